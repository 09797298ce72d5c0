"""Win/loss sweeps over rectangular boards, also usable as notebook helpers"""

from dataclasses import asdict, dataclass
from datargs import parse
import json
import logging
import os
import sys
import time

from tqdm.autonotebook import tqdm
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.append(ROOT_DIR)

from chomp import utils
from chomp.game import Move, init_state
from chomp.memo import Memo
from chomp.play import get_solver


##############
# Parameters #
##############
@dataclass(frozen=True, eq=True)
class Params:
    max_rows: int = 6  # boards from 1 up to max_rows rows
    max_cols: int = 6  # boards from 1 up to max_cols columns
    solver: str = "retrograde"  # memoized or retrograde
    progress: bool = False  # show progress bars
    # output_path / plot_path: if empty, nothing is written
    output_path: str = ""
    plot_path: str = ""

    def dump(self, path: str):
        with open(path, "w") as f:
            json.dump(asdict(self), f, indent=2)

    @staticmethod
    def load(path: str):
        with open(path, "r") as f:
            return Params(**json.load(f))


#########
# Sweep #
#########
def sweep_boards(
    max_rows: int,
    max_cols: int,
    solver_name: str = "retrograde",
    progress: bool = False,
) -> utils.MetricLogger:
    """
    Solve every full rectangular board up to the given size.

    Args:
        max_rows (int): Largest number of rows.
        max_cols (int): Largest number of columns.
        solver_name (str): memoized or retrograde. Defaults to retrograde.
        progress (bool): Show a progress bar over the boards. Defaults to False.
    Returns:
        utils.MetricLogger: one step per board with metrics rows, cols, squares, outcome
            ("win" or "loss"), move_row, move_col (empty for losses), states (memo
            size after solving) and seconds.
    """
    solver = get_solver(solver_name)
    logger = utils.MetricLogger()
    boards = [(r, c) for r in range(1, max_rows + 1) for c in range(1, max_cols + 1)]
    for rows, cols in tqdm(boards, desc="Boards", disable=not progress):
        memo = Memo()
        start = time.perf_counter()
        result = solver.solve(init_state(rows, cols), memo)
        seconds = time.perf_counter() - start

        logger.add_metric("rows", rows)
        logger.add_metric("cols", cols)
        logger.add_metric("squares", rows * cols)
        logger.add_metric("outcome", "win" if isinstance(result, Move) else "loss")
        logger.add_metric("move_row", result.row if isinstance(result, Move) else None)
        logger.add_metric("move_col", result.col if isinstance(result, Move) else None)
        logger.add_metric("states", len(memo))
        logger.add_metric("seconds", seconds)
        logger.step()
    return logger


def outcome_table(
    max_rows: int,
    max_cols: int,
    solver_name: str = "retrograde",
    progress: bool = False,
) -> pd.DataFrame:
    return sweep_boards(max_rows, max_cols, solver_name, progress).to_df()


def load_outcomes(path: str) -> pd.DataFrame:
    """Reads a table written by run_sweep"""
    return utils.MetricLogger.load(path).to_df()


def win_grid(df: pd.DataFrame) -> np.ndarray:
    """Boolean grid indexed [rows - 1, cols - 1], True where the first player wins"""
    grid = np.zeros((df.rows.max(), df.cols.max()), dtype=bool)
    grid[df.rows.to_numpy() - 1, df.cols.to_numpy() - 1] = (
        df.outcome == "win"
    ).to_numpy()
    return grid


def plot_outcomes(df: pd.DataFrame):
    grid = win_grid(df)
    fig, ax = plt.subplots(figsize=(6, 5))
    ax.set_title("First player outcome")
    ax.imshow(grid, cmap="RdYlGn", origin="lower", vmin=0, vmax=1)
    ax.set_xlabel("Columns")
    ax.set_ylabel("Rows")
    ax.set_xticks(range(grid.shape[1]), labels=range(1, grid.shape[1] + 1))
    ax.set_yticks(range(grid.shape[0]), labels=range(1, grid.shape[0] + 1))
    # label each winning board with its move as (col, row)
    for row in df.itertuples():
        text = "loss" if row.outcome == "loss" else f"{row.move_col:.0f},{row.move_row:.0f}"
        ax.text(row.cols - 1, row.rows - 1, text, ha="center", va="center", fontsize=8)
    return fig


def run_sweep(params: Params) -> pd.DataFrame:
    logging.info(f"Sweeping with: {params}")
    logger = sweep_boards(
        params.max_rows, params.max_cols, params.solver, params.progress
    )
    df = logger.to_df()
    losses = df[df.outcome == "loss"]
    logging.info(
        f"Solved {len(df)} boards in {df.seconds.sum():.2f}s, "
        f"{len(losses)} losing: {list(zip(losses.rows, losses.cols))}"
    )
    if params.output_path:
        logger.dump(params.output_path)
        logging.info(f"Saved table {params.output_path}")
    if params.plot_path:
        fig = plot_outcomes(df)
        fig.savefig(params.plot_path)
        plt.close(fig)
        logging.info(f"Saved plot {params.plot_path}")
    return df


if __name__ == "__main__":
    utils.setup_logging(stderr=True)
    params = parse(Params)
    df = run_sweep(params)
    print(df.to_string(index=False))

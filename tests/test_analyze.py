import os
import tempfile
from unittest import TestCase

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt

from chomp.analyze import (
    Params,
    load_outcomes,
    outcome_table,
    plot_outcomes,
    run_sweep,
    win_grid,
)


class TestAnalyze(TestCase):
    def test_outcome_table(self):
        df = outcome_table(3, 4)
        self.assertEqual(len(df), 12)
        self.assertEqual(
            list(df.columns),
            [
                "rows",
                "cols",
                "squares",
                "outcome",
                "move_row",
                "move_col",
                "states",
                "seconds",
            ],
        )
        # strategy stealing: only the single square is lost for the first player
        losses = df[df.outcome == "loss"]
        self.assertEqual(list(zip(losses.rows, losses.cols)), [(1, 1)])

        board = df[(df.rows == 3) & (df.cols == 3)].iloc[0]
        self.assertEqual((board.move_row, board.move_col), (1, 1))
        self.assertEqual(board.states, 20)

    def test_solvers_agree(self):
        memoized = outcome_table(3, 3, "memoized")
        retrograde = outcome_table(3, 3, "retrograde")
        cols = ["rows", "cols", "outcome", "move_row", "move_col"]
        self.assertTrue(memoized[cols].equals(retrograde[cols]))

    def test_win_grid(self):
        grid = win_grid(outcome_table(2, 3))
        self.assertEqual(grid.shape, (2, 3))
        self.assertFalse(grid[0, 0])
        self.assertTrue(grid[1:, :].all())
        self.assertTrue(grid[:, 1:].all())

    def test_plot_outcomes(self):
        fig = plot_outcomes(outcome_table(2, 2))
        self.assertEqual(len(fig.axes), 1)
        plt.close(fig)

    def test_run_sweep(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            params = Params(
                max_rows=2,
                max_cols=2,
                output_path=os.path.join(tmp_dir, "outcomes.csv"),
                plot_path=os.path.join(tmp_dir, "outcomes.png"),
            )
            df = run_sweep(params)
            self.assertEqual(len(df), 4)
            self.assertTrue(os.path.exists(params.output_path))
            self.assertTrue(os.path.exists(params.plot_path))

            loaded = load_outcomes(params.output_path)
            cols = ["rows", "cols", "squares", "outcome", "move_row", "move_col", "states"]
            self.assertTrue(loaded[cols].equals(df[cols]))

    def test_params_dump_load(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = os.path.join(tmp_dir, "params.json")
            params = Params(max_rows=3, solver="memoized")
            params.dump(path)
            self.assertEqual(Params.load(path), params)

import argparse
import logging
import os
import sys

ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.append(ROOT_DIR)

from chomp.game import Move, NoWinningMove, Result, State, Terminal, create_state, play_move
from chomp.memo import Memo
from chomp.solvers.base_solver import Solver
from chomp.solvers.memoized import MemoizedSolver
from chomp.solvers.retrograde import RetrogradeSolver
from chomp.utils import set_log_level, setup_logging


SOLVERS = ("memoized", "retrograde")


def get_solver(solver_str: str, progress: bool = False) -> Solver:
    if solver_str == "memoized":
        return MemoizedSolver()
    if solver_str == "retrograde":
        return RetrogradeSolver(progress=progress)
    raise ValueError(f"Unknown solver: {solver_str}")


def format_result(result: Result) -> str:
    if isinstance(result, Terminal):
        return "already won"
    if isinstance(result, NoWinningMove):
        return "give up"
    if isinstance(result, Move):
        return f"eat column {result.col} row {result.row}"
    raise TypeError(f"Not a result: {result!r}")


def stalling_move(state: State) -> Move:
    """Single top square of the rightmost non-empty column, the smallest bite there is"""
    col = max(c for c, h in enumerate(state.heights) if h > 0)
    return Move(state.heights[col] - 1, col)


def play_game(state: State, solver: Solver, print_steps: bool = False) -> int:
    """
    Plays a position out between two perfect players and returns the winner.
    Whoever eats the last square loses. A player without a winning move stalls
    with the smallest possible bite.

    Args:
        state (State): The starting position, player 1 moves first.
        solver (Solver): Solver used by both players.
        print_steps (bool, optional): Whether to print the game steps. Defaults to False.

    Returns:
        int: The winner of the game, 1 or 2.
    """
    memo = Memo()
    mark = 1
    step = 0
    while not state.is_terminal():
        result = solver.solve(state, memo)
        move = result if isinstance(result, Move) else stalling_move(state)
        if print_steps:
            print(
                f"Step: {step} | Player {mark} | {list(state.heights)} | "
                f"{format_result(result)} -> eat column {move.col} row {move.row}"
            )
        state = play_move(state, move)
        mark = 1 if mark == 2 else 2
        step += 1
    # the player now to move did not take the last square
    if print_steps:
        print("--------------------")
        print(f"Player {mark} wins!")
    return mark


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Find a winning move in a game of Chomp"
    )
    parser.add_argument(
        "heights",
        type=int,
        nargs="+",
        help="Number of squares remaining in each column, left to right",
    )
    parser.add_argument(
        "--solver",
        choices=SOLVERS,
        default="memoized",
        help="Evaluation strategy: memoized (top-down) or retrograde (bottom-up)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Run both solvers and fail if they disagree",
    )
    parser.add_argument(
        "--play",
        action="store_true",
        help="Play the position out between two perfect players",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log solver progress to stderr",
    )
    parser.add_argument(
        "--log-file",
        help="Write the log to this file",
    )
    args = parser.parse_args(argv)
    if any(h < 0 for h in args.heights):
        parser.error("column heights must be non-negative")
    return args


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_file, level=logging.WARNING, stderr=args.verbose)
    # a log file gets solver summaries, -v adds per state detail
    if args.verbose:
        set_log_level(logging.DEBUG)
    elif args.log_file:
        set_log_level(logging.INFO)
    state = create_state(args.heights)

    if args.play:
        play_game(state, get_solver(args.solver), print_steps=True)
        return 0

    result = get_solver(args.solver, progress=args.verbose).solve(state)
    if args.check:
        other = "retrograde" if args.solver == "memoized" else "memoized"
        other_result = get_solver(other).solve(state)
        if other_result != result:
            print(
                f"Solvers disagree: {args.solver} gave {result}, "
                f"{other} gave {other_result}",
                file=sys.stderr,
            )
            return 1
    print(format_result(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())

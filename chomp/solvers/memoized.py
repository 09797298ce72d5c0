import logging
import sys

from chomp.game import NO_WINNING_MOVE, TERMINAL, NoWinningMove, Result, State, play_move
from chomp.memo import Memo
from chomp.solvers.base_solver import Solver


# head room for the frames above the search itself
RECURSION_MARGIN = 100


class MemoizedSolver(Solver):
    """
    Top-down search. Children are only expanded on demand and every solved state
    goes into the memo, so a position reached through different move orders is
    expanded once.
    """

    name = "memoized"

    def evaluate(self, state: State, memo: Memo) -> Result:
        if state.is_terminal():
            return TERMINAL
        cached = memo.get(state)
        if cached is not None:
            logging.debug(f"Memo hit {state.heights}: {cached}")
            return cached

        result = NO_WINNING_MOVE
        for move in state.valid_moves:
            next_state = play_move(state, move)
            # leaving the opponent without a winning reply wins
            if isinstance(self.evaluate(next_state, memo), NoWinningMove):
                result = move
                break
        logging.debug(f"Solved {state.heights}: {result}")
        return memo.put_if_absent(state, result)

    def solve(self, state: State, memo: Memo | None = None) -> Result:
        memo = Memo() if memo is None else memo
        # each move eats at least one square, so the search is never deeper than this
        depth = state.squares + RECURSION_MARGIN
        if sys.getrecursionlimit() < depth:
            sys.setrecursionlimit(depth)
        result = self.evaluate(state, memo)
        logging.info(f"{self.name}: {len(memo)} states in memo, {memo.hits} hits")
        return result

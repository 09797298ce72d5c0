from collections import deque
import logging

from tqdm.autonotebook import tqdm

from chomp.game import NO_WINNING_MOVE, TERMINAL, NoWinningMove, Result, State, play_move
from chomp.memo import Memo
from chomp.solvers.base_solver import Solver


TRAVERSAL_ORDERS = ("dfs", "bfs")


def collect_reachable(initial: State, order: str = "dfs") -> set[State]:
    """
    Every state reachable from initial by zero or more moves, initial included.

    Args:
        initial (State): Starting position.
        order (str): "dfs" or "bfs". Only changes the visiting order, the returned
            set is the same either way.
    Returns:
        set[State]: The reachable states.
    """
    if order not in TRAVERSAL_ORDERS:
        raise ValueError(f"Unknown traversal order: {order}")

    visited = {initial}
    frontier = deque([initial])
    while frontier:
        state = frontier.pop() if order == "dfs" else frontier.popleft()
        for move in state.valid_moves:
            next_state = play_move(state, move)
            if next_state not in visited:
                visited.add(next_state)
                frontier.append(next_state)
    return visited


class RetrogradeSolver(Solver):
    name = "retrograde"

    def __init__(self, order: str = "dfs", progress: bool = False):
        """
        Bottom-up solver: enumerates every reachable state, then solves them from the
        fewest remaining squares upwards so each child is solved before its parents.

        Args:
            order (str): Traversal used to enumerate states, "dfs" or "bfs".
                Defaults to "dfs".
            progress (bool): Show a progress bar over the evaluation pass. Defaults
                to False.
        """
        if order not in TRAVERSAL_ORDERS:
            raise ValueError(f"Unknown traversal order: {order}")
        self.order = order
        self.progress = progress

    def _evaluate(self, state: State, memo: Memo) -> Result:
        if state.is_terminal():
            return TERMINAL
        for move in state.valid_moves:
            # children have fewer squares and were solved earlier in the pass
            child_result = memo.get(play_move(state, move))
            if child_result is None:
                raise RuntimeError(f"Child of {state.heights} was not solved")
            if isinstance(child_result, NoWinningMove):
                return move
        return NO_WINNING_MOVE

    def solve(self, state: State, memo: Memo | None = None) -> Result:
        memo = Memo() if memo is None else memo
        states = collect_reachable(state, self.order)
        logging.info(f"{self.name}: collected {len(states)} reachable states")

        pending = sorted(
            (s for s in states if s not in memo), key=lambda s: (s.squares, s)
        )
        for s in tqdm(pending, desc="States", disable=not self.progress):
            memo.put_if_absent(s, self._evaluate(s, memo))
        logging.info(
            f"{self.name}: solved {len(pending)} states, {len(memo)} states in memo"
        )
        return memo.get(state)

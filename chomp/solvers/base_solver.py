from abc import ABC, abstractmethod

from chomp.game import Result, State
from chomp.memo import Memo


class Solver(ABC):
    name: str = "base"

    @abstractmethod
    def solve(self, state: State, memo: Memo | None = None) -> Result:
        """
        Evaluate a position for the player about to move.
        Args:
            state (State): Position to evaluate.
            memo (Memo, optional): Results of already solved states. Entries found
                here are trusted and not recomputed, new results are added to it.
                A fresh memo is used when omitted.
        Returns:
            Result: TERMINAL if the board is empty, NO_WINNING_MOVE if every move
                loses, otherwise the first winning Move in column, then row order.
        """
        pass

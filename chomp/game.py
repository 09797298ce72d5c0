from dataclasses import dataclass
from functools import cached_property
from typing import Iterable


HASH_MULTIPLIER = 31
HASH_MASK = (1 << 64) - 1


@dataclass(frozen=True)
class Move:
    """Eat the square at (row, col) and every square above and to the right of it.
    Row 0 / column 0 is the bottom left (poisoned) square."""

    row: int
    col: int


@dataclass(frozen=True)
class Terminal:
    """No squares remain, there is nothing to move."""


@dataclass(frozen=True)
class NoWinningMove:
    """Every move leaves the opponent a winning position."""


TERMINAL = Terminal()
NO_WINNING_MOVE = NoWinningMove()

# A winning position is reported by the Move that forces the win.
Result = Terminal | NoWinningMove | Move


@dataclass(frozen=True, eq=True)
class State:
    heights: tuple[int, ...]  # remaining squares per column, left to right

    def __post_init__(self):
        heights = tuple(self.heights)
        if any(h < 0 for h in heights):
            raise ValueError(f"Column heights must be non-negative: {heights}")
        object.__setattr__(self, "heights", heights)

    @property
    def width(self) -> int:
        return len(self.heights)

    @cached_property
    def squares(self) -> int:
        return sum(self.heights)

    @cached_property
    def valid_moves(self) -> list[Move]:
        """Every legal move, column ascending then row ascending. Solvers rely on
        this order to agree on the first winning move they find."""
        return [
            Move(row, col)
            for col, height in enumerate(self.heights)
            for row in range(height)
        ]

    def height(self, col: int) -> int:
        return self.heights[col]

    def is_terminal(self) -> bool:
        return all(h == 0 for h in self.heights)

    def __lt__(self, other: "State") -> bool:
        return compare(self, other) < 0

    def __hash__(self):
        return state_hash(self)


def init_state(rows: int, cols: int) -> State:
    """A full rectangular pan of the given size"""
    if rows < 0 or cols < 0:
        raise ValueError(f"Invalid board size: {rows}x{cols}")
    return State((rows,) * cols)


def create_state(heights: Iterable[int]) -> State:
    return State(tuple(heights))


def compare(s1: State, s2: State) -> int:
    """
    Orders states column by column from the left, the first differing column
    decides and the lower height comes first. Missing columns count as height 0.

    Returns:
        int: negative if s1 comes first, positive if s2 comes first, 0 if equal.
    """
    for col in range(max(s1.width, s2.width)):
        h1 = s1.heights[col] if col < s1.width else 0
        h2 = s2.heights[col] if col < s2.width else 0
        if h1 != h2:
            return -1 if h1 < h2 else 1
    return 0


def state_hash(state: State) -> int:
    """Order sensitive rolling hash over the heights. Trailing empty columns are
    skipped so that states which compare equal also hash equal."""
    heights = state.heights
    end = len(heights)
    while end > 0 and heights[end - 1] == 0:
        end -= 1
    h = 0
    for height in heights[:end]:
        h = (h * HASH_MULTIPLIER + height) & HASH_MASK
    return h


def play_move(state: State, move: Move) -> State:
    """
    Plays a move given a game state.

    Args:
        state (State): The current state of the game.
        move (Move): The square to eat.
    Returns:
        State: The new state, every column from move.col rightwards is cut down to
            move.row squares. The input state is left untouched.
    """
    if state.is_terminal():
        raise RuntimeError("Game is over")
    if not (0 <= move.col < state.width and 0 <= move.row < state.heights[move.col]):
        raise ValueError(f"Invalid move: {move}")

    next_heights = [
        h if col < move.col else min(h, move.row) for col, h in enumerate(state.heights)
    ]
    return State(tuple(next_heights))

from typing import Callable

from chomp.game import Result, State


class Memo:
    """
    Cache of solved states. Keys are immutable States, so the stored key is
    already independent of whatever the caller does with its own references.

    Evaluators write through put_if_absent: once a state has a result it is never
    replaced. put() keeps plain insert-or-replace semantics for other callers.
    """

    def __init__(self):
        self._results: dict[State, Result] = {}
        self.hits = 0
        self.misses = 0

    def put(self, key: State, value: Result) -> None:
        self._results[key] = value

    def put_if_absent(self, key: State, value: Result) -> Result:
        return self._results.setdefault(key, value)

    def get(self, key: State, default: Result | None = None) -> Result | None:
        value = self._results.get(key)
        if value is None:
            self.misses += 1
            return default
        self.hits += 1
        return value

    def keys(self) -> list[State]:
        return list(self._results.keys())

    def items(self) -> list[tuple[State, Result]]:
        return list(self._results.items())

    def for_each(self, visitor: Callable[[State, Result], None]) -> None:
        for key, value in self._results.items():
            visitor(key, value)

    def clear(self) -> None:
        self._results.clear()

    def __contains__(self, key: State) -> bool:
        return key in self._results

    def __len__(self) -> int:
        return len(self._results)

    def __repr__(self):
        return f"Memo(size={len(self)}, hits={self.hits}, misses={self.misses})"

"""Local copy of a heap array."""

from __future__ import annotations

from typing import List, Sequence


class HeapMirror:
    """Array cells of the heap currently on screen."""

    def __init__(self, values: Sequence[int] = ()) -> None:
        self.values: List[int] = list(values)

    def load(self, values: Sequence[int]) -> None:
        self.values = list(values)

    def __len__(self) -> int:
        return len(self.values)

    def push(self, value: int) -> int:
        """Append ``value`` and return its index."""
        self.values.append(value)
        return len(self.values) - 1

    def swap(self, i: int, j: int) -> bool:
        n = len(self.values)
        if not (0 <= i < n and 0 <= j < n):
            return False
        self.values[i], self.values[j] = self.values[j], self.values[i]
        return True

    def pop(self) -> int | None:
        return self.values.pop() if self.values else None

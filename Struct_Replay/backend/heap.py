"""Reference array-backed binary heap backend."""

from __future__ import annotations

from typing import List

from ..config import Config
from ..events import EventLog, record
from ..events import records as kinds


class HeapBackend:
    """Binary min- or max-heap stored as an implicit array.

    ``insert`` records carry ``(index, value)``; ``highlight`` and ``swap``
    carry the two array indices involved; ``extract`` carries the index the
    root was moved to and the extracted value.
    """

    def __init__(self, is_min: bool | None = None) -> None:
        self.is_min = Config.heap_min_mode if is_min is None else bool(is_min)
        self._heap: List[int] = []
        self._log: list = []

    def set_mode(self, is_min: bool) -> None:
        """Switch ordering; the heap is emptied."""
        self.is_min = bool(is_min)
        self._heap.clear()

    def array(self) -> List[int]:
        """Return a copy of the backing array."""
        return list(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    # ------------------------------------------------------------------
    def _before(self, a: int, b: int) -> bool:
        return a < b if self.is_min else a > b

    def _swap(self, i: int, j: int, info: str = "Swapping") -> None:
        self._log.append(record(kinds.HIGHLIGHT, i, j, info="Comparing..."))
        self._heap[i], self._heap[j] = self._heap[j], self._heap[i]
        self._log.append(record(kinds.SWAP, i, j, info=info))

    def _sift_up(self, i: int) -> None:
        while i != 0 and self._before(self._heap[i], self._heap[(i - 1) // 2]):
            parent = (i - 1) // 2
            self._swap(i, parent)
            i = parent

    def _sift_down(self, i: int) -> None:
        size = len(self._heap)
        while True:
            extreme = i
            for child in (2 * i + 1, 2 * i + 2):
                if child < size and self._before(self._heap[child], self._heap[extreme]):
                    extreme = child
            if extreme == i:
                return
            self._swap(i, extreme)
            i = extreme

    # ------------------------------------------------------------------
    def insert(self, value: int) -> EventLog:
        """Append ``value`` and restore the heap property."""
        self._log = []
        self._heap.append(value)
        index = len(self._heap) - 1
        self._log.append(record(kinds.INSERT, index, value, info="Inserted", value=value))
        self._sift_up(index)
        self._log.append(record(kinds.COMPLETE, info="Done"))
        return EventLog(self._log)

    def extract(self) -> EventLog:
        """Remove the root; an empty heap yields an empty log."""
        self._log = []
        if not self._heap:
            return EventLog(self._log)
        last = len(self._heap) - 1
        root = self._heap[0]
        self._log.append(record(kinds.HIGHLIGHT, 0, last, info="Swap Root with Last"))
        self._heap[0], self._heap[last] = self._heap[last], self._heap[0]
        self._log.append(record(kinds.SWAP, 0, last, info="Removing Root"))
        self._log.append(record(kinds.EXTRACT, last, root, info="Extracted", value=root))
        self._heap.pop()
        if self._heap:
            self._sift_down(0)
        self._log.append(record(kinds.COMPLETE, info="Done"))
        return EventLog(self._log)

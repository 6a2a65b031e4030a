"""Immutable, ordered event log returned by one backend operation."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Sequence, Tuple, overload

from .records import ActionRecord


class EventLog(Sequence[ActionRecord]):
    """Read-only sequence of :class:`ActionRecord` objects.

    The order of records is the execution order of the algorithm and is never
    changed. A log is handed to a scheduler once; :attr:`consumed` is set when
    playback starts so the same log cannot be replayed.
    """

    __slots__ = ("_records", "_consumed")

    def __init__(self, records: Iterable[ActionRecord] = ()) -> None:
        self._records: Tuple[ActionRecord, ...] = tuple(records)
        self._consumed = False

    @overload
    def __getitem__(self, index: int) -> ActionRecord: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[ActionRecord]: ...

    def __getitem__(self, index):
        return self._records[index]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ActionRecord]:
        return iter(self._records)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, EventLog):
            return self._records == other._records
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._records)

    def __repr__(self) -> str:
        return f"EventLog({len(self._records)} records)"

    @property
    def consumed(self) -> bool:
        """``True`` once a scheduler has started playing this log."""
        return self._consumed

    def mark_consumed(self) -> None:
        """Flag the log as handed to a scheduler."""
        self._consumed = True

    def kinds(self) -> List[str]:
        """Return the record kinds in order."""
        return [r.kind for r in self._records]

    def has(self, kind: str) -> bool:
        """Return ``True`` if any record is of ``kind``."""
        return any(r.kind == kind for r in self._records)

    def find(self, kind: str) -> List[ActionRecord]:
        """Return all records of ``kind`` in order."""
        return [r for r in self._records if r.kind == kind]


__all__ = ["EventLog"]

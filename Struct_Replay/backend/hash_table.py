"""Reference separate-chaining hash table backend."""

from __future__ import annotations

from typing import Callable, List

from ..config import Config
from ..events import BucketData, EventLog, record
from ..events import records as kinds


class HashTableBackend:
    """Fixed-size table of chained buckets without duplicate keys.

    Parameters
    ----------
    size:
        Number of buckets; defaults to :attr:`Config.hash_table_size`.
    hash_fn:
        Optional ``(key, size) -> index`` function. The default is
        ``key % size``.

    Records carry ``(bucket, key)`` as their subjects. Insertion appends at the
    tail of the chain so chains keep insertion order.
    """

    def __init__(
        self,
        size: int | None = None,
        hash_fn: Callable[[int, int], int] | None = None,
    ) -> None:
        self.size = int(size if size is not None else Config.hash_table_size)
        if self.size <= 0:
            raise ValueError("size must be positive")
        self._hash_fn = hash_fn
        self._table: List[List[int]] = [[] for _ in range(self.size)]

    def bucket_of(self, key: int) -> int:
        if self._hash_fn is not None:
            return self._hash_fn(key, self.size) % self.size
        return key % self.size

    def _describe(self, key: int, index: int) -> str:
        if self._hash_fn is not None:
            return f"Hash: h({key}) = {index}"
        return f"Hash: {key} % {self.size} = {index}"

    def insert(self, key: int) -> EventLog:
        """Append ``key`` to its bucket unless already present."""
        index = self.bucket_of(key)
        chain = self._table[index]
        log = [record(kinds.COMPUTE_HASH, index, key, info=self._describe(key, index), value=index)]

        if not chain:
            chain.append(key)
            log.append(record(kinds.INSERT, index, key, info="Inserted as Head", value=index))
            return EventLog(log)

        if chain[0] == key:
            log.append(record(kinds.DUPLICATE, index, key, info="Duplicate Key Ignored", value=index))
            return EventLog(log)

        for pos, current in enumerate(chain[:-1]):
            log.append(record(kinds.TRAVERSE, index, current, info=f"Traversing {current}", value=index))
            if chain[pos + 1] == key:
                log.append(
                    record(kinds.DUPLICATE, index, key, info="Duplicate Key Ignored", value=index)
                )
                return EventLog(log)

        log.append(record(kinds.TRAVERSE, index, chain[-1], info="Reached Tail", value=index))
        chain.append(key)
        log.append(record(kinds.INSERT, index, key, info="Inserted at Tail", value=index))
        return EventLog(log)

    def search(self, key: int) -> EventLog:
        """Walk the bucket of ``key`` and report whether it was found."""
        index = self.bucket_of(key)
        log = [record(kinds.COMPUTE_HASH, index, key, info=f"Searching Bucket {index}", value=index)]
        for current in self._table[index]:
            log.append(record(kinds.TRAVERSE, index, current, info=f"Checking {current}", value=index))
            if current == key:
                log.append(record(kinds.FOUND, index, key, info=f"Found Key {key}", value=index))
                return EventLog(log)
        log.append(record(kinds.NOT_FOUND, index, key, info="Key Not Found", value=index))
        return EventLog(log)

    def snapshot(self) -> List[BucketData]:
        """Return every bucket with its keys in chain order."""
        return [BucketData(i, tuple(chain)) for i, chain in enumerate(self._table)]

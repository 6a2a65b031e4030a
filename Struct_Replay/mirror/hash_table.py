"""Local copy of a chained hash table."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from ..events import BucketData


class HashMirror:
    """Bucket chains in insertion order."""

    def __init__(self, size: int = 0) -> None:
        self.chains: List[List[int]] = [[] for _ in range(size)]

    def load(self, snapshot: Sequence[BucketData]) -> None:
        size = max((b.index for b in snapshot), default=-1) + 1
        self.chains = [[] for _ in range(size)]
        for bucket in snapshot:
            self.chains[bucket.index] = list(bucket.keys)

    def append(self, bucket: int, key: int) -> bool:
        """Add ``key`` at the tail of ``bucket`` unless it is already there."""
        if not 0 <= bucket < len(self.chains):
            return False
        chain = self.chains[bucket]
        if key in chain:
            return False
        chain.append(key)
        return True

    def locate(self, key: int, bucket: int | None = None) -> Tuple[int, int] | None:
        """Return ``(bucket, position)`` of ``key`` or ``None``."""
        buckets = range(len(self.chains)) if bucket is None else [bucket]
        for b in buckets:
            if 0 <= b < len(self.chains) and key in self.chains[b]:
                return b, self.chains[b].index(key)
        return None

    def keys(self) -> List[int]:
        return [k for chain in self.chains for k in chain]

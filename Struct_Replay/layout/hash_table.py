"""Bucket-and-chain layout for separate-chaining hash tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from ..config import Config

Rect = Tuple[float, float, float, float]


@dataclass(frozen=True)
class ChainSlot:
    """Rest rectangle of a chained entry and the ``y`` it enters from."""

    rect: Rect
    enter_y: float


@dataclass
class HashLayout:
    """Geometry of one hash-table snapshot.

    ``buckets`` maps bucket index to its rectangle, ``chains`` maps
    ``(bucket, position)`` to the entry slot and ``connectors`` lists the
    vertical links drawn between consecutive boxes of a chain.
    """

    buckets: Dict[int, Rect] = field(default_factory=dict)
    chains: Dict[Tuple[int, int], ChainSlot] = field(default_factory=dict)
    connectors: List[Tuple[float, float, float, float]] = field(default_factory=list)


def hash_layout(chains: Sequence[Sequence[int]], geometry: Dict[str, float] | None = None) -> HashLayout:
    """Place ``chains`` (one key sequence per bucket, in bucket order)."""

    g = dict(Config.hash_layout)
    if geometry:
        g.update(geometry)
    bw, bh = g["bucket_width"], g["bucket_height"]
    cw, ch = g["chain_width"], g["chain_height"]
    layout = HashLayout()

    for idx, keys in enumerate(chains):
        bx = g["start_x"] + (bw + g["gap_x"]) * idx
        by = g["start_y"]
        layout.buckets[idx] = (bx, by, bw, bh)

        centre = bx + bw / 2
        prev_y = by + bh
        cy = by + bh + g["gap_y"]
        for pos in range(len(keys)):
            cx = bx + (bw - cw) / 2
            layout.connectors.append((centre, prev_y, centre, cy - 5))
            layout.chains[(idx, pos)] = ChainSlot((cx, cy, cw, ch), cy + g["enter_offset"])
            prev_y = cy + ch
            cy += ch + g["gap_y"]
    return layout

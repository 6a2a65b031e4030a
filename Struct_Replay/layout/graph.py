"""User-owned vertex positions for graph views."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

import numpy as np

from ..config import Config

Position = Tuple[float, float]


@dataclass(frozen=True)
class EdgeGeometry:
    """Endpoints of an edge line and the midpoint of its weight label."""

    u: int
    v: int
    start: Position
    end: Position

    @property
    def midpoint(self) -> Position:
        return ((self.start[0] + self.end[0]) / 2, (self.start[1] + self.end[1]) / 2)


class GraphLayout:
    """Mutable vertex positions set by callers or by dragging.

    Unlike the tree and hash layouts, graph positions are not derived from the
    structure. New vertices receive the coordinates supplied by the caller or a
    seeded random spot near ``(spawn_x, spawn_y)``; afterwards only
    :meth:`move` changes them.
    """

    def __init__(self, seed: int | None = None) -> None:
        g = Config.graph_layout
        self._rng = np.random.default_rng(g["seed"] if seed is None else seed)
        self._spawn = (float(g["spawn_x"]), float(g["spawn_y"]))
        self._jitter = float(g["jitter"])
        self.positions: Dict[int, Position] = {}

    def __contains__(self, vid: int) -> bool:
        return vid in self.positions

    def place(self, vid: int, x: float | None = None, y: float | None = None) -> Position:
        """Return the position of ``vid``, assigning one if it has none."""
        if vid in self.positions:
            return self.positions[vid]
        if x is None or y is None:
            dx, dy = self._rng.uniform(0.0, self._jitter, size=2)
            x = self._spawn[0] + float(dx) if x is None else x
            y = self._spawn[1] + float(dy) if y is None else y
        self.positions[vid] = (float(x), float(y))
        return self.positions[vid]

    def move(self, vid: int, x: float, y: float) -> bool:
        """Drag ``vid`` to ``(x, y)``; unknown vertices are ignored."""
        if vid not in self.positions:
            return False
        self.positions[vid] = (float(x), float(y))
        return True

    def forget(self, vid: int) -> None:
        self.positions.pop(vid, None)

    def edge(self, u: int, v: int) -> EdgeGeometry | None:
        """Geometry of edge ``(u, v)`` or ``None`` if an endpoint is unplaced."""
        if u not in self.positions or v not in self.positions:
            return None
        return EdgeGeometry(u, v, self.positions[u], self.positions[v])

    def dependent_edges(self, vid: int, edges: Iterable[Tuple[int, int]]) -> List[EdgeGeometry]:
        """Recompute the geometry of every edge touching ``vid``."""
        out = []
        for u, v in edges:
            if vid in (u, v):
                geom = self.edge(u, v)
                if geom is not None:
                    out.append(geom)
        return out

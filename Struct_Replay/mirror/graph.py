"""Local copy of a weighted graph."""

from __future__ import annotations

from typing import Dict, FrozenSet, List, Tuple

from ..events import GraphSnapshot


def _pair(u: int, v: int) -> FrozenSet[int]:
    return frozenset((u, v))


class GraphMirror:
    """Vertices and undirected edges shown by a graph view.

    Edges are keyed by their unordered endpoint pair; adding an edge between
    an already connected pair replaces it. Vertex positions are kept by
    :class:`~Struct_Replay.layout.GraphLayout`, not here.
    """

    def __init__(self) -> None:
        self.vertices: List[int] = []
        self._edges: Dict[FrozenSet[int], Tuple[int, int, int]] = {}

    def load(self, snapshot: GraphSnapshot) -> None:
        self.vertices = list(snapshot.vertices)
        self._edges = {}
        for u, v, w in snapshot.edges:
            self._edges[_pair(u, v)] = (u, v, w)

    def __contains__(self, vid: int) -> bool:
        return vid in self.vertices

    @property
    def edges(self) -> List[Tuple[int, int, int]]:
        return list(self._edges.values())

    def add_vertex(self, vid: int) -> bool:
        if vid in self.vertices:
            return False
        self.vertices.append(vid)
        return True

    def remove_vertex(self, vid: int) -> bool:
        if vid not in self.vertices:
            return False
        self.vertices.remove(vid)
        self._edges = {k: e for k, e in self._edges.items() if vid not in k}
        return True

    def add_edge(self, u: int, v: int, weight: int) -> None:
        self.add_vertex(u)
        self.add_vertex(v)
        self._edges.pop(_pair(u, v), None)
        self._edges[_pair(u, v)] = (u, v, weight)

    def edge(self, u: int, v: int) -> Tuple[int, int, int] | None:
        """Return the stored edge between ``u`` and ``v`` in either direction."""
        return self._edges.get(_pair(u, v))

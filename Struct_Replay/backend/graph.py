"""Reference weighted-graph backend built on :mod:`networkx`."""

from __future__ import annotations

import heapq
from collections import deque
from typing import Dict, List, Tuple

import networkx as nx

from ..events import EventLog, GraphSnapshot, record
from ..events import records as kinds

_INF = float("inf")


class GraphBackend:
    """Undirected weighted graph with traversal and shortest-path logs.

    Vertices are integers. Adding an edge between a pair that is already
    connected replaces its weight. Neighbours are visited in the order their
    edges were added. Algorithms started from a vertex that does not exist
    return an empty :class:`EventLog`.
    """

    def __init__(self) -> None:
        self._graph = nx.Graph()

    # ------------------------------------------------------------------
    def add_vertex(self, vid: int) -> None:
        """Insert ``vid`` unless it already exists."""
        if vid not in self._graph:
            self._graph.add_node(vid)

    def remove_vertex(self, vid: int) -> None:
        """Remove ``vid`` and every incident edge; unknown ids are ignored."""
        if vid in self._graph:
            self._graph.remove_node(vid)

    def add_edge(self, u: int, v: int, weight: int) -> None:
        """Connect ``u`` and ``v`` creating missing endpoints."""
        self._graph.add_edge(u, v, weight=weight)

    def has_edge(self, u: int, v: int) -> bool:
        return self._graph.has_edge(u, v)

    def snapshot(self) -> GraphSnapshot:
        """Return vertices in insertion order and each edge once."""
        edges = tuple((u, v, int(d["weight"])) for u, v, d in self._graph.edges(data=True))
        return GraphSnapshot(vertices=tuple(self._graph.nodes), edges=edges)

    def _neighbors(self, vid: int) -> List[Tuple[int, int]]:
        return [(v, int(d["weight"])) for v, d in self._graph.adj[vid].items()]

    # ------------------------------------------------------------------
    def run_bfs(self, start: int) -> EventLog:
        """Breadth-first traversal from ``start``."""
        log = []
        if start not in self._graph:
            return EventLog(log)
        visited = {start}
        queue = deque([start])
        log.append(record(kinds.PUSH, start, info="Start"))
        while queue:
            curr = queue.popleft()
            log.append(record(kinds.POP, curr))
            log.append(record(kinds.VISIT, curr))
            for nb, _ in self._neighbors(curr):
                if nb not in visited:
                    visited.add(nb)
                    queue.append(nb)
                    log.append(record(kinds.PUSH, nb))
                    log.append(record(kinds.HIGHLIGHT_EDGE, curr, nb))
        return EventLog(log)

    def run_dfs(self, start: int) -> EventLog:
        """Iterative depth-first traversal from ``start``."""
        log = []
        if start not in self._graph:
            return EventLog(log)
        visited: set[int] = set()
        stack = [start]
        log.append(record(kinds.PUSH, start, info="Start"))
        while stack:
            curr = stack.pop()
            log.append(record(kinds.POP, curr))
            if curr in visited:
                continue
            visited.add(curr)
            log.append(record(kinds.VISIT, curr))
            # reversed so the first neighbour is popped first
            for nb, _ in reversed(self._neighbors(curr)):
                if nb not in visited:
                    stack.append(nb)
                    log.append(record(kinds.PUSH, nb))
                    log.append(record(kinds.HIGHLIGHT_EDGE, curr, nb))
        return EventLog(log)

    def run_dijkstra(self, start: int) -> EventLog:
        """Single-source shortest paths from ``start``.

        ``update_dist`` records carry the new distance both as text and as the
        numeric ``value``; the initial infinite distances have no value.
        """
        log = []
        if start not in self._graph:
            return EventLog(log)
        dist: Dict[int, float] = {}
        for vid in sorted(self._graph.nodes):
            dist[vid] = _INF
            log.append(record(kinds.UPDATE_DIST, vid, info="INF"))
        dist[start] = 0
        log.append(record(kinds.UPDATE_DIST, start, info="0", value=0))

        pq: List[Tuple[float, int]] = [(0, start)]
        log.append(record(kinds.PUSH, start, info="d:0"))
        while pq:
            d, u = heapq.heappop(pq)
            log.append(record(kinds.POP, u))
            if d > dist[u]:
                continue
            log.append(record(kinds.VISIT, u))
            for v, weight in self._neighbors(u):
                if dist[u] + weight < dist[v]:
                    dist[v] = dist[u] + weight
                    heapq.heappush(pq, (dist[v], v))
                    nd = int(dist[v])
                    log.append(record(kinds.UPDATE_DIST, v, info=str(nd), value=nd))
                    log.append(record(kinds.PUSH, v, info=f"d:{nd}"))
                    log.append(record(kinds.HIGHLIGHT_EDGE, u, v))
        return EventLog(log)

    def run_prim(self, start: int) -> EventLog:
        """Minimum spanning tree of the component containing ``start``.

        ``update_dist`` is reused to show the current key of each vertex and
        tree edges are reported as ``highlight_edge`` records with info
        ``"MST"``.
        """
        log = []
        if start not in self._graph:
            return EventLog(log)
        key: Dict[int, float] = {}
        parent: Dict[int, int] = {}
        in_mst: set[int] = set()
        for vid in sorted(self._graph.nodes):
            key[vid] = _INF
            log.append(record(kinds.UPDATE_DIST, vid, info="Key: INF"))
        key[start] = 0
        log.append(record(kinds.UPDATE_DIST, start, info="Key: 0", value=0))

        pq: List[Tuple[float, int]] = [(0, start)]
        log.append(record(kinds.PUSH, start, info="k:0"))
        while pq:
            _, u = heapq.heappop(pq)
            log.append(record(kinds.POP, u))
            if u in in_mst:
                continue
            in_mst.add(u)
            log.append(record(kinds.VISIT, u))
            if u in parent:
                log.append(record(kinds.HIGHLIGHT_EDGE, parent[u], u, info="MST"))
            for v, weight in self._neighbors(u):
                if v not in in_mst and weight < key[v]:
                    key[v] = weight
                    parent[v] = u
                    heapq.heappush(pq, (weight, v))
                    log.append(record(kinds.UPDATE_DIST, v, info=f"Key: {weight}", value=weight))
                    log.append(record(kinds.PUSH, v, info=f"k:{weight}"))
        return EventLog(log)

    def run(self, algorithm: str, start: int) -> EventLog:
        """Dispatch ``algorithm`` (``bfs``, ``dfs``, ``dijkstra`` or ``prim``)."""
        runners = {
            "bfs": self.run_bfs,
            "dfs": self.run_dfs,
            "dijkstra": self.run_dijkstra,
            "prim": self.run_prim,
        }
        runner = runners.get(algorithm)
        if runner is None:
            raise ValueError(f"unknown graph algorithm: {algorithm}")
        return runner(start)

import pytest

from Struct_Replay.backend import GraphBackend
from Struct_Replay.events import records as kinds


def _triangle():
    g = GraphBackend()
    for vid in (1, 2, 3):
        g.add_vertex(vid)
    g.add_edge(1, 2, 4)
    g.add_edge(1, 3, 2)
    g.add_edge(2, 3, 5)
    return g


def _visits(log):
    return [r.a for r in log.find(kinds.VISIT)]


def test_bfs_order_and_frontier():
    log = _triangle().run_bfs(1)
    assert _visits(log) == [1, 2, 3]
    assert log[0].kind == kinds.PUSH and log[0].info == "Start"
    pairs = [(r.a, r.b) for r in log.find(kinds.HIGHLIGHT_EDGE)]
    assert pairs == [(1, 2), (1, 3)]


def test_dfs_visits_each_vertex_once():
    log = _triangle().run_dfs(1)
    assert _visits(log) == [1, 2, 3]
    assert len(log.find(kinds.PUSH)) == len(log.find(kinds.POP))


def test_dijkstra_final_distances():
    g = _triangle()
    log = g.run_dijkstra(1)
    final = {}
    for r in log.find(kinds.UPDATE_DIST):
        if r.value is not None:
            final[r.a] = r.value
    assert final == {1: 0, 2: 4, 3: 2}
    assert [r.info for r in log[:3]] == ["INF", "INF", "INF"]
    for r in log.find(kinds.HIGHLIGHT_EDGE):
        assert g.has_edge(r.a, r.b)


def test_prim_tree_edges():
    log = _triangle().run_prim(1)
    mst = log.find(kinds.HIGHLIGHT_EDGE)
    assert {frozenset((r.a, r.b)) for r in mst} == {frozenset((1, 3)), frozenset((1, 2))}
    assert all(r.info == "MST" for r in mst)


def test_absent_start_gives_empty_log():
    g = _triangle()
    for algorithm in ("bfs", "dfs", "dijkstra", "prim"):
        assert len(g.run(algorithm, 99)) == 0


def test_unknown_algorithm():
    with pytest.raises(ValueError):
        _triangle().run("astar", 1)


def test_edge_replacement_and_vertex_removal():
    g = _triangle()
    g.add_edge(2, 1, 9)
    edges = {frozenset((u, v)): w for u, v, w in g.snapshot().edges}
    assert len(edges) == 3
    assert edges[frozenset((1, 2))] == 9
    g.remove_vertex(3)
    snap = g.snapshot()
    assert snap.vertices == (1, 2)
    assert len(snap.edges) == 1
    g.remove_vertex(42)

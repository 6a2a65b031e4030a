import asyncio

import pytest

from Struct_Replay.backend import HashTableBackend, HeapBackend
from Struct_Replay.config import Config
from Struct_Replay.engine import (
    COMPLETE_STATUS,
    GraphSession,
    HashSession,
    HeapSession,
    TreeSession,
    parse_int,
)
from Struct_Replay.events import records as kinds

FAST = 0.001


def _collect(session):
    seen = []
    session.scheduler.add_listener(lambda i, rec: seen.append(rec))
    return seen


def test_parse_int_accepts_leading_integer():
    assert parse_int("42") == 42
    assert parse_int(" -7 ") == -7
    assert parse_int("12abc") == 12
    assert parse_int(5) == 5
    assert parse_int("") is None
    assert parse_int("abc") is None
    assert parse_int(None) is None


def test_default_delays_come_from_config():
    assert TreeSession().scheduler.step_delay == 0.5
    assert HeapSession().scheduler.step_delay == 0.8
    Config.step_delay["hash"] = 0.25
    assert HashSession().scheduler.step_delay == 0.25


def test_tree_inserts_resync_to_backend():
    session = TreeSession(step_delay=FAST)
    keys = [50, 20, 70, 10, 30, 60, 80, 25, 5, 30]

    async def main():
        for key in keys:
            assert session.insert(key)
            await session.wait_idle()

    asyncio.run(main())
    backend_keys = [n.key for n in session.backend.snapshot()]
    assert session.mirror.keys() == backend_keys
    assert sorted(backend_keys) == sorted(set(keys))
    assert session.surface.status == COMPLETE_STATUS
    assert session.surface.focus is None
    assert set(session.engine.scene.handles) >= {f"node-{k}" for k in set(keys)}


def test_tree_keeps_negative_one_key():
    session = TreeSession(step_delay=FAST)

    async def main():
        for key in (5, -1, 3):
            assert session.insert(key)
            await session.wait_idle()

    asyncio.run(main())
    backend_keys = [n.key for n in session.backend.snapshot()]
    assert backend_keys == [3, -1, 5]
    assert session.mirror.keys() == backend_keys
    assert -1 in session.mirror
    assert {"node--1", "link-3--1"} <= session.engine.scene.handles


def test_tree_remove_with_successor():
    session = TreeSession(step_delay=FAST)
    seen = _collect(session)

    async def main():
        for key in (20, 10, 30, 25):
            session.insert(key)
            await session.wait_idle()
        seen.clear()
        assert session.remove(20)
        await session.wait_idle()

    asyncio.run(main())
    assert [r.kind for r in seen].count(kinds.REMOVE_NODE) == 1
    assert 20 not in session.mirror
    assert session.mirror.preorder() == session.backend.snapshot()


def test_invalid_input_never_reaches_backend():
    session = TreeSession(step_delay=FAST)
    assert not session.insert("abc")
    assert not session.insert("")
    assert not session.remove(None)
    assert session.backend.snapshot() == []
    assert not session.is_busy


def test_busy_request_is_rejected_before_backend():
    session = TreeSession(step_delay=FAST)

    async def main():
        assert session.insert(1)
        assert session.is_busy
        assert not session.insert(2)
        await session.wait_idle()

    asyncio.run(main())
    assert 1 in session.backend
    assert 2 not in session.backend


def test_hash_duplicate_keeps_chain():
    session = HashSession(HashTableBackend(7), step_delay=FAST)
    seen = _collect(session)

    async def main():
        for key in (5, 12, 5):
            assert session.insert(key)
            await session.wait_idle()

    asyncio.run(main())
    assert [r.kind for r in seen].count(kinds.DUPLICATE) == 1
    assert seen[-1].kind == kinds.DUPLICATE
    assert session.mirror.chains[5] == [5, 12]
    assert ("set_highlight", "chain-5-0", "error") in session.surface.calls
    assert session.surface.highlights == {}
    assert session.surface.status == COMPLETE_STATUS


def test_hash_search_marks_found_entry():
    session = HashSession(HashTableBackend(7), step_delay=FAST)

    async def main():
        for key in (5, 12):
            session.insert(key)
            await session.wait_idle()
        assert session.search("12")
        await session.wait_idle()
        assert session.search(40)
        await session.wait_idle()

    asyncio.run(main())
    calls = session.surface.calls
    assert ("set_highlight", "chain-5-0", "traversed") in calls
    assert ("set_highlight", "chain-5-1", "found") in calls
    assert ("set_highlight", "bucket-5", "error") in calls


def test_heap_round_trip():
    session = HeapSession(HeapBackend(is_min=True), step_delay=FAST)
    seen = _collect(session)
    sizes = []
    session.scheduler.add_listener(
        lambda i, rec: sizes.append(len(session.mirror)) if rec.kind == kinds.EXTRACT else None
    )

    async def main():
        for value in (7, 3, 9, 1):
            assert session.insert(value)
            await session.wait_idle()
            assert session.mirror.values == session.backend.array()
        for _ in range(4):
            assert session.extract()
            await session.wait_idle()
            assert session.mirror.values == session.backend.array()

    asyncio.run(main())
    assert [r.value for r in seen if r.kind == kinds.EXTRACT] == [1, 3, 7, 9]
    assert sizes == [3, 2, 1, 0]
    assert any(call[0] == "move_to" for call in session.surface.calls)
    assert session.engine.scene.is_empty()


def test_heap_set_mode_clears():
    session = HeapSession(step_delay=FAST)

    async def main():
        session.insert(4)
        await session.wait_idle()

    asyncio.run(main())
    assert session.set_mode(False)
    assert session.mirror.values == []
    assert session.backend.is_min is False


def test_dijkstra_on_default_graph():
    session = GraphSession.with_default_graph(step_delay=FAST)
    seen = _collect(session)

    async def main():
        assert session.run("dijkstra", 1)
        await session.wait_idle()

    asyncio.run(main())
    final = {}
    for rec in seen:
        if rec.kind == kinds.UPDATE_DIST and rec.value is not None:
            final[rec.a] = rec.value
    assert final == {1: 0, 2: 4, 3: 2}
    for rec in seen:
        if rec.kind == kinds.HIGHLIGHT_EDGE:
            assert session.engine.find_edge(rec.a, rec.b) is not None
    surface = session.surface
    assert surface.highlights["edge-1-2"] == "traversed"
    assert surface.highlights["node-3"] == "visited"
    assert surface.badges["node-2"] == "4"
    assert surface.panel == []
    assert surface.status == COMPLETE_STATUS


def test_bfs_frontier_panel():
    session = GraphSession.with_default_graph(step_delay=FAST)

    async def main():
        assert session.run("bfs", "1")
        assert session.surface.panel == ["1 [Start]"]
        await session.wait_idle()

    asyncio.run(main())
    assert ("set_panel", ("2", "3")) in session.surface.calls


def test_graph_run_validation():
    session = GraphSession.with_default_graph(step_delay=FAST)
    assert not session.run("bfs", 99)
    assert not session.run("dfs", "x")
    with pytest.raises(ValueError):
        session.run("astar", 1)
    assert not session.is_busy


def test_graph_editing_is_immediate():
    session = GraphSession.with_default_graph(step_delay=FAST)
    assert session.layout.positions[1] == (400.0, 100.0)
    assert not session.add_vertex(1)
    assert session.add_vertex("4", 100, 100)
    assert not session.add_edge(4, 99, 1)
    assert session.add_edge(4, 1, 7)
    assert session.add_edge(1, 4, 3)
    assert session.mirror.edge(4, 1) == (1, 4, 3)
    assert "edge-1-4" in session.engine.scene

    calls = session.surface.calls
    calls.clear()
    assert session.move_vertex(4, 200, 500)
    edge = session.engine.scene.shape("edge-1-4")
    assert (edge.x2, edge.y2) == (200.0, 500.0)
    # only the vertex and the edges touching it are re-placed
    assert calls == [("update_shape", "node-4"), ("update_shape", "edge-1-4")]
    assert session.surface.shapes["edge-1-4"] == edge
    assert not session.move_vertex(42, 0, 0)

    assert session.remove_vertex(4)
    assert "node-4" not in session.engine.scene
    assert session.backend.snapshot().vertices == (1, 2, 3)

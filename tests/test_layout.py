from Struct_Replay.events import TreeNodeData
from Struct_Replay.layout import (
    GraphLayout,
    array_positions,
    binary_tree_layout,
    hash_layout,
    heap_positions,
    tree_positions,
)

_TREE = [TreeNodeData(20, 2, 0, 10, 30), TreeNodeData(10, 1, 0), TreeNodeData(30, 1, 0)]


def test_tree_positions_halve_offset():
    pos = tree_positions(_TREE, 800)
    assert pos == {20: (400.0, 60.0), 10: (200.0, 130.0), 30: (600.0, 130.0)}
    assert tree_positions(_TREE, 800) == pos
    assert tree_positions([], 800) == {}


def test_degenerate_tree_needs_no_recursion():
    chain = [TreeNodeData(i, 1, 0, None, i + 1 if i < 1999 else None) for i in range(2000)]
    pos = tree_positions(chain, 800)
    assert len(pos) == 2000
    assert pos[1999][1] == 60 + 1999 * 70


def test_cycle_is_placed_once():
    pos = binary_tree_layout("a", lambda n: ("a", None), 800, 60, 70)
    assert pos == {"a": (400, 60)}


def test_heap_positions_and_cells():
    pos = heap_positions(4, 800)
    assert pos == {0: (400.0, 50.0), 1: (200.0, 120.0), 2: (600.0, 120.0), 3: (100.0, 190.0)}
    assert heap_positions(0, 800) == {}
    assert array_positions(3) == {0: (40.0, 420.0), 1: (90.0, 420.0), 2: (140.0, 420.0)}


def test_hash_layout_geometry():
    layout = hash_layout([[5, 12], []])
    assert layout.buckets == {0: (50.0, 40.0, 60.0, 40.0), 1: (130.0, 40.0, 60.0, 40.0)}
    assert layout.chains[(0, 0)].rect == (55.0, 110.0, 50.0, 35.0)
    assert layout.chains[(0, 0)].enter_y == 125.0
    assert layout.chains[(0, 1)].rect == (55.0, 175.0, 50.0, 35.0)
    assert layout.connectors == [(80.0, 80.0, 80.0, 105.0), (80.0, 145.0, 80.0, 170.0)]
    assert hash_layout([[5, 12], []]) == layout
    assert hash_layout([]).buckets == {}


def test_graph_layout_is_user_owned():
    layout = GraphLayout(seed=3)
    assert layout.place(1, 400, 100) == (400.0, 100.0)
    x, y = layout.place(2)
    assert 400 <= x < 450 and 300 <= y < 350
    assert layout.place(2) == (x, y)
    assert GraphLayout(seed=3).place(2) == (x, y)

    assert not layout.move(9, 0, 0)
    assert layout.move(2, 250, 300)
    geom = layout.edge(1, 2)
    assert geom.midpoint == (325.0, 200.0)
    assert layout.edge(1, 9) is None
    assert [g.v for g in layout.dependent_edges(2, [(1, 2), (1, 3)])] == [2]
    layout.forget(2)
    assert 2 not in layout

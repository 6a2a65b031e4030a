from Struct_Replay.backend import AVLBackend
from Struct_Replay.events import BucketData, GraphSnapshot, TreeNodeData
from Struct_Replay.mirror import GraphMirror, HashMirror, HeapMirror, TreeMirror


def test_tree_mirror_loads_backend_snapshot():
    tree = AVLBackend()
    for key in (50, 20, 70, 10, 30):
        tree.insert(key)
    mirror = TreeMirror.from_snapshot(tree.snapshot())
    assert mirror.preorder() == tree.snapshot()
    assert mirror.edges()[0] == (50, 20)


def test_tree_mirror_bst_insert():
    mirror = TreeMirror()
    for key in (5, 3, 8):
        assert mirror.insert(key)
    assert not mirror.insert(3)
    assert mirror.root == 5
    assert (mirror.nodes[5].left, mirror.nodes[5].right) == (3, 8)


def test_tree_mirror_remove_two_children():
    mirror = TreeMirror()
    for key in (5, 3, 8, 7, 9):
        mirror.insert(key)
    assert mirror.remove(5)
    assert mirror.root == 7
    assert (mirror.nodes[7].left, mirror.nodes[7].right) == (3, 8)
    assert mirror.nodes[8].left is None
    assert sorted(mirror.keys()) == [3, 7, 8, 9]
    assert not mirror.remove(42)


def test_tree_mirror_stats_and_cycles():
    mirror = TreeMirror.from_snapshot([TreeNodeData(1, 2, -1, None, 2), TreeNodeData(2, 1, 0, 1, None)])
    assert mirror.keys() == [1, 2]
    mirror.update_stats(2, 5, 1)
    assert (mirror.nodes[2].height, mirror.nodes[2].balance) == (5, 1)
    mirror.update_stats(99, 1, 0)


def test_graph_mirror_replaces_edges():
    mirror = GraphMirror()
    mirror.load(GraphSnapshot(vertices=(1, 2, 3), edges=((1, 2, 4), (1, 3, 2))))
    mirror.add_edge(2, 1, 9)
    assert mirror.edges == [(1, 3, 2), (2, 1, 9)]
    assert mirror.edge(1, 2) == (2, 1, 9)
    assert not mirror.add_vertex(1)
    assert mirror.remove_vertex(1)
    assert mirror.edges == []


def test_hash_mirror_chains():
    mirror = HashMirror()
    mirror.load([BucketData(0, (7,)), BucketData(1, ())])
    assert mirror.append(0, 14)
    assert not mirror.append(0, 14)
    assert not mirror.append(5, 1)
    assert mirror.locate(14) == (0, 1)
    assert mirror.locate(14, 1) is None
    assert mirror.keys() == [7, 14]


def test_heap_mirror():
    mirror = HeapMirror([3, 1])
    assert mirror.push(2) == 2
    assert mirror.swap(0, 1)
    assert mirror.values == [1, 3, 2]
    assert not mirror.swap(0, 7)
    assert mirror.pop() == 2
    assert HeapMirror().pop() is None

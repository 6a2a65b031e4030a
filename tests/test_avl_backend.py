from Struct_Replay.backend import AVLBackend
from Struct_Replay.events import TreeNodeData
from Struct_Replay.events import records as kinds


def _keys(tree):
    return [n.key for n in tree.snapshot()]


def test_rr_rotation_log():
    tree = AVLBackend()
    tree.insert(10)
    tree.insert(20)
    log = tree.insert(30)
    assert log.kinds() == [
        kinds.SEARCH_VISIT,
        kinds.SEARCH_VISIT,
        kinds.INSERT_NODE,
        kinds.UPDATE_STATS,
        kinds.UPDATE_STATS,
        kinds.ROTATE_EVENT,
    ]
    assert [r.info for r in log.find(kinds.UPDATE_STATS)] == ["H:2 BF:-1", "H:3 BF:-2"]
    assert log.find(kinds.ROTATE_EVENT)[0].info == "Performing Left Rotate (RR Case)"
    assert tree.snapshot()[0] == TreeNodeData(20, 2, 0, 10, 30)
    assert _keys(tree) == [20, 10, 30]


def test_lr_rotation_emits_prep_step():
    tree = AVLBackend()
    tree.insert(30)
    tree.insert(10)
    log = tree.insert(20)
    infos = [r.info for r in log.find(kinds.ROTATE_EVENT)]
    assert infos == [
        "Left Rotate (LR Prep)",
        "Performing Left Rotate (RR Case)",
        "Performing Right Rotate (LL Case)",
    ]
    assert _keys(tree)[0] == 20


def test_duplicate_insert_has_no_insert_record():
    tree = AVLBackend()
    tree.insert(5)
    log = tree.insert(5)
    assert not log.has(kinds.INSERT_NODE)
    assert _keys(tree) == [5]


def test_remove_absent_key():
    tree = AVLBackend()
    tree.insert(1)
    log = tree.remove(9)
    assert log.kinds() == [kinds.SEARCH_VISIT]
    assert 1 in tree


def test_remove_two_children_moves_successor():
    tree = AVLBackend()
    for key in (20, 10, 30):
        tree.insert(key)
    log = tree.remove(20)
    highlight = log.find(kinds.HIGHLIGHT_NODE)[0]
    assert (highlight.a, highlight.value) == (30, 20)
    removed = log.find(kinds.REMOVE_NODE)
    assert len(removed) == 1
    assert (removed[0].a, removed[0].value) == (30, 20)
    assert removed[0].info == "Successor Moved Up"
    assert tree.snapshot()[0] == TreeNodeData(30, 2, 1, 10, None)
    assert 20 not in tree


def test_remove_leaf():
    tree = AVLBackend()
    for key in (2, 1, 3):
        tree.insert(key)
    log = tree.remove(3)
    assert log.find(kinds.REMOVE_NODE)[0].info == "Deleted"
    assert _keys(tree) == [2, 1]


def test_snapshot_is_preorder_and_balanced():
    tree = AVLBackend()
    for key in range(1, 16):
        tree.insert(key)
    nodes = tree.snapshot()
    assert nodes[0].key == 8
    assert sorted(n.key for n in nodes) == list(range(1, 16))
    assert all(abs(n.balance) <= 1 for n in nodes)
    assert AVLBackend().snapshot() == []

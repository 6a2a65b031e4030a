from Struct_Replay.backend import HeapBackend
from Struct_Replay.events import records as kinds


def _extract_all(heap):
    out = []
    while len(heap):
        out.append(heap.extract().find(kinds.EXTRACT)[0].value)
    return out


def test_min_heap_insert_sift_up():
    heap = HeapBackend(is_min=True)
    for value in (7, 3, 9):
        heap.insert(value)
    log = heap.insert(1)
    assert log.kinds() == [
        kinds.INSERT,
        kinds.HIGHLIGHT,
        kinds.SWAP,
        kinds.HIGHLIGHT,
        kinds.SWAP,
        kinds.COMPLETE,
    ]
    assert log[0].subjects == (3, 1)
    assert heap.array() == [1, 3, 9, 7]


def test_extract_order_min_and_max():
    heap = HeapBackend(is_min=True)
    for value in (7, 3, 9, 1):
        heap.insert(value)
    assert _extract_all(heap) == [1, 3, 7, 9]

    heap.set_mode(False)
    for value in (7, 3, 9, 1):
        heap.insert(value)
    assert _extract_all(heap) == [9, 7, 3, 1]


def test_extract_log_shape():
    heap = HeapBackend(is_min=True)
    for value in (1, 3, 9, 7):
        heap.insert(value)
    log = heap.extract()
    assert log[:3] == (
        log.find(kinds.HIGHLIGHT)[0],
        log.find(kinds.SWAP)[0],
        log.find(kinds.EXTRACT)[0],
    )
    assert log[2].subjects == (3, 1)
    assert log[-1].kind == kinds.COMPLETE
    assert heap.array() == [3, 7, 9]


def test_empty_extract_and_mode_switch():
    heap = HeapBackend()
    assert len(heap.extract()) == 0
    heap.insert(4)
    heap.set_mode(False)
    assert heap.array() == []
    assert heap.is_min is False

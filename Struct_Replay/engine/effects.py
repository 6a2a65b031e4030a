"""Per-kind visual effects applied while an event log plays.

Every effect takes the owning session and the record and may return a
*settle* callback that the scheduler runs when the step's delay has elapsed.
Structural kinds also mutate the session's mirror.
"""

from __future__ import annotations

import functools
import logging
import re
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from ..events import ActionRecord, Family
from ..events import records as kinds
from ..render import bucket_handle, cell_handle, chain_handle, node_handle

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .session import GraphSession, HashSession, HeapSession, TreeSession

logger = logging.getLogger(__name__)

Settle = Optional[Callable[[], None]]
Effect = Callable[[Any, ActionRecord], Settle]

_STATS_RE = re.compile(r"H:\s*(-?\d+)\s+BF:\s*(-?\d+)")


# ----------------------------------------------------------------------
# status line
def describe(family: Family, rec: ActionRecord) -> str:
    """Status line shown while ``rec`` is applied."""
    if family is Family.TREE:
        if rec.kind == kinds.INSERT_NODE:
            return f"Adding Node {rec.a}"
        if rec.kind == kinds.ROTATE_EVENT:
            return f"Tree Balancing: {rec.info}"
        return f"{rec.kind}: {rec.info}"
    if family is Family.GRAPH:
        text = f"{rec.kind} {' - '.join(str(s) for s in rec.subjects)}"
        return f"{text} [{rec.info}]" if rec.info else text
    return rec.info or rec.kind


# ----------------------------------------------------------------------
# AVL tree
def _tree_search_visit(session: "TreeSession", rec: ActionRecord) -> Settle:
    session.engine.focus(node_handle(rec.a))
    return None


def _tree_insert_node(session: "TreeSession", rec: ActionRecord) -> Settle:
    if session.mirror.insert(rec.a):
        session.redraw()
    return None


def _tree_remove_node(session: "TreeSession", rec: ActionRecord) -> Settle:
    # a successor moving up carries the key it replaces in ``value``
    target = rec.value if rec.value is not None else rec.a
    if session.mirror.remove(target):
        session.redraw()
    return None


def _tree_rotate(session: "TreeSession", rec: ActionRecord) -> Settle:
    engine = session.engine
    engine.clear_highlights(["compare"])
    engine.highlight(node_handle(rec.a), "compare")
    return None


def _tree_update_stats(session: "TreeSession", rec: ActionRecord) -> Settle:
    match = _STATS_RE.search(rec.info)
    if match is None:
        logger.debug("unparsable stats %r for node %s", rec.info, rec.a)
        return None
    height, balance = int(match.group(1)), int(match.group(2))
    session.mirror.update_stats(rec.a, height, balance)
    session.redraw()
    session.engine.badge(node_handle(rec.a), f"BF:{balance}")
    return None


def _tree_highlight_node(session: "TreeSession", rec: ActionRecord) -> Settle:
    session.engine.highlight(node_handle(rec.a), "active")
    return None


# ----------------------------------------------------------------------
# graph traversal
def _graph_visit(session: "GraphSession", rec: ActionRecord) -> Settle:
    session.engine.highlight(node_handle(rec.a), "visited")
    return None


def _graph_push(session: "GraphSession", rec: ActionRecord) -> Settle:
    label = f"{rec.a} [{rec.info}]" if rec.info else str(rec.a)
    session.frontier.append((rec.a, label))
    session.engine.set_panel([item for _, item in session.frontier])
    handle = node_handle(rec.a)
    if handle not in session.engine.highlighted("visited"):
        session.engine.highlight(handle, "frontier")
    return None


def _graph_pop(session: "GraphSession", rec: ActionRecord) -> Settle:
    for pos, (vid, _) in enumerate(session.frontier):
        if vid == rec.a:
            del session.frontier[pos]
            break
    else:
        logger.debug("pop of %s which is not in the frontier", rec.a)
    session.engine.set_panel([item for _, item in session.frontier])
    return None


def _graph_update_dist(session: "GraphSession", rec: ActionRecord) -> Settle:
    session.engine.badge(node_handle(rec.a), rec.info)
    return None


def _graph_highlight_edge(session: "GraphSession", rec: ActionRecord) -> Settle:
    handle = session.engine.find_edge(rec.a, rec.b)
    if handle is None:
        logger.debug("no edge between %s and %s on screen", rec.a, rec.b)
        return None
    session.engine.highlight(handle, "mst" if rec.info == "MST" else "traversed")
    return None


# ----------------------------------------------------------------------
# chained hash table; subjects are (bucket, key)
def _hash_chain(session: "HashSession", rec: ActionRecord) -> str | None:
    loc = session.mirror.locate(rec.b, rec.a)
    return None if loc is None else chain_handle(*loc)


def _hash_mark(session: "HashSession", rec: ActionRecord, style: str) -> None:
    handle = _hash_chain(session, rec)
    if handle is None:
        logger.debug("key %s is not shown in bucket %s", rec.b, rec.a)
        return
    session.engine.highlight(handle, style)


def _hash_compute(session: "HashSession", rec: ActionRecord) -> Settle:
    session.engine.highlight(bucket_handle(rec.a), "active")
    return None


def _hash_traverse(session: "HashSession", rec: ActionRecord) -> Settle:
    session.engine.highlight(bucket_handle(rec.a), "active")
    _hash_mark(session, rec, "traversed")
    return None


def _hash_insert(session: "HashSession", rec: ActionRecord) -> Settle:
    if session.mirror.append(rec.a, rec.b):
        session.redraw()
    _hash_mark(session, rec, "inserted")
    return None


def _hash_duplicate(session: "HashSession", rec: ActionRecord) -> Settle:
    _hash_mark(session, rec, "error")
    return None


def _hash_found(session: "HashSession", rec: ActionRecord) -> Settle:
    _hash_mark(session, rec, "found")
    return None


def _hash_not_found(session: "HashSession", rec: ActionRecord) -> Settle:
    session.engine.highlight(bucket_handle(rec.a), "error")
    return None


def _hash_step(effect: Effect) -> Effect:
    # per-step highlights of the previous step are dropped first
    @functools.wraps(effect)
    def wrapped(session: "HashSession", rec: ActionRecord) -> Settle:
        session.engine.clear_highlights(["active", "traversed", "inserted"])
        return effect(session, rec)

    return wrapped


# ----------------------------------------------------------------------
# binary heap; subjects are array indices
def _heap_mark(session: "HeapSession", index: int, style: str) -> None:
    session.engine.highlight(node_handle(index), style)
    session.engine.highlight(cell_handle(index), style)


def _heap_unmark(session: "HeapSession") -> None:
    session.engine.clear_highlights(["compare", "inserted"])


def _heap_insert(session: "HeapSession", rec: ActionRecord) -> Settle:
    value = rec.value if rec.value is not None else rec.b
    index = session.mirror.push(value)
    session.redraw()
    _heap_mark(session, index, "inserted")
    return lambda: _heap_unmark(session)


def _heap_highlight(session: "HeapSession", rec: ActionRecord) -> Settle:
    _heap_mark(session, rec.a, "compare")
    _heap_mark(session, rec.b, "compare")
    return lambda: _heap_unmark(session)


def _heap_swap(session: "HeapSession", rec: ActionRecord) -> Settle:
    engine = session.engine
    for make in (node_handle, cell_handle):
        first, second = make(rec.a), make(rec.b)
        pos_a, pos_b = engine.scene.position(first), engine.scene.position(second)
        if pos_a is None or pos_b is None:
            continue
        engine.move(first, pos_b)
        engine.move(second, pos_a)
    if not session.mirror.swap(rec.a, rec.b):
        logger.debug("swap of %s and %s outside the mirror", rec.a, rec.b)
        return None

    def settle() -> None:
        _heap_unmark(session)
        session.redraw()

    return settle


def _heap_extract(session: "HeapSession", rec: ActionRecord) -> Settle:
    if session.mirror.pop() is not None:
        session.redraw()
    return None


def _heap_complete(session: "HeapSession", rec: ActionRecord) -> Settle:
    _heap_unmark(session)
    return None


# ----------------------------------------------------------------------
EFFECTS: Dict[Family, Dict[str, Effect]] = {
    Family.TREE: {
        kinds.SEARCH_VISIT: _tree_search_visit,
        kinds.INSERT_NODE: _tree_insert_node,
        kinds.REMOVE_NODE: _tree_remove_node,
        kinds.ROTATE_EVENT: _tree_rotate,
        kinds.UPDATE_STATS: _tree_update_stats,
        kinds.HIGHLIGHT_NODE: _tree_highlight_node,
    },
    Family.GRAPH: {
        kinds.VISIT: _graph_visit,
        kinds.PUSH: _graph_push,
        kinds.POP: _graph_pop,
        kinds.UPDATE_DIST: _graph_update_dist,
        kinds.HIGHLIGHT_EDGE: _graph_highlight_edge,
    },
    Family.HASH: {
        kinds.COMPUTE_HASH: _hash_step(_hash_compute),
        kinds.TRAVERSE: _hash_step(_hash_traverse),
        kinds.INSERT: _hash_step(_hash_insert),
        kinds.DUPLICATE: _hash_step(_hash_duplicate),
        kinds.FOUND: _hash_step(_hash_found),
        kinds.NOT_FOUND: _hash_step(_hash_not_found),
    },
    Family.HEAP: {
        kinds.INSERT: _heap_insert,
        kinds.HIGHLIGHT: _heap_highlight,
        kinds.SWAP: _heap_swap,
        kinds.EXTRACT: _heap_extract,
        kinds.COMPLETE: _heap_complete,
    },
}

"""YAML operation scripts driving a session or a bare backend.

A script names one structure family and a list of operations, each a
single-key mapping from the operation name to its argument(s)::

    structure: hash
    size: 7
    operations:
      - insert: 5
      - insert: 12
      - search: 12

Family options: ``size`` (hash), ``min`` (heap), ``default_graph`` and
``seed`` (graph).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Tuple

import yaml

from .backend import AVLBackend, GraphBackend, HashTableBackend, HeapBackend
from .events import EventLog, Family
from .engine.session import GraphSession, HashSession, HeapSession, Session, TreeSession

logger = logging.getLogger(__name__)

#: operations accepted per family; the value says whether it yields a log
OPERATIONS: Dict[Family, Dict[str, bool]] = {
    Family.TREE: {"insert": True, "remove": True},
    Family.HASH: {"insert": True, "search": True},
    Family.HEAP: {"insert": True, "extract": True, "set_mode": False},
    Family.GRAPH: {
        "add_vertex": False,
        "remove_vertex": False,
        "add_edge": False,
        "move_vertex": False,
        "run": True,
    },
}

Operation = Tuple[str, Tuple[Any, ...]]


@dataclass
class Script:
    family: Family
    operations: List[Operation] = field(default_factory=list)
    options: Dict[str, Any] = field(default_factory=dict)


def _as_args(value: Any) -> Tuple[Any, ...]:
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return (value,)


def parse_script(data: Any) -> Script:
    """Validate a decoded script mapping."""
    if not isinstance(data, dict):
        raise ValueError("script must be a mapping")
    try:
        family = Family(str(data.get("structure", "")).lower())
    except ValueError:
        raise ValueError(f"unknown structure: {data.get('structure')!r}") from None
    allowed = OPERATIONS[family]
    operations: List[Operation] = []
    for entry in data.get("operations") or []:
        if isinstance(entry, str):
            entry = {entry: None}
        if not isinstance(entry, dict) or len(entry) != 1:
            raise ValueError(f"operation must be a single-key mapping: {entry!r}")
        ((name, value),) = entry.items()
        if name not in allowed:
            raise ValueError(f"{family.value} has no operation {name!r}")
        operations.append((name, _as_args(value)))
    options = {k: v for k, v in data.items() if k not in ("structure", "operations")}
    return Script(family, operations, options)


def load_script(path: str) -> Script:
    with open(path) as fh:
        return parse_script(yaml.safe_load(fh))


# ----------------------------------------------------------------------
def build_backend(script: Script) -> Any:
    opts = script.options
    if script.family is Family.TREE:
        return AVLBackend()
    if script.family is Family.HASH:
        return HashTableBackend(opts.get("size"))
    if script.family is Family.HEAP:
        return HeapBackend(opts.get("min"))
    backend = GraphBackend()
    if opts.get("default_graph"):
        for vid in (1, 2, 3):
            backend.add_vertex(vid)
        for u, v, w in ((1, 2, 4), (1, 3, 2), (2, 3, 5)):
            backend.add_edge(u, v, w)
    return backend


def build_session(script: Script, surface: Any = None, **kwargs: Any) -> Session:
    """Create the session for ``script``; ``kwargs`` go to the session."""
    opts = script.options
    if script.family is Family.TREE:
        return TreeSession(surface=surface, **kwargs)
    if script.family is Family.HASH:
        return HashSession(HashTableBackend(opts.get("size")), surface, **kwargs)
    if script.family is Family.HEAP:
        return HeapSession(HeapBackend(opts.get("min")), surface, **kwargs)
    if opts.get("default_graph"):
        return GraphSession.with_default_graph(surface, seed=opts.get("seed"), **kwargs)
    return GraphSession(surface=surface, seed=opts.get("seed"), **kwargs)


def event_logs(script: Script, backend: Any = None) -> Iterator[EventLog]:
    """Apply the script to a bare backend and yield every event log."""
    backend = backend if backend is not None else build_backend(script)
    for name, args in script.operations:
        if name == "move_vertex":
            continue
        if name == "set_mode":
            backend.set_mode(bool(args[0]) if args else True)
            continue
        if name == "add_vertex":
            # positions only matter to a session's layout
            args = args[:1]
        result = getattr(backend, name)(*args)
        if OPERATIONS[script.family][name]:
            yield result


async def play_script(
    session: Session,
    script: Script,
    on_operation: Callable[[str, Tuple[Any, ...], bool], None] | None = None,
) -> None:
    """Run each operation on ``session`` and wait for its playback."""
    for name, args in script.operations:
        if name == "set_mode":
            args = (bool(args[0]) if args else True,)
        started = getattr(session, name)(*args)
        logger.debug("%s%r -> %s", name, args, started)
        await session.wait_idle()
        if on_operation is not None:
            on_operation(name, args, started)

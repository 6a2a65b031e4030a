"""Action records emitted by the structure backends."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple


class Family(Enum):
    """Structure families understood by the replay engine."""

    TREE = "tree"
    GRAPH = "graph"
    HASH = "hash"
    HEAP = "heap"


# AVL tree
SEARCH_VISIT = "search_visit"
INSERT_NODE = "insert_node"
REMOVE_NODE = "remove_node"
ROTATE_EVENT = "rotate_event"
UPDATE_STATS = "update_stats"
HIGHLIGHT_NODE = "highlight_node"

# graph traversal
VISIT = "visit"
PUSH = "push"
POP = "pop"
UPDATE_DIST = "update_dist"
HIGHLIGHT_EDGE = "highlight_edge"

# chained hash table
COMPUTE_HASH = "compute_hash"
TRAVERSE = "traverse"
INSERT = "insert"
DUPLICATE = "duplicate"
FOUND = "found"
NOT_FOUND = "not_found"

# binary heap (``INSERT`` is shared with the hash table)
HIGHLIGHT = "highlight"
SWAP = "swap"
EXTRACT = "extract"
COMPLETE = "complete"

KINDS: Dict[Family, frozenset[str]] = {
    Family.TREE: frozenset(
        {SEARCH_VISIT, INSERT_NODE, REMOVE_NODE, ROTATE_EVENT, UPDATE_STATS, HIGHLIGHT_NODE}
    ),
    Family.GRAPH: frozenset({VISIT, PUSH, POP, UPDATE_DIST, HIGHLIGHT_EDGE}),
    Family.HASH: frozenset({COMPUTE_HASH, TRAVERSE, INSERT, DUPLICATE, FOUND, NOT_FOUND}),
    Family.HEAP: frozenset({INSERT, HIGHLIGHT, SWAP, EXTRACT, COMPLETE}),
}


@dataclass(frozen=True)
class ActionRecord:
    """One step of a backend operation.

    ``subjects`` holds the identities the step refers to (a tree key, one or
    two graph vertices, a bucket index and key, or two heap indices). ``value``
    is the optional numeric payload such as a bucket index, a distance or the
    value inserted into a heap.
    """

    kind: str
    subjects: Tuple[int, ...] = ()
    info: str = ""
    value: int | None = None

    @property
    def a(self) -> int | None:
        """First subject, or ``None``."""
        return self.subjects[0] if self.subjects else None

    @property
    def b(self) -> int | None:
        """Second subject, or ``None``."""
        return self.subjects[1] if len(self.subjects) > 1 else None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the record to a plain ``dict``."""
        data: Dict[str, Any] = {"kind": self.kind, "subjects": list(self.subjects)}
        if self.info:
            data["info"] = self.info
        if self.value is not None:
            data["value"] = self.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ActionRecord":
        """Construct a record from ``data`` produced by :meth:`to_dict`."""
        if "kind" not in data:
            raise ValueError("action record missing 'kind'")
        value = data.get("value")
        return cls(
            kind=str(data["kind"]),
            subjects=tuple(int(s) for s in data.get("subjects", ())),
            info=str(data.get("info", "")),
            value=None if value is None else int(value),
        )


def record(kind: str, *subjects: int, info: str = "", value: int | None = None) -> ActionRecord:
    """Shorthand used by the backends to build an :class:`ActionRecord`."""
    return ActionRecord(kind=kind, subjects=tuple(subjects), info=info, value=value)


@dataclass(frozen=True)
class TreeNodeData:
    """One AVL node in preorder snapshot form; a missing child is ``None``."""

    key: int
    height: int
    balance: int
    left: int | None = None
    right: int | None = None


@dataclass(frozen=True)
class BucketData:
    """Ordered chain contents of one hash bucket."""

    index: int
    keys: Tuple[int, ...] = ()


@dataclass(frozen=True)
class GraphSnapshot:
    """Vertices and undirected weighted edges of a graph backend."""

    vertices: Tuple[int, ...] = ()
    edges: Tuple[Tuple[int, int, int], ...] = field(default_factory=tuple)

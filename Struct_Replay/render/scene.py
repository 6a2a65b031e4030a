"""Pure projection of mirrors and layouts into drawable primitives."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Tuple

from ..config import Config
from ..layout import GraphLayout, hash_layout, heap_positions, tree_positions
from ..layout.tree import array_positions
from ..mirror import GraphMirror, HashMirror, HeapMirror, TreeMirror

Position = Tuple[float, float]


def node_handle(key: int) -> str:
    return f"node-{key}"


def edge_handle(u: int, v: int) -> str:
    return f"edge-{u}-{v}"


def cell_handle(index: int) -> str:
    return f"cell-{index}"


def bucket_handle(index: int) -> str:
    return f"bucket-{index}"


def chain_handle(bucket: int, position: int) -> str:
    return f"chain-{bucket}-{position}"


@dataclass(frozen=True)
class NodeShape:
    """Circle with a centred label."""

    handle: str
    x: float
    y: float
    radius: float
    label: str
    tooltip: str = ""


@dataclass(frozen=True)
class EdgeShape:
    """Straight line with an optional weight label at its midpoint."""

    handle: str
    x1: float
    y1: float
    x2: float
    y2: float
    label: str | None = None


@dataclass(frozen=True)
class BoxShape:
    """Rectangle used for hash buckets, chain entries and array cells.

    ``enter_y`` is the ``y`` a newly drawn box slides in from, if any.
    ``caption`` is drawn under the box (bucket or array index).
    """

    handle: str
    kind: str
    x: float
    y: float
    width: float
    height: float
    label: str
    caption: str = ""
    enter_y: float | None = None


@dataclass(frozen=True)
class ConnectorShape:
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class Scene:
    """Immutable scene graph; equal inputs render to equal scenes."""

    nodes: Tuple[NodeShape, ...] = ()
    edges: Tuple[EdgeShape, ...] = ()
    boxes: Tuple[BoxShape, ...] = ()
    connectors: Tuple[ConnectorShape, ...] = ()
    _index: Dict[str, Position] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        index: Dict[str, Position] = {}
        for n in self.nodes:
            index[n.handle] = (n.x, n.y)
        for e in self.edges:
            index[e.handle] = ((e.x1 + e.x2) / 2, (e.y1 + e.y2) / 2)
        for b in self.boxes:
            index[b.handle] = (b.x, b.y)
        object.__setattr__(self, "_index", index)

    @property
    def handles(self) -> FrozenSet[str]:
        return frozenset(self._index)

    def __contains__(self, handle: str) -> bool:
        return handle in self._index

    def position(self, handle: str) -> Position | None:
        """Anchor of ``handle``: node centre, edge midpoint or box corner."""
        return self._index.get(handle)

    def shape(self, handle: str) -> NodeShape | EdgeShape | BoxShape | None:
        for group in (self.nodes, self.edges, self.boxes):
            for item in group:
                if item.handle == handle:
                    return item
        return None

    def is_empty(self) -> bool:
        return not (self.nodes or self.edges or self.boxes)


# ----------------------------------------------------------------------
def render_tree(mirror: TreeMirror, width: float | None = None) -> Scene:
    """Scene for an AVL mirror; tooltips show height and balance factor."""
    snapshot = mirror.preorder()
    positions = tree_positions(snapshot, width)
    radius = Config.tree_layout["radius"]
    edges = []
    for parent, child in mirror.edges():
        if child not in positions:
            continue
        (x1, y1), (x2, y2) = positions[parent], positions[child]
        edges.append(EdgeShape(f"link-{parent}-{child}", x1, y1, x2, y2))
    nodes = tuple(
        NodeShape(
            node_handle(n.key),
            *positions[n.key],
            radius=radius,
            label=str(n.key),
            tooltip=f"Node {n.key}\nHeight: {n.height}\nBalance Factor: {n.balance}",
        )
        for n in snapshot
    )
    return Scene(nodes=nodes, edges=tuple(edges))


def render_graph(mirror: GraphMirror, layout: GraphLayout) -> Scene:
    """Scene for a graph; vertices without a position are not drawn."""
    radius = Config.graph_layout["radius"]
    edges = []
    for u, v, w in mirror.edges:
        geom = layout.edge(u, v)
        if geom is None:
            continue
        edges.append(EdgeShape(edge_handle(u, v), *geom.start, *geom.end, label=str(w)))
    nodes = tuple(
        NodeShape(node_handle(vid), *layout.positions[vid], radius=radius, label=str(vid))
        for vid in mirror.vertices
        if vid in layout
    )
    return Scene(nodes=nodes, edges=tuple(edges))


def render_hash(mirror: HashMirror) -> Scene:
    """Scene for a hash table with one box per bucket and chained entry."""
    layout = hash_layout(mirror.chains)
    boxes = []
    for idx, (x, y, w, h) in layout.buckets.items():
        boxes.append(BoxShape(bucket_handle(idx), "bucket", x, y, w, h, "[ ]", caption=str(idx)))
    for (idx, pos), slot in layout.chains.items():
        x, y, w, h = slot.rect
        boxes.append(
            BoxShape(
                chain_handle(idx, pos),
                "chain",
                x,
                y,
                w,
                h,
                str(mirror.chains[idx][pos]),
                enter_y=slot.enter_y,
            )
        )
    connectors = tuple(ConnectorShape(*c) for c in layout.connectors)
    return Scene(boxes=tuple(boxes), connectors=connectors)


def render_heap(mirror: HeapMirror, width: float | None = None) -> Scene:
    """Scene for a heap: the implicit tree plus the flat array row."""
    values = mirror.values
    positions = heap_positions(len(values), width)
    radius = Config.heap_layout["radius"]
    size = Config.heap_layout["cell_size"]
    edges = []
    for i in range(1, len(values)):
        parent = (i - 1) // 2
        (x1, y1), (x2, y2) = positions[parent], positions[i]
        edges.append(EdgeShape(f"link-{parent}-{i}", x1, y1, x2, y2))
    nodes = tuple(
        NodeShape(node_handle(i), *positions[i], radius=radius, label=str(v))
        for i, v in enumerate(values)
    )
    cells = tuple(
        BoxShape(cell_handle(i), "cell", x, y, size, size, str(values[i]), caption=str(i))
        for i, (x, y) in array_positions(len(values)).items()
    )
    return Scene(nodes=nodes, edges=tuple(edges), boxes=cells)

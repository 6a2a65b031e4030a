"""Binary-tree layouts for AVL trees and the implicit heap tree."""

from __future__ import annotations

from typing import Callable, Dict, Hashable, List, Sequence, Tuple

from ..config import Config
from ..events import TreeNodeData

Position = Tuple[float, float]


def binary_tree_layout(
    root: Hashable | None,
    children: Callable[[Hashable], Tuple[Hashable | None, Hashable | None]],
    width: float,
    start_y: float,
    level_height: float,
) -> Dict[Hashable, Position]:
    """Place a binary tree top-down on a canvas of ``width``.

    The root sits at ``(width / 2, start_y)``. Each child is placed
    ``offset`` to the left or right of its parent and ``level_height`` below
    it, where ``offset`` starts at ``width / 4`` and halves at every depth.
    A work-list replaces recursion so degenerate trees of any depth are
    handled. Identities reached twice (malformed input) are placed once.

    Parameters
    ----------
    root:
        Identity of the root or ``None`` for an empty tree.
    children:
        Callback returning ``(left, right)`` for an identity; missing children
        are ``None``.
    width:
        Viewport width.
    start_y, level_height:
        Vertical placement of the root and distance between depths.
    """

    positions: Dict[Hashable, Position] = {}
    if root is None:
        return positions
    work: List[Tuple[Hashable, float, float, float]] = [
        (root, width / 2, start_y, width / 4)
    ]
    while work:
        node, x, y, offset = work.pop()
        if node in positions:
            continue
        positions[node] = (x, y)
        left, right = children(node)
        if right is not None:
            work.append((right, x + offset, y + level_height, offset / 2))
        if left is not None:
            work.append((left, x - offset, y + level_height, offset / 2))
    return positions


def tree_positions(
    nodes: Sequence[TreeNodeData],
    width: float | None = None,
    *,
    start_y: float | None = None,
    level_height: float | None = None,
) -> Dict[int, Position]:
    """Lay out an AVL snapshot given in preorder (root first)."""

    if not nodes:
        return {}
    width = Config.viewport_width if width is None else width
    start_y = Config.tree_layout["start_y"] if start_y is None else start_y
    level_height = Config.tree_layout["level_height"] if level_height is None else level_height
    arena = {n.key: n for n in nodes}

    def _children(key):
        node = arena[key]
        left = node.left if node.left is not None and node.left in arena else None
        right = node.right if node.right is not None and node.right in arena else None
        return left, right

    return binary_tree_layout(nodes[0].key, _children, width, start_y, level_height)


def heap_positions(
    count: int,
    width: float | None = None,
    *,
    start_y: float | None = None,
    level_height: float | None = None,
) -> Dict[int, Position]:
    """Lay out the implicit tree of a heap array with ``count`` cells."""

    width = Config.viewport_width if width is None else width
    start_y = Config.heap_layout["start_y"] if start_y is None else start_y
    level_height = Config.heap_layout["level_height"] if level_height is None else level_height

    def _children(i):
        left, right = 2 * i + 1, 2 * i + 2
        return (left if left < count else None, right if right < count else None)

    return binary_tree_layout(0 if count > 0 else None, _children, width, start_y, level_height)


def array_positions(
    count: int,
    *,
    x: float | None = None,
    y: float | None = None,
    pitch: float | None = None,
) -> Dict[int, Position]:
    """Return the top-left corner of each flat array cell, left to right."""

    x = Config.heap_layout["cell_x"] if x is None else x
    y = Config.heap_layout["cell_y"] if y is None else y
    pitch = Config.heap_layout["cell_pitch"] if pitch is None else pitch
    return {i: (x + i * pitch, y) for i in range(count)}

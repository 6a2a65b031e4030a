"""Local copy of an AVL tree kept in step with playback."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from ..events import TreeNodeData


@dataclass
class TreeEntity:
    key: int
    height: int = 1
    balance: int = 0
    left: int | None = None
    right: int | None = None


class TreeMirror:
    """Write-ahead approximation of the backend tree.

    :meth:`insert` and :meth:`remove` apply plain BST mutations without
    rebalancing, so intermediate states may differ from the backend's shape.
    The mirror is only authoritative right after :meth:`load`.
    """

    def __init__(self) -> None:
        self.nodes: Dict[int, TreeEntity] = {}
        self.root: int | None = None

    @classmethod
    def from_snapshot(cls, snapshot: Sequence[TreeNodeData]) -> "TreeMirror":
        mirror = cls()
        mirror.load(snapshot)
        return mirror

    def load(self, snapshot: Sequence[TreeNodeData]) -> None:
        """Replace the mirror with a preorder ``snapshot``."""
        self.nodes = {
            n.key: TreeEntity(
                key=n.key,
                height=n.height,
                balance=n.balance,
                left=n.left,
                right=n.right,
            )
            for n in snapshot
        }
        self.root = snapshot[0].key if snapshot else None

    def __contains__(self, key: int) -> bool:
        return key in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def keys(self) -> List[int]:
        return [n.key for n in self.preorder()]

    def preorder(self) -> List[TreeNodeData]:
        """Return the mirror in the backend's snapshot format."""
        out: List[TreeNodeData] = []
        stack = [self.root] if self.root is not None else []
        seen: set[int] = set()
        while stack:
            key = stack.pop()
            if key in seen or key not in self.nodes:
                continue
            seen.add(key)
            node = self.nodes[key]
            out.append(
                TreeNodeData(
                    key=node.key,
                    height=node.height,
                    balance=node.balance,
                    left=node.left,
                    right=node.right,
                )
            )
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)
        return out

    def edges(self) -> List[Tuple[int, int]]:
        """Return ``(parent, child)`` pairs in preorder."""
        pairs = []
        for node in self.preorder():
            for child in (node.left, node.right):
                if child is not None:
                    pairs.append((node.key, child))
        return pairs

    # ------------------------------------------------------------------
    def insert(self, key: int) -> bool:
        """Attach ``key`` as a new leaf in BST order."""
        if key in self.nodes:
            return False
        self.nodes[key] = TreeEntity(key)
        if self.root is None:
            self.root = key
            return True
        curr = self.nodes[self.root]
        while True:
            side = "left" if key < curr.key else "right"
            child = getattr(curr, side)
            if child is None:
                setattr(curr, side, key)
                return True
            curr = self.nodes[child]

    def remove(self, key: int) -> bool:
        """Unlink ``key`` the way a BST deletion would."""
        if key not in self.nodes:
            return False
        parent = self._parent_of(key)
        node = self.nodes[key]
        if node.left is not None and node.right is not None:
            succ_key = node.right
            while self.nodes[succ_key].left is not None:
                succ_key = self.nodes[succ_key].left
            self.remove(succ_key)
            # the successor takes over the removed node's slot
            succ = self.nodes.setdefault(succ_key, TreeEntity(succ_key))
            succ.left, succ.right = node.left, node.right
            replacement: int | None = succ_key
        else:
            replacement = node.left if node.left is not None else node.right
        del self.nodes[key]
        self._relink(parent, key, replacement)
        return True

    def update_stats(self, key: int, height: int, balance: int) -> None:
        node = self.nodes.get(key)
        if node is not None:
            node.height = height
            node.balance = balance

    def _parent_of(self, key: int) -> int | None:
        for node in self.nodes.values():
            if node.left == key or node.right == key:
                return node.key
        return None

    def _relink(self, parent: int | None, old: int, new: int | None) -> None:
        if parent is None:
            self.root = new
            return
        node = self.nodes[parent]
        if node.left == old:
            node.left = new
        else:
            node.right = new

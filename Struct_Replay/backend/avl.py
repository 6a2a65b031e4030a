"""Reference AVL tree backend producing replayable event logs."""

from __future__ import annotations

from typing import List

from ..events import EventLog, TreeNodeData, record
from ..events import records as kinds


class _Node:
    __slots__ = ("key", "height", "left", "right")

    def __init__(self, key: int) -> None:
        self.key = key
        self.height = 1
        self.left: _Node | None = None
        self.right: _Node | None = None


def _height(node: _Node | None) -> int:
    return node.height if node is not None else 0


def _balance(node: _Node | None) -> int:
    if node is None:
        return 0
    return _height(node.left) - _height(node.right)


def _update_height(node: _Node) -> None:
    node.height = 1 + max(_height(node.left), _height(node.right))


class AVLBackend:
    """Self-balancing binary search tree without duplicate keys.

    Every mutating call clears the internal log, performs the operation and
    returns the steps taken as an :class:`EventLog`. Inserting an existing key
    or removing an absent one is not an error: the log simply documents the
    search path without an ``insert_node``/``remove_node`` record.

    Removing a node with two children copies its in-order successor into it
    and then unlinks the successor. That second ``remove_node`` record carries
    the key that was replaced as its ``value``.
    """

    def __init__(self) -> None:
        self._root: _Node | None = None
        self._log: list = []

    # ------------------------------------------------------------------
    def insert(self, key: int) -> EventLog:
        """Insert ``key`` and return the recorded steps."""
        self._log = []
        self._root = self._insert(self._root, key)
        return EventLog(self._log)

    def remove(self, key: int) -> EventLog:
        """Remove ``key`` if present and return the recorded steps."""
        self._log = []
        self._root = self._delete(self._root, key)
        return EventLog(self._log)

    def snapshot(self) -> List[TreeNodeData]:
        """Return all nodes in preorder, root first."""
        out: List[TreeNodeData] = []
        stack = [self._root] if self._root is not None else []
        while stack:
            node = stack.pop()
            out.append(
                TreeNodeData(
                    key=node.key,
                    height=node.height,
                    balance=_balance(node),
                    left=node.left.key if node.left is not None else None,
                    right=node.right.key if node.right is not None else None,
                )
            )
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)
        return out

    def __contains__(self, key: int) -> bool:
        node = self._root
        while node is not None:
            if key == node.key:
                return True
            node = node.left if key < node.key else node.right
        return False

    # ------------------------------------------------------------------
    def _emit(self, kind: str, key: int, info: str = "") -> None:
        self._log.append(record(kind, key, info=info))

    def _rotate_right(self, y: _Node) -> _Node:
        self._emit(kinds.ROTATE_EVENT, y.key, "Performing Right Rotate (LL Case)")
        x = y.left
        y.left = x.right
        x.right = y
        _update_height(y)
        _update_height(x)
        return x

    def _rotate_left(self, x: _Node) -> _Node:
        self._emit(kinds.ROTATE_EVENT, x.key, "Performing Left Rotate (RR Case)")
        y = x.right
        x.right = y.left
        y.left = x
        _update_height(x)
        _update_height(y)
        return y

    def _stats(self, node: _Node) -> int:
        _update_height(node)
        balance = _balance(node)
        self._emit(kinds.UPDATE_STATS, node.key, f"H:{node.height} BF:{balance}")
        return balance

    def _insert(self, node: _Node | None, key: int) -> _Node:
        if node is None:
            self._emit(kinds.INSERT_NODE, key, "Inserted")
            return _Node(key)

        self._emit(kinds.SEARCH_VISIT, node.key)
        if key < node.key:
            node.left = self._insert(node.left, key)
        elif key > node.key:
            node.right = self._insert(node.right, key)
        else:
            return node

        balance = self._stats(node)
        if balance > 1 and key < node.left.key:
            return self._rotate_right(node)
        if balance < -1 and key > node.right.key:
            return self._rotate_left(node)
        if balance > 1 and key > node.left.key:
            self._emit(kinds.ROTATE_EVENT, node.left.key, "Left Rotate (LR Prep)")
            node.left = self._rotate_left(node.left)
            return self._rotate_right(node)
        if balance < -1 and key < node.right.key:
            self._emit(kinds.ROTATE_EVENT, node.right.key, "Right Rotate (RL Prep)")
            node.right = self._rotate_right(node.right)
            return self._rotate_left(node)
        return node

    def _delete(self, node: _Node | None, key: int, replaced: int | None = None) -> _Node | None:
        # ``replaced`` is the key a successor is moving up to replace
        if node is None:
            return None

        self._emit(kinds.SEARCH_VISIT, node.key)
        if key < node.key:
            node.left = self._delete(node.left, key, replaced)
        elif key > node.key:
            node.right = self._delete(node.right, key, replaced)
        elif node.left is None or node.right is None:
            if replaced is None:
                self._log.append(record(kinds.REMOVE_NODE, key, info="Deleted"))
            else:
                self._log.append(
                    record(kinds.REMOVE_NODE, key, info="Successor Moved Up", value=replaced)
                )
            node = node.left or node.right
        else:
            successor = node.right
            while successor.left is not None:
                successor = successor.left
            original = node.key
            node.key = successor.key
            self._log.append(
                record(kinds.HIGHLIGHT_NODE, node.key, info="Replaced with Successor", value=original)
            )
            node.right = self._delete(node.right, successor.key, original)

        if node is None:
            return None

        balance = self._stats(node)
        if balance > 1 and _balance(node.left) >= 0:
            return self._rotate_right(node)
        if balance > 1:
            node.left = self._rotate_left(node.left)
            return self._rotate_right(node)
        if balance < -1 and _balance(node.right) <= 0:
            return self._rotate_left(node)
        if balance < -1:
            node.right = self._rotate_right(node.right)
            return self._rotate_left(node)
        return node

"""Deterministic placement of structure entities on a 2-D canvas."""

from .graph import EdgeGeometry, GraphLayout
from .hash_table import ChainSlot, HashLayout, hash_layout
from .tree import array_positions, binary_tree_layout, heap_positions, tree_positions

__all__ = [
    "ChainSlot",
    "EdgeGeometry",
    "GraphLayout",
    "HashLayout",
    "array_positions",
    "binary_tree_layout",
    "hash_layout",
    "heap_positions",
    "tree_positions",
]

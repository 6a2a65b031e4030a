"""Reference algorithm backends for each structure family."""

from .avl import AVLBackend
from .graph import GraphBackend
from .hash_table import HashTableBackend
from .heap import HeapBackend

__all__ = ["AVLBackend", "GraphBackend", "HashTableBackend", "HeapBackend"]

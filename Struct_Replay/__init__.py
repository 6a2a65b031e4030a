"""Replay engine animating event logs of AVL trees, graphs, hash tables and heaps."""

from .config import Config, load_config

__all__ = ["Config", "load_config"]

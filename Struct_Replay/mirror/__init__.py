"""Visual mirrors: local, possibly stale copies of backend structures.

A mirror is updated optimistically while an event log plays and is only
guaranteed to match the backend after a resync at the end of playback.
"""

from .graph import GraphMirror
from .hash_table import HashMirror
from .heap import HeapMirror
from .tree import TreeEntity, TreeMirror

__all__ = ["GraphMirror", "HashMirror", "HeapMirror", "TreeEntity", "TreeMirror"]

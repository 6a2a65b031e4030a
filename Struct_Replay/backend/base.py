"""Call/response contracts consumed by the replay engine.

The sessions only rely on these protocols, so any object with matching
methods (for example a proxy decoding :mod:`Struct_Replay.events.protocol`
messages from another process) can stand in for the reference backends.
"""

from __future__ import annotations

from typing import List, Protocol

from ..events import BucketData, EventLog, GraphSnapshot, TreeNodeData


class TreeBackend(Protocol):
    def insert(self, key: int) -> EventLog: ...

    def remove(self, key: int) -> EventLog: ...

    def snapshot(self) -> List[TreeNodeData]: ...


class GraphBackendProtocol(Protocol):
    def add_vertex(self, vid: int) -> None: ...

    def remove_vertex(self, vid: int) -> None: ...

    def add_edge(self, u: int, v: int, weight: int) -> None: ...

    def run(self, algorithm: str, start: int) -> EventLog: ...

    def snapshot(self) -> GraphSnapshot: ...


class HashBackend(Protocol):
    def insert(self, key: int) -> EventLog: ...

    def search(self, key: int) -> EventLog: ...

    def snapshot(self) -> List[BucketData]: ...


class HeapBackendProtocol(Protocol):
    def set_mode(self, is_min: bool) -> None: ...

    def insert(self, value: int) -> EventLog: ...

    def extract(self) -> EventLog: ...

    def array(self) -> List[int]: ...

"""Action records and event logs produced by the structure backends."""

from .log import EventLog
from .records import (
    ActionRecord,
    BucketData,
    Family,
    GraphSnapshot,
    TreeNodeData,
    record,
)

__all__ = [
    "ActionRecord",
    "BucketData",
    "EventLog",
    "Family",
    "GraphSnapshot",
    "TreeNodeData",
    "record",
]

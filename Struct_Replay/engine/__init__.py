"""Playback of event logs: scheduler, timers, effects and sessions."""

from .scheduler import AnimationScheduler, PlaybackState
from .session import (
    COMPLETE_STATUS,
    GraphSession,
    HashSession,
    HeapSession,
    Session,
    TreeSession,
    parse_int,
)
from .timers import AsyncioTimer, QtTimer

__all__ = [
    "AnimationScheduler",
    "AsyncioTimer",
    "COMPLETE_STATUS",
    "GraphSession",
    "HashSession",
    "HeapSession",
    "PlaybackState",
    "QtTimer",
    "Session",
    "TreeSession",
    "parse_int",
]

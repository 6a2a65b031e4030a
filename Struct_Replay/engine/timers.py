"""Timer adapters used by :class:`~Struct_Replay.engine.scheduler.AnimationScheduler`."""

from __future__ import annotations

import asyncio
from typing import Callable, Protocol


class Timer(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> None: ...


class AsyncioTimer:
    """Schedule callbacks on an asyncio event loop.

    When no loop is given the running loop is looked up on every call, so the
    timer can be created before the loop starts.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        loop = self._loop or asyncio.get_running_loop()
        loop.call_later(delay, callback)


class QtTimer:
    """Schedule callbacks with ``QTimer.singleShot`` on the Qt event loop."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        from PySide6.QtCore import QTimer

        QTimer.singleShot(int(round(delay * 1000)), callback)

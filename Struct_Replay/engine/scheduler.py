"""Timer-driven playback of event logs."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Callable, List, Optional

from ..events import ActionRecord, EventLog
from .timers import AsyncioTimer, Timer

logger = logging.getLogger(__name__)

Settle = Optional[Callable[[], None]]
StepListener = Callable[[int, ActionRecord], None]


class PlaybackState(Enum):
    IDLE = "idle"
    PLAYING = "playing"


class AnimationScheduler:
    """Apply the records of an :class:`EventLog` one per step.

    Parameters
    ----------
    apply_step:
        Called with each record. It may return a *settle* callback which runs
        once the step's delay has elapsed, before the next record.
    step_delay:
        Seconds between consecutive steps.
    on_finish:
        Called once after the last step's delay, before waiters are released.
    timer:
        Object with ``call_later(delay, callback)``; defaults to
        :class:`AsyncioTimer`.

    The first record is applied synchronously by :meth:`play`. A log of ``K``
    records returns to :attr:`PlaybackState.IDLE` after exactly ``K`` delays.
    """

    def __init__(
        self,
        apply_step: Callable[[ActionRecord], Settle],
        *,
        step_delay: float,
        on_finish: Callable[[], None] | None = None,
        timer: Timer | None = None,
    ) -> None:
        self._apply = apply_step
        self.step_delay = float(step_delay)
        self._on_finish = on_finish
        self._timer = timer or AsyncioTimer()
        self._state = PlaybackState.IDLE
        self._log: EventLog | None = None
        self._index = 0
        self._listeners: List[StepListener] = []
        self._waiters: List[asyncio.Future] = []

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state is PlaybackState.PLAYING

    @property
    def position(self) -> int:
        """Number of records applied from the current log."""
        return self._index

    def add_listener(self, listener: StepListener) -> None:
        """Register ``listener(index, record)`` to run after every step."""
        self._listeners.append(listener)

    def remove_listener(self, listener: StepListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ------------------------------------------------------------------
    def play(self, log: EventLog) -> bool:
        """Start playing ``log``; returns ``False`` if the request is ignored."""
        if self._state is PlaybackState.PLAYING:
            logger.debug("busy: ignoring a log of %d records", len(log))
            return False
        if log.consumed:
            logger.debug("event log was already played")
            return False
        log.mark_consumed()
        self._log = log
        self._index = 0
        self._state = PlaybackState.PLAYING
        if not len(log):
            self._finish()
            return True
        try:
            self._step()
        except RuntimeError:
            # no loop to schedule the next step on
            self._state = PlaybackState.IDLE
            self._log = None
            raise
        return True

    def _step(self) -> None:
        assert self._log is not None
        rec = self._log[self._index]
        settle: Settle = None
        try:
            settle = self._apply(rec)
        except Exception:
            logger.exception("step %d (%s) failed and was skipped", self._index, rec.kind)
        for listener in list(self._listeners):
            try:
                listener(self._index, rec)
            except Exception:
                logger.exception("listener failed on step %d (%s)", self._index, rec.kind)
        self._index += 1
        self._timer.call_later(self.step_delay, lambda: self._advance(settle))

    def _advance(self, settle: Settle) -> None:
        if settle is not None:
            try:
                settle()
            except Exception:
                logger.exception("settling step %d failed", self._index - 1)
        if self._log is not None and self._index < len(self._log):
            self._step()
        else:
            self._finish()

    def _finish(self) -> None:
        count = self._index
        self._state = PlaybackState.IDLE
        self._log = None
        try:
            if self._on_finish is not None:
                self._on_finish()
        finally:
            waiters, self._waiters = self._waiters, []
            for fut in waiters:
                if not fut.done():
                    fut.set_result(None)
            logger.info("playback finished after %d steps", count)

    async def wait_idle(self) -> None:
        """Wait until the current log, if any, has finished playing."""
        if self._state is PlaybackState.IDLE:
            return
        fut = asyncio.get_running_loop().create_future()
        self._waiters.append(fut)
        await fut

"""Tick sources for the session timer.

The timer only needs two things from a clock: run an action every
``interval`` seconds, and stop doing so. Production uses the running asyncio
loop; tests drive a fake scheduler by hand.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Protocol

import structlog

logger = structlog.get_logger()


class ScheduledHandle(Protocol):
    def cancel(self) -> None: ...

    @property
    def cancelled(self) -> bool: ...


class Scheduler(Protocol):
    def schedule_repeating(
        self, interval_seconds: float, action: Callable[[], None]
    ) -> ScheduledHandle: ...

    def cancel(self, handle: ScheduledHandle) -> None: ...


class RepeatingCall:
    """A repeating ``call_later`` chain on an asyncio loop."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        interval_seconds: float,
        action: Callable[[], None],
    ) -> None:
        self._loop = loop
        self._interval = interval_seconds
        self._action = action
        self._cancelled = False
        # Deadlines are derived from the first one so callback latency does not accumulate.
        self._next_deadline = loop.time() + interval_seconds
        self._timer: asyncio.TimerHandle | None = loop.call_at(self._next_deadline, self._fire)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self) -> None:
        if self._cancelled:
            return
        self._next_deadline += self._interval
        self._timer = self._loop.call_at(self._next_deadline, self._fire)
        try:
            self._action()
        except Exception:
            logger.exception("scheduled_action_failed")


class AsyncioScheduler:
    """Scheduler backed by the asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def schedule_repeating(
        self, interval_seconds: float, action: Callable[[], None]
    ) -> RepeatingCall:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        loop = self._loop or asyncio.get_running_loop()
        return RepeatingCall(loop, interval_seconds, action)

    def cancel(self, handle: ScheduledHandle) -> None:
        handle.cancel()

"""
Countdown timer used to pace a session.

Phases:
- idle: nothing configured
- armed: duration set, waiting for start
- running: one tick per interval decrements the remaining seconds
- completed: countdown reached zero; completion listeners fired once

There is no pause. Reconfiguring is the only way out of a running
countdown, and it always cancels the active tick before re-arming.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog
from src.domain.errors import TimerConfigurationError, TimerNotArmedError
from src.domain.models import TimerPhase, TimerState
from src.infrastructure.scheduling import ScheduledHandle, Scheduler

logger = structlog.get_logger()

CompletionListener = Callable[[TimerState], None]


def format_clock(seconds: int) -> str:
    """Render seconds as zero-padded ``MM:SS``."""
    minutes, secs = divmod(max(seconds, 0), 60)
    return f"{minutes:02d}:{secs:02d}"


class SessionTimer:
    def __init__(self, scheduler: Scheduler, *, tick_interval_seconds: float = 1.0) -> None:
        self.scheduler = scheduler
        self.tick_interval_seconds = tick_interval_seconds
        self._phase = TimerPhase.IDLE
        self._configured: int | None = None
        self._remaining = 0
        self._handle: ScheduledHandle | None = None
        self._listeners: list[CompletionListener] = []
        self._closed = False

    @property
    def state(self) -> TimerState:
        return TimerState(
            phase=self._phase,
            configured_duration_seconds=self._configured,
            remaining_seconds=self._remaining,
            running=self._phase is TimerPhase.RUNNING,
        )

    def format_remaining(self) -> str:
        return format_clock(self._remaining)

    def add_completion_listener(self, listener: CompletionListener) -> None:
        self._listeners.append(listener)

    def configure(self, minutes: int, seconds: int) -> TimerState:
        if minutes < 0 or seconds < 0:
            raise TimerConfigurationError("Minutes and seconds must not be negative")
        total = minutes * 60 + seconds
        if total <= 0:
            raise TimerConfigurationError("Timer duration must be greater than zero")

        self._cancel_tick()
        self._configured = total
        self._remaining = total
        self._phase = TimerPhase.ARMED
        self._closed = False

        logger.info("timer_configured", minutes=minutes, seconds=seconds, total_seconds=total)
        return self.state

    def start(self) -> TimerState:
        if self._remaining <= 0:
            raise TimerNotArmedError("No time remaining; configure the timer first")
        if self._phase is TimerPhase.RUNNING:
            logger.info("timer_already_running", remaining_seconds=self._remaining)
            return self.state

        self._phase = TimerPhase.RUNNING
        self._closed = False
        self._handle = self.scheduler.schedule_repeating(self.tick_interval_seconds, self.tick)
        logger.info("timer_started", remaining_seconds=self._remaining)
        return self.state

    def tick(self) -> None:
        if self._closed or self._phase is not TimerPhase.RUNNING:
            return

        self._remaining -= 1
        if self._remaining > 0:
            return

        self._remaining = 0
        self._phase = TimerPhase.COMPLETED
        self._cancel_tick()
        logger.info("timer_completed", configured_seconds=self._configured)
        self._notify_completed()

    def close(self) -> None:
        """Stop ticking for good; the owning session is going away."""
        self._cancel_tick()
        self._closed = True
        if self._phase is TimerPhase.RUNNING:
            self._phase = TimerPhase.ARMED

    def _cancel_tick(self) -> None:
        if self._handle is not None:
            self.scheduler.cancel(self._handle)
            self._handle = None

    def _notify_completed(self) -> None:
        state = self.state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("timer_completion_listener_failed")

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

from src.libs.ledger_client import LedgerClientError, LedgerReceipt


class FakeHandle:
    def __init__(self, interval_seconds: float, action: Callable[[], None], due: float) -> None:
        self.interval_seconds = interval_seconds
        self.action = action
        self.due = due
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class FakeScheduler:
    """Scheduler driven by explicit ``advance`` calls instead of wall time."""

    def __init__(self) -> None:
        self.now = 0.0
        self.handles: list[FakeHandle] = []

    def schedule_repeating(self, interval_seconds: float, action: Callable[[], None]) -> FakeHandle:
        handle = FakeHandle(interval_seconds, action, due=self.now + interval_seconds)
        self.handles.append(handle)
        return handle

    def cancel(self, handle: FakeHandle) -> None:
        handle.cancel()

    @property
    def active(self) -> list[FakeHandle]:
        return [handle for handle in self.handles if not handle.cancelled]

    def advance(self, seconds: int) -> None:
        for _ in range(seconds):
            self.now += 1.0
            for handle in list(self.active):
                while not handle.cancelled and handle.due <= self.now:
                    handle.due += handle.interval_seconds
                    handle.action()


class RecordingLedger:
    def __init__(self) -> None:
        self.names: list[str] = []

    async def submit_participant(self, name: str) -> LedgerReceipt:
        self.names.append(name)
        return LedgerReceipt(reference=f"ref-{len(self.names)}", status_code=201)


class StalledLedger:
    """Ledger whose submissions never finish on their own."""

    def __init__(self) -> None:
        self.started = asyncio.Event()

    async def submit_participant(self, name: str) -> LedgerReceipt:
        self.started.set()
        await asyncio.Event().wait()
        return LedgerReceipt(reference=None, status_code=201)


class FailingLedger:
    def __init__(self) -> None:
        self.calls = 0

    async def submit_participant(self, name: str) -> LedgerReceipt:
        self.calls += 1
        raise LedgerClientError("ledger unavailable")


def enrollment_payload(**overrides: Any) -> dict[str, Any]:
    """Build a valid intake payload."""
    payload: dict[str, Any] = {
        "name": "Ada Lovelace",
        "phone": "+441234567890",
        "email": "ada@example.com",
        "age": 36,
        "gender": "female",
    }
    payload.update(overrides)
    return payload

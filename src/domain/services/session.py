"""
Session manager: the single owner of roster, grouping, and countdown state.

The store, assigner, timer, and optional ledger client are injected so
each can be swapped for an in-memory or simulated version.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

import structlog
from src.domain.models import EnrollmentInput, EnrollmentRecord, GroupAssignment, TimerState
from src.domain.services.enrollment import EnrollmentStore
from src.domain.services.grouping import GroupAssigner
from src.domain.services.timer import SessionTimer
from src.libs.ledger_client import LedgerClientError, LedgerClientProtocol

logger = structlog.get_logger()


class SessionManager:
    def __init__(
        self,
        store: EnrollmentStore,
        assigner: GroupAssigner,
        timer: SessionTimer,
        ledger: LedgerClientProtocol | None = None,
    ) -> None:
        self.store = store
        self.assigner = assigner
        self.timer = timer
        self.ledger = ledger
        self._groups = GroupAssignment()
        self._ledger_tasks: set[asyncio.Task[None]] = set()

    @property
    def current_groups(self) -> GroupAssignment:
        return self._groups

    async def enroll(self, data: EnrollmentInput | Mapping[str, Any]) -> EnrollmentRecord:
        record = await self.store.append(data)
        if self.ledger is not None:
            task = asyncio.create_task(self._attest(self.ledger, record))
            self._ledger_tasks.add(task)
            task.add_done_callback(self._ledger_tasks.discard)
        return record

    async def roster(self) -> list[EnrollmentRecord]:
        return await self.store.load()

    async def randomize(self) -> GroupAssignment:
        snapshot = await self.store.load()
        self._groups = self.assigner.run(snapshot)
        return self._groups

    async def reset(self) -> None:
        await self.store.clear()
        self._groups = GroupAssignment()
        await logger.ainfo("session_reset")

    def configure_timer(self, minutes: int, seconds: int) -> TimerState:
        return self.timer.configure(minutes, seconds)

    def start_timer(self) -> TimerState:
        return self.timer.start()

    def timer_state(self) -> TimerState:
        return self.timer.state

    async def wait_for_attestations(self) -> None:
        """Block until in-flight ledger submissions have finished."""
        if self._ledger_tasks:
            await asyncio.gather(*list(self._ledger_tasks), return_exceptions=True)

    async def close(self) -> None:
        """Stop the countdown and cancel ledger submissions still in flight."""
        self.timer.close()
        pending = list(self._ledger_tasks)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._ledger_tasks.clear()

    async def _attest(self, ledger: LedgerClientProtocol, record: EnrollmentRecord) -> None:
        try:
            receipt = await ledger.submit_participant(record.name)
        except LedgerClientError as exc:
            await logger.awarning(
                "ledger_attestation_failed",
                enrollment_id=record.id,
                error=str(exc),
            )
            return
        await logger.ainfo(
            "ledger_attestation_recorded",
            enrollment_id=record.id,
            reference=receipt.reference,
        )

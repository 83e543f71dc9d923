"""
Client for the external participant ledger.

Enrollments may be attested to an outside service by name. The submission
is best effort: callers schedule it in the background and never wait on it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import httpx
import structlog
from src.core.config import get_settings

logger = structlog.get_logger(__name__)


class LedgerClientError(Exception):
    """Base exception for ledger client errors."""


class LedgerAPIError(LedgerClientError):
    """Raised for non-success responses from the ledger."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(slots=True)
class LedgerReceipt:
    """Acknowledgement returned by the ledger."""

    reference: str | None
    status_code: int


class LedgerClientProtocol(Protocol):
    async def submit_participant(self, name: str) -> LedgerReceipt: ...


class LedgerClient:
    """Async HTTP client posting participant names to the ledger."""

    def __init__(
        self,
        url: str | None = None,
        timeout_seconds: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.url = url or settings.ledger_url
        self.timeout = (
            timeout_seconds if timeout_seconds is not None else settings.ledger_timeout_seconds
        )
        self.transport = transport

    async def submit_participant(self, name: str) -> LedgerReceipt:
        """Record a participant name on the ledger."""
        if not self.url:
            raise LedgerClientError("LEDGER_URL not configured")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.url, json={"name": name})
        except httpx.HTTPError as exc:
            raise LedgerClientError(f"Ledger request failed: {exc}") from exc

        if response.status_code not in (200, 201, 202):
            raise LedgerAPIError(
                f"Ledger error {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )

        reference: str | None = None
        try:
            data = response.json()
        except ValueError:
            data = None
        if isinstance(data, dict):
            reference = data.get("reference") or data.get("id") or data.get("txHash")

        logger.info("ledger_participant_recorded", status_code=response.status_code)
        return LedgerReceipt(reference=reference, status_code=response.status_code)

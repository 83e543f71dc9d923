"""Shared library helpers."""

from src.libs.ledger_client import (
    LedgerAPIError,
    LedgerClient,
    LedgerClientError,
    LedgerClientProtocol,
    LedgerReceipt,
)

__all__ = [
    "LedgerAPIError",
    "LedgerClient",
    "LedgerClientError",
    "LedgerClientProtocol",
    "LedgerReceipt",
]

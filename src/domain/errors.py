from __future__ import annotations

from typing import Any


class DomainValidationError(Exception):
    """Raised when a request is rejected before any state changes."""


class EnrollmentValidationError(DomainValidationError):
    """Raised when intake data is missing, out of range, or malformed."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class TimerConfigurationError(DomainValidationError):
    """Raised when a countdown duration is not positive."""


class TimerNotArmedError(DomainValidationError):
    """Raised when starting a countdown that has no time remaining."""


class EnrollmentNotFoundError(Exception):
    """Raised when a record id is not in the store."""


class StorageCorruptedError(Exception):
    """Raised in strict mode when persisted enrollments cannot be parsed."""

"""Domain layer: enrollment records, grouping, and the session countdown."""

from src.domain.errors import (
    DomainValidationError,
    EnrollmentNotFoundError,
    EnrollmentValidationError,
    StorageCorruptedError,
    TimerConfigurationError,
    TimerNotArmedError,
)
from src.domain.models import (
    EnrollmentInput,
    EnrollmentRecord,
    Gender,
    Group,
    GroupAssignment,
    TimerPhase,
    TimerState,
)

__all__ = [
    "DomainValidationError",
    "EnrollmentInput",
    "EnrollmentNotFoundError",
    "EnrollmentRecord",
    "EnrollmentValidationError",
    "Gender",
    "Group",
    "GroupAssignment",
    "StorageCorruptedError",
    "TimerConfigurationError",
    "TimerNotArmedError",
    "TimerPhase",
    "TimerState",
]

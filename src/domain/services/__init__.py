"""Domain services."""

from src.domain.services.enrollment import ENROLLMENTS_KEY, EnrollmentStore
from src.domain.services.grouping import GroupAssigner
from src.domain.services.session import SessionManager
from src.domain.services.timer import SessionTimer, format_clock

__all__ = [
    "ENROLLMENTS_KEY",
    "EnrollmentStore",
    "GroupAssigner",
    "SessionManager",
    "SessionTimer",
    "format_clock",
]

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field
from src.api.schemas.enrollments import EnrollmentItem
from src.domain.models import GroupAssignment


class GroupsResponse(BaseModel):
    empty: bool = Field(False, description="True when there were no enrollments to assign")
    message: str
    group_a: list[EnrollmentItem] = Field(default_factory=list)
    group_b: list[EnrollmentItem] = Field(default_factory=list)
    created_at: datetime | None = None

    @classmethod
    def from_assignment(cls, assignment: GroupAssignment) -> GroupsResponse:
        if assignment.empty:
            message = "There are no enrollments to randomize."
        elif assignment.total == 0:
            message = "Groups have not been randomized yet."
        else:
            message = (
                f"{len(assignment.group_a)} users in Group A, "
                f"{len(assignment.group_b)} users in Group B"
            )
        return cls(
            empty=assignment.empty,
            message=message,
            group_a=[EnrollmentItem.from_record(r) for r in assignment.group_a],
            group_b=[EnrollmentItem.from_record(r) for r in assignment.group_b],
            created_at=assignment.created_at if assignment.total else None,
        )

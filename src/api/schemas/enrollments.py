from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field
from src.domain.models import EnrollmentRecord


class EnrollmentCreateRequest(BaseModel):
    """Intake payload. Field rules are enforced by the enrollment store."""

    name: str = Field("", description="Participant full name")
    phone: str = Field("", description="Contact phone number")
    email: str = Field("", description="Contact email address")
    age: int | str | None = Field(None, description="Age in years, 1-150")
    gender: str = Field("", description="male, female, or other")
    attachment_name: str | None = Field(
        None,
        validation_alias=AliasChoices("attachment_name", "attachmentName", "pdfFile"),
        description="Filename of an attached document",
    )


class EnrollmentItem(BaseModel):
    id: str
    name: str
    phone: str
    email: str
    age: int
    gender: str
    attachment_name: str | None = None
    created_at: datetime
    group: str | None = None

    @classmethod
    def from_record(cls, record: EnrollmentRecord) -> EnrollmentItem:
        return cls(
            id=record.id,
            name=record.name,
            phone=record.phone,
            email=record.email,
            age=record.age,
            gender=record.gender.value,
            attachment_name=record.attachment_name,
            created_at=record.created_at,
            group=record.group.value if record.group else None,
        )


class EnrollmentListResponse(BaseModel):
    enrollments: list[EnrollmentItem]
    count: int

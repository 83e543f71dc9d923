from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class Group(str, enum.Enum):
    A = "A"
    B = "B"


class TimerPhase(str, enum.Enum):
    IDLE = "idle"
    ARMED = "armed"
    RUNNING = "running"
    COMPLETED = "completed"


class EnrollmentInput(BaseModel):
    """Intake data submitted for one participant."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    age: int = Field(..., ge=1, le=150)
    gender: Gender
    attachment_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("attachmentName", "attachment_name", "pdfFile"),
        serialization_alias="attachmentName",
    )

    @field_validator("gender", mode="before")
    @classmethod
    def _normalise_gender(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("attachment_name")
    @classmethod
    def _blank_attachment_is_none(cls, value: str | None) -> str | None:
        return value or None


class EnrollmentRecord(EnrollmentInput):
    """A stored enrollment, optionally tagged with a group by a randomization run.

    The persisted form uses camelCase keys and never carries ``group``.
    Records are immutable; tagging produces a copy.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid4().hex)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        validation_alias=AliasChoices("createdAt", "created_at", "timestamp"),
        serialization_alias="createdAt",
    )
    group: Group | None = Field(default=None, exclude=True)

    @classmethod
    def from_input(cls, data: EnrollmentInput) -> EnrollmentRecord:
        return cls(**data.model_dump(include=set(EnrollmentInput.model_fields)))

    def tagged(self, group: Group | None) -> EnrollmentRecord:
        return self.model_copy(update={"group": group})

    def to_storage(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


@dataclass(slots=True, frozen=True)
class GroupAssignment:
    """Ephemeral two-way partition produced by one randomization run."""

    group_a: tuple[EnrollmentRecord, ...] = ()
    group_b: tuple[EnrollmentRecord, ...] = ()
    empty: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def total(self) -> int:
        return len(self.group_a) + len(self.group_b)


@dataclass(slots=True, frozen=True)
class TimerState:
    """Point-in-time view of the session countdown."""

    phase: TimerPhase = TimerPhase.IDLE
    configured_duration_seconds: int | None = None
    remaining_seconds: int = 0
    running: bool = False

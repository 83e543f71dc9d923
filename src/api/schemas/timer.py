from __future__ import annotations

from pydantic import BaseModel, Field
from src.domain.models import TimerState
from src.domain.services.timer import format_clock


class TimerConfigureRequest(BaseModel):
    minutes: int = Field(0, description="Whole minutes")
    seconds: int = Field(0, description="Additional seconds")


class TimerResponse(BaseModel):
    phase: str
    configured_duration_seconds: int | None = None
    remaining_seconds: int
    running: bool
    display: str = Field(..., description="Remaining time as MM:SS")

    @classmethod
    def from_state(cls, state: TimerState) -> TimerResponse:
        return cls(
            phase=state.phase.value,
            configured_duration_seconds=state.configured_duration_seconds,
            remaining_seconds=state.remaining_seconds,
            running=state.running,
            display=format_clock(state.remaining_seconds),
        )

from __future__ import annotations

from fastapi import APIRouter, Depends
from src.api.deps import conflict, get_session_manager, unprocessable_entity
from src.api.schemas.timer import TimerConfigureRequest, TimerResponse
from src.domain.errors import TimerConfigurationError, TimerNotArmedError
from src.domain.services.session import SessionManager

router = APIRouter(prefix="/timer", tags=["Timer"])


@router.get("", response_model=TimerResponse)
async def get_timer(manager: SessionManager = Depends(get_session_manager)) -> TimerResponse:
    return TimerResponse.from_state(manager.timer_state())


@router.post("/configure", response_model=TimerResponse)
async def configure_timer(
    payload: TimerConfigureRequest,
    manager: SessionManager = Depends(get_session_manager),
) -> TimerResponse:
    """Arm the countdown. Any running countdown is stopped first."""
    try:
        state = manager.configure_timer(payload.minutes, payload.seconds)
    except TimerConfigurationError as exc:
        raise unprocessable_entity(str(exc)) from exc
    return TimerResponse.from_state(state)


@router.post("/start", response_model=TimerResponse)
async def start_timer(manager: SessionManager = Depends(get_session_manager)) -> TimerResponse:
    try:
        state = manager.start_timer()
    except TimerNotArmedError as exc:
        raise conflict(str(exc)) from exc
    return TimerResponse.from_state(state)

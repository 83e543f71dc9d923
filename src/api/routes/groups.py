from __future__ import annotations

from fastapi import APIRouter, Depends
from src.api.deps import get_session_manager
from src.api.schemas.groups import GroupsResponse
from src.domain.services.session import SessionManager

router = APIRouter(prefix="/groups", tags=["Groups"])


@router.post("/randomize", response_model=GroupsResponse)
async def randomize_groups(
    manager: SessionManager = Depends(get_session_manager),
) -> GroupsResponse:
    """
    Shuffle the current roster into Group A and Group B.

    Group A gets the extra participant when the roster is odd. The result is
    held in memory for this session only and is replaced by the next run.
    """
    assignment = await manager.randomize()
    return GroupsResponse.from_assignment(assignment)


@router.get("", response_model=GroupsResponse)
async def get_groups(
    manager: SessionManager = Depends(get_session_manager),
) -> GroupsResponse:
    return GroupsResponse.from_assignment(manager.current_groups)

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from src.api.deps import conflict, get_session_manager, not_found, unprocessable_entity
from src.api.schemas.enrollments import (
    EnrollmentCreateRequest,
    EnrollmentItem,
    EnrollmentListResponse,
)
from src.domain.errors import (
    EnrollmentNotFoundError,
    EnrollmentValidationError,
    StorageCorruptedError,
)
from src.domain.services.session import SessionManager

router = APIRouter(prefix="/enrollments", tags=["Enrollments"])


@router.post("", response_model=EnrollmentItem, status_code=status.HTTP_201_CREATED)
async def create_enrollment(
    payload: EnrollmentCreateRequest,
    manager: SessionManager = Depends(get_session_manager),
) -> EnrollmentItem:
    """Store a new participant enrollment."""
    try:
        record = await manager.enroll(payload.model_dump())
    except EnrollmentValidationError as exc:
        raise unprocessable_entity({"message": str(exc), "errors": exc.errors}) from exc
    except StorageCorruptedError as exc:
        raise conflict(str(exc)) from exc
    return EnrollmentItem.from_record(record)


@router.get("", response_model=EnrollmentListResponse)
async def list_enrollments(
    manager: SessionManager = Depends(get_session_manager),
) -> EnrollmentListResponse:
    """Return every enrollment in the order it was submitted."""
    try:
        records = await manager.roster()
    except StorageCorruptedError as exc:
        raise conflict(str(exc)) from exc
    return EnrollmentListResponse(
        enrollments=[EnrollmentItem.from_record(record) for record in records],
        count=len(records),
    )


@router.get("/{enrollment_id}", response_model=EnrollmentItem)
async def get_enrollment(
    enrollment_id: str,
    manager: SessionManager = Depends(get_session_manager),
) -> EnrollmentItem:
    try:
        record = await manager.store.get(enrollment_id)
    except EnrollmentNotFoundError as exc:
        raise not_found(str(exc)) from exc
    except StorageCorruptedError as exc:
        raise conflict(str(exc)) from exc
    return EnrollmentItem.from_record(record)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def reset_enrollments(
    manager: SessionManager = Depends(get_session_manager),
) -> Response:
    """Remove all enrollments along with any randomized groups."""
    await manager.reset()
    return Response(status_code=status.HTTP_204_NO_CONTENT)

from __future__ import annotations

from fastapi import HTTPException, Request, status
from src.domain.services.session import SessionManager


def get_session_manager(request: Request) -> SessionManager:
    """Resolve the session manager built during application startup."""
    manager: SessionManager | None = getattr(request.app.state, "session_manager", None)
    if manager is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Session is not initialised",
        )
    return manager


def unprocessable_entity(detail: object) -> HTTPException:
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)


def not_found(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


def conflict(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=detail)

from __future__ import annotations

from datetime import UTC, datetime

import structlog
from fastapi import APIRouter, Request
from src.core.config import get_settings

router = APIRouter(tags=["Observability"])
logger = structlog.get_logger()


async def check_storage(request: Request) -> dict:
    """Check the enrollment storage backend."""
    manager = getattr(request.app.state, "session_manager", None)
    if manager is None:
        return {"status": "error", "message": "session not initialised"}
    try:
        await manager.store.storage.ping()
        return {"status": "ok"}
    except Exception as e:
        return {"status": "error", "message": str(e)[:100]}


@router.get("/health", summary="Service health probe")
async def health_check(request: Request) -> dict:
    """Return basic service and storage status information."""
    settings = get_settings()

    storage_status = await check_storage(request)
    overall_status = "ok" if storage_status.get("status") == "ok" else "degraded"

    payload = {
        "service": settings.app_name,
        "version": settings.version,
        "status": overall_status,
        "timestamp": datetime.now(UTC).isoformat(),
        "datastores": {
            "storage": storage_status,
        },
    }
    logger.info("health_probe", **payload)
    return payload

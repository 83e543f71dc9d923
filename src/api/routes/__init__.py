from fastapi import FastAPI

from . import enrollments, groups, health, timer


def register_routes(app: FastAPI) -> None:
    """Attach all API routers to the FastAPI application."""
    app.include_router(health.router)
    app.include_router(enrollments.router)
    app.include_router(groups.router)
    app.include_router(timer.router)

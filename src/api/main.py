from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from src.api.routes import register_routes
from src.core.config import Settings, get_settings
from src.core.logging import setup_logging
from src.domain.models import TimerState
from src.domain.services.enrollment import EnrollmentStore
from src.domain.services.grouping import GroupAssigner
from src.domain.services.session import SessionManager
from src.domain.services.timer import SessionTimer
from src.infrastructure.db.base import Base
from src.infrastructure.db.session import dispose_engine, get_engine, get_session_factory
from src.infrastructure.repositories.storage import (
    InMemoryKeyValueStorage,
    KeyValueStorage,
    SqlKeyValueStorage,
)
from src.infrastructure.scheduling import AsyncioScheduler
from src.libs.ledger_client import LedgerClient
from starlette.responses import Response
from structlog.contextvars import bind_contextvars, clear_contextvars

logger = structlog.get_logger()

SessionManagerFactory = Callable[[], Awaitable[SessionManager]]


def _notify_timer_complete(state: TimerState) -> None:
    logger.info(
        "session_timer_finished",
        configured_seconds=state.configured_duration_seconds,
    )


async def build_session_manager(settings: Settings | None = None) -> SessionManager:
    """Wire storage, grouping, timer, and ledger from configuration."""
    settings = settings or get_settings()

    storage: KeyValueStorage
    if settings.storage_backend == "memory":
        storage = InMemoryKeyValueStorage()
    else:
        if settings.auto_create_schema:
            async with get_engine().begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        storage = SqlKeyValueStorage(get_session_factory())

    timer = SessionTimer(
        AsyncioScheduler(),
        tick_interval_seconds=settings.tick_interval_seconds,
    )
    timer.add_completion_listener(_notify_timer_complete)

    return SessionManager(
        store=EnrollmentStore(storage, fail_open=settings.storage_fail_open),
        assigner=GroupAssigner(),
        timer=timer,
        ledger=(
            LedgerClient(url=settings.ledger_url, timeout_seconds=settings.ledger_timeout_seconds)
            if settings.ledger_url
            else None
        ),
    )


def create_app(manager_factory: SessionManagerFactory | None = None) -> FastAPI:
    """Application factory for the session API."""
    settings = get_settings()
    setup_logging(json_logs=settings.log_format == "json")
    factory = manager_factory or build_session_manager

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.session_manager = await factory()
        logger.info(
            "service_startup",
            service=settings.app_name,
            environment=settings.environment,
            version=settings.version,
            storage_backend=settings.storage_backend,
        )
        try:
            yield
        finally:
            await app.state.session_manager.close()
            app.state.session_manager = None
            if manager_factory is None and settings.storage_backend != "memory":
                await dispose_engine()
            logger.info("service_shutdown", service=settings.app_name)

    app = FastAPI(title=settings.app_name, version=settings.version, lifespan=lifespan)

    cors_origins = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:8080",
        "http://127.0.0.1:3000",
    ]
    if settings.environment in ["local", "development"]:
        cors_origins.append("*")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins if "*" not in cors_origins else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)

    @app.middleware("http")
    async def correlation_id_middleware(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get("x-request-id", str(uuid4()))
        bind_contextvars(
            request_id=request_id,
            path=str(request.url.path),
            method=request.method,
        )
        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            clear_contextvars()

    return app


app = create_app()

from __future__ import annotations

import random
from collections.abc import AsyncIterator, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from src.api.main import create_app
from src.domain.services.enrollment import EnrollmentStore
from src.domain.services.grouping import GroupAssigner
from src.domain.services.session import SessionManager
from src.domain.services.timer import SessionTimer
from src.infrastructure.db.base import Base
from src.infrastructure.repositories.storage import InMemoryKeyValueStorage, SqlKeyValueStorage

from tests.utils import FakeScheduler


@pytest.fixture()
def storage() -> InMemoryKeyValueStorage:
    return InMemoryKeyValueStorage()


@pytest.fixture()
def store(storage: InMemoryKeyValueStorage) -> EnrollmentStore:
    return EnrollmentStore(storage)


@pytest.fixture()
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture()
def timer(scheduler: FakeScheduler) -> SessionTimer:
    return SessionTimer(scheduler)


@pytest.fixture()
async def manager(store: EnrollmentStore, timer: SessionTimer) -> AsyncIterator[SessionManager]:
    session_manager = SessionManager(
        store=store,
        assigner=GroupAssigner(random.Random(1234)),
        timer=timer,
    )
    yield session_manager
    await session_manager.close()


@pytest.fixture()
def test_client(manager: SessionManager) -> Iterator[TestClient]:
    async def factory() -> SessionManager:
        return manager

    app = create_app(manager_factory=factory)
    with TestClient(app) as client:
        yield client


@pytest.fixture()
async def sql_storage(tmp_path) -> AsyncIterator[SqlKeyValueStorage]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'storage.db'}", future=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield SqlKeyValueStorage(async_sessionmaker(engine, expire_on_commit=False))
    await engine.dispose()

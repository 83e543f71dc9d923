from __future__ import annotations

from typing import Protocol

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from src.infrastructure.db.models import StorageEntry

logger = structlog.get_logger()


class KeyValueStorage(Protocol):
    """Durable string slots addressed by key."""

    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def remove(self, key: str) -> None: ...

    async def ping(self) -> None: ...


class SqlKeyValueStorage:
    """Key/value storage persisted in the ``storage_entries`` table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def get(self, key: str) -> str | None:
        async with self.session_factory() as session:
            stmt = select(StorageEntry.value).where(StorageEntry.key == key)
            return await session.scalar(stmt)

    async def set(self, key: str, value: str) -> None:
        async with self.session_factory() as session:
            entry = await session.get(StorageEntry, key)
            if entry is None:
                session.add(StorageEntry(key=key, value=value))
            else:
                entry.value = value
            await session.commit()
        logger.debug("storage_set", key=key, size=len(value))

    async def remove(self, key: str) -> None:
        async with self.session_factory() as session:
            await session.execute(delete(StorageEntry).where(StorageEntry.key == key))
            await session.commit()
        logger.debug("storage_remove", key=key)

    async def ping(self) -> None:
        async with self.session_factory() as session:
            await session.execute(select(1))


class InMemoryKeyValueStorage:
    """Process-local storage used by tests and ``STORAGE_BACKEND=memory``."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.entries: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self.entries.get(key)

    async def set(self, key: str, value: str) -> None:
        self.entries[key] = value

    async def remove(self, key: str) -> None:
        self.entries.pop(key, None)

    async def ping(self) -> None:
        return None

"""Durable enrollment collection kept under a single storage key."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import structlog
from pydantic import TypeAdapter, ValidationError
from src.domain.errors import (
    EnrollmentNotFoundError,
    EnrollmentValidationError,
    StorageCorruptedError,
)
from src.domain.models import EnrollmentInput, EnrollmentRecord
from src.infrastructure.repositories.storage import KeyValueStorage

logger = structlog.get_logger()

ENROLLMENTS_KEY = "enrollments"

_records_adapter = TypeAdapter(list[EnrollmentRecord])


class EnrollmentStore:
    """Append, list, and reset enrollment records.

    ``append`` is a plain read-modify-write with no locking; two writers
    racing on the same storage end with the last write winning. It always
    reads strictly, so a corrupted stored value is never overwritten.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        fail_open: bool = True,
        key: str = ENROLLMENTS_KEY,
    ) -> None:
        self.storage = storage
        self.fail_open = fail_open
        self.key = key

    async def append(self, data: EnrollmentInput | Mapping[str, Any]) -> EnrollmentRecord:
        intake = self._validate(data)

        records = await self._read(strict=True)
        record = EnrollmentRecord.from_input(intake)
        records.append(record)
        await self._write(records)

        await logger.ainfo(
            "enrollment_appended",
            enrollment_id=record.id,
            total=len(records),
        )
        return record

    async def load(self) -> list[EnrollmentRecord]:
        return await self._read(strict=not self.fail_open)

    async def _read(self, *, strict: bool) -> list[EnrollmentRecord]:
        raw = await self.storage.get(self.key)
        if raw is None:
            return []

        try:
            records = _records_adapter.validate_json(raw)
        except ValidationError as exc:
            if strict:
                raise StorageCorruptedError(
                    f"Stored value under '{self.key}' is not a valid enrollment list"
                ) from exc
            await logger.awarning(
                "enrollment_storage_corrupt",
                key=self.key,
                error_count=exc.error_count(),
            )
            return []

        # Group tags are session-only; ignore any that leaked into storage.
        return [record.tagged(None) if record.group else record for record in records]

    async def get(self, record_id: str) -> EnrollmentRecord:
        for record in await self.load():
            if record.id == record_id:
                return record
        raise EnrollmentNotFoundError(f"Enrollment '{record_id}' not found")

    async def count(self) -> int:
        return len(await self.load())

    async def clear(self) -> None:
        await self.storage.remove(self.key)
        await logger.ainfo("enrollments_cleared", key=self.key)

    async def _write(self, records: list[EnrollmentRecord]) -> None:
        payload = json.dumps([record.to_storage() for record in records])
        await self.storage.set(self.key, payload)

    @staticmethod
    def _validate(data: EnrollmentInput | Mapping[str, Any]) -> EnrollmentInput:
        if isinstance(data, EnrollmentInput):
            return data
        try:
            return EnrollmentInput.model_validate(dict(data))
        except ValidationError as exc:
            fields = sorted({".".join(str(part) for part in err["loc"]) for err in exc.errors()})
            raise EnrollmentValidationError(
                f"Invalid enrollment fields: {', '.join(fields)}",
                errors=exc.errors(include_url=False, include_context=False),
            ) from exc

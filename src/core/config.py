from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment."""

    app_name: str = Field(default="Session Enrollment API", validation_alias="APP_NAME")
    environment: str = Field(default="local", validation_alias="APP_ENV")
    version: str = Field(default="0.1.0")
    log_format: str = Field(default="json", validation_alias="LOG_FORMAT")
    database_url: str = Field(
        default="sqlite+aiosqlite:///./enrollments.db",
        validation_alias="DATABASE_URL",
    )
    storage_backend: str = Field(default="sql", validation_alias="STORAGE_BACKEND")
    storage_fail_open: bool = Field(default=True, validation_alias="STORAGE_FAIL_OPEN")
    auto_create_schema: bool = Field(default=True, validation_alias="AUTO_CREATE_SCHEMA")
    tick_interval_seconds: float = Field(default=1.0, validation_alias="TICK_INTERVAL_SECONDS")

    @property
    def async_database_url(self) -> str:
        """Convert database URL to an async driver URL."""
        url = self.database_url
        if url.startswith("sqlite:///"):
            url = url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
        elif url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        elif url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql+asyncpg://", 1)
        return url

    # Ledger attestation (optional)
    ledger_url: str = Field(default="", validation_alias="LEDGER_URL")
    ledger_timeout_seconds: int = Field(default=10, validation_alias="LEDGER_TIMEOUT_SECONDS")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="allow")


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()

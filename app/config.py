"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    app_timezone: str = Field(
        default="UTC",
        description="IANA name or UTC offset used to stamp records and compute windows",
    )
    store_max_attempts: int = Field(
        default=5,
        description="Attempts made for a store transaction before giving up",
        gt=0,
    )
    store_retry_initial_delay: float = Field(
        default=0.05,
        description="Seconds to wait before the first retry of an unavailable store",
        ge=0,
    )
    store_retry_max_delay: float = Field(
        default=2.0,
        description="Upper bound in seconds for the backoff between retries",
        ge=0,
    )
    sqlite_busy_timeout: float = Field(
        default=30.0,
        description="Seconds SQLite waits on a locked database before failing",
        gt=0,
    )
    trending_refresh_hours: int = Field(
        default=24,
        description="Refresh cadence recorded on generated trending collections",
        gt=0,
    )
    cors_allow_origins: list[str] = Field(
        default_factory=list,
        description="Origins allowed to call the HTTP API from a browser",
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]

"""Application settings using Pydantic Settings for typed configuration.

This module centralizes all configuration and provides type-safe access to settings.
Settings are loaded from environment variables with sensible defaults.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageBackend(str, Enum):
    """Which status store implementation to run against."""

    database = "database"
    memory = "memory"


class Settings(BaseSettings):
    """Application-wide settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Environment
    env_name: str = Field(default="development", alias="ENV_NAME")

    # Storage
    storage_backend: StorageBackend = Field(
        default=StorageBackend.database, alias="STORAGE_BACKEND"
    )
    database_url: str = Field(default="sqlite:///./doorsign.db", alias="DATABASE_URL")

    # Sessions
    session_secret_key: str = Field(alias="SESSION_SECRET_KEY")
    session_max_age_days: int = Field(
        default=7, alias="SESSION_MAX_AGE_DAYS", ge=1, le=30
    )

    # First-run admin bootstrap
    admin_username: str | None = Field(default=None, alias="ADMIN_USERNAME")
    admin_password: str | None = Field(default=None, alias="ADMIN_PASSWORD")
    admin_email: str | None = Field(default=None, alias="ADMIN_EMAIL")

    # CORS
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")

    # E-paper provider (global endpoint, per-user credentials take precedence)
    epaper_import_url: str | None = Field(default=None, alias="EPAPER_IMPORT_URL")
    epaper_import_key: str | None = Field(default=None, alias="EPAPER_IMPORT_KEY")
    epaper_export_url: str | None = Field(default=None, alias="EPAPER_EXPORT_URL")
    epaper_export_key: str | None = Field(default=None, alias="EPAPER_EXPORT_KEY")
    epaper_push_timeout_seconds: float = Field(
        default=5.0, alias="EPAPER_PUSH_TIMEOUT_SECONDS", gt=0
    )

    # Reconciliation
    sync_back_enabled: bool = Field(default=False, alias="SYNC_BACK_ENABLED")
    sync_interval_minutes: int = Field(
        default=5, alias="SYNC_INTERVAL_MINUTES", ge=0
    )
    sync_concurrency: int = Field(default=5, alias="SYNC_CONCURRENCY", ge=1, le=50)

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list."""
        origins = []
        for o in self.cors_origins.split(","):
            trimmed = o.strip()
            if trimmed:
                origins.append(trimmed)
        return origins

    @computed_field
    @property
    def is_secure_cookie(self) -> bool:
        """Determine if cookies should be set with Secure flag."""
        return self.env_name.lower() not in {"dev", "development", "local", "test"}

    @computed_field
    @property
    def session_max_age_seconds(self) -> int:
        """Session cookie lifetime in seconds."""
        return self.session_max_age_days * 24 * 60 * 60


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()

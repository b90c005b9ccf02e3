"""Application configuration via pydantic-settings.

All values are loaded from environment variables (.env file).
Settings are organized into logical groups and composed into a single Settings object.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from yogyatha.models.enums import StorageBackend


class StorageSettings(BaseSettings):
    """Key-value store selection and connection settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    storage_backend: StorageBackend = Field(
        default=StorageBackend.MEMORY,
        description="Key-value store implementation (memory or redis)",
    )
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection string",
    )
    key_prefix: str = Field(
        default="yogyatha",
        description="Prefix for every key written to the store",
    )


class SecuritySettings(BaseSettings):
    """Admin authentication settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    admin_web_username: str = Field(default="admin", description="HTTP Basic Auth username for admin routes")
    admin_web_password: str = Field(default="", description="HTTP Basic Auth password for admin routes")


class Settings(BaseSettings):
    """Root settings composing all sub-settings.

    Usage:
        settings = Settings()
        settings.storage.redis_url
        settings.security.admin_web_password
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = Field(default="Yogyatha")
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    storage: StorageSettings = Field(default_factory=StorageSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid:
            msg = f"Invalid log level: {v}. Must be one of {valid}"
            raise ValueError(msg)
        return upper


# Module-level singleton, import this wherever settings are needed.
settings = Settings()

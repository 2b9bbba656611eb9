"""Centralized configuration management using pydantic-settings.

Configuration is loaded from environment variables with sensible defaults.
All settings can be overridden via environment variables or a .env file.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Log level options."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class StorageBackend(str, Enum):
    """Supported store backends."""

    MEMORY = "memory"
    SQLITE = "sqlite"


class EventSinkType(str, Enum):
    """Where family change events are delivered."""

    LOG = "log"
    MEMORY = "memory"
    HTTP = "http"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults for development. Override via
    environment variables (prefixed with FR_) or .env file.

    Examples:
        FR_STORAGE_BACKEND=sqlite
        FR_SQLITE_PATH=/var/lib/family_registry/registry.db
        FR_EVENT_SINK=http
        FR_EVENT_WEBHOOK_URL=http://events.internal/topics
    """

    model_config = SettingsConfigDict(
        env_prefix="FR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Family Registry"
    app_version: str = "0.1.0"
    environment: Environment = Environment.DEVELOPMENT
    debug: bool | None = Field(
        default=None,
        description="Enable debug mode; defaults to on in development only",
    )

    # Storage
    storage_backend: StorageBackend = StorageBackend.SQLITE
    sqlite_path: Path = Field(
        default=Path("family_registry.db"),
        description="SQLite database file path (when storage_backend=sqlite)",
    )

    # Events
    event_sink: EventSinkType = EventSinkType.LOG
    event_topic: str = Field(default="family-events", min_length=1)
    event_webhook_url: str | None = Field(
        default=None,
        description="Endpoint receiving family events (when event_sink=http)",
    )
    event_timeout_seconds: float = Field(default=5.0, gt=0)

    # Logging
    log_level: LogLevel = LogLevel.INFO
    log_format: Literal["json", "console"] | None = Field(
        default=None,
        description="Log output format; defaults to 'json' in production, 'console' elsewhere",
    )
    log_file: Path | None = Field(default=None, description="Optional log file path")

    # API Server
    api_host: str = "127.0.0.1"
    api_port: int = Field(default=8000, ge=1, le=65535)

    @model_validator(mode="after")
    def resolve_environment_defaults(self) -> "Settings":
        """Fill unset debug and log format from the environment."""
        if self.debug is None:
            self.debug = self.environment == Environment.DEVELOPMENT
        if self.log_format is None:
            self.log_format = "json" if self.is_production else "console"
        return self

    @model_validator(mode="after")
    def require_webhook_for_http_sink(self) -> "Settings":
        if self.event_sink == EventSinkType.HTTP and not self.event_webhook_url:
            raise ValueError("event_webhook_url must be set when event_sink is http")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == Environment.TESTING


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Call get_settings.cache_clear() to reload settings.
    """
    return Settings()

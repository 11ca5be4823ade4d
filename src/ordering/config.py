"""Configuration for the ordering core.

Values come from ``ORDERING_``-prefixed environment variables (or a local
``.env`` file) and are validated by pydantic-settings. The environment name
also drives logging defaults, see ordering.utils.logging.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TEST = "test"


class OrderingSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ORDERING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: Environment = Environment.DEVELOPMENT
    log_level: str | None = None  # Overrides the per-environment default
    log_json: bool | None = None  # Defaults to JSON in production and staging
    log_dir: Path | None = None  # Rotating file logs are written only when set

    repository_adapter: str = Field(default="memory", pattern="^[a-z_]+$")
    dispatcher_adapter: str = Field(default="memory", pattern="^[a-z_]+$")

    @property
    def effective_log_level(self) -> str:
        if self.log_level:
            return self.log_level.upper()
        return {
            Environment.PRODUCTION: "INFO",
            Environment.STAGING: "INFO",
            Environment.DEVELOPMENT: "DEBUG",
            Environment.TEST: "WARNING",
        }[self.environment]

    @property
    def render_json(self) -> bool:
        if self.log_json is not None:
            return self.log_json
        return self.environment in (Environment.PRODUCTION, Environment.STAGING)


@lru_cache
def get_settings() -> OrderingSettings:
    """Return the process-wide settings, loaded once."""
    return OrderingSettings()


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()

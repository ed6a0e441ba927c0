"""
logfacade Configuration Module.

Each sub-module represents an independent concern with its own environment
variable prefix.

Multi-Environment Support:
    Set `LF_ENV` to one of: development, testing, staging, production
    The system will load .env files in this order (later overrides earlier):
    1. .env
    2. .env.local
    3. .env.{environment}
    4. .env.{environment}.local

Usage:
    from logfacade.config import settings

    settings.environment.env  # "development"
    settings.logging.level  # Severity.INFO

Library code should receive a `LoggingSettings` (or a ready `LoggingContext`)
explicitly; the module-level `settings` instance is meant for entry points.
"""

from functools import cached_property
import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from .environment import EnvironmentSettings
from .logging import LoggingSettings, LogFormat


def _get_env_files() -> tuple[str, ...]:
    """Determine which .env files to load based on LF_ENV."""
    env = os.getenv("LF_ENV", "development")
    return (
        ".env",
        ".env.local",
        f".env.{env}",
        f".env.{env}.local",
    )


class Settings(BaseSettings):
    """Composite settings aggregating the configuration domains."""

    model_config = SettingsConfigDict(
        env_file=_get_env_files(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @cached_property
    def environment(self) -> EnvironmentSettings:
        return EnvironmentSettings()

    @cached_property
    def logging(self) -> LoggingSettings:
        return LoggingSettings(_env_file=self.environment.env_files)


settings = Settings()

__all__ = ["EnvironmentSettings", "LogFormat", "LoggingSettings", "Settings", "settings"]

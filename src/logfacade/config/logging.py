"""
Logging Configuration.
"""

from enum import Enum
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from logfacade.logging.levels import Severity


class LogFormat(str, Enum):
    CONSOLE = "console"
    JSON = "json"


class LoggingSettings(BaseSettings):
    """Logging infrastructure configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LF_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    level: Severity = Field(default=Severity.INFO, description="Minimum severity emitted")
    sinks: str = Field(default="stdio", description="Comma-separated sink names (stdio, file, memory)")
    format: LogFormat = Field(default=LogFormat.CONSOLE, description="Output format for the stdio sink")
    stream: Literal["stderr", "stdout"] = Field(default="stderr", description="Stream for the stdio sink")
    file_path: str = Field(default="logs/logfacade.log", description="Path for file sink")
    capture_stdlib: bool = Field(default=False, description="Route stdlib logging records through the facade")
    raise_errors: bool = Field(default=False, description="Propagate sink failures to the caller")
    console_timestamp_format: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="Console timestamp format",
    )
    console_level_width: int = Field(default=5, description="Console level column width")
    console_logger_width: int = Field(default=32, description="Console logger column width")
    console_separator: str = Field(default=" | ", description="Console column separator")

    @field_validator("level", mode="before")
    @classmethod
    def _parse_level(cls, value: object) -> Severity:
        if isinstance(value, (Severity, int, str)):
            return Severity.parse(value)
        raise ValueError(f"Invalid severity: {value!r}")

    @classmethod
    def defaults(cls) -> "LoggingSettings":
        """Field defaults only; neither environment variables nor .env files are read."""
        return cls.model_construct()

    @property
    def sink_names(self) -> list[str]:
        return [s.strip().lower() for s in self.sinks.split(",") if s.strip()]

"""
Console line rendering.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from structlog.typing import EventDict

RESET = "\x1b[0m"

LEVEL_COLORS = {
    "TRACE": "\x1b[2;37m",
    "DEBUG": "\x1b[36m",
    "INFO": "\x1b[32m",
    "WARN": "\x1b[33m",
    "ERROR": "\x1b[31m",
    "FATAL": "\x1b[1;31m",
}

PART_COLORS = {
    "timestamp": "\x1b[90m",
    "logger": "\x1b[35m",
    "key": "\x1b[34m",
    "value": "\x1b[2m",
}

# Keys rendered in their own column (or after the line) rather than as key=value
RESERVED_KEYS = frozenset({"level", "message", "event", "logger", "timestamp", "exception"})


def fit_column(text: str, width: int) -> str:
    """Right-align ``text`` in ``width`` characters, eliding its head when too long."""
    if width <= 0:
        return text
    if len(text) > width:
        text = text[-width:] if width <= 3 else "..." + text[len(text) - width + 3 :]
    return text.rjust(width)


@dataclass(frozen=True)
class ConsoleLayout:
    """Column layout for one console sink.

    Renders ``timestamp | LEVEL | logger | message key=value ...`` with the
    traceback, if any, on the following lines.
    """

    timestamp_format: str = "%Y-%m-%d %H:%M:%S"
    level_width: int = 5
    logger_width: int = 32
    separator: str = " | "

    @classmethod
    def from_settings(cls, settings: Any) -> ConsoleLayout:
        return cls(
            timestamp_format=settings.console_timestamp_format,
            level_width=settings.console_level_width,
            logger_width=settings.console_logger_width,
            separator=settings.console_separator,
        )

    @property
    def timestamp_width(self) -> int:
        return len(datetime(2000, 12, 31, 23, 59, 59).strftime(self.timestamp_format))

    def local_time(self, raw: Any) -> str:
        """Render an ISO 8601 timestamp in local time; fall back to now."""
        moment = None
        if isinstance(raw, str) and raw:
            try:
                moment = datetime.fromisoformat(raw.replace("Z", "+00:00"))
            except ValueError:
                moment = None
        if moment is None:
            return datetime.now().strftime(self.timestamp_format)
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return moment.astimezone().strftime(self.timestamp_format)

    def render(self, event_dict: EventDict, *, use_color: bool = False) -> str:
        level = str(event_dict.get("level", "info")).upper()

        def paint(text: str, code: str | None) -> str:
            return f"{code}{text}{RESET}" if use_color and code else text

        body = str(event_dict.get("message", event_dict.get("event", "")))
        pairs = [
            f"{paint(key, PART_COLORS['key'])}={paint(str(value), PART_COLORS['value'])}"
            for key, value in event_dict.items()
            if key not in RESERVED_KEYS
        ]
        if pairs:
            body = " ".join([body, *pairs])
        if event_dict.get("exception"):
            body = f"{body}\n{event_dict['exception']}"

        columns = [
            paint(fit_column(self.local_time(event_dict.get("timestamp")), self.timestamp_width), PART_COLORS["timestamp"]),
            paint(fit_column(level, self.level_width), LEVEL_COLORS.get(level)),
            paint(fit_column(str(event_dict.get("logger", "root")), self.logger_width), PART_COLORS["logger"]),
            body,
        ]
        return self.separator.join(columns)

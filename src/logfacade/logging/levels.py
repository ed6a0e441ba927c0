"""
Severity levels.
"""

from __future__ import annotations

from enum import IntEnum


class Severity(IntEnum):
    """Ordered log severity, least to most severe.

    Numeric values line up with the stdlib ``logging`` levels so a threshold
    applies the same way to bridged stdlib records.
    """

    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40
    FATAL = 50

    @property
    def label(self) -> str:
        """Canonical lowercase name, e.g. ``"warn"``."""
        return self.name.lower()

    @classmethod
    def parse(cls, value: Severity | int | str) -> Severity:
        """Resolve a severity from a member, its value, or a name (case-insensitive)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Invalid severity: {value!r}")
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise ValueError(f"Invalid severity value: {value!r}") from None
        if isinstance(value, str):
            key = value.strip().upper()
            key = _ALIASES.get(key, key)
            try:
                return cls[key]
            except KeyError:
                raise ValueError(f"Invalid severity name: {value!r}") from None
        raise ValueError(f"Invalid severity: {value!r}")

    @classmethod
    def from_stdlib(cls, levelno: int) -> Severity:
        """Map a stdlib level number to the highest severity not above it."""
        for severity in reversed(cls):
            if levelno >= severity:
                return severity
        return cls.TRACE


_ALIASES = {
    "WARNING": "WARN",
    "CRITICAL": "FATAL",
}

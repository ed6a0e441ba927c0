"""
Log sink abstractions and concrete implementations.
"""

from __future__ import annotations

import sys
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Literal

import orjson
from structlog.typing import EventDict

from .formatters import ConsoleLayout

LogFormat = Literal["console", "json"]


def orjson_dumps(v: Any, *, default: Any = str) -> str:
    """Fast JSON serialization using orjson."""
    return orjson.dumps(v, default=default, option=orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC).decode()


# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for log sinks.

    Implementations must tolerate concurrent ``emit`` calls; each one writes a
    whole record under its own lock.
    """

    @abstractmethod
    def emit(self, event_dict: EventDict) -> None:
        """Emit a log event to the sink."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the sink and release resources."""
        ...


class StdioSink(BaseSink):
    """Standard I/O sink with configurable format.

    Args:
        fmt: Output format - "console" (human-readable, colored on a TTY) or "json"
        stream: Output stream (default: stderr)
        layout: Console column layout (default: ``ConsoleLayout()``)
    """

    def __init__(self, fmt: LogFormat = "console", stream: Any = None, layout: ConsoleLayout | None = None):
        if fmt not in ("console", "json"):
            raise ValueError(f"Unknown log format: {fmt!r}")
        self._fmt = fmt
        self._stream = stream or sys.stderr
        self._layout = layout or ConsoleLayout()
        self._lock = threading.Lock()

    @property
    def layout(self) -> ConsoleLayout:
        return self._layout

    @property
    def stream(self) -> Any:
        return self._stream

    def emit(self, event_dict: EventDict) -> None:
        if self._fmt == "json":
            output = orjson_dumps(event_dict)
        else:
            use_color = bool(getattr(self._stream, "isatty", lambda: False)())
            output = self._layout.render(event_dict, use_color=use_color)

        with self._lock:
            self._stream.write(output + "\n")
            self._stream.flush()

    def close(self) -> None:
        # The stream belongs to the process, not to the sink.
        pass


class FileSink(BaseSink):
    """Local file sink writing JSON lines in append mode."""

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._file = open(self._path, "a", encoding="utf-8")

    @property
    def path(self) -> Path:
        return self._path

    def emit(self, event_dict: EventDict) -> None:
        json_str = orjson_dumps(event_dict)
        with self._lock:
            self._file.write(json_str + "\n")
            self._file.flush()

    def close(self) -> None:
        with self._lock:
            if not self._file.closed:
                self._file.close()


class MemorySink(BaseSink):
    """Keeps emitted events in memory, in arrival order."""

    def __init__(self) -> None:
        self._records: list[EventDict] = []
        self._lock = threading.Lock()

    def emit(self, event_dict: EventDict) -> None:
        with self._lock:
            self._records.append(dict(event_dict))

    @property
    def records(self) -> list[EventDict]:
        with self._lock:
            return list(self._records)

    @property
    def messages(self) -> list[str]:
        return [str(record.get("message", "")) for record in self.records]

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def close(self) -> None:
        pass

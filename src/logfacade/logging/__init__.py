"""
Logging facade for logfacade.

Named logger handles emitting at six ordered severities
(trace < debug < info < warn < error < fatal), filtered by a threshold and
written synchronously to pluggable sinks:
- stdio: Standard error/output (console/json format)
- file: Local append-only JSON lines
- memory: In-process capture

Design Pattern: Strategy Pattern for sink abstraction.
Library: structlog + orjson for JSON serialization.
"""

from .core import LoggingContext, Logger, configure_logging, get_default_context, get_logger
from .levels import Severity
from .sinks import BaseSink, FileSink, MemorySink, StdioSink

__all__ = [
    "BaseSink",
    "FileSink",
    "Logger",
    "LoggingContext",
    "MemorySink",
    "Severity",
    "StdioSink",
    "configure_logging",
    "get_default_context",
    "get_logger",
]

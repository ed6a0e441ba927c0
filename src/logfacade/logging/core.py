"""
Core logging configuration and initialization logic.
"""

from __future__ import annotations

import logging
import sys
import threading
import traceback
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

import structlog
from structlog.typing import EventDict, WrappedLogger

from .formatters import ConsoleLayout
from .levels import Severity
from .sinks import BaseSink, FileSink, MemorySink, StdioSink

if TYPE_CHECKING:
    from logfacade.config.logging import LoggingSettings


# =============================================================================
# Structlog Processors
# =============================================================================


def add_log_level(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add the canonical severity label (``trace`` ... ``fatal``) to log event."""
    event_dict["level"] = method_name
    return event_dict


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add ISO 8601 timestamp to log event."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def add_logger_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add logger name to log event."""
    event_dict["logger"] = getattr(logger, "name", "root")
    return event_dict


def rename_event_key(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename 'event' to 'message'."""
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def deliver(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> tuple[tuple[EventDict], dict]:
    """Hand the finished event dict to the wrapped emitter unchanged."""
    return (event_dict,), {}


PROCESSORS = [
    add_log_level,
    add_timestamp,
    add_logger_name,
    rename_event_key,
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    deliver,
]


# =============================================================================
# Logger Handle
# =============================================================================


class _SinkEmitter:
    """Wrapped logger: forwards event dicts to the sinks of its context."""

    def __init__(self, context: LoggingContext, name: str):
        self.context = context
        self.name = name

    def msg(self, event_dict: EventDict) -> None:
        self.context.dispatch(event_dict)

    trace = debug = info = warn = error = fatal = msg

    def __repr__(self) -> str:
        return f"<_SinkEmitter name={self.name!r}>"


class Logger(structlog.BoundLoggerBase):
    """Named logger handle.

    Obtain one through :meth:`LoggingContext.get_logger` or :func:`get_logger`;
    the same name always yields the same handle. Emission below the context
    threshold is a no-op, and every emit call returns ``None``.
    """

    _logger: _SinkEmitter

    @property
    def name(self) -> str:
        return self._logger.name

    @property
    def context(self) -> LoggingContext:
        return self._logger.context

    def is_enabled_for(self, severity: Severity | int | str) -> bool:
        return Severity.parse(severity) >= self._logger.context.threshold

    def log(self, severity: Severity | int | str, event: Any, **kw: Any) -> None:
        severity = Severity.parse(severity)
        if severity < self._logger.context.threshold:
            return None
        self._proxy_to_logger(severity.label, event, **kw)
        return None

    def trace(self, event: Any, **kw: Any) -> None:
        self.log(Severity.TRACE, event, **kw)

    def debug(self, event: Any, **kw: Any) -> None:
        self.log(Severity.DEBUG, event, **kw)

    def info(self, event: Any, **kw: Any) -> None:
        self.log(Severity.INFO, event, **kw)

    def warn(self, event: Any, **kw: Any) -> None:
        self.log(Severity.WARN, event, **kw)

    def error(self, event: Any, **kw: Any) -> None:
        self.log(Severity.ERROR, event, **kw)

    def fatal(self, event: Any, **kw: Any) -> None:
        self.log(Severity.FATAL, event, **kw)

    def exception(self, event: Any, **kw: Any) -> None:
        """Log at ``error`` with the active exception's traceback."""
        kw.setdefault("exc_info", True)
        self.log(Severity.ERROR, event, **kw)

    warning = warn
    critical = fatal


def _resolve_name(name: Any) -> str:
    if isinstance(name, str):
        if not name.strip():
            raise ValueError("Logger name must be a non-empty string")
        return name
    module = getattr(name, "__module__", None)
    qualname = getattr(name, "__qualname__", None)
    if module and qualname:
        return f"{module}.{qualname}"
    raise ValueError(f"Cannot derive a logger name from {name!r}")


def _report_sink_error(sink: BaseSink) -> None:
    """Print the active sink exception to the original stderr."""
    stream = sys.__stderr__
    if stream is None:
        return
    try:
        stream.write(f"--- Logging error in {type(sink).__name__} ---\n")
        traceback.print_exc(file=stream)
    except OSError:
        pass


# =============================================================================
# Logging Context
# =============================================================================


class LoggingContext:
    """Threshold, sinks and the logger registry for one logging domain.

    Pass a context into components that log instead of reaching for global
    state; :func:`get_logger` and :func:`configure_logging` operate on a
    process-wide default instance for entry points.

    Args:
        settings: Source for threshold and sinks (default: built-in defaults, the
            environment is not read)
        sinks: Explicit sinks, overriding ``settings.sinks``
        threshold: Explicit threshold, overriding ``settings.level``
    """

    def __init__(
        self,
        settings: LoggingSettings | None = None,
        *,
        sinks: Sequence[BaseSink] | None = None,
        threshold: Severity | int | str | None = None,
    ):
        self._lock = threading.RLock()
        # Held for a whole dispatch; replaced sinks close only once it is free
        self._dispatch_lock = threading.RLock()
        self._loggers: dict[str, Logger] = {}
        self._sinks: tuple[BaseSink, ...] = ()
        self._threshold = Severity.INFO
        self._raise_errors = False
        self._stdlib_handler: logging.Handler | None = None
        self.configure(settings, sinks=sinks, threshold=threshold)

    @property
    def threshold(self) -> Severity:
        return self._threshold

    @property
    def sinks(self) -> tuple[BaseSink, ...]:
        return self._sinks

    def configure(
        self,
        settings: LoggingSettings | None = None,
        *,
        sinks: Sequence[BaseSink] | None = None,
        threshold: Severity | int | str | None = None,
    ) -> None:
        """(Re)configure in place; handles already handed out follow the new setup."""
        if settings is None:
            from logfacade.config.logging import LoggingSettings

            settings = LoggingSettings.defaults()

        new_threshold = Severity.parse(threshold) if threshold is not None else settings.level
        new_sinks = tuple(sinks) if sinks is not None else _build_sinks(settings)

        with self._lock:
            old_sinks = self._sinks
            self._sinks = new_sinks
            self._threshold = new_threshold
            self._raise_errors = settings.raise_errors

        # Close existing sinks
        with self._dispatch_lock:
            for sink in old_sinks:
                if sink not in new_sinks:
                    sink.close()

        if settings.capture_stdlib:
            self.capture_stdlib()
        else:
            self.release_stdlib()

    def set_threshold(self, severity: Severity | int | str) -> None:
        self._threshold = Severity.parse(severity)
        if self._stdlib_handler is not None:
            logging.getLogger().setLevel(int(self._threshold))

    def get_logger(self, name: Any = "root") -> Logger:
        """Return the cached handle for ``name``, creating it on first use."""
        key = _resolve_name(name)
        with self._lock:
            logger = self._loggers.get(key)
            if logger is None:
                logger = Logger(_SinkEmitter(self, key), PROCESSORS, {})
                self._loggers[key] = logger
            return logger

    def dispatch(self, event_dict: EventDict) -> None:
        """Write one finished event to every sink, in configuration order."""
        with self._dispatch_lock:
            for sink in self._sinks:
                try:
                    sink.emit(event_dict)
                except Exception:
                    if self._raise_errors:
                        raise
                    _report_sink_error(sink)

    def capture_stdlib(self) -> None:
        """Install the stdlib bridge as the only root handler."""
        from .interceptors import RedirectStdLibHandler

        root_logger = logging.getLogger()
        with self._lock:
            if self._stdlib_handler is None:
                self._stdlib_handler = RedirectStdLibHandler(self)
            root_logger.handlers = [self._stdlib_handler]
            root_logger.setLevel(int(self._threshold))

    def release_stdlib(self) -> None:
        with self._lock:
            handler, self._stdlib_handler = self._stdlib_handler, None
        if handler is not None:
            logging.getLogger().removeHandler(handler)

    def close(self) -> None:
        """Detach from stdlib logging and close all sinks."""
        self.release_stdlib()
        with self._lock:
            sinks, self._sinks = self._sinks, ()
        with self._dispatch_lock:
            for sink in sinks:
                sink.close()


def _build_sinks(settings: LoggingSettings) -> tuple[BaseSink, ...]:
    """Create the sinks named in settings."""
    names = settings.sink_names
    unknown = [name for name in names if name not in ("stdio", "file", "memory")]
    if unknown:
        raise ValueError(f"Unknown log sink(s): {', '.join(unknown)}")

    sinks: list[BaseSink] = []
    for name in names:
        if name == "stdio":
            stream = sys.stdout if settings.stream == "stdout" else sys.stderr
            layout = ConsoleLayout.from_settings(settings)
            sinks.append(StdioSink(fmt=settings.format.value, stream=stream, layout=layout))
        elif name == "file":
            sinks.append(FileSink(settings.file_path))
        elif name == "memory":
            sinks.append(MemorySink())
    return tuple(sinks)


# =============================================================================
# Process-wide Default
# =============================================================================

_default_context: LoggingContext | None = None
_default_lock = threading.Lock()


def _environment_settings() -> LoggingSettings:
    from logfacade.config.logging import LoggingSettings

    return LoggingSettings()


def get_default_context() -> LoggingContext:
    """Return the process-wide context, configuring it from the environment on first use."""
    global _default_context
    if _default_context is None:
        with _default_lock:
            if _default_context is None:
                _default_context = LoggingContext(_environment_settings())
    return _default_context


def get_logger(name: Any = None) -> Logger:
    """Get a named logger handle from the process-wide context."""
    return get_default_context().get_logger("root" if name is None else name)


def configure_logging(
    settings: LoggingSettings | None = None,
    *,
    level: Severity | int | str | None = None,
    sinks: Sequence[BaseSink] | None = None,
) -> LoggingContext:
    """
    Configure the process-wide logging context.

    Args:
        settings: Logging settings (default: read from the environment and .env)
        level: Threshold override (trace, debug, info, warn, error, fatal)
        sinks: Explicit sinks, overriding the ones named in settings

    Returns:
        The configured default context.
    """
    global _default_context
    if settings is None:
        settings = _environment_settings()
    with _default_lock:
        if _default_context is None:
            _default_context = LoggingContext(settings, sinks=sinks, threshold=level)
            return _default_context
    _default_context.configure(settings, sinks=sinks, threshold=level)
    return _default_context

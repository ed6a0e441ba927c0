"""
Interceptors for capturing standard library logs.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .levels import Severity

if TYPE_CHECKING:
    from .core import LoggingContext


class RedirectStdLibHandler(logging.Handler):
    """
    Redirect standard library logging records into a logging context.

    Each record goes to the context logger with the record's own name, at the
    severity matching its level number, so third-party logs share the
    threshold and sinks of the application.
    """

    def __init__(self, context: LoggingContext, level: int = logging.NOTSET):
        super().__init__(level)
        self._context = context

    def emit(self, record: logging.LogRecord) -> None:
        try:
            # Skip structlog's own stdlib chatter
            if "structlog" in record.name:
                return

            # Format message using stdlib's formatting (handles %s args and exc_text)
            msg = self.format(record)
            logger = self._context.get_logger(record.name or "stdlib")
            logger.log(Severity.from_stdlib(record.levelno), msg)
        except Exception:
            self.handleError(record)

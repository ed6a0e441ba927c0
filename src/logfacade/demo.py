"""
Demonstrates the facade: a unit that receives its logger explicitly and emits
one message per severity.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from logfacade.logging import Logger, configure_logging

if TYPE_CHECKING:
    from logfacade.config.logging import LoggingSettings


class UserDirectory:
    """Owning unit holding one named logger for its lifetime."""

    LOGGER_NAME = "logfacade.demo.UserDirectory"

    def __init__(self, logger: Logger):
        self._logger = logger

    def report_levels(self) -> None:
        """Log messages at different levels."""
        self._logger.trace("This is a TRACE message")
        self._logger.debug("This is a DEBUG message")
        self._logger.info("This is an INFO message")
        self._logger.warn("This is a WARN message")
        self._logger.error("This is an ERROR message")
        self._logger.fatal("This is a FATAL message")


def main(logging_settings: LoggingSettings | None = None) -> None:
    if logging_settings is None:
        from logfacade.config import settings

        logging_settings = settings.logging

    context = configure_logging(logging_settings)
    directory = UserDirectory(context.get_logger(UserDirectory.LOGGER_NAME))
    directory.report_levels()


if __name__ == "__main__":
    main()

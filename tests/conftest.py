import logging
import os

import pytest

from logfacade.config.logging import LoggingSettings
from logfacade.logging import LoggingContext, MemorySink
from logfacade.logging import core


@pytest.fixture(autouse=True)
def isolated_logging(monkeypatch):
    """
    Keeps tests independent of the environment and of each other.
    Clears LF_* variables and gives every test a fresh process-wide context.
    """
    for key in list(os.environ):
        if key.startswith("LF_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(os.path.dirname(__file__))
    monkeypatch.setattr(core, "_default_context", None)

    root_level = logging.getLogger().level
    yield

    if core._default_context is not None:
        core._default_context.close()
    logging.getLogger().setLevel(root_level)


@pytest.fixture
def memory_sink() -> MemorySink:
    return MemorySink()


@pytest.fixture
def settings() -> LoggingSettings:
    return LoggingSettings(_env_file=None)


@pytest.fixture
def context(settings, memory_sink):
    """Context at the most permissive threshold writing to a memory sink."""
    ctx = LoggingContext(settings, sinks=[memory_sink], threshold="trace")
    yield ctx
    ctx.close()

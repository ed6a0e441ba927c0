"""
Logger acquisition and message emission tests.
"""

from __future__ import annotations

import logging
import threading

import pytest

from logfacade.logging import Logger, LoggingContext, MemorySink, Severity

ALL_LEVELS = ["trace", "debug", "info", "warn", "error", "fatal"]


class Owner:
    """Stand-in owning type for name derivation."""


class TestLoggerAcquisition:
    """LoggingContext.get_logger"""

    def test_same_name_returns_same_handle(self, context: LoggingContext) -> None:
        first = context.get_logger("billing.Invoices")
        second = context.get_logger("billing.Invoices")
        assert first is second
        assert first.name == "billing.Invoices"

    def test_different_names_return_different_handles(self, context: LoggingContext) -> None:
        assert context.get_logger("a") is not context.get_logger("b")

    def test_name_derived_from_type(self, context: LoggingContext) -> None:
        logger = context.get_logger(Owner)
        assert logger.name == f"{Owner.__module__}.Owner"
        assert context.get_logger(f"{Owner.__module__}.Owner") is logger

    @pytest.mark.parametrize("name", ["", "   ", 42])
    def test_invalid_names_are_rejected(self, context: LoggingContext, name) -> None:
        with pytest.raises(ValueError):
            context.get_logger(name)

    def test_concurrent_acquisition_yields_one_handle(self, context: LoggingContext) -> None:
        results: list[Logger] = []
        barrier = threading.Barrier(8)

        def acquire() -> None:
            barrier.wait()
            results.append(context.get_logger("shared"))

        threads = [threading.Thread(target=acquire) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 8
        assert all(r is results[0] for r in results)

    def test_repeated_acquisition_filters_identically(self, settings, memory_sink) -> None:
        ctx = LoggingContext(settings, sinks=[memory_sink], threshold="warn")
        first = ctx.get_logger("svc")
        second = ctx.get_logger("svc")
        for level in ALL_LEVELS:
            assert first.is_enabled_for(level) == second.is_enabled_for(level)
        ctx.close()


class TestEmission:
    """Emit calls and the resulting records"""

    @pytest.mark.parametrize("level", ALL_LEVELS)
    def test_every_level_returns_none(self, context: LoggingContext, level: str) -> None:
        logger = context.get_logger("emit")
        assert getattr(logger, level)(f"{level} message") is None

    def test_record_shape(self, context: LoggingContext, memory_sink: MemorySink) -> None:
        context.get_logger("shape").warn("disk almost full")

        [record] = memory_sink.records
        assert record["message"] == "disk almost full"
        assert record["level"] == "warn"
        assert record["logger"] == "shape"
        assert "timestamp" in record
        assert "event" not in record

    def test_log_accepts_severity_names_and_members(self, context: LoggingContext, memory_sink: MemorySink) -> None:
        logger = context.get_logger("generic")
        logger.log("error", "by name")
        logger.log(Severity.FATAL, "by member")
        assert [r["level"] for r in memory_sink.records] == ["error", "fatal"]

    def test_log_rejects_unknown_severity(self, context: LoggingContext) -> None:
        with pytest.raises(ValueError):
            context.get_logger("generic").log("verbose", "nope")

    def test_aliases(self, context: LoggingContext, memory_sink: MemorySink) -> None:
        logger = context.get_logger("aliases")
        logger.warning("w")
        logger.critical("c")
        assert [r["level"] for r in memory_sink.records] == ["warn", "fatal"]

    def test_keyword_context_is_kept(self, context: LoggingContext, memory_sink: MemorySink) -> None:
        context.get_logger("kw").info("user created", user_id=7)
        assert memory_sink.records[0]["user_id"] == 7

    def test_bind_keeps_name_and_adds_context(self, context: LoggingContext, memory_sink: MemorySink) -> None:
        bound = context.get_logger("bound").bind(request_id="r-1")
        bound.info("handled")

        record = memory_sink.records[0]
        assert bound.name == "bound"
        assert record["logger"] == "bound"
        assert record["request_id"] == "r-1"

    def test_exception_includes_traceback(self, context: LoggingContext, memory_sink: MemorySink) -> None:
        logger = context.get_logger("errors")
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            logger.exception("operation failed")

        record = memory_sink.records[0]
        assert record["level"] == "error"
        assert "RuntimeError: boom" in record["exception"]


class TestThresholdFiltering:
    """Monotonic severity filtering"""

    def test_warn_threshold(self, settings, memory_sink) -> None:
        ctx = LoggingContext(settings, sinks=[memory_sink], threshold="warn")
        logger = ctx.get_logger("filter")
        for level in ALL_LEVELS:
            getattr(logger, level)(level)

        assert memory_sink.messages == ["warn", "error", "fatal"]
        ctx.close()

    def test_info_threshold_scenario(self, settings, memory_sink) -> None:
        """threshold=info: debug 'x' is dropped, info 'y' is written"""
        ctx = LoggingContext(settings, sinks=[memory_sink], threshold="info")
        logger = ctx.get_logger("scenario")
        logger.debug("x")
        logger.info("y")

        assert memory_sink.messages == ["y"]
        ctx.close()

    def test_trace_threshold_emits_all_in_order(self, context: LoggingContext, memory_sink: MemorySink) -> None:
        logger = context.get_logger("all")
        for level in ALL_LEVELS:
            getattr(logger, level)(level.upper())

        assert memory_sink.messages == [level.upper() for level in ALL_LEVELS]
        assert [r["level"] for r in memory_sink.records] == ALL_LEVELS

    @pytest.mark.parametrize("threshold", ALL_LEVELS)
    def test_is_enabled_for_matches_threshold(self, settings, memory_sink, threshold: str) -> None:
        ctx = LoggingContext(settings, sinks=[memory_sink], threshold=threshold)
        logger = ctx.get_logger("enabled")
        expected = ALL_LEVELS[ALL_LEVELS.index(threshold) :]
        assert [level for level in ALL_LEVELS if logger.is_enabled_for(level)] == expected
        ctx.close()

    def test_default_threshold_is_info(self, settings, memory_sink) -> None:
        ctx = LoggingContext(settings, sinks=[memory_sink])
        assert ctx.threshold is Severity.INFO
        ctx.close()

    def test_set_threshold_applies_to_existing_handles(self, context: LoggingContext, memory_sink: MemorySink) -> None:
        logger = context.get_logger("live")
        logger.debug("before")
        context.set_threshold("error")
        logger.debug("after")
        logger.error("kept")

        assert memory_sink.messages == ["before", "kept"]

    def test_reconfigure_applies_to_existing_handles(self, context: LoggingContext, settings) -> None:
        logger = context.get_logger("reconfigured")
        replacement = MemorySink()
        context.configure(settings, sinks=[replacement], threshold="fatal")

        logger.error("dropped")
        logger.fatal("written")

        assert replacement.messages == ["written"]
        assert context.get_logger("reconfigured") is logger


class TestOrdering:
    """Order preservation at a single destination"""

    def test_sequential_calls_keep_order(self, context: LoggingContext, memory_sink: MemorySink) -> None:
        logger = context.get_logger("order")
        logger.info("A")
        logger.info("B")
        assert memory_sink.messages == ["A", "B"]

    def test_concurrent_callers_keep_their_own_order(self, context: LoggingContext, memory_sink: MemorySink) -> None:
        per_thread = 200

        def worker(tag: str) -> None:
            logger = context.get_logger("concurrent")
            for i in range(per_thread):
                logger.info(f"{tag}-{i}")

        threads = [threading.Thread(target=worker, args=(f"t{n}",)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        messages = memory_sink.messages
        assert len(messages) == 4 * per_thread
        for n in range(4):
            mine = [m for m in messages if m.startswith(f"t{n}-")]
            assert mine == [f"t{n}-{i}" for i in range(per_thread)]


class TestInjectedContextIgnoresEnvironment:
    """A context built without settings does not read LF_LOG_* variables"""

    def test_capture_setting_in_environment_is_ignored(self, monkeypatch) -> None:
        from logfacade.logging.interceptors import RedirectStdLibHandler

        monkeypatch.setenv("LF_LOG_CAPTURE_STDLIB", "true")
        ctx = LoggingContext(sinks=[], threshold="warn")

        assert not any(isinstance(h, RedirectStdLibHandler) for h in logging.getLogger().handlers)
        ctx.close()

    def test_invalid_level_in_environment_is_ignored(self, monkeypatch) -> None:
        monkeypatch.setenv("LF_LOG_LEVEL", "loud")
        ctx = LoggingContext(sinks=[MemorySink()], threshold="warn")

        assert ctx.threshold is Severity.WARN
        ctx.close()

    def test_defaults_apply_without_settings(self, monkeypatch) -> None:
        monkeypatch.setenv("LF_LOG_LEVEL", "fatal")
        sink = MemorySink()
        ctx = LoggingContext(sinks=[sink])
        ctx.get_logger("defaults").info("kept")

        assert ctx.threshold is Severity.INFO
        assert sink.messages == ["kept"]
        ctx.close()

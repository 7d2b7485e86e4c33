"""Tests for logging infrastructure."""
import logging
from datetime import date

import pytest
import structlog

from shiftboard.core.periods import Period
from shiftboard.utils.logging_setup import (
    TRACE,
    ColoredFormatter,
    EngineLogger,
    get_logger,
    log_function_call,
    setup_logging,
)
from shiftboard.utils.structured_logging import (
    bind_context,
    clear_context,
    configure_structlog,
    get_structured_logger,
)


@pytest.fixture(autouse=True)
def reset_handlers():
    yield
    logging.getLogger("shiftboard").handlers.clear()


class TestLoggingSetup:
    """Tests for logging configuration."""

    def test_setup_logging_creates_logger(self, tmp_path):
        logger = setup_logging(log_file=str(tmp_path / "test.log"))
        assert logger.name == "shiftboard"
        assert len(logger.handlers) == 2  # Console + file

    def test_file_gets_debug_console_stays_quiet(self, tmp_path, capsys):
        log_file = tmp_path / "logs" / "test.log"
        logger = setup_logging(console_level="WARNING", log_file=str(log_file))
        logger.debug("slot filled")
        logger.warning("move declined")
        text = log_file.read_text(encoding="utf-8")
        assert "slot filled" in text
        assert "move declined" in text
        err = capsys.readouterr().err
        assert "move declined" in err
        assert "slot filled" not in err

    def test_setup_logging_no_file(self):
        logger = setup_logging(console_level="INFO")
        assert len(logger.handlers) == 1  # Console only

    def test_repeated_setup_replaces_handlers(self, tmp_path):
        setup_logging(log_file=str(tmp_path / "a.log"))
        logger = setup_logging(log_file=str(tmp_path / "b.log"))
        assert len(logger.handlers) == 2

    def test_trace_level(self):
        assert TRACE == 5
        assert logging.getLevelName(TRACE) == "TRACE"

    def test_get_logger(self):
        assert get_logger("shiftboard.engine").name == "shiftboard.engine"


class TestColoredFormatter:
    def _record(self):
        return logging.LogRecord("shiftboard", logging.WARNING, __file__, 1, "declined", None, None)

    def test_plain_when_not_a_terminal(self):
        assert ColoredFormatter("%(message)s").format(self._record()) == "declined"

    def test_coloured_on_a_terminal(self):
        text = ColoredFormatter("%(message)s", use_color=True).format(self._record())
        assert text.startswith("\033[33m")
        assert text.endswith("\033[0m")


class TestLogFunctionCall:
    """Tests for function call decorator."""

    def test_decorator_logs_entry_and_result(self, caplog):
        @log_function_call
        def add(a, b):
            return a + b

        with caplog.at_level(TRACE):
            result = add(1, 2)

        assert result == 3
        assert "add(1, 2)" in caplog.text
        assert "add -> 3" in caplog.text

    def test_arguments_summarised(self, caplog):
        @log_function_call
        def suggest(period, current):
            return list(current)

        week = Period.week(date(2024, 4, 28))
        with caplog.at_level(TRACE):
            suggest(week, ["a", "b", "c"])

        assert f"suggest({week.label}, <list of 3>)" in caplog.text
        assert "suggest -> <list of 3>" in caplog.text

    def test_decorator_logs_exceptions(self, caplog):
        @log_function_call
        def fail():
            raise ValueError("test error")

        with pytest.raises(ValueError):
            fail()
        assert "fail failed: ValueError: test error" in caplog.text


class TestEngineLogger:
    def test_phase_and_steps(self, caplog):
        elog = EngineLogger("shiftboard.test")
        with caplog.at_level(TRACE, logger="shiftboard.test"):
            elog.phase("Suggest")
            elog.step("slot filled")
            elog.detail("load", {"A": 1})
        assert "-- Suggest --" in caplog.text
        assert "  slot filled" in caplog.text
        assert "load: {'A': 1}" in caplog.text


class TestStructuredLogging:
    def test_events_rendered_as_json(self, capsys):
        configure_structlog(json_output=True)
        try:
            get_structured_logger("shiftboard.test").info("workspace_committed", assignments=3)
            out = capsys.readouterr().out
            assert '"event": "workspace_committed"' in out
            assert '"assignments": 3' in out
        finally:
            structlog.reset_defaults()

    def test_level_filter(self, capsys):
        configure_structlog(level=logging.WARNING)
        try:
            get_structured_logger("shiftboard.test").info("quiet")
            assert "quiet" not in capsys.readouterr().out
        finally:
            structlog.reset_defaults()

    def test_context_binding(self, capsys):
        configure_structlog(json_output=True)
        try:
            bind_context(period="2024-05")
            get_structured_logger("shiftboard.test").info("suggestions_merged")
            assert '"period": "2024-05"' in capsys.readouterr().out
        finally:
            clear_context()
            structlog.reset_defaults()

"""
Unit tests for ashandler.helpers.log module.
"""

import logging

import pytest


def _record(level, func_name="test_function", **extra):
    record = logging.LogRecord(
        name="test",
        level=level,
        pathname="test.py",
        lineno=1,
        msg="test message",
        args=(),
        exc_info=None,
    )
    record.funcName = func_name
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestAshandlerFormatter:
    """Test custom AshandlerFormatter."""

    @pytest.mark.parametrize(
        "level,level_name,expected_color",
        [
            (logging.ERROR, "ERROR", "RED"),
            (logging.CRITICAL, "CRITICAL", "RED"),
            (logging.WARNING, "WARNING", "YELLOW"),
            (logging.INFO, "INFO", None),
            (logging.DEBUG, "DEBUG", None),
        ],
    )
    def test_format_with_different_levels(self, level, level_name, expected_color):
        """Formatter produces the prefix, level label and colors"""
        from ashandler.helpers.log import AshandlerFormatter, Colors

        result = AshandlerFormatter().format(_record(level))

        assert "test message" in result
        assert "[ashandler]" in result
        assert "[test_function]" in result

        if level >= logging.ERROR:
            assert f"[{level_name}]" in result
        if expected_color == "RED":
            assert Colors.RED in result
            assert Colors.BOLD in result
        elif expected_color == "YELLOW":
            assert Colors.YELLOW in result
        else:
            assert result.startswith("[ashandler]")
            assert Colors.RESET not in result

    def test_format_removes_module_tag(self):
        """<module> is dropped from the prefix"""
        from ashandler.helpers.log import AshandlerFormatter

        result = AshandlerFormatter().format(_record(logging.INFO, "<module>"))

        assert "[<module>]" not in result
        assert result == "[ashandler] test message"

    def test_format_with_custom_method_name(self):
        from ashandler.helpers.log import AshandlerFormatter

        result = AshandlerFormatter().format(
            _record(logging.INFO, "default_func", method_name="custom_method")
        )

        assert "[custom_method]" in result
        assert "[default_func]" not in result

    def test_format_is_restored(self):
        """The formatter's own format string is left unchanged"""
        from ashandler.helpers.log import AshandlerFormatter

        formatter = AshandlerFormatter()
        original = formatter._style._fmt
        formatter.format(_record(logging.ERROR))
        assert formatter._style._fmt == original


class TestGetLogger:
    """Test logger creation and singleton behavior."""

    def test_get_logger_returns_logger(self):
        from ashandler.helpers.log import get_logger

        logger = get_logger()
        assert isinstance(logger, logging.Logger)
        assert logger.name == "ashandler"

    def test_get_logger_is_singleton(self):
        from ashandler.helpers.log import get_logger

        assert get_logger() is get_logger()

    def test_get_logger_has_custom_formatter(self):
        from ashandler.helpers.log import AshandlerFormatter, get_logger

        handler = get_logger().handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        assert isinstance(handler.formatter, AshandlerFormatter)

    def test_get_logger_no_propagate(self):
        from ashandler.helpers.log import get_logger

        assert get_logger().propagate is False


class TestLevelFromEnvironment:
    """Test ASHANDLER_LOG_LEVEL handling."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("DEBUG", logging.DEBUG),
            ("info", logging.INFO),
            ("", logging.WARNING),
            ("loud", logging.WARNING),
        ],
    )
    def test_level_from_env(self, monkeypatch, value, expected):
        from ashandler.helpers import log

        monkeypatch.setenv(log.LOG_LEVEL_ENV, value)
        assert log._level_from_env() == expected

    def test_unset(self, monkeypatch):
        from ashandler.helpers import log

        monkeypatch.delenv(log.LOG_LEVEL_ENV, raising=False)
        assert log._level_from_env() == logging.WARNING


class TestLoggingFunctions:
    """Test logging functions."""

    def test_log_with_explicit_method_name(self, log_stream):
        from ashandler.helpers.log import log

        log("test message", method_name="my_method")

        assert "[ashandler][my_method] test message" in log_stream.getvalue()

    def test_caller_name_detection(self, log_stream):
        from ashandler.helpers.log import log_info

        def my_test_function():
            log_info("message from function")

        my_test_function()
        assert "[my_test_function] message from function" in log_stream.getvalue()

    def test_all_levels(self, log_stream):
        from ashandler.helpers.log import log_debug, log_error, log_info, log_warning

        log_debug("debug")
        log_info("info")
        log_warning("warning")
        log_error("error")

        output = log_stream.getvalue()
        for word in ("debug", "info", "warning", "error"):
            assert word in output

    def test_set_log_level_filters_messages(self, log_stream):
        from ashandler.helpers.log import log_debug, log_info, set_log_level

        set_log_level(logging.WARNING)
        log_debug("should not appear")
        log_info("also should not appear")

        assert log_stream.getvalue() == ""


class TestLogTime:
    """Test LogTime context manager."""

    def test_logtime(self, log_stream):
        from ashandler.helpers.log import LogTime

        with LogTime("test_operation"):
            pass

        output = log_stream.getvalue()
        assert "[LogTime] test_operation took" in output
        assert "seconds" in output

    def test_logtime_does_not_swallow(self, log_stream):
        from ashandler.helpers.log import LogTime

        with pytest.raises(KeyError):
            with LogTime("failing"):
                raise KeyError("x")
        assert "failing took" in log_stream.getvalue()

"""Tests for telemetry module."""

import io
import json
import logging

import pytest

from buffer_protocol.telemetry import (
    BufferLogger,
    JsonFormatter,
    LogContext,
    LogLevel,
    TextFormatter,
    clear_log_context,
    get_log_context,
    get_logger,
    set_log_context,
)


class TestLogContext:
    """Tests for LogContext."""

    def test_empty_context(self) -> None:
        """Test empty context."""
        assert LogContext().to_dict() == {}

    def test_context_with_fields(self) -> None:
        """Test context with fields."""
        ctx = LogContext(provider="BufferProvider", view_id="v-1", flags=0)
        assert ctx.to_dict() == {
            "provider": "BufferProvider",
            "view_id": "v-1",
            "flags": 0,
        }

    def test_context_with_extra(self) -> None:
        """Test context with extra fields."""
        ctx = LogContext(provider="BufferProvider").with_extra(nbytes=8)
        result = ctx.to_dict()
        assert result["provider"] == "BufferProvider"
        assert result["nbytes"] == 8

    def test_set_and_get(self) -> None:
        """Test context round trip through the context variable."""
        set_log_context(LogContext(provider="P", flags=0x11D).with_extra(run=3))
        try:
            ctx = get_log_context()
            assert ctx.provider == "P"
            assert ctx.flags == 0x11D
            assert ctx.extra == {"run": 3}
        finally:
            clear_log_context()
        assert get_log_context().to_dict() == {}


class TestLogLevel:
    """Tests for LogLevel."""

    def test_to_logging_level(self) -> None:
        """Test conversion to logging constants."""
        assert LogLevel.DEBUG.to_logging_level() == logging.DEBUG
        assert LogLevel.WARNING.to_logging_level() == logging.WARNING


class TestFormatters:
    """Tests for JSON and text formatters."""

    def _record(self, **fields: object) -> logging.LogRecord:
        record = logging.LogRecord(
            "buffer_protocol.test", logging.INFO, __file__, 1, "granted", None, None
        )
        if fields:
            record.extra_fields = fields
        return record

    def test_json_formatter(self) -> None:
        """Test JSON output carries extra fields."""
        data = json.loads(
            JsonFormatter(include_timestamp=False).format(self._record(nbytes=8))
        )
        assert data == {
            "level": "INFO",
            "logger": "buffer_protocol.test",
            "message": "granted",
            "nbytes": 8,
        }

    def test_json_formatter_context(self) -> None:
        """Test JSON output carries the logging context."""
        set_log_context(LogContext(provider="P"))
        try:
            data = json.loads(JsonFormatter().format(self._record()))
        finally:
            clear_log_context()
        assert data["context"] == {"provider": "P"}
        assert data["timestamp"].endswith("Z")

    def test_text_formatter(self) -> None:
        """Test text output appends fields."""
        line = TextFormatter().format(self._record(nbytes=8))
        assert "| INFO     | buffer_protocol.test | granted" in line
        assert line.endswith("| nbytes=8")

    def test_text_formatter_without_context(self) -> None:
        """Test text output without fields."""
        line = TextFormatter(include_context=False).format(self._record(nbytes=8))
        assert line.endswith("granted")


class TestBufferLogger:
    """Tests for BufferLogger."""

    def test_get_logger_is_cached(self) -> None:
        """Test loggers are reused by name."""
        first = get_logger("buffer_protocol.cached")
        second = BufferLogger.get_logger("buffer_protocol.cached")
        assert first.name == second.name == "buffer_protocol.cached"
        assert first._logger is second._logger

    def test_structured_output(self, log_stream: io.StringIO) -> None:
        """Test keyword fields reach the JSON output."""
        logger = get_logger("buffer_protocol.structured")
        logger.debug("View granted", provider="P", nbytes=8)
        data = json.loads(log_stream.getvalue())
        assert data["level"] == "DEBUG"
        assert data["provider"] == "P"
        assert data["nbytes"] == 8

    def test_level_filtering(self, log_stream: io.StringIO) -> None:
        """Test messages below the configured level are dropped."""
        BufferLogger.configure(level=LogLevel.WARNING, stream=log_stream)
        logger = get_logger("buffer_protocol.filtered")
        logger.info("hidden")
        logger.warning("shown")
        lines = log_stream.getvalue().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["message"] == "shown"

    def test_exception(self, log_stream: io.StringIO) -> None:
        """Test exception logging includes the traceback."""
        logger = get_logger("buffer_protocol.errors")
        try:
            raise BufferError("held")
        except BufferError:
            logger.exception("Release failed")
        data = json.loads(log_stream.getvalue())
        assert data["level"] == "ERROR"
        assert "BufferError: held" in data["exception"]


class TestConfigureFromEnv:
    """Tests for environment configuration."""

    def test_from_env(
        self, monkeypatch: pytest.MonkeyPatch, log_stream: io.StringIO
    ) -> None:
        """Test level and format come from the environment."""
        monkeypatch.setenv("BUFFER_PROTOCOL_LOG_LEVEL", "warning")
        monkeypatch.setenv("BUFFER_PROTOCOL_LOG_FORMAT", "text")
        BufferLogger.configure_from_env(stream=log_stream)
        logger = get_logger("buffer_protocol.env")
        logger.info("hidden")
        logger.warning("shown", provider="P")
        output = log_stream.getvalue()
        assert "hidden" not in output
        assert "| WARNING  | buffer_protocol.env | shown | provider=P" in output

    def test_invalid_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test unknown levels are rejected."""
        monkeypatch.setenv("BUFFER_PROTOCOL_LOG_LEVEL", "loud")
        with pytest.raises(ValueError, match="BUFFER_PROTOCOL_LOG_LEVEL"):
            BufferLogger.configure_from_env()

    def test_invalid_format(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test unknown formats are rejected."""
        monkeypatch.setenv("BUFFER_PROTOCOL_LOG_LEVEL", "INFO")
        monkeypatch.setenv("BUFFER_PROTOCOL_LOG_FORMAT", "xml")
        with pytest.raises(ValueError, match="BUFFER_PROTOCOL_LOG_FORMAT"):
            BufferLogger.configure_from_env()

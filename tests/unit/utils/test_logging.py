"""Tests for logging configuration utilities."""

from io import StringIO
import json
import logging
import sys

from particlefx.core.utils.logging import (
    StructuredJSONFormatter,
    configure_logging,
    get_logger,
)


def _record(level: int = logging.INFO, msg: str = "Test message", exc_info=None) -> logging.LogRecord:
    record = logging.LogRecord(
        name="particlefx.test",
        level=level,
        pathname="/path/to/session.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    record.funcName = "drag_to"
    record.module = "session"
    return record


class TestStructuredJSONFormatter:
    """Test suite for StructuredJSONFormatter."""

    def test_basic_log_format(self):
        """Records become one JSON object with a context block."""
        data = json.loads(StructuredJSONFormatter().format(_record()))

        assert data["level"] == "INFO"
        assert data["message"] == "Test message"
        assert "timestamp" in data
        assert data["context"]["logger_name"] == "particlefx.test"
        assert data["context"]["module"] == "session"
        assert data["context"]["function"] == "drag_to"
        assert data["context"]["line"] == 42

    def test_log_with_extra_fields(self):
        """Extra fields are included in context."""
        record = _record(logging.DEBUG)
        record.model_id = "emitter"
        record.curve_id = "size"

        data = json.loads(StructuredJSONFormatter().format(record))

        assert data["context"]["model_id"] == "emitter"
        assert data["context"]["curve_id"] == "size"
        assert "thread" not in data["context"]

    def test_log_with_exception(self):
        """Exception info is captured in context."""
        try:
            raise ValueError("Test error")
        except ValueError:
            exc_info = sys.exc_info()

        data = json.loads(StructuredJSONFormatter().format(_record(logging.ERROR, exc_info=exc_info)))

        assert data["level"] == "ERROR"
        assert data["context"]["error_type"] == "ValueError"
        assert data["context"]["error_message"] == "Test error"
        assert "ValueError: Test error" in data["context"]["stack_trace"]


class TestConfigureLogging:
    """Test suite for configure_logging function."""

    def test_configure_standard_logging(self, capsys):
        """Standard text logging goes to stdout."""
        configure_logging(level="INFO", structured=False)

        logging.getLogger("test.standard").info("Test message")

        captured = capsys.readouterr()
        assert "Test message" in captured.out
        assert "test.standard" in captured.out
        assert "INFO" in captured.out

    def test_level_is_case_insensitive(self):
        configure_logging(level="debug")
        assert logging.getLogger().level == logging.DEBUG
        configure_logging(level="INFO")

    def test_configure_structured_logging_to_file(self, tmp_path):
        """Structured JSON lines are written to a file."""
        log_file = tmp_path / "editor.jsonl"
        configure_logging(level="DEBUG", structured=True, filename=str(log_file))

        logger = logging.getLogger("test.file")
        logger.debug("Debug message")
        logger.warning("Warning message")
        for handler in logging.getLogger().handlers:
            handler.flush()

        lines = [json.loads(line) for line in log_file.read_text().splitlines() if line]
        assert [line["level"] for line in lines[-2:]] == ["DEBUG", "WARNING"]
        configure_logging(level="INFO")


class TestGetLogger:
    """Test suite for get_logger function."""

    def test_get_logger_without_context(self):
        logger = get_logger("test.plain")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "test.plain"

    def test_get_logger_with_context(self):
        logger = get_logger("test.context", model_id="emitter")
        assert isinstance(logger, logging.LoggerAdapter)
        assert logger.logger.name == "test.context"
        assert logger.extra["model_id"] == "emitter"

    def test_logger_adapter_includes_context_in_structured_logs(self):
        """LoggerAdapter context appears in structured logs."""
        stream = StringIO()
        handler = logging.StreamHandler(stream)
        handler.setFormatter(StructuredJSONFormatter())

        logger = get_logger("test.adapter", model_id="emitter", curve_id="alpha")
        assert isinstance(logger, logging.LoggerAdapter)
        logger.logger.addHandler(handler)
        logger.logger.setLevel(logging.INFO)
        try:
            logger.info("Message with context")
        finally:
            logger.logger.removeHandler(handler)

        data = json.loads(stream.getvalue().strip())
        assert data["message"] == "Message with context"
        assert data["context"]["model_id"] == "emitter"
        assert data["context"]["curve_id"] == "alpha"

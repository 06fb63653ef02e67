# Area: Shared Tests
"""Tests for logging setup."""

import json
import logging

from flip6._shared.logging_config import JSONFormatter, log_engine_error, setup_logging
from flip6.errors import JoinRejectedError


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_handlers_installed(self, tmp_path):
        """Test terminal and file handlers are installed on the package logger."""
        log_file = tmp_path / "logs" / "flip6.log"
        setup_logging(str(log_file), "DEBUG")

        pkg_logger = logging.getLogger("flip6")
        assert pkg_logger.level == logging.DEBUG
        assert len(pkg_logger.handlers) == 2
        assert pkg_logger.propagate is False

        logging.getLogger("flip6.engine").info("hello")
        for handler in pkg_logger.handlers:
            handler.flush()
        record = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert record["message"] == "hello"
        assert record["logger"] == "flip6.engine"

        setup_logging(None)
        assert len(pkg_logger.handlers) == 1
        pkg_logger.handlers.clear()

    def test_json_formatter_session_code(self):
        """Test the session code travels in the JSON record."""
        record = logging.LogRecord("flip6", logging.WARNING, __file__, 1, "msg", None, None)
        record.session_code = "ROOM"
        data = json.loads(JSONFormatter().format(record))
        assert data["session_code"] == "ROOM"
        assert data["level"] == "WARNING"


class TestLogEngineError:
    """Tests for log_engine_error."""

    def test_logs_error_block(self, caplog):
        """Test the structured error block is logged."""
        pkg_logger = logging.getLogger("flip6")
        pkg_logger.propagate = True
        try:
            with caplog.at_level(logging.WARNING, logger="flip6"):
                log_engine_error(
                    JoinRejectedError("name_in_use", "ROOM", "Alice"), level=logging.WARNING
                )
        finally:
            pkg_logger.propagate = False
        assert "JOIN_REJECTED" in caplog.text
        assert "name_in_use" in caplog.text

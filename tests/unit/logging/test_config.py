"""Tests for logging/config.py."""

import json
import logging
from logging.handlers import RotatingFileHandler

from mediacompat.config.models import LoggingConfig
from mediacompat.logging.config import configure_logging
from mediacompat.logging.context import worker_context
from mediacompat.logging.handlers import JSONFormatter


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_stderr_by_default(self, restore_root_logger) -> None:
        """Without a file, logs go to stderr at the configured level."""
        configure_logging(LoggingConfig(level="debug"))

        root = restore_root_logger
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)

    def test_file_handler(self, restore_root_logger, temp_dir) -> None:
        """A configured file gets a rotating handler without stderr."""
        log_file = temp_dir / "logs" / "app.log"
        configure_logging(LoggingConfig(file=log_file, format="json"))

        root = restore_root_logger
        assert len(root.handlers) == 1
        handler = root.handlers[0]
        assert isinstance(handler, RotatingFileHandler)
        assert isinstance(handler.formatter, JSONFormatter)

        logging.getLogger("mediacompat.test").warning("written")
        handler.flush()
        line = log_file.read_text(encoding="utf-8").strip()
        assert json.loads(line)["message"] == "written"

    def test_file_and_stderr(self, restore_root_logger, temp_dir) -> None:
        configure_logging(
            LoggingConfig(file=temp_dir / "app.log", include_stderr=True)
        )
        assert len(restore_root_logger.handlers) == 2

    def test_unwritable_file_falls_back(
        self, restore_root_logger, temp_dir, capsys
    ) -> None:
        """An unusable log file warns and falls back to stderr."""
        blocker = temp_dir / "blocker"
        blocker.write_text("", encoding="utf-8")
        configure_logging(LoggingConfig(file=blocker / "app.log"))

        root = restore_root_logger
        assert len(root.handlers) == 1
        assert not isinstance(root.handlers[0], RotatingFileHandler)
        assert "Could not open log file" in capsys.readouterr().err

    def test_text_format_includes_worker_tag(
        self, restore_root_logger, temp_dir
    ) -> None:
        """Text lines carry the worker tag when inside a worker context."""
        log_file = temp_dir / "app.log"
        configure_logging(LoggingConfig(file=log_file))

        with worker_context("01", "F001"):
            logging.getLogger("mediacompat.test").warning("tagged")
        for handler in restore_root_logger.handlers:
            handler.flush()

        text = log_file.read_text(encoding="utf-8")
        assert "[W01:F001] mediacompat.test - WARNING - tagged" in text

"""Tests for config/logging_factory.py."""

from pathlib import Path

import pytest

from mediacompat.config.logging_factory import build_logging_config
from mediacompat.config.models import LoggingConfig


class TestBuildLoggingConfig:
    def test_no_overrides(self) -> None:
        base = LoggingConfig(level="warning")
        assert build_logging_config(base) == base

    def test_overrides_applied(self) -> None:
        """Only the given overrides replace base values."""
        base = LoggingConfig(level="warning", include_stderr=True)
        config = build_logging_config(
            base, level="debug", file=Path("/tmp/a.log"), format="json"
        )
        assert config.level == "debug"
        assert config.file == Path("/tmp/a.log")
        assert config.format == "json"
        assert config.include_stderr is True

    def test_invalid_override(self) -> None:
        with pytest.raises(ValueError):
            build_logging_config(LoggingConfig(), level="chatty")

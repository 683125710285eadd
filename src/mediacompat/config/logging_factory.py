"""LoggingConfig assembly from CLI flags."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from mediacompat.config.models import LoggingConfig


def build_logging_config(
    base: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
    include_stderr: bool | None = None,
) -> LoggingConfig:
    """Apply non-None CLI overrides to a base LoggingConfig.

    Raises:
        ValueError: If an override is invalid.
    """
    overrides = {
        "level": level,
        "file": file,
        "format": format,
        "include_stderr": include_stderr,
    }
    return replace(base, **{k: v for k, v in overrides.items() if v is not None})

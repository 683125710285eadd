"""Configuration data models.

All models are plain dataclasses validated in __post_init__. Invalid
values raise ValueError.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from mediacompat.rating.legacy import LegacyThresholds

VALID_LOG_LEVELS = frozenset({"debug", "info", "warning", "error"})
VALID_LOG_FORMATS = frozenset({"text", "json"})


@dataclass(frozen=True)
class LoggingConfig:
    """Logging output settings."""

    # debug, info, warning, error
    level: str = "info"

    # None = stderr only
    file: Path | None = None

    # text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (10 MiB)
    max_bytes: int = 10_485_760

    # Rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.level.lower() not in VALID_LOG_LEVELS:
            raise ValueError(
                f"level must be one of {sorted(VALID_LOG_LEVELS)}, got {self.level}"
            )
        if self.format.lower() not in VALID_LOG_FORMATS:
            raise ValueError(
                f"format must be one of {sorted(VALID_LOG_FORMATS)}, "
                f"got {self.format}"
            )
        if self.max_bytes <= 0:
            raise ValueError(f"max_bytes must be positive, got {self.max_bytes}")
        if self.backup_count < 0:
            raise ValueError(
                f"backup_count must be non-negative, got {self.backup_count}"
            )


@dataclass(frozen=True)
class BatchConfig:
    """Worker counts for batch jobs."""

    # Scoring is CPU bound
    rescore_workers: int = 4
    match_workers: int = 8

    def __post_init__(self) -> None:
        """Validate configuration."""
        for name in ("rescore_workers", "match_workers"):
            value = getattr(self, name)
            if value < 1:
                raise ValueError(f"{name} must be at least 1, got {value}")


@dataclass(frozen=True)
class AppConfig:
    """Complete mediacompat configuration.

    Attributes:
        logging: Logging output settings.
        batch: Batch worker counts.
        legacy: Playback-count bucket thresholds.
        policy_path: Rating policy YAML; None uses the built-in policy.
        case_insensitive_paths: Path comparison override; None uses the
            platform default.
    """

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    batch: BatchConfig = field(default_factory=BatchConfig)
    legacy: LegacyThresholds = field(default_factory=LegacyThresholds)
    policy_path: Path | None = None
    case_insensitive_paths: bool | None = None

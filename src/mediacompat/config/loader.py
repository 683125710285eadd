"""Configuration loading with precedence handling.

Precedence (highest to lowest):

1. CLI arguments (passed to get_config)
2. Environment variables (MEDIACOMPAT_*)
3. Config file (~/.mediacompat/config.toml)
4. Defaults

Environment variables:

- MEDIACOMPAT_CONFIG_PATH: config file location
- MEDIACOMPAT_POLICY_PATH: rating policy YAML
- MEDIACOMPAT_CASE_INSENSITIVE_PATHS: force path case handling
- MEDIACOMPAT_LOG_LEVEL, MEDIACOMPAT_LOG_FILE, MEDIACOMPAT_LOG_FORMAT
- MEDIACOMPAT_RESCORE_WORKERS, MEDIACOMPAT_MATCH_WORKERS
- MEDIACOMPAT_LEGACY_OPTIMAL, MEDIACOMPAT_LEGACY_GOOD_DIRECT,
  MEDIACOMPAT_LEGACY_GOOD_COMBINED

Example config.toml::

    policy_path = "~/.mediacompat/policy.yaml"

    [logging]
    level = "debug"

    [batch]
    match_workers = 16

    [legacy]
    optimal = 10
"""

from __future__ import annotations

import logging
import threading
import tomllib
from pathlib import Path
from typing import Any

from mediacompat.config.env import EnvReader
from mediacompat.config.models import AppConfig, BatchConfig, LoggingConfig
from mediacompat.rating.exceptions import PolicyValidationError
from mediacompat.rating.legacy import LegacyThresholds

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".mediacompat"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"


class ConfigError(ValueError):
    """Raised when configuration cannot be loaded or is invalid."""


# path -> (mtime_ns, parsed contents)
_file_cache: dict[Path, tuple[int, dict[str, Any]]] = {}
_cache_lock = threading.Lock()


def clear_config_cache() -> None:
    """Drop all cached config file contents."""
    with _cache_lock:
        _file_cache.clear()


def get_default_config_path(env_reader: EnvReader | None = None) -> Path:
    """Config file location, overridable by MEDIACOMPAT_CONFIG_PATH."""
    reader = env_reader or EnvReader()
    return reader.get_path("CONFIG_PATH") or DEFAULT_CONFIG_FILE


def load_config_file(path: Path, *, strict: bool = False) -> dict[str, Any]:
    """Parse a TOML config file, caching by modification time.

    Args:
        path: Config file path.
        strict: Raise ConfigError on unreadable or malformed files instead
            of logging a warning and returning an empty dict.

    Returns:
        Parsed contents; empty if the file does not exist.
    """
    try:
        mtime = path.stat().st_mtime_ns
    except FileNotFoundError:
        logger.debug("Config file not found: %s", path)
        return {}
    except OSError as e:
        if strict:
            raise ConfigError(f"Cannot access config file {path}: {e}") from e
        logger.warning("Cannot access config file %s: %s", path, e)
        return {}

    with _cache_lock:
        cached = _file_cache.get(path)
        if cached is not None and cached[0] == mtime:
            return cached[1]

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        if strict:
            raise ConfigError(f"Invalid config file {path}: {e}") from e
        logger.warning("Failed to load config file %s: %s", path, e)
        return {}

    with _cache_lock:
        _file_cache[path] = (mtime, data)
    logger.debug("Loaded config from %s", path)
    return data


def _section(file_config: dict[str, Any], name: str) -> dict[str, Any]:
    section = file_config.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table")
    return section


def _optional_path(value: Any) -> Path | None:
    return Path(value).expanduser() if value else None


def get_config(
    config_path: Path | None = None,
    *,
    # CLI overrides (highest precedence)
    policy_path: Path | None = None,
    case_insensitive_paths: bool | None = None,
    env_reader: EnvReader | None = None,
    strict: bool = False,
) -> AppConfig:
    """Build the application configuration.

    Args:
        config_path: Config file; defaults to get_default_config_path().
        policy_path: CLI override for the rating policy file.
        case_insensitive_paths: CLI override for path case handling.
        env_reader: Environment source (for tests).
        strict: Fail on a malformed config file instead of ignoring it.

    Returns:
        Merged AppConfig.

    Raises:
        ConfigError: If a merged value is invalid.
    """
    env = env_reader or EnvReader()
    path = config_path or get_default_config_path(env)
    file_config = load_config_file(path, strict=strict)

    log_file = _section(file_config, "logging")
    batch_file = _section(file_config, "batch")
    legacy_file = _section(file_config, "legacy")

    try:
        logging_config = LoggingConfig(
            level=env.get_str("LOG_LEVEL", log_file.get("level", "info")),
            file=env.get_path("LOG_FILE", _optional_path(log_file.get("file"))),
            format=env.get_str("LOG_FORMAT", log_file.get("format", "text")),
            include_stderr=env.get_bool(
                "LOG_INCLUDE_STDERR", log_file.get("include_stderr", False)
            ),
            max_bytes=log_file.get("max_bytes", 10_485_760),
            backup_count=log_file.get("backup_count", 5),
        )
        batch = BatchConfig(
            rescore_workers=env.get_int(
                "RESCORE_WORKERS", batch_file.get("rescore_workers", 4)
            ),
            match_workers=env.get_int(
                "MATCH_WORKERS", batch_file.get("match_workers", 8)
            ),
        )
        legacy = LegacyThresholds(
            optimal=env.get_int("LEGACY_OPTIMAL", legacy_file.get("optimal", 8)),
            good_direct=env.get_int(
                "LEGACY_GOOD_DIRECT", legacy_file.get("good_direct", 5)
            ),
            good_combined=env.get_int(
                "LEGACY_GOOD_COMBINED", legacy_file.get("good_combined", 8)
            ),
        )
    except (ValueError, TypeError, AttributeError, PolicyValidationError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    if case_insensitive_paths is None:
        case_insensitive_paths = env.get_bool(
            "CASE_INSENSITIVE_PATHS", file_config.get("case_insensitive_paths")
        )

    return AppConfig(
        logging=logging_config,
        batch=batch,
        legacy=legacy,
        policy_path=(
            policy_path
            or env.get_path("POLICY_PATH")
            or _optional_path(file_config.get("policy_path"))
        ),
        case_insensitive_paths=case_insensitive_paths,
    )


def validate_config(config: AppConfig) -> list[str]:
    """Check cross-field consistency.

    Returns:
        Problems found; empty when the configuration is usable.
    """
    errors: list[str] = []
    if config.policy_path is not None and not config.policy_path.is_file():
        errors.append(f"policy_path does not exist: {config.policy_path}")
    if config.legacy.good_combined < config.legacy.good_direct:
        errors.append(
            "legacy.good_combined should not be lower than legacy.good_direct"
        )
    if config.legacy.good_direct > config.legacy.optimal:
        errors.append("legacy.good_direct should not exceed legacy.optimal")
    return errors

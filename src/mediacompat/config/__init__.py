"""Configuration for mediacompat.

Layered: defaults, then ~/.mediacompat/config.toml, then MEDIACOMPAT_*
environment variables, then CLI flags.
"""

from mediacompat.config.env import EnvReader
from mediacompat.config.loader import (
    ConfigError,
    clear_config_cache,
    get_config,
    get_default_config_path,
    load_config_file,
    validate_config,
)
from mediacompat.config.logging_factory import build_logging_config
from mediacompat.config.models import AppConfig, BatchConfig, LoggingConfig

__all__ = [
    "AppConfig",
    "BatchConfig",
    "ConfigError",
    "EnvReader",
    "LoggingConfig",
    "build_logging_config",
    "clear_config_cache",
    "get_config",
    "get_default_config_path",
    "load_config_file",
    "validate_config",
]

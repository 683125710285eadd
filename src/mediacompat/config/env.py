"""Typed access to MEDIACOMPAT_* environment variables."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

ENV_PREFIX = "MEDIACOMPAT_"

_TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
_FALSE_VALUES = frozenset({"false", "0", "no", "off"})


class EnvReader:
    """Read typed values from the environment.

    Names are given without the MEDIACOMPAT_ prefix. Unset variables return
    the default; unparsable ones log a warning and return the default.

    Example:
        reader = EnvReader(env={"MEDIACOMPAT_RESCORE_WORKERS": "16"})
        reader.get_int("RESCORE_WORKERS", 4)  # 16
    """

    def __init__(
        self, env: Mapping[str, str] | None = None, prefix: str = ENV_PREFIX
    ) -> None:
        """Initialize the reader.

        Args:
            env: Mapping used instead of os.environ (for tests).
            prefix: Prefix prepended to every variable name.
        """
        self._env: Mapping[str, str] = env if env is not None else os.environ
        self._prefix = prefix

    def _raw(self, name: str) -> str | None:
        value = self._env.get(self._prefix + name)
        if value is None or not value.strip():
            return None
        return value.strip()

    def get_str(self, name: str, default: str | None = None) -> str | None:
        value = self._raw(name)
        return default if value is None else value

    def get_int(self, name: str, default: int | None = None) -> int | None:
        value = self._raw(name)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid integer for %s%s: %s", self._prefix, name, value)
            return default

    def get_float(self, name: str, default: float | None = None) -> float | None:
        value = self._raw(name)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            logger.warning("Invalid number for %s%s: %s", self._prefix, name, value)
            return default

    def get_bool(self, name: str, default: bool | None = None) -> bool | None:
        """Parse true/1/yes/on and false/0/no/off, ignoring case."""
        value = self._raw(name)
        if value is None:
            return default
        lowered = value.lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        logger.warning("Invalid boolean for %s%s: %s", self._prefix, name, value)
        return default

    def get_path(self, name: str, default: Path | None = None) -> Path | None:
        """Return the value as an expanded Path; existence is not checked."""
        value = self._raw(name)
        return default if value is None else Path(value).expanduser()

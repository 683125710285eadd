"""Path normalization for cross-platform comparison.

Media servers, library managers and the local scanner report the same file
with different separators and trailing slashes. Paths are compared as
strings after normalization, never resolved against the filesystem.
"""

from __future__ import annotations

import sys


def is_case_insensitive_platform() -> bool:
    """Return True when file paths on this platform ignore case."""
    return sys.platform == "win32"


def normalize_path(path: str | None, *, case_insensitive: bool | None = None) -> str:
    """Normalize a path string for equality comparison.

    Backslashes become forward slashes and trailing slashes are stripped.
    The result is lowercased only for case-insensitive comparison.

    Args:
        path: Path string, may be None or empty.
        case_insensitive: Lowercase the result. None uses the platform
            default (Windows is case-insensitive).

    Returns:
        Normalized path string, empty for empty input.

    Example:
        >>> normalize_path("C:\\\\Media\\\\Movies\\\\", case_insensitive=True)
        'c:/media/movies'
    """
    if not path:
        return ""
    if case_insensitive is None:
        case_insensitive = is_case_insensitive_platform()
    normalized = path.replace("\\", "/").rstrip("/")
    return normalized.lower() if case_insensitive else normalized


def path_file_name(path: str) -> str:
    """Return the final component of a path regardless of separator style.

    Example:
        >>> path_file_name("D:\\\\TV\\\\Show\\\\S01E01.mkv")
        'S01E01.mkv'
    """
    return path.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]

"""String manipulation utilities.

Case-insensitive operations use casefold() for proper Unicode handling.
"""

from __future__ import annotations

# Characters removed by squash()
_SQUASH_CHARS = str.maketrans("", "", " _-.")


def normalize_string(s: str) -> str:
    """Normalize string for case-insensitive comparison.

    Args:
        s: String to normalize.

    Returns:
        Casefolded string stripped of leading/trailing whitespace.

    Example:
        >>> normalize_string("  H.264 ")
        'h.264'
    """
    return s.casefold().strip()


def starts_with_ci(s: str, prefix: str) -> bool:
    """Check if a string starts with a prefix, ignoring case.

    Example:
        >>> starts_with_ci("/Media/Movies/a.mkv", "/media/movies")
        True
    """
    return s.casefold().startswith(prefix.casefold())


def collapse_whitespace(s: str) -> str:
    """Collapse runs of whitespace to single spaces and trim.

    Example:
        >>> collapse_whitespace("  the   matrix ")
        'the matrix'
    """
    return " ".join(s.split())


def squash(s: str) -> str:
    """Lowercase and drop spaces, underscores, dashes and dots.

    Used for loose filename comparison where separators differ between
    a video and its sidecar files.

    Example:
        >>> squash("Movie_Name - 2020.en")
        'moviename2020en'
    """
    return s.lower().translate(_SQUASH_CHARS)

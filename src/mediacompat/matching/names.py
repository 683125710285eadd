"""Title normalization and fuzzy title comparison.

Playback events carry a display title ("The Matrix (1999)") while library
entries carry file names ("The.Matrix.1999.[1080p].mkv"). Both sides are
canonicalized with normalize_name() and compared with are_similar().
"""

from __future__ import annotations

import re

from mediacompat.core.string_utils import collapse_whitespace

# One or more trailing "(YYYY)" groups
_TRAILING_YEAR = re.compile(r"(?:\s*\(\d{4}\))+\s*$")
_BRACKET_GROUP = re.compile(r"\[[^\]]*\]")
_BRACE_GROUP = re.compile(r"\{[^}]*\}")

# Extensions dropped from file names; other dotted suffixes are title text
MEDIA_EXTENSIONS: frozenset[str] = frozenset(
    {
        "mkv",
        "mp4",
        "m4v",
        "mov",
        "avi",
        "wmv",
        "flv",
        "webm",
        "ts",
        "m2ts",
        "mpg",
        "mpeg",
        "srt",
        "vtt",
        "ass",
        "ssa",
        "sub",
    }
)

_SEPARATORS = str.maketrans({"_": " ", "-": " ", ".": " "})
_REMOVED = str.maketrans("", "", "'’:")

# Similarity thresholds
MIN_CONTAINED_LENGTH = 3
MIN_LENGTH_RATIO = 0.7
MIN_SHARED_WORDS = 2
MIN_WORD_OVERLAP = 0.5


def _strip_extension(text: str) -> str:
    stem, dot, ext = text.rpartition(".")
    if dot and stem and ext.lower() in MEDIA_EXTENSIONS:
        return stem
    return text


def normalize_name(name: str | None) -> str:
    """Canonicalize a title or file name for fuzzy comparison.

    Steps, in order: strip a trailing "(YYYY)" year, strip "[...]" and
    "{...}" groups, drop a media file extension, lowercase, turn "_", "-"
    and "." into spaces, remove apostrophes and colons, replace "&" with
    "and", collapse whitespace. Cleanup can expose a new trailing year
    ("Movie (2020) [1080p]"), which is stripped as well.

    The function is idempotent: normalize_name(normalize_name(x)) equals
    normalize_name(x).

    Args:
        name: Title or file name; None is treated as empty.

    Returns:
        Normalized name, possibly empty.

    Examples:
        >>> normalize_name("The.Matrix.(1999).mkv")
        'the matrix'
        >>> normalize_name("Tom & Jerry: The Movie [1080p]")
        'tom and jerry the movie'
    """
    if not name:
        return ""

    text = _TRAILING_YEAR.sub("", name)
    text = _BRACKET_GROUP.sub("", text)
    text = _BRACE_GROUP.sub("", text)
    text = _strip_extension(text.strip())
    text = text.lower()
    text = text.translate(_SEPARATORS)
    text = text.translate(_REMOVED)
    text = text.replace("&", " and ")
    text = collapse_whitespace(text)

    # Repeat until no trailing year remains; each pass removes at least one
    while True:
        stripped = collapse_whitespace(_TRAILING_YEAR.sub("", text))
        if stripped == text:
            return text
        text = stripped


def are_similar(a: str, b: str) -> bool:
    """Decide whether two normalized names refer to the same title.

    Returns True on the first rule that holds:

    1. The names are equal.
    2. One contains the other, the shorter has at least 3 characters and
       is at least 70% of the longer's length.
    3. Both have at least 2 distinct words, they share at least 2 words
       (case-insensitive), and the shared words make up at least half of
       the larger word set.

    The comparison is symmetric.

    Args:
        a: Normalized name.
        b: Normalized name.

    Returns:
        True if the names are considered the same title.
    """
    if a == b:
        return True

    shorter, longer = (a, b) if len(a) <= len(b) else (b, a)
    if (
        shorter in longer
        and len(shorter) >= MIN_CONTAINED_LENGTH
        and len(shorter) / len(longer) >= MIN_LENGTH_RATIO
    ):
        return True

    words_a = set(a.casefold().split())
    words_b = set(b.casefold().split())
    if len(words_a) < MIN_SHARED_WORDS or len(words_b) < MIN_SHARED_WORDS:
        return False
    shared = len(words_a & words_b)
    if shared < MIN_SHARED_WORDS:
        return False
    return shared / max(len(words_a), len(words_b)) >= MIN_WORD_OVERLAP

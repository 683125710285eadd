"""Domain enums for mediacompat.

This module contains the tagged variants shared across the scoring,
matching and batch modules. String categories coming from external
services are parsed into these enums once, at the boundary.
"""

from __future__ import annotations

from enum import Enum


class Classification(Enum):
    """Overall compatibility classification of a title.

    Members compare by rank: POOR < GOOD < OPTIMAL.
    """

    OPTIMAL = "Optimal"  # Plays everywhere without intervention
    GOOD = "Good"  # Plays on most clients, some may remux
    POOR = "Poor"  # Likely to transcode on many clients

    @property
    def rank(self) -> int:
        """Numeric rank, higher is better."""
        return _CLASSIFICATION_RANK[self]

    @property
    def symbol(self) -> str:
        """Single-character marker used in text reports."""
        return _CLASSIFICATION_SYMBOL[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Classification):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Classification):
            return NotImplemented
        return self.rank <= other.rank


_CLASSIFICATION_RANK: dict[Classification, int] = {
    Classification.POOR: 0,
    Classification.GOOD: 1,
    Classification.OPTIMAL: 2,
}

_CLASSIFICATION_SYMBOL: dict[Classification, str] = {
    Classification.OPTIMAL: "✓",
    Classification.GOOD: "~",
    Classification.POOR: "✗",
}


class PlayMethod(Enum):
    """How a media server delivered a playback session.

    Used by the legacy counting-based classification.
    """

    DIRECT_PLAY = "Direct Play"  # File sent to the client unchanged
    DIRECT_STREAM = "Direct Stream"  # Streamed as-is, container untouched
    REMUX = "Remux"  # Container rewritten, streams copied
    TRANSCODE = "Transcode"  # At least one stream re-encoded
    UNKNOWN = "Unknown"  # Not reported by the server

    @classmethod
    def parse(cls, value: str | None) -> PlayMethod:
        """Parse a play method string reported by a media server.

        Matching ignores case, spaces, dashes and underscores, so
        "DirectPlay", "direct_play" and "Direct Play" are equivalent.

        Args:
            value: Raw play method string, or None.

        Returns:
            The matching PlayMethod, or UNKNOWN when unrecognized.

        Example:
            >>> PlayMethod.parse("DirectPlay")
            <PlayMethod.DIRECT_PLAY: 'Direct Play'>
        """
        if not value:
            return cls.UNKNOWN
        key = "".join(ch for ch in value.casefold() if ch not in " -_")
        return _PLAY_METHOD_KEYS.get(key, cls.UNKNOWN)


_PLAY_METHOD_KEYS: dict[str, PlayMethod] = {
    "directplay": PlayMethod.DIRECT_PLAY,
    "directstream": PlayMethod.DIRECT_STREAM,
    "remux": PlayMethod.REMUX,
    "transcode": PlayMethod.TRANSCODE,
}


class ServarrType(Enum):
    """External library manager that owns a library root."""

    SONARR = "Sonarr"  # TV series manager
    RADARR = "Radarr"  # Movie manager


class LibraryCategory(Enum):
    """Content category of a library root."""

    MOVIES = "Movies"
    TV_SHOWS = "TV Shows"
    MISC = "Misc"


class MatchMethod(Enum):
    """How a playback event was reconciled to a library entry."""

    EXACT_PATH = "exact_path"  # Normalized paths are equal
    NAME_SIMILARITY = "name_similarity"  # Title fuzzy-matched a file name
    NONE = "none"  # No library entry matched

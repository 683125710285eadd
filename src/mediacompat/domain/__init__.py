"""Domain models and enums for mediacompat.

This package contains the value types shared by the core:

- Models: AudioTrack, SubtitleTrack, MediaMetadataRecord, CompatibilityOutcome,
  PlaybackEvent, LibraryEntry, LibraryRoot, MatchResult, PlaybackCounters
- Enums: Classification, PlayMethod, ServarrType, LibraryCategory, MatchMethod

Usage:
    from mediacompat.domain import MediaMetadataRecord, AudioTrack
    from mediacompat.domain import Classification
"""

from .enums import (
    Classification,
    LibraryCategory,
    MatchMethod,
    PlayMethod,
    ServarrType,
)
from .models import (
    AudioTrack,
    CompatibilityOutcome,
    LibraryEntry,
    LibraryRoot,
    MatchResult,
    MediaMetadataRecord,
    PlaybackCounters,
    PlaybackEvent,
    SubtitleTrack,
)

__all__ = [
    # Models
    "AudioTrack",
    "CompatibilityOutcome",
    "LibraryEntry",
    "LibraryRoot",
    "MatchResult",
    "MediaMetadataRecord",
    "PlaybackCounters",
    "PlaybackEvent",
    "SubtitleTrack",
    # Enums
    "Classification",
    "LibraryCategory",
    "MatchMethod",
    "PlayMethod",
    "ServarrType",
]

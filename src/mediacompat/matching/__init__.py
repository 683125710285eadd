"""Reconciliation of loosely named artifacts against library entries.

- names: title normalization and fuzzy comparison
- subtitles: external subtitle file association
- library: playback event to library entry/root matching
"""

from mediacompat.matching.library import match_playback_event
from mediacompat.matching.names import are_similar, normalize_name
from mediacompat.matching.subtitles import (
    SubtitleMatchRule,
    build_external_subtitle_tracks,
    enrich_record,
    find_subtitles,
    match_subtitles,
)

__all__ = [
    "SubtitleMatchRule",
    "are_similar",
    "build_external_subtitle_tracks",
    "enrich_record",
    "find_subtitles",
    "match_playback_event",
    "match_subtitles",
    "normalize_name",
]

"""Domain models for mediacompat.

This module contains the value types exchanged between the scoring and
reconciliation core and its callers. All models are frozen: the core never
mutates its inputs and every result is created fresh per call.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime

from mediacompat.core.paths import path_file_name
from mediacompat.domain.enums import (
    Classification,
    LibraryCategory,
    MatchMethod,
    PlayMethod,
    ServarrType,
)


@dataclass(frozen=True)
class AudioTrack:
    """An audio stream within a media file."""

    codec: str
    channels: int = 2
    language: str = "Unknown"
    bitrate_kbps: int = 0
    sample_rate_hz: int = 0


@dataclass(frozen=True)
class SubtitleTrack:
    """A subtitle stream, either embedded or an external sidecar file."""

    format: str
    language: str = "Unknown"
    is_embedded: bool = True
    # Set for external subtitles only
    file_path: str | None = None


@dataclass(frozen=True)
class MediaMetadataRecord:
    """Technical metadata for one media file (immutable input to scoring).

    Produced by an external metadata-extraction step. Sizes are in bytes,
    durations in seconds.
    """

    file_path: str
    container: str = ""
    video_codec: str = ""
    video_codec_tag: str = ""
    is_codec_tag_correct: bool = True
    bit_depth: int = 8
    width: int = 0
    height: int = 0
    frame_rate: float = 0.0
    is_hdr: bool = False
    hdr_type: str = ""
    is_fast_start: bool = False
    audio_tracks: tuple[AudioTrack, ...] = ()
    subtitle_tracks: tuple[SubtitleTrack, ...] = ()
    file_size: int = 0
    duration_seconds: float = 0.0

    @property
    def file_name(self) -> str:
        """File-name component of the path, separator agnostic."""
        return path_file_name(self.file_path)

    def with_subtitle_tracks(
        self, tracks: tuple[SubtitleTrack, ...] | list[SubtitleTrack]
    ) -> MediaMetadataRecord:
        """Return a copy with additional subtitle tracks appended.

        Tracks whose file path is already present are skipped, so enriching
        a record twice with the same sidecar files is a no-op.
        """
        known = {t.file_path for t in self.subtitle_tracks if t.file_path}
        extra = tuple(t for t in tracks if not t.file_path or t.file_path not in known)
        return replace(self, subtitle_tracks=self.subtitle_tracks + extra)


@dataclass(frozen=True)
class CompatibilityOutcome:
    """Result of scoring one record against a rating policy."""

    score: int
    classification: Classification
    issues: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate score bounds."""
        if not 0 <= self.score <= 100:
            raise ValueError(f"score must be within 0..100, got {self.score}")

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "score": self.score,
            "classification": self.classification.value,
            "issues": list(self.issues),
            "recommendations": list(self.recommendations),
        }


@dataclass(frozen=True)
class PlaybackEvent:
    """A playback-history event reported by a media server."""

    title: str = ""
    file_path: str = ""
    started_at: datetime | None = None
    stopped_at: datetime | None = None
    client_name: str = ""
    device_name: str = ""
    device_id: str = ""
    user_id: str = ""
    play_method: PlayMethod = PlayMethod.UNKNOWN


@dataclass(frozen=True)
class LibraryEntry:
    """A canonical media file known to the library."""

    id: int
    file_path: str
    # Stored display file name, when the persistence layer keeps one
    file_name: str | None = None


@dataclass(frozen=True)
class LibraryRoot:
    """A configured library root directory."""

    id: int
    path: str
    is_active: bool = True
    category: LibraryCategory = LibraryCategory.MISC
    servarr_type: ServarrType | None = None


@dataclass(frozen=True)
class MatchResult:
    """Outcome of reconciling one playback event against the library.

    Either side may be None. A result with neither is a valid "no match".
    """

    entry: LibraryEntry | None = None
    root: LibraryRoot | None = None
    method: MatchMethod = MatchMethod.NONE

    @property
    def is_matched(self) -> bool:
        """True if a library entry was found."""
        return self.entry is not None

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "entry_id": self.entry.id if self.entry else None,
            "root_id": self.root.id if self.root else None,
            "method": self.method.value,
        }


@dataclass
class PlaybackCounters:
    """Per-title playback counters feeding the legacy classification."""

    direct_play: int = 0
    remux: int = 0
    transcode: int = 0
    methods: dict[PlayMethod, int] = field(default_factory=dict)

    def record(self, method: PlayMethod) -> None:
        """Count one playback session."""
        self.methods[method] = self.methods.get(method, 0) + 1
        if method == PlayMethod.DIRECT_PLAY:
            self.direct_play += 1
        elif method == PlayMethod.REMUX:
            self.remux += 1
        elif method == PlayMethod.TRANSCODE:
            self.transcode += 1

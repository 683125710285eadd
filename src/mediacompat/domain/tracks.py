"""Stored track list (de)serialization.

The persistence layer keeps audio and subtitle tracks as JSON arrays in a
single column each. Older rows use PascalCase keys ("Codec", "Channels"),
newer rows snake_case; both are accepted. Malformed data never fails the
caller: it degrades to an empty track list and a logged warning.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, RootModel

from mediacompat.core.json_utils import parse_json_with_schema, serialize_json_safe
from mediacompat.domain.models import AudioTrack, SubtitleTrack


def _alias(name: str, pascal: str) -> AliasChoices:
    return AliasChoices(name, pascal)


class AudioTrackSchema(BaseModel):
    """Stored audio track entry."""

    model_config = ConfigDict(extra="ignore")

    codec: str = Field(validation_alias=_alias("codec", "Codec"))
    channels: int = Field(
        default=2, ge=0, validation_alias=_alias("channels", "Channels")
    )
    language: str | None = Field(
        default=None, validation_alias=_alias("language", "Language")
    )
    bitrate_kbps: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("bitrate_kbps", "bitrate", "Bitrate"),
    )
    sample_rate_hz: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("sample_rate_hz", "sample_rate", "SampleRate"),
    )

    def to_domain(self) -> AudioTrack:
        return AudioTrack(
            codec=self.codec,
            channels=self.channels,
            language=self.language or "Unknown",
            bitrate_kbps=self.bitrate_kbps,
            sample_rate_hz=self.sample_rate_hz,
        )


class SubtitleTrackSchema(BaseModel):
    """Stored subtitle track entry."""

    model_config = ConfigDict(extra="ignore")

    format: str = Field(default="", validation_alias=_alias("format", "Format"))
    language: str | None = Field(
        default=None, validation_alias=_alias("language", "Language")
    )
    is_embedded: bool = Field(
        default=True, validation_alias=_alias("is_embedded", "IsEmbedded")
    )
    file_path: str | None = Field(
        default=None, validation_alias=_alias("file_path", "FilePath")
    )

    def to_domain(self) -> SubtitleTrack:
        return SubtitleTrack(
            format=self.format,
            language=self.language or "Unknown",
            is_embedded=self.is_embedded,
            file_path=self.file_path,
        )


class AudioTrackList(RootModel[list[AudioTrackSchema]]):
    """JSON array of audio tracks."""


class SubtitleTrackList(RootModel[list[SubtitleTrackSchema]]):
    """JSON array of subtitle tracks."""


def load_audio_tracks(
    raw: str | None, *, context: str = "audio_tracks"
) -> tuple[AudioTrack, ...]:
    """Deserialize a stored audio track list.

    Args:
        raw: Stored JSON array, or None.
        context: Label used in the warning on malformed data.

    Returns:
        Tuple of AudioTrack. Empty when raw is empty or malformed.
    """
    result = parse_json_with_schema(raw, AudioTrackList, context=context)
    if not result.success or result.value is None:
        return ()
    return tuple(entry.to_domain() for entry in result.value.root)


def load_subtitle_tracks(
    raw: str | None, *, context: str = "subtitle_tracks"
) -> tuple[SubtitleTrack, ...]:
    """Deserialize a stored subtitle track list.

    Args:
        raw: Stored JSON array, or None.
        context: Label used in the warning on malformed data.

    Returns:
        Tuple of SubtitleTrack. Empty when raw is empty or malformed.
    """
    result = parse_json_with_schema(raw, SubtitleTrackList, context=context)
    if not result.success or result.value is None:
        return ()
    return tuple(entry.to_domain() for entry in result.value.root)


def dump_audio_tracks(tracks: tuple[AudioTrack, ...] | list[AudioTrack]) -> str:
    """Serialize audio tracks to their stored JSON form."""
    return serialize_json_safe(
        [
            {
                "codec": t.codec,
                "channels": t.channels,
                "language": t.language,
                "bitrate_kbps": t.bitrate_kbps,
                "sample_rate_hz": t.sample_rate_hz,
            }
            for t in tracks
        ],
        context="audio_tracks",
    ) or "[]"


def dump_subtitle_tracks(
    tracks: tuple[SubtitleTrack, ...] | list[SubtitleTrack],
) -> str:
    """Serialize subtitle tracks to their stored JSON form."""
    return serialize_json_safe(
        [
            {
                "format": t.format,
                "language": t.language,
                "is_embedded": t.is_embedded,
                "file_path": t.file_path,
            }
            for t in tracks
        ],
        context="subtitle_tracks",
    ) or "[]"

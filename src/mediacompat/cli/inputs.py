"""JSON input documents accepted by the CLI.

Records, playback events and library listings are read from JSON files
and validated with Pydantic before conversion to domain models.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field, RootModel, ValidationError

from mediacompat.core.codecs import (
    container_from_extension,
    is_codec_tag_correct,
    normalize_audio_codec,
    normalize_subtitle_format,
    normalize_video_codec,
)
from mediacompat.core.json_utils import load_json_file
from mediacompat.domain.enums import LibraryCategory, PlayMethod, ServarrType
from mediacompat.domain.models import (
    LibraryEntry,
    LibraryRoot,
    MediaMetadataRecord,
    PlaybackEvent,
)
from mediacompat.domain.tracks import AudioTrackSchema, SubtitleTrackSchema

M = TypeVar("M", bound=BaseModel)


class InputError(Exception):
    """Raised when an input document is unreadable or invalid."""


class RecordInput(BaseModel):
    """Media metadata record document."""

    model_config = ConfigDict(extra="ignore")

    file_path: str
    container: str = ""
    video_codec: str = ""
    video_codec_tag: str = ""
    is_codec_tag_correct: bool | None = None
    bit_depth: int = Field(default=8, ge=1)
    width: int = Field(default=0, ge=0)
    height: int = Field(default=0, ge=0)
    frame_rate: float = Field(default=0.0, ge=0)
    is_hdr: bool = False
    hdr_type: str = ""
    is_fast_start: bool = False
    audio_tracks: list[AudioTrackSchema] = Field(default_factory=list)
    subtitle_tracks: list[SubtitleTrackSchema] = Field(default_factory=list)
    file_size: int = Field(default=0, ge=0)
    duration_seconds: float = Field(default=0.0, ge=0)

    def to_domain(self) -> MediaMetadataRecord:
        """Build the record, mapping raw extractor names to policy labels.

        A missing container is derived from the file extension and a
        missing codec tag verdict is derived from the codec and its tag.
        """
        data = self.model_dump(exclude={"audio_tracks", "subtitle_tracks"})
        if self.video_codec:
            data["video_codec"] = normalize_video_codec(self.video_codec)
        if not self.container:
            data["container"] = container_from_extension(self.file_path)
        if self.is_codec_tag_correct is None:
            data["is_codec_tag_correct"] = is_codec_tag_correct(
                self.video_codec, self.video_codec_tag
            )
        audio_tracks = tuple(
            replace(track, codec=normalize_audio_codec(track.codec))
            for track in (t.to_domain() for t in self.audio_tracks)
        )
        subtitle_tracks = tuple(
            replace(track, format=normalize_subtitle_format(track.format))
            if track.format
            else track
            for track in (t.to_domain() for t in self.subtitle_tracks)
        )
        return MediaMetadataRecord(
            **data, audio_tracks=audio_tracks, subtitle_tracks=subtitle_tracks
        )


class PlaybackEventInput(BaseModel):
    """Playback history event document."""

    model_config = ConfigDict(extra="ignore")

    title: str = ""
    file_path: str = ""
    started_at: datetime | None = None
    stopped_at: datetime | None = None
    client_name: str = ""
    device_name: str = ""
    device_id: str = ""
    user_id: str = ""
    play_method: str | None = None

    def to_domain(self) -> PlaybackEvent:
        data = self.model_dump(exclude={"play_method"})
        return PlaybackEvent(**data, play_method=PlayMethod.parse(self.play_method))


class RecordList(RootModel[list[RecordInput]]):
    """JSON array of media metadata records."""


class PlaybackEventList(RootModel[list[PlaybackEventInput]]):
    """JSON array of playback events."""


class LibraryEntryInput(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    file_path: str
    file_name: str | None = None

    def to_domain(self) -> LibraryEntry:
        return LibraryEntry(**self.model_dump())


class LibraryRootInput(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    path: str
    is_active: bool = True
    category: LibraryCategory = LibraryCategory.MISC
    servarr_type: ServarrType | None = None

    def to_domain(self) -> LibraryRoot:
        return LibraryRoot(**self.model_dump())


class LibraryInput(BaseModel):
    """Library listing document: {"entries": [...], "roots": [...]}."""

    model_config = ConfigDict(extra="ignore")

    entries: list[LibraryEntryInput] = Field(default_factory=list)
    roots: list[LibraryRootInput] = Field(default_factory=list)


def load_document(path: Path, schema: type[M]) -> M:
    """Read a JSON file and validate it against schema.

    Raises:
        InputError: If the file is unreadable, not JSON, or invalid.
    """
    parsed = load_json_file(path)
    if not parsed.success:
        raise InputError(parsed.error or f"Cannot parse {path}")
    if parsed.value is None:
        raise InputError(f"{path}: empty document")
    try:
        return schema.model_validate(parsed.value)
    except ValidationError as e:
        first = e.errors()[0]
        loc = ".".join(str(part) for part in first.get("loc", ()))
        raise InputError(f"{path}: {loc}: {first.get('msg')}") from e

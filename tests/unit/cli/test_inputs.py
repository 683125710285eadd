"""Tests for cli/inputs.py."""

import json

import pytest

from mediacompat.cli.inputs import (
    InputError,
    LibraryInput,
    PlaybackEventList,
    RecordInput,
    load_document,
)
from mediacompat.domain.enums import LibraryCategory, PlayMethod


class TestLoadDocument:
    """Tests for load_document."""

    def test_record(self, write_file) -> None:
        """Records accept both snake_case and PascalCase track keys."""
        path = write_file(
            "record.json",
            json.dumps(
                {
                    "file_path": "/m/a.mkv",
                    "container": "MKV",
                    "audio_tracks": [
                        {"Codec": "AAC", "Channels": 6},
                        {"codec": "DTS", "language": "French"},
                    ],
                    "subtitle_tracks": [{"Format": "SRT", "IsEmbedded": False}],
                    "unused": "ignored",
                }
            ),
        )

        record = load_document(path, RecordInput).to_domain()

        assert record.container == "MKV"
        assert [t.codec for t in record.audio_tracks] == ["AAC", "DTS"]
        assert record.audio_tracks[0].language == "Unknown"
        assert record.audio_tracks[1].channels == 2
        assert not record.subtitle_tracks[0].is_embedded

    def test_events(self, write_file) -> None:
        path = write_file(
            "events.json",
            json.dumps(
                [
                    {"title": "A", "play_method": "Direct Stream"},
                    {"title": "B", "started_at": "2024-01-02T03:04:05"},
                ]
            ),
        )

        events = [e.to_domain() for e in load_document(path, PlaybackEventList).root]

        assert events[0].play_method is PlayMethod.DIRECT_STREAM
        assert events[1].play_method is PlayMethod.UNKNOWN
        assert events[1].started_at.year == 2024

    def test_library(self, write_file) -> None:
        path = write_file(
            "library.json",
            json.dumps(
                {
                    "entries": [{"id": 1, "file_path": "/m/a.mkv"}],
                    "roots": [{"id": 2, "path": "/tv", "category": "TV Shows"}],
                }
            ),
        )

        library = load_document(path, LibraryInput)

        assert library.entries[0].to_domain().id == 1
        assert library.roots[0].to_domain().category is LibraryCategory.TV_SHOWS

    def test_invalid_json(self, write_file) -> None:
        path = write_file("bad.json", "{not json")
        with pytest.raises(InputError):
            load_document(path, RecordInput)

    def test_validation_error_location(self, write_file) -> None:
        """Validation errors name the offending field."""
        path = write_file("record.json", json.dumps({"file_path": "/a", "width": -1}))
        with pytest.raises(InputError, match="width"):
            load_document(path, RecordInput)

    def test_empty_document(self, write_file) -> None:
        path = write_file("null.json", "null")
        with pytest.raises(InputError, match="empty document"):
            load_document(path, RecordInput)


class TestRecordInputToDomain:
    """Tests for RecordInput.to_domain."""

    def test_raw_codec_names_are_labelled(self) -> None:
        """Extractor codec names map onto the labels policies are keyed on."""
        record = RecordInput(
            file_path="/m/a.mkv",
            container="MKV",
            video_codec="hevc",
            audio_tracks=[{"codec": "E-AC-3"}, {"codec": "AAC"}],
            subtitle_tracks=[{"format": "UTF-8"}, {"format": ""}],
        ).to_domain()

        assert record.video_codec == "H.265"
        assert [t.codec for t in record.audio_tracks] == ["EAC3", "AAC"]
        assert [t.format for t in record.subtitle_tracks] == ["SRT", ""]

    def test_container_from_extension(self) -> None:
        """A missing container is derived from the file extension."""
        record = RecordInput(file_path="/m/Movie (2020).mkv").to_domain()
        assert record.container == "MKV"

    def test_explicit_container_kept(self) -> None:
        record = RecordInput(file_path="/m/a.mkv", container="MP4").to_domain()
        assert record.container == "MP4"

    def test_codec_tag_verdict_derived(self) -> None:
        """Without an explicit verdict the tag is checked against the codec."""
        wrong = RecordInput(
            file_path="/m/a.mp4", video_codec="HEVC", video_codec_tag="hev1"
        ).to_domain()
        right = RecordInput(
            file_path="/m/a.mp4", video_codec="HEVC", video_codec_tag="hvc1"
        ).to_domain()

        assert not wrong.is_codec_tag_correct
        assert right.is_codec_tag_correct

    def test_explicit_codec_tag_verdict_kept(self) -> None:
        record = RecordInput(
            file_path="/m/a.mp4",
            video_codec="HEVC",
            video_codec_tag="hvc1",
            is_codec_tag_correct=False,
        ).to_domain()
        assert not record.is_codec_tag_correct

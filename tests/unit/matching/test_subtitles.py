"""Tests for matching/subtitles.py."""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from hypothesis import given, strategies as st

from mediacompat.domain.models import SubtitleTrack
from mediacompat.matching.subtitles import (
    SubtitleMatchRule,
    build_external_subtitle_tracks,
    enrich_record,
    find_subtitles,
    is_subtitle_file,
    match_subtitle_rule,
    match_subtitles,
    subtitle_format_for,
)


class TestMatchSubtitleRule:
    """Tests for match_subtitle_rule."""

    @pytest.mark.parametrize(
        ("video", "candidate", "expected"),
        [
            ("Movie (2020)", "Movie (2020)", SubtitleMatchRule.EXACT),
            ("Movie (2020)", "movie (2020)", SubtitleMatchRule.EXACT),
            ("Movie (2020)", "Movie (2020).eng", SubtitleMatchRule.DOT_SUFFIX),
            ("Movie (2020) ", "Movie (2020).eng", SubtitleMatchRule.DOT_SUFFIX),
            ("Movie", "Movie - English", SubtitleMatchRule.SEPARATOR),
            ("Movie", "Movie_en", SubtitleMatchRule.SEPARATOR),
            ("Movie", "[Group] Movie", SubtitleMatchRule.CONTAINS),
            ("Movie Name", "movie_name(forced)", SubtitleMatchRule.SQUASHED_PREFIX),
            ("Movie Name", "MovieName", SubtitleMatchRule.SQUASHED_PREFIX),
            ("Movie-Name", "sub.movie_name", SubtitleMatchRule.SQUASHED_CONTAINS),
            ("Movie Name", "movie_name.en", SubtitleMatchRule.SQUASHED_CONTAINS),
            ("Movie (2020)", "Other", None),
        ],
    )
    def test_rules(self, video, candidate, expected) -> None:
        """The first applicable rule should be reported."""
        assert match_subtitle_rule(video, candidate) == expected

    def test_short_stems_do_not_match_by_substring(self) -> None:
        """Squashed substring matching needs at least three characters."""
        assert match_subtitle_rule("A-B", "xab") is None


class TestMatchSubtitles:
    """Tests for match_subtitles."""

    def test_example_directory(self) -> None:
        """Own subtitles are returned shortest first; others are ignored."""
        directory = Path("/media/movies")
        candidates = [
            directory / "Other.srt",
            directory / "Movie (2020).eng.srt",
            directory / "Movie (2020).srt",
        ]

        found = match_subtitles(directory / "Movie (2020).mkv", candidates)

        assert found == [
            directory / "Movie (2020).srt",
            directory / "Movie (2020).eng.srt",
        ]

    def test_ignores_non_subtitle_files(self) -> None:
        """Files without a subtitle extension should be skipped."""
        directory = Path("/m")
        found = match_subtitles(
            directory / "Movie.mkv",
            [directory / "Movie.nfo", directory / "Movie.jpg", directory / "Movie.SRT"],
        )
        assert found == [directory / "Movie.SRT"]

    def test_removes_duplicates(self) -> None:
        directory = Path("/m")
        sub = directory / "Movie.en.srt"
        assert match_subtitles(directory / "Movie.mkv", [sub, sub]) == [sub]

    @given(
        st.permutations(
            ["Movie.srt", "Movie.en.srt", "Movie.forced.en.srt", "Movie_de.ass"]
        )
    )
    def test_order_independent(self, names: list[str]) -> None:
        """Result should not depend on the listing order."""
        directory = Path("/m")
        found = match_subtitles(directory / "Movie.mkv", [directory / n for n in names])
        assert found == [
            directory / "Movie.srt",
            directory / "Movie.en.srt",
            directory / "Movie_de.ass",
            directory / "Movie.forced.en.srt",
        ]


class TestFindSubtitles:
    """Tests for find_subtitles against a real directory."""

    def test_lists_video_directory(self, temp_dir: Path) -> None:
        """Should find own subtitle files in the video's directory only."""
        video = temp_dir / "Movie (2020).mkv"
        video.touch()
        (temp_dir / "Movie (2020).srt").touch()
        (temp_dir / "Movie (2020).eng.srt").touch()
        (temp_dir / "Other.srt").touch()
        nested = temp_dir / "Subs"
        nested.mkdir()
        (nested / "Movie (2020).srt").touch()

        found = find_subtitles(video)

        assert found == [
            temp_dir / "Movie (2020).srt",
            temp_dir / "Movie (2020).eng.srt",
        ]
        assert find_subtitles(video) == found

    def test_missing_directory_returns_empty(
        self, temp_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A listing failure should be logged and yield no subtitles."""
        with caplog.at_level(logging.WARNING):
            found = find_subtitles(temp_dir / "missing" / "Movie.mkv")
        assert found == []
        assert "Cannot list subtitle candidates" in caplog.text

    def test_permission_error_returns_empty(self, temp_dir: Path) -> None:
        """Any OS error while listing should yield no subtitles."""
        with patch.object(Path, "iterdir", side_effect=PermissionError("denied")):
            assert find_subtitles(temp_dir / "Movie.mkv") == []


class TestSubtitleTracks:
    """Tests for subtitle track construction and record enrichment."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("a.srt", "SRT"),
            ("a.VTT", "VTT"),
            ("a.ass", "ASS"),
            ("a.sub", "VobSub"),
        ],
    )
    def test_subtitle_format_for(self, name, expected) -> None:
        assert subtitle_format_for(Path(name)) == expected

    def test_is_subtitle_file(self) -> None:
        assert is_subtitle_file(Path("a.SSA"))
        assert not is_subtitle_file(Path("a.mkv"))

    def test_build_external_subtitle_tracks(self) -> None:
        """Language should be detected from the file name."""
        tracks = build_external_subtitle_tracks(
            [Path("/m/Movie.eng.srt"), Path("/m/Movie.srt")]
        )
        assert tracks == (
            SubtitleTrack(
                format="SRT",
                language="English",
                is_embedded=False,
                file_path=str(Path("/m/Movie.eng.srt")),
            ),
            SubtitleTrack(
                format="SRT",
                language="Unknown",
                is_embedded=False,
                file_path=str(Path("/m/Movie.srt")),
            ),
        )

    def test_enrich_record_with_candidates(self, make_record) -> None:
        """Matched candidates should be appended as external tracks."""
        record = make_record(file_path="/m/Movie.mp4")
        enriched = enrich_record(
            record, [Path("/m/Movie.fre.srt"), Path("/m/Other.srt")]
        )
        assert len(enriched.subtitle_tracks) == 1
        assert enriched.subtitle_tracks[0].language == "French"
        assert enriched.subtitle_tracks[0].is_embedded is False

    def test_enrich_record_without_matches(self, make_record) -> None:
        """A record without sidecar files is returned unchanged."""
        record = make_record(file_path="/m/Movie.mp4")
        assert enrich_record(record, []) is record

    def test_enrich_record_lists_directory(self, temp_dir: Path, make_record) -> None:
        """Without candidates the video's directory is listed."""
        (temp_dir / "Movie.en.srt").touch()
        record = make_record(file_path=str(temp_dir / "Movie.mp4"))
        enriched = enrich_record(record)
        assert [t.file_path for t in enriched.subtitle_tracks] == [
            str(temp_dir / "Movie.en.srt")
        ]

"""Tests for the bucket, match, subtitles and policy commands."""

import json
from dataclasses import replace
from unittest.mock import patch

import yaml
from click.testing import CliRunner

from mediacompat.cli import main
from mediacompat.cli.exit_codes import ExitCode
from mediacompat.jobs.rematch import match_events
from mediacompat.rating.legacy import LegacyThresholds
from mediacompat.rating.loader import load_policy_from_dict
from mediacompat.rating.types import RatingPolicy


class TestBucketCommand:
    """Tests for mediacompat bucket."""

    def test_default_thresholds(self, invoke) -> None:
        result = invoke("bucket", "5", "3")
        assert result.exit_code == 0
        assert result.output.strip() == "~ Good"

    def test_configured_thresholds(self, invoke, app_config) -> None:
        """Thresholds come from the configuration."""
        config = replace(app_config, legacy=LegacyThresholds(optimal=5))
        result = invoke("bucket", "5", "0", "--json", config=config)
        assert json.loads(result.output) == {
            "direct_play": 5,
            "remux": 0,
            "classification": "Optimal",
        }

    def test_option_overrides(self, invoke) -> None:
        result = invoke("bucket", "1", "0", "--good-direct", "1")
        assert result.output.strip() == "~ Good"

    def test_negative_threshold(self, invoke) -> None:
        result = invoke("bucket", "1", "0", "--optimal", "-1")
        assert result.exit_code == ExitCode.POLICY_VALIDATION_ERROR

    def test_negative_count_rejected(self, invoke) -> None:
        result = invoke("bucket", "--", "-1", "0")
        assert result.exit_code == 2


class TestMatchCommand:
    """Tests for mediacompat match."""

    def _write_inputs(self, write_json):
        events = [
            {
                "title": "Heat",
                "file_path": "/media/Heat.mkv",
                "play_method": "DirectPlay",
            },
            {"title": "Heat", "file_path": "/media/Heat.mkv", "play_method": "Remux"},
            {"title": "Heat (1995)", "file_path": "", "play_method": "Transcode"},
            {"title": "Nothing Here", "file_path": "/other/x.mkv"},
        ]
        library = {
            "entries": [{"id": 1, "file_path": "/media/Heat.mkv"}],
            "roots": [{"id": 1, "path": "/media", "category": "Movies"}],
        }
        return write_json("events.json", events), write_json("library.json", library)

    def test_json_tallies(self, invoke, write_json) -> None:
        """Matched events are tallied per entry and bucketed."""
        events, library = self._write_inputs(write_json)

        result = invoke("match", events, library, "--json")

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["unmatched"] == 1
        assert data["entries"] == [
            {
                "entry_id": 1,
                "direct_play": 1,
                "remux": 1,
                "transcode": 1,
                "classification": "Poor",
            }
        ]
        assert data["events"][0]["method"] == "exact_path"
        assert data["events"][2]["method"] == "name_similarity"
        assert data["events"][3]["entry_id"] is None

    def test_text_output(self, invoke, write_json) -> None:
        events, library = self._write_inputs(write_json)
        result = invoke("match", events, library)
        assert "entry 1: Poor (direct 1, remux 1, transcode 1)" in result.output
        assert "Matched 3 of 4 event(s)" in result.output

    def test_interrupted_batch(self, cancel_last, invoke, write_json) -> None:
        """Cancelled events are neither matched nor unmatched."""
        events, library = self._write_inputs(write_json)

        with patch(
            "mediacompat.cli.match.match_events",
            side_effect=cancel_last(match_events),
        ):
            result = invoke("match", events, library, "--json")

        assert result.exit_code == ExitCode.INTERRUPTED
        data = json.loads(result.output)
        assert data["unmatched"] == 0
        assert data["cancelled"] == 1
        assert data["events"][3] == {"title": "Nothing Here", "error": "cancelled"}
        assert data["entries"][0]["transcode"] == 1

    def test_interrupted_text_output(
        self, cancel_last, invoke, write_json
    ) -> None:
        events, library = self._write_inputs(write_json)
        with patch(
            "mediacompat.cli.match.match_events",
            side_effect=cancel_last(match_events),
        ):
            result = invoke("match", events, library)
        assert result.exit_code == ExitCode.INTERRUPTED
        assert "Matched 3 of 4 event(s)" in result.output
        assert "Cancelled 1 event(s)" in result.output

    def test_missing_library(self, invoke, write_json, temp_dir) -> None:
        events, _ = self._write_inputs(write_json)
        result = invoke("match", events, str(temp_dir / "none.json"))
        assert result.exit_code == ExitCode.TARGET_NOT_FOUND


class TestSubtitlesCommand:
    """Tests for mediacompat subtitles."""

    def test_lists_subtitles(self, invoke, temp_dir) -> None:
        """Matching sidecar files are listed with format and language."""
        video = temp_dir / "Movie.mkv"
        video.write_bytes(b"")
        for name in ("Movie.en.srt", "Movie.fr.ass", "Other.srt"):
            (temp_dir / name).write_text("", encoding="utf-8")

        result = invoke("subtitles", str(video), "--json")

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [(d["format"], d["language"]) for d in data] == [
            ("SRT", "English"),
            ("ASS", "French"),
        ]

    def test_no_subtitles(self, invoke, temp_dir) -> None:
        result = invoke("subtitles", str(temp_dir / "Movie.mkv"))
        assert result.exit_code == 0
        assert result.output.strip() == "No external subtitles for Movie.mkv"

    def test_missing_directory(self, invoke, temp_dir) -> None:
        result = invoke("subtitles", str(temp_dir / "gone" / "Movie.mkv"))
        assert result.exit_code == ExitCode.TARGET_NOT_FOUND


class TestPolicyCommands:
    """Tests for mediacompat policy validate/show."""

    def test_validate_ok(self, invoke, write_file) -> None:
        path = write_file("policy.yaml", "name: tv\n")
        result = invoke("policy", "validate", str(path))
        assert result.exit_code == 0
        assert "Policy 'tv' is valid" in result.output

    def test_validate_json(self, invoke, write_file) -> None:
        path = write_file("policy.yaml", "name: tv\n")
        result = invoke("policy", "validate", str(path), "--json")
        assert json.loads(result.output)["status"] == "valid"

    def test_validate_invalid(self, invoke, write_file) -> None:
        """Invalid policies exit with the policy validation code."""
        path = write_file("policy.yaml", "thresholds: {optimal: 10, good: 20}\n")
        result = invoke("policy", "validate", str(path))
        assert result.exit_code == ExitCode.POLICY_VALIDATION_ERROR
        assert result.output.startswith("Error: Policy validation failed")

    def test_show_default(self, invoke) -> None:
        """Without a policy the built-in one is shown as loadable YAML."""
        result = invoke("policy", "show")
        assert result.exit_code == 0
        document = yaml.safe_load(result.output)
        assert document["name"] == "default"
        assert document["thresholds"] == {"optimal": 80, "good": 60}

    def test_show_round_trips(self, invoke, write_file) -> None:
        """The shown document loads back to an equal policy."""
        result = invoke("policy", "show", "--json")
        assert load_policy_from_dict(json.loads(result.output)) == RatingPolicy()


class TestMainGroup:
    def test_version(self, invoke) -> None:
        result = invoke("--version")
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_bad_config_file(self, restore_root_logger, write_file) -> None:
        """A malformed explicit config file exits with the config error code."""
        path = write_file("config.toml", "[logging\n")
        result = CliRunner().invoke(main, ["--config", str(path), "bucket", "1", "1"])
        assert result.exit_code == ExitCode.CONFIG_ERROR

"""Tests for core/json_utils.py."""

import logging
from pathlib import Path

import pytest
from pydantic import BaseModel

from mediacompat.core.json_utils import (
    load_json_file,
    parse_json_safe,
    parse_json_with_schema,
    serialize_json_safe,
)


class _Item(BaseModel):
    name: str
    count: int = 0


class TestParseJsonSafe:
    """Tests for parse_json_safe."""

    def test_parses_valid_json(self) -> None:
        """Valid JSON should parse successfully."""
        result = parse_json_safe('[1, 2]')
        assert result.success is True
        assert result.value == [1, 2]
        assert result.error is None

    @pytest.mark.parametrize("raw", [None, "", b""])
    def test_empty_input_yields_default(self, raw) -> None:
        """Empty input should succeed with the default."""
        assert parse_json_safe(raw, default=[]).value == []
        assert parse_json_safe(raw).value is None

    def test_malformed_without_default_fails(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Malformed JSON without default should fail and log a warning."""
        with caplog.at_level(logging.WARNING):
            result = parse_json_safe("{bad", context="audio_tracks")
        assert result.success is False
        assert result.error.startswith("audio_tracks: Invalid JSON")
        assert "audio_tracks" in caplog.text

    def test_malformed_with_default_substitutes(self) -> None:
        """Malformed JSON with a default should succeed with the default."""
        result = parse_json_safe("{bad", default=[])
        assert result.success is True
        assert result.value == []
        assert result.error is not None


class TestParseJsonWithSchema:
    """Tests for parse_json_with_schema."""

    def test_validates_model(self) -> None:
        """Valid documents should produce a model instance."""
        result = parse_json_with_schema('{"name": "a", "count": 2}', _Item)
        assert result.success is True
        assert result.value == _Item(name="a", count=2)

    def test_schema_error(self) -> None:
        """Schema violations should fail with a located message."""
        result = parse_json_with_schema('{"count": 2}', _Item, context="item")
        assert result.success is False
        assert "item: Schema validation failed" in result.error
        assert "name" in result.error

    def test_empty_input(self) -> None:
        """Empty input should succeed with no value."""
        result = parse_json_with_schema(None, _Item)
        assert result.success is True
        assert result.value is None


class TestSerializeJsonSafe:
    def test_serializes(self) -> None:
        assert serialize_json_safe({"a": "é"}) == '{"a": "é"}'

    def test_none(self) -> None:
        assert serialize_json_safe(None) is None

    def test_unserializable_raises(self) -> None:
        """Unserializable data should raise TypeError with context."""
        with pytest.raises(TypeError, match="tracks: Cannot serialize"):
            serialize_json_safe({"a": object()}, context="tracks")


class TestLoadJsonFile:
    def test_reads_file(self, temp_dir: Path) -> None:
        """Existing JSON files should be parsed."""
        path = temp_dir / "data.json"
        path.write_text('{"a": 1}', encoding="utf-8")
        assert load_json_file(path).value == {"a": 1}

    def test_missing_file_fails(self, temp_dir: Path) -> None:
        """A missing file should be reported as a failure."""
        result = load_json_file(temp_dir / "missing.json")
        assert result.success is False
        assert "Cannot read file" in result.error

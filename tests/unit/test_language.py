"""Tests for language.py."""

import pytest

from mediacompat.language import detect_language_from_filename, language_from_code


class TestLanguageFromCode:
    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            ("en", "English"),
            ("eng", "English"),
            ("fre", "French"),
            ("fra", "French"),
            ("ger", "German"),
            ("deu", "German"),
            ("ENG", "English"),
            ("xx", None),
            ("", None),
            (None, None),
        ],
    )
    def test_codes(self, code, expected) -> None:
        """ISO 639-1 and both ISO 639-2 forms should resolve."""
        assert language_from_code(code) == expected


class TestDetectLanguageFromFilename:
    """Tests for detect_language_from_filename."""

    @pytest.mark.parametrize(
        ("stem", "expected"),
        [
            ("Movie (2020).eng", "English"),
            ("Movie.en-US.forced", "English (en-US)"),
            ("Movie.spanish", "Spanish"),
            ("Movie.forced.de", "German"),
            ("Movie", "Unknown"),
            ("", "Unknown"),
            (None, "Unknown"),
        ],
    )
    def test_detects(self, stem, expected) -> None:
        """The first dot-separated part naming a language wins."""
        assert detect_language_from_filename(stem) == expected

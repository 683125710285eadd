"""Language detection for external subtitle files.

Sidecar subtitles carry their language in the file name:

- movie.en.srt (ISO 639-1)
- movie.eng.srt (ISO 639-2, bibliographic or terminological)
- movie.en-US.srt (locale)
- movie.english.srt (English language name)

Detection returns an English display name, or "Unknown".
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

UNKNOWN_LANGUAGE = "Unknown"

# ISO 639-1 (2-letter) codes to English names
_ISO_639_1_NAMES: dict[str, str] = {
    "ar": "Arabic",
    "cs": "Czech",
    "da": "Danish",
    "de": "German",
    "el": "Greek",
    "en": "English",
    "es": "Spanish",
    "fi": "Finnish",
    "fr": "French",
    "he": "Hebrew",
    "hi": "Hindi",
    "hr": "Croatian",
    "hu": "Hungarian",
    "id": "Indonesian",
    "is": "Icelandic",
    "it": "Italian",
    "ja": "Japanese",
    "ko": "Korean",
    "ms": "Malay",
    "nb": "Norwegian Bokmål",
    "nl": "Dutch",
    "no": "Norwegian",
    "pl": "Polish",
    "pt": "Portuguese",
    "ro": "Romanian",
    "ru": "Russian",
    "sv": "Swedish",
    "th": "Thai",
    "tr": "Turkish",
    "uk": "Ukrainian",
    "vi": "Vietnamese",
    "zh": "Chinese",
}

# ISO 639-2 (3-letter) codes to English names; /B and /T variants both listed
_ISO_639_2_NAMES: dict[str, str] = {
    "ara": "Arabic",
    "ces": "Czech",  # Terminological
    "chi": "Chinese",  # Bibliographic
    "cze": "Czech",  # Bibliographic
    "dan": "Danish",
    "deu": "German",  # Terminological
    "dut": "Dutch",  # Bibliographic
    "ell": "Greek",  # Terminological
    "eng": "English",
    "fin": "Finnish",
    "fra": "French",  # Terminological
    "fre": "French",  # Bibliographic
    "ger": "German",  # Bibliographic
    "gre": "Greek",  # Bibliographic
    "heb": "Hebrew",
    "hin": "Hindi",
    "hrv": "Croatian",
    "hun": "Hungarian",
    "ice": "Icelandic",  # Bibliographic
    "ind": "Indonesian",
    "isl": "Icelandic",  # Terminological
    "ita": "Italian",
    "jpn": "Japanese",
    "kor": "Korean",
    "may": "Malay",  # Bibliographic
    "msa": "Malay",  # Terminological
    "nld": "Dutch",  # Terminological
    "nob": "Norwegian Bokmål",
    "nor": "Norwegian",
    "pol": "Polish",
    "por": "Portuguese",
    "ron": "Romanian",  # Terminological
    "rum": "Romanian",  # Bibliographic
    "rus": "Russian",
    "spa": "Spanish",
    "swe": "Swedish",
    "tha": "Thai",
    "tur": "Turkish",
    "ukr": "Ukrainian",
    "vie": "Vietnamese",
    "zho": "Chinese",  # Terminological
}

# Lowercase English names (and common spellings) to display names
_LANGUAGE_NAMES: dict[str, str] = {
    name.casefold(): name for name in set(_ISO_639_1_NAMES.values())
}
_LANGUAGE_NAMES.update(
    {
        "bokmal": "Norwegian Bokmål",
        "bokmål": "Norwegian Bokmål",
        "norwegian bokmal": "Norwegian Bokmål",
    }
)


def language_from_code(code: str | None) -> str | None:
    """Look up the English name for an ISO 639-1 or 639-2 code.

    Args:
        code: Two or three letter code, case-insensitive.

    Returns:
        English language name, or None if unrecognized.

    Examples:
        >>> language_from_code("de")
        'German'
        >>> language_from_code("GER")
        'German'
    """
    if not code:
        return None
    key = code.casefold().strip()
    if len(key) == 2:
        return _ISO_639_1_NAMES.get(key)
    if len(key) == 3:
        return _ISO_639_2_NAMES.get(key)
    return None


def _language_from_part(part: str) -> str | None:
    key = part.casefold()

    # Locale form: en-US, pt-BR
    if "-" in key:
        head, _, tail = key.partition("-")
        name = _ISO_639_1_NAMES.get(head)
        if name is not None:
            return f"{name} ({part})" if len(tail) == 2 else name

    return language_from_code(key) or _LANGUAGE_NAMES.get(key)


def detect_language_from_filename(stem: str | None) -> str:
    """Detect a subtitle language from a file name without extension.

    Dot-separated parts are checked in order; the first part that names a
    language wins. A two-letter country suffix is kept in the result
    ("English (en-US)").

    Args:
        stem: File name without its extension (e.g., "Movie (2020).eng").

    Returns:
        English language name, or "Unknown".

    Examples:
        >>> detect_language_from_filename("Movie (2020).eng")
        'English'
        >>> detect_language_from_filename("Movie.en-US.forced")
        'English (en-US)'
        >>> detect_language_from_filename("Movie")
        'Unknown'
    """
    if not stem:
        return UNKNOWN_LANGUAGE

    for part in stem.split("."):
        part = part.strip()
        if not part:
            continue
        language = _language_from_part(part)
        if language is not None:
            logger.debug("Detected subtitle language %s from %r", language, stem)
            return language

    return UNKNOWN_LANGUAGE

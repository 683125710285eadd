"""Codec name normalization and codec tag validation.

Metadata extractors report codecs as raw format strings ("AVC", "HEVC",
"E-AC-3", "UTF-8"...). Rating policies key their support maps on display
labels ("H.264", "H.265", "EAC3", "SRT"). This module maps one onto the other.
"""

from __future__ import annotations

# =============================================================================
# Codec Alias Groups
# =============================================================================
# Ordered (label, substrings) pairs. The first label whose substring occurs in
# the uppercased raw name wins, so more specific entries come first.

VIDEO_CODEC_LABELS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("H.264", ("AVC", "H264", "H.264", "X264")),
    ("H.265", ("HEVC", "H265", "H.265", "X265")),
    ("VP9", ("VP9", "VP09")),
    ("AV1", ("AV1", "AV01")),
)

AUDIO_CODEC_LABELS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("AAC", ("AAC", "MP4A")),
    ("EAC3", ("EAC3", "E-AC-3", "DD+")),
    ("AC3", ("AC3", "AC-3")),
    ("MP3", ("MP3", "MPEG")),
    ("DTS", ("DTS",)),
    ("FLAC", ("FLAC",)),
    ("Opus", ("OPUS",)),
    ("Vorbis", ("VORBIS",)),
    ("ALAC", ("ALAC",)),
)

SUBTITLE_FORMAT_LABELS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("SRT", ("SRT", "SUBRIP", "UTF-8")),
    ("VTT", ("VTT", "WEBVTT")),
    ("ASS", ("ASS",)),
    ("SSA", ("SSA",)),
    ("PGSSUB", ("PGS",)),
    ("VobSub", ("VOBSUB", "DVD_SUBTITLE", "SUB")),
    ("MP4TT", ("MP4TT", "TTXT", "MOV_TEXT", "TX3G")),
    ("TXTT", ("TXTT",)),
    ("EIA-608", ("EIA-608", "608")),
    ("EIA-708", ("EIA-708", "708")),
)

# Accepted MP4 sample-entry tags per normalized video codec
VALID_CODEC_TAGS: dict[str, frozenset[str]] = {
    "H.265": frozenset({"HVC1", "HEVC"}),
    "H.264": frozenset({"AVC1", "AVC3", "H264"}),
    "VP9": frozenset({"VP09"}),
    "AV1": frozenset({"AV01"}),
}

# Containers that can place the index (moov atom) before media data
FAST_START_CONTAINERS: frozenset[str] = frozenset({"MP4", "M4V", "MOV"})

# Container label derived from the file extension when the extractor reports none
_EXTENSION_CONTAINERS: dict[str, str] = {
    "mp4": "MP4",
    "m4v": "MP4",
    "mov": "MP4",
    "mkv": "MKV",
    "mka": "MKV",
    "webm": "WebM",
    "ts": "TS",
    "m2ts": "TS",
    "ogg": "OGG",
    "ogv": "OGG",
    "avi": "AVI",
}


def _match_label(
    raw: str, table: tuple[tuple[str, tuple[str, ...]], ...]
) -> str | None:
    upper = raw.upper()
    for label, needles in table:
        if any(needle in upper for needle in needles):
            return label
    return None


def _label_for(
    raw: str | None, table: tuple[tuple[str, tuple[str, ...]], ...]
) -> str:
    if not raw:
        return "Unknown"
    return _match_label(raw, table) or raw


def normalize_video_codec(codec: str | None) -> str:
    """Map a raw video format name to its policy label.

    MPEG-4 Part 2 is split by profile ("MPEG-4 ASP", "MPEG-4 SP").

    Args:
        codec: Raw format string from the extractor.

    Returns:
        Policy label, the input unchanged if unrecognized, or "Unknown".

    Example:
        >>> normalize_video_codec("HEVC")
        'H.265'
        >>> normalize_video_codec("MPEG-4 Visual ASP")
        'MPEG-4 ASP'
    """
    if not codec:
        return "Unknown"
    label = _match_label(codec, VIDEO_CODEC_LABELS)
    if label is not None:
        return label
    upper = codec.upper()
    if "MPEG-4" in upper or "MPEG4" in upper:
        profile = upper.replace("MPEG-4", "").replace("MPEG4", "").split()
        if "ASP" in profile:
            return "MPEG-4 ASP"
        if "SP" in profile:
            return "MPEG-4 SP"
        return "MPEG-4"
    return codec


def normalize_audio_codec(codec: str | None) -> str:
    """Map a raw audio format name to its policy label.

    Example:
        >>> normalize_audio_codec("E-AC-3")
        'EAC3'
    """
    return _label_for(codec, AUDIO_CODEC_LABELS)


def normalize_subtitle_format(fmt: str | None) -> str:
    """Map a raw subtitle format name to its policy label.

    Example:
        >>> normalize_subtitle_format("SubRip")
        'SRT'
    """
    return _label_for(fmt, SUBTITLE_FORMAT_LABELS)


def container_from_extension(path: str) -> str:
    """Derive a container label from a file extension.

    Args:
        path: File path or name.

    Returns:
        Container label, the uppercased extension if unknown, or "" if the
        path has no extension.
    """
    name = path.replace("\\", "/").rsplit("/", 1)[-1]
    if "." not in name:
        return ""
    ext = name.rsplit(".", 1)[-1].lower()
    return _EXTENSION_CONTAINERS.get(ext, ext.upper())


def is_codec_tag_correct(codec: str | None, tag: str | None) -> bool:
    """Check an MP4 codec tag against the tags expected for a codec.

    A missing tag cannot be judged and counts as correct, as does any tag
    for a codec without tag requirements.

    Args:
        codec: Video codec, raw or normalized.
        tag: Codec tag (CodecID) reported by the extractor.

    Returns:
        True if the tag is acceptable.

    Example:
        >>> is_codec_tag_correct("H.265", "hev1")
        False
        >>> is_codec_tag_correct("H.265", "hvc1")
        True
    """
    if not tag:
        return True
    expected = VALID_CODEC_TAGS.get(normalize_video_codec(codec))
    if expected is None:
        return True
    return tag.upper() in expected


def is_fast_start_container(container: str | None) -> bool:
    """Return True if the container supports fast-start layout."""
    return bool(container) and container.upper() in FAST_START_CONTAINERS

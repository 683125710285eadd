"""External subtitle association.

Finds the sidecar subtitle files that belong to a video file. Only the
video's own directory is considered (no recursion). Each candidate is
checked against an ordered list of filename rules; the first rule that
holds decides the match.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum
from pathlib import Path

from mediacompat.core.string_utils import squash
from mediacompat.domain.models import MediaMetadataRecord, SubtitleTrack
from mediacompat.language import detect_language_from_filename

logger = logging.getLogger(__name__)

SUBTITLE_EXTENSIONS: frozenset[str] = frozenset(
    {".srt", ".vtt", ".ass", ".ssa", ".sub"}
)

# Separators accepted between the video stem and a subtitle suffix
STEM_SEPARATORS: tuple[str, ...] = (" ", "-", "_", " - ", " -", "- ")

# Characters allowed right after the squashed video stem
_SQUASHED_BOUNDARY: frozenset[str] = frozenset(". -_([")

# Minimum squashed stem length for substring matching
MIN_SQUASHED_CONTAINS_LENGTH = 3

_FORMAT_BY_EXTENSION: dict[str, str] = {
    ".srt": "SRT",
    ".vtt": "VTT",
    ".ass": "ASS",
    ".ssa": "SSA",
    ".sub": "VobSub",
}


class SubtitleMatchRule(Enum):
    """Filename rule that associated a subtitle with a video, by priority."""

    EXACT = 1  # movie.srt
    DOT_SUFFIX = 2  # movie.eng.srt
    DOT_PREFIX = 3  # movie.eng.srt, stem compared by prefix and next char
    SEPARATOR = 4  # movie - english.srt, movie_en.srt
    CONTAINS = 5  # [group] movie.srt
    SQUASHED_PREFIX = 6  # movie_name.srt for "Movie Name.mkv"
    SQUASHED_CONTAINS = 7  # sub.movie-name.srt


def is_subtitle_file(path: Path) -> bool:
    """Return True if the path has a subtitle extension (case-insensitive)."""
    return path.suffix.lower() in SUBTITLE_EXTENSIONS


def _starts_with_dot_suffix(candidate: str, video: str) -> bool:
    return candidate.startswith(video + ".")


def _has_dot_after_prefix(candidate: str, video: str) -> bool:
    return (
        len(candidate) > len(video)
        and candidate.startswith(video)
        and candidate[len(video)] == "."
    )


def match_subtitle_rule(
    video_stem: str, candidate_stem: str
) -> SubtitleMatchRule | None:
    """Find the first rule associating a subtitle stem with a video stem.

    Both stems are file names without extension. Comparison ignores case.

    Args:
        video_stem: Video file name without extension.
        candidate_stem: Subtitle file name without extension.

    Returns:
        The matching rule, or None if the subtitle belongs elsewhere.

    Examples:
        >>> match_subtitle_rule("Movie (2020)", "Movie (2020).eng")
        <SubtitleMatchRule.DOT_SUFFIX: 2>
        >>> match_subtitle_rule("Movie (2020)", "Other") is None
        True
    """
    video = video_stem.lower()
    candidate = candidate_stem.lower()
    video_trimmed = video.strip()
    candidate_trimmed = candidate.strip()

    if candidate_trimmed == video_trimmed:
        return SubtitleMatchRule.EXACT

    if _starts_with_dot_suffix(candidate, video) or _starts_with_dot_suffix(
        candidate_trimmed, video_trimmed
    ):
        return SubtitleMatchRule.DOT_SUFFIX

    if _has_dot_after_prefix(candidate, video) or _has_dot_after_prefix(
        candidate_trimmed, video_trimmed
    ):
        return SubtitleMatchRule.DOT_PREFIX

    if any(candidate.startswith(video + sep) for sep in STEM_SEPARATORS):
        return SubtitleMatchRule.SEPARATOR

    if video in candidate:
        return SubtitleMatchRule.CONTAINS

    video_squashed = squash(video)
    candidate_squashed = squash(candidate)
    if candidate_squashed.startswith(video_squashed):
        if len(candidate_squashed) == len(video_squashed):
            return SubtitleMatchRule.SQUASHED_PREFIX
        if candidate_squashed[len(video_squashed)] in _SQUASHED_BOUNDARY:
            return SubtitleMatchRule.SQUASHED_PREFIX

    if (
        len(video_squashed) >= MIN_SQUASHED_CONTAINS_LENGTH
        and video_squashed in candidate_squashed
    ):
        return SubtitleMatchRule.SQUASHED_CONTAINS

    return None


def _ordered(paths: Iterable[Path]) -> list[Path]:
    unique = {str(p): p for p in paths}
    return [unique[key] for key in sorted(unique, key=lambda s: (len(s), s))]


def match_subtitles(video_path: Path, candidates: Iterable[Path]) -> list[Path]:
    """Select the subtitle files that belong to a video.

    Args:
        video_path: Path to the video file.
        candidates: Files from the video's directory. Entries without a
            subtitle extension are ignored.

    Returns:
        Matching paths without duplicates, shortest path first, ties
        broken alphabetically.
    """
    video_stem = video_path.stem
    matched: list[Path] = []
    for candidate in candidates:
        if not is_subtitle_file(candidate):
            continue
        rule = match_subtitle_rule(video_stem, candidate.stem)
        if rule is not None:
            logger.debug(
                "Subtitle %s matched %s (%s)",
                candidate.name,
                video_path.name,
                rule.name,
            )
            matched.append(candidate)
    return _ordered(matched)


def find_subtitles(video_path: Path) -> list[Path]:
    """List the video's directory and return its matching subtitle files.

    A missing or unreadable directory is logged and yields an empty list.

    Args:
        video_path: Path to the video file.

    Returns:
        Matching subtitle paths, ordered as by match_subtitles().
    """
    directory = video_path.parent
    try:
        candidates = [
            entry for entry in directory.iterdir() if is_subtitle_file(entry)
        ]
    except OSError as e:
        logger.warning("Cannot list subtitle candidates in %s: %s", directory, e)
        return []

    found = match_subtitles(video_path, candidates)
    if found:
        logger.info(
            "Found %d external subtitle file(s) for %s: %s",
            len(found),
            video_path.name,
            ", ".join(p.name for p in found),
        )
    return found


def subtitle_format_for(path: Path) -> str:
    """Map a subtitle file extension to its format label.

    Example:
        >>> subtitle_format_for(Path("Movie.en.sub"))
        'VobSub'
    """
    suffix = path.suffix.lower()
    return _FORMAT_BY_EXTENSION.get(suffix, suffix.lstrip(".").upper())


def build_external_subtitle_tracks(
    paths: Iterable[Path],
) -> tuple[SubtitleTrack, ...]:
    """Describe sidecar subtitle files as non-embedded subtitle tracks.

    Args:
        paths: Subtitle file paths, typically from find_subtitles().

    Returns:
        One SubtitleTrack per path, language taken from the file name.
    """
    return tuple(
        SubtitleTrack(
            format=subtitle_format_for(path),
            language=detect_language_from_filename(path.stem),
            is_embedded=False,
            file_path=str(path),
        )
        for path in paths
    )


def enrich_record(
    record: MediaMetadataRecord,
    candidates: Iterable[Path] | None = None,
) -> MediaMetadataRecord:
    """Attach the video's external subtitle files to its metadata record.

    Args:
        record: Record to enrich; it is not modified.
        candidates: Pre-listed directory contents. When None the video's
            directory is listed.

    Returns:
        A record whose subtitle tracks include the external subtitles.
    """
    video_path = Path(record.file_path)
    if candidates is None:
        found = find_subtitles(video_path)
    else:
        found = match_subtitles(video_path, candidates)
    if not found:
        return record
    return record.with_subtitle_tracks(build_external_subtitle_tracks(found))

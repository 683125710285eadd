"""Playback event reconciliation against the library.

A playback event is matched to at most one library entry and at most one
library root:

1. Exact path: normalized event path equals a normalized entry path.
2. Name fallback (only without an exact match and with a non-empty title):
   the normalized event title is similar to the entry's normalized file name.
3. Root: the first active root whose normalized path prefixes the event path.

Entries and roots are scanned in ascending id order so results do not depend
on the order the persistence layer returns rows in.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import TypeVar

from mediacompat.core.paths import normalize_path, path_file_name
from mediacompat.core.string_utils import starts_with_ci
from mediacompat.domain.enums import MatchMethod
from mediacompat.domain.models import (
    LibraryEntry,
    LibraryRoot,
    MatchResult,
    PlaybackEvent,
)
from mediacompat.matching.names import are_similar, normalize_name

_Ided = TypeVar("_Ided", LibraryEntry, LibraryRoot)

logger = logging.getLogger(__name__)


def entry_comparison_name(entry: LibraryEntry) -> str:
    """Name compared against event titles: stored file name, else path tail."""
    if entry.file_name:
        return entry.file_name
    return path_file_name(entry.file_path)


def _by_id(items: Iterable[_Ided]) -> list[_Ided]:
    return sorted(items, key=lambda item: item.id)


def match_by_path(
    event_path: str,
    entries: Sequence[LibraryEntry],
    *,
    case_insensitive: bool | None = None,
) -> LibraryEntry | None:
    """Find the first entry whose normalized path equals the event path."""
    target = normalize_path(event_path, case_insensitive=case_insensitive)
    if not target:
        return None
    for entry in entries:
        path = normalize_path(entry.file_path, case_insensitive=case_insensitive)
        if path == target:
            return entry
    return None


def match_by_name(
    title: str, entries: Sequence[LibraryEntry]
) -> LibraryEntry | None:
    """Find the first entry whose file name is similar to the title."""
    normalized_title = normalize_name(title)
    if not normalized_title:
        return None
    for entry in entries:
        name = normalize_name(entry_comparison_name(entry))
        if are_similar(normalized_title, name):
            return entry
    return None


def match_root(
    event_path: str,
    roots: Sequence[LibraryRoot],
    *,
    case_insensitive: bool | None = None,
) -> LibraryRoot | None:
    """Find the first active root that prefixes the event path.

    The prefix comparison ignores case on every platform. A root that
    normalizes to an empty path, such as "/", prefixes every path.
    """
    target = normalize_path(event_path, case_insensitive=case_insensitive)
    if not target:
        return None
    for root in roots:
        if not root.is_active:
            continue
        root_path = normalize_path(root.path, case_insensitive=case_insensitive)
        if starts_with_ci(target, root_path):
            return root
    return None


def match_playback_event(
    event: PlaybackEvent,
    entries: Iterable[LibraryEntry],
    roots: Iterable[LibraryRoot],
    *,
    case_insensitive: bool | None = None,
) -> MatchResult:
    """Reconcile one playback event with the library.

    Args:
        event: Playback event to match.
        entries: All library entries.
        roots: Library roots; inactive roots are skipped.
        case_insensitive: Override path case handling. None uses the
            platform default (case-insensitive on Windows only).

    Returns:
        MatchResult with the matched entry and/or root. An exact path
        match always takes precedence over a name match.
    """
    ordered_entries = _by_id(entries)
    ordered_roots = _by_id(roots)

    entry = match_by_path(
        event.file_path, ordered_entries, case_insensitive=case_insensitive
    )
    method = MatchMethod.EXACT_PATH if entry is not None else MatchMethod.NONE

    if entry is None and event.title.strip():
        entry = match_by_name(event.title, ordered_entries)
        if entry is not None:
            method = MatchMethod.NAME_SIMILARITY

    root = match_root(
        event.file_path, ordered_roots, case_insensitive=case_insensitive
    )

    if entry is None:
        logger.debug(
            "No library entry for playback of %r (%s)", event.title, event.file_path
        )
    else:
        logger.debug(
            "Matched playback of %r to entry %d by %s",
            event.title,
            entry.id,
            method.value,
        )
    return MatchResult(entry=entry, root=root, method=method)

"""Reconciliation of playback history against the library."""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence

from mediacompat.domain.models import (
    LibraryEntry,
    LibraryRoot,
    MatchResult,
    PlaybackEvent,
)
from mediacompat.jobs.batch import BatchSummary, run_batch
from mediacompat.matching.library import match_playback_event

logger = logging.getLogger(__name__)

DEFAULT_MATCH_WORKERS = 8


def match_events(
    events: Sequence[PlaybackEvent],
    entries: Sequence[LibraryEntry],
    roots: Sequence[LibraryRoot],
    *,
    max_workers: int = DEFAULT_MATCH_WORKERS,
    stop_event: threading.Event | None = None,
    case_insensitive: bool | None = None,
) -> BatchSummary[PlaybackEvent, MatchResult]:
    """Match every playback event to a library entry and root.

    Args:
        events: Playback events to reconcile.
        entries: Library entries.
        roots: Library roots.
        max_workers: Maximum concurrent workers.
        stop_event: Cooperative cancellation signal.
        case_insensitive: Path case handling override.

    Returns:
        BatchSummary mapping each event to its MatchResult.
    """
    entry_list = tuple(entries)
    root_list = tuple(roots)
    logger.info(
        "Matching %d event(s) against %d entries and %d roots",
        len(events),
        len(entry_list),
        len(root_list),
    )

    def _match(event: PlaybackEvent) -> MatchResult:
        return match_playback_event(
            event, entry_list, root_list, case_insensitive=case_insensitive
        )

    return run_batch(
        events,
        _match,
        max_workers=max_workers,
        stop_event=stop_event,
        item_label=lambda event: event.file_path or event.title,
    )

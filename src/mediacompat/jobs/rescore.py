"""Re-scoring of stored metadata records."""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence

from mediacompat.domain.models import CompatibilityOutcome, MediaMetadataRecord
from mediacompat.jobs.batch import BatchSummary, run_batch
from mediacompat.rating.scorer import score
from mediacompat.rating.snapshot import PolicyStore
from mediacompat.rating.types import RatingPolicy

logger = logging.getLogger(__name__)

DEFAULT_RESCORE_WORKERS = 4


def rescore_records(
    records: Sequence[MediaMetadataRecord],
    policy: PolicyStore | RatingPolicy,
    *,
    max_workers: int = DEFAULT_RESCORE_WORKERS,
    stop_event: threading.Event | None = None,
) -> BatchSummary[MediaMetadataRecord, CompatibilityOutcome]:
    """Score every record against one policy snapshot.

    A policy reload during the batch does not affect it: the snapshot is
    taken once, before the first record is scored.

    Args:
        records: Records to score.
        policy: A PolicyStore (its current snapshot is used) or a policy.
        max_workers: Maximum concurrent workers.
        stop_event: Cooperative cancellation signal.

    Returns:
        BatchSummary mapping each record to its CompatibilityOutcome.
    """
    snapshot = policy.snapshot() if isinstance(policy, PolicyStore) else policy
    logger.info(
        "Rescoring %d record(s) with policy %r", len(records), snapshot.name
    )

    def _score(record: MediaMetadataRecord) -> CompatibilityOutcome:
        return score(record, snapshot)

    return run_batch(
        records,
        _score,
        max_workers=max_workers,
        stop_event=stop_event,
        item_label=lambda record: record.file_path,
    )

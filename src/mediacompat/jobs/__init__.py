"""Batch jobs: concurrent re-scoring and playback matching."""

from mediacompat.jobs.batch import (
    BatchSummary,
    ItemResult,
    get_max_workers,
    resolve_worker_count,
    run_batch,
)
from mediacompat.jobs.rematch import match_events
from mediacompat.jobs.rescore import rescore_records

__all__ = [
    "BatchSummary",
    "ItemResult",
    "get_max_workers",
    "match_events",
    "rescore_records",
    "resolve_worker_count",
    "run_batch",
]

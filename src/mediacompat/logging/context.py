"""Worker context for batch logging.

Batch workers run in a thread pool; each item is processed inside
worker_context() so every log line it emits carries a compact
``[W01:F003]`` tag (text format) or worker_id/file_id/file_path fields
(JSON format).
"""

from __future__ import annotations

import contextvars
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class WorkerContext:
    """Identifies the worker slot and item a log record belongs to."""

    worker_id: str
    file_id: str | None = None
    file_path: str | None = None

    @property
    def tag(self) -> str:
        """Compact text tag such as "[W01:F003] "."""
        if self.file_id:
            return f"[W{self.worker_id}:{self.file_id}] "
        return f"[W{self.worker_id}] "


_current: contextvars.ContextVar[WorkerContext | None] = contextvars.ContextVar(
    "mediacompat_worker_context", default=None
)


def get_worker_context() -> WorkerContext | None:
    """Return the context of the current thread, if any."""
    return _current.get()


@contextmanager
def worker_context(
    worker_id: str,
    file_id: str | None = None,
    file_path: Path | str | None = None,
) -> Iterator[WorkerContext]:
    """Bind a worker context for the duration of the block.

    Example:
        with worker_context("01", "F001", "/media/Movie.mkv"):
            logger.info("Scoring")  # "... [W01:F001] ... Scoring"
    """
    ctx = WorkerContext(
        worker_id=worker_id,
        file_id=file_id,
        file_path=str(file_path) if file_path is not None else None,
    )
    token = _current.set(ctx)
    try:
        yield ctx
    finally:
        _current.reset(token)


class WorkerContextFilter(logging.Filter):
    """Enrich log records with the current worker context.

    Never drops records.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        ctx = _current.get()
        record.worker_id = ctx.worker_id if ctx else None
        record.file_id = ctx.file_id if ctx else None
        record.file_path = ctx.file_path if ctx else None
        record.worker_tag = ctx.tag if ctx else ""
        return True

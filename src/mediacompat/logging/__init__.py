"""Logging setup for mediacompat.

Text or JSON output, optional rotating log file, and per-item worker
context for batch runs.
"""

from mediacompat.logging.config import configure_logging
from mediacompat.logging.context import (
    WorkerContext,
    WorkerContextFilter,
    get_worker_context,
    worker_context,
)
from mediacompat.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "WorkerContext",
    "WorkerContextFilter",
    "configure_logging",
    "get_worker_context",
    "worker_context",
]

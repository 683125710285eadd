"""Bounded-concurrency batch execution.

run_batch() fans a worker function out over a ThreadPoolExecutor and
collects one ItemResult per input item, in input order. A failing item
never aborts the batch. Cancellation is cooperative: once the stop event
is set, items that have not started are reported as cancelled while
running items finish normally.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Generic, TypeVar

from mediacompat.logging.context import worker_context

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class ItemResult(Generic[T, R]):
    """Outcome of one batch item.

    Attributes:
        item: The input item.
        success: True when the worker returned normally.
        value: Worker return value on success.
        error_message: Exception text on failure.
        cancelled: True when the item never started because the batch
            was stopped.
    """

    item: T
    success: bool
    value: R | None = None
    error_message: str | None = None
    cancelled: bool = False


@dataclass(frozen=True)
class BatchSummary(Generic[T, R]):
    """All item results of a batch, in input order."""

    results: tuple[ItemResult[T, R], ...]

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.success and not r.cancelled)

    @property
    def cancelled(self) -> int:
        return sum(1 for r in self.results if r.cancelled)

    @property
    def values(self) -> list[R]:
        """Values of the successful items."""
        return [r.value for r in self.results if r.success]


def get_max_workers() -> int:
    """Upper bound on worker threads: the CPU count, minimum 1."""
    return max(1, os.cpu_count() or 1)


def resolve_worker_count(requested: int | None, config_default: int) -> int:
    """Resolve the effective worker count.

    Args:
        requested: Worker count from the CLI (None if not specified).
        config_default: Worker count from configuration.

    Returns:
        Effective worker count, at least 1 and capped at get_max_workers().
    """
    max_workers = get_max_workers()
    effective = requested if requested is not None else config_default
    if effective > max_workers:
        logger.warning(
            "Requested %d workers exceeds cap of %d, using %d",
            effective,
            max_workers,
            max_workers,
        )
        return max_workers
    return max(1, effective)


def _run_item(
    worker: Callable[[T], R],
    item: T,
    stop_event: threading.Event,
    worker_id: str,
    file_id: str,
    label: str | None,
) -> ItemResult[T, R]:
    if stop_event.is_set():
        return ItemResult(item=item, success=False, cancelled=True)

    with worker_context(worker_id, file_id, label):
        try:
            value = worker(item)
        except Exception as e:
            logger.warning("Item failed: %s", e)
            return ItemResult(item=item, success=False, error_message=str(e))
    return ItemResult(item=item, success=True, value=value)


def run_batch(
    items: Sequence[T],
    worker: Callable[[T], R],
    *,
    max_workers: int = 4,
    stop_event: threading.Event | None = None,
    item_label: Callable[[T], str] | None = None,
) -> BatchSummary[T, R]:
    """Run worker over items with bounded concurrency.

    Args:
        items: Inputs, each handed to worker exactly once.
        worker: Function applied to each item. It must not mutate shared
            state; results are collected by the calling thread.
        max_workers: Maximum concurrent workers (at least 1).
        stop_event: Set it to stop the batch. Checked before each item
            starts.
        item_label: Produces the file_path shown in log context.

    Returns:
        BatchSummary with one result per item, in input order.
    """
    if stop_event is None:
        stop_event = threading.Event()
    workers = max(1, max_workers)
    id_width = len(str(len(items)))
    results: list[ItemResult[T, R] | None] = [None] * len(items)

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures: dict[Future[ItemResult[T, R]], int] = {}
        for idx, item in enumerate(items, start=1):
            if stop_event.is_set():
                break
            # Logical slot for log tags, not the executing thread
            worker_id = f"{((idx - 1) % workers) + 1:02d}"
            file_id = f"F{idx:0{id_width}d}"
            label = item_label(item) if item_label else None
            future = executor.submit(
                _run_item, worker, item, stop_event, worker_id, file_id, label
            )
            futures[future] = idx - 1

        try:
            for future in as_completed(futures):
                index = futures[future]
                if future.cancelled():
                    continue
                results[index] = future.result()
        except KeyboardInterrupt:
            stop_event.set()
            logger.warning("Interrupted, waiting for active workers to finish")
            executor.shutdown(wait=True, cancel_futures=True)
            for future, index in futures.items():
                if future.done() and not future.cancelled():
                    results[index] = future.result()

    summary = BatchSummary(
        results=tuple(
            result
            if result is not None
            else ItemResult(item=item, success=False, cancelled=True)
            for item, result in zip(items, results)
        )
    )
    logger.info(
        "Batch finished: %d succeeded, %d failed, %d cancelled",
        summary.succeeded,
        summary.failed,
        summary.cancelled,
    )
    return summary

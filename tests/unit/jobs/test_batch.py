"""Tests for jobs/batch.py."""

import threading
import time
from unittest.mock import patch

from mediacompat.jobs.batch import (
    BatchSummary,
    ItemResult,
    get_max_workers,
    resolve_worker_count,
    run_batch,
)
from mediacompat.logging.context import get_worker_context


class TestRunBatch:
    """Tests for run_batch."""

    def test_results_in_input_order(self) -> None:
        """Results follow input order even when items finish out of order."""

        def slow_for_small(n: int) -> int:
            time.sleep(0.01 * (5 - n))
            return n * n

        summary = run_batch([1, 2, 3, 4], slow_for_small, max_workers=4)

        assert [r.item for r in summary.results] == [1, 2, 3, 4]
        assert summary.values == [1, 4, 9, 16]
        assert summary.succeeded == 4

    def test_failure_does_not_abort_batch(self) -> None:
        """A failing item is recorded while the others succeed."""

        def worker(n: int) -> int:
            if n == 2:
                raise ValueError("bad item")
            return n

        summary = run_batch([1, 2, 3], worker, max_workers=2)

        assert summary.succeeded == 2
        assert summary.failed == 1
        failed = summary.results[1]
        assert not failed.success
        assert failed.error_message == "bad item"
        assert not failed.cancelled

    def test_preset_stop_event_cancels_everything(self) -> None:
        """Items never start once the stop event is set."""
        stop = threading.Event()
        stop.set()
        calls = []

        summary = run_batch([1, 2, 3], calls.append, stop_event=stop)

        assert calls == []
        assert summary.cancelled == 3
        assert summary.failed == 0

    def test_stop_midway(self) -> None:
        """Setting the stop event cancels items that have not started."""
        stop = threading.Event()

        def worker(n: int) -> int:
            if n == 1:
                stop.set()
            return n

        summary = run_batch([1, 2, 3, 4], worker, max_workers=1, stop_event=stop)

        assert summary.results[0].success
        assert summary.cancelled == 3

    def test_empty_items(self) -> None:
        summary = run_batch([], lambda n: n)
        assert summary.results == ()

    def test_worker_context_tags(self) -> None:
        """Each item runs with its worker and file identifiers in context."""

        def worker(name: str) -> str:
            ctx = get_worker_context()
            return f"{ctx.worker_id}:{ctx.file_id}:{ctx.file_path}"

        items = [f"item{i}" for i in range(10)]
        summary = run_batch(
            items, worker, max_workers=3, item_label=lambda s: f"/m/{s}"
        )

        assert summary.values[0] == "01:F01:/m/item0"
        assert summary.values[2] == "03:F03:/m/item2"
        assert summary.values[3] == "01:F04:/m/item3"
        assert summary.values[9] == "01:F10:/m/item9"

    def test_context_cleared_after_item(self) -> None:
        """The calling thread has no worker context after the batch."""
        run_batch([1], lambda n: n, max_workers=1)
        assert get_worker_context() is None


class TestBatchSummary:
    def test_counts(self) -> None:
        summary = BatchSummary(
            results=(
                ItemResult(item=1, success=True, value="a"),
                ItemResult(item=2, success=False, error_message="x"),
                ItemResult(item=3, success=False, cancelled=True),
            )
        )
        assert (summary.succeeded, summary.failed, summary.cancelled) == (1, 1, 1)
        assert summary.values == ["a"]


class TestWorkerCount:
    """Tests for worker count resolution."""

    def test_max_workers_at_least_one(self) -> None:
        with patch("mediacompat.jobs.batch.os.cpu_count", return_value=None):
            assert get_max_workers() == 1

    def test_requested_wins_over_config(self) -> None:
        with patch("mediacompat.jobs.batch.get_max_workers", return_value=8):
            assert resolve_worker_count(2, 4) == 2
            assert resolve_worker_count(None, 4) == 4

    def test_capped(self) -> None:
        """Counts above the CPU cap are reduced."""
        with patch("mediacompat.jobs.batch.get_max_workers", return_value=4):
            assert resolve_worker_count(16, 2) == 4

    def test_minimum_one(self) -> None:
        with patch("mediacompat.jobs.batch.get_max_workers", return_value=4):
            assert resolve_worker_count(0, 2) == 1

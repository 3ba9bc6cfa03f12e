"""Tests for the latest-request-wins background preview scheduler."""

from __future__ import annotations

import threading
import time
import unittest

from lazydiff.runtime.preview_worker import PreviewRequest, PreviewResult, PreviewScheduler
from lazydiff.tree_model import ChangedPath


def _wait_for_results(scheduler: PreviewScheduler, count: int, timeout: float = 5.0) -> list[PreviewResult]:
    results: list[PreviewResult] = []
    deadline = time.monotonic() + timeout
    while len(results) < count and time.monotonic() < deadline:
        results.extend(scheduler.drain_results())
        time.sleep(0.01)
    return results


class PreviewSchedulerTests(unittest.TestCase):
    def test_completed_preview_is_drained_once(self) -> None:
        scheduler = PreviewScheduler(lambda file, width: f"{file.path}@{width}")

        scheduler.schedule(PreviewRequest(1, ChangedPath("a.txt"), 80))
        results = _wait_for_results(scheduler, 1)

        self.assertEqual([(r.request.request_id, r.content) for r in results], [(1, "a.txt@80")])
        self.assertEqual(scheduler.drain_results(), [])

    def test_only_latest_pending_request_runs(self) -> None:
        started = threading.Event()
        release = threading.Event()
        calls: list[str] = []

        def build(file: ChangedPath, width: int) -> str:
            calls.append(file.path)
            if file.path == "first":
                started.set()
                release.wait(5)
            return file.path

        scheduler = PreviewScheduler(build)
        scheduler.schedule(PreviewRequest(1, ChangedPath("first"), 80))
        self.assertTrue(started.wait(5))
        scheduler.schedule(PreviewRequest(2, ChangedPath("second"), 80))
        scheduler.schedule(PreviewRequest(3, ChangedPath("third"), 80))
        release.set()

        results = _wait_for_results(scheduler, 2)

        self.assertEqual([r.request.request_id for r in results], [1, 3])
        self.assertEqual(calls, ["first", "third"])

    def test_builder_failure_becomes_error_text(self) -> None:
        def build(file: ChangedPath, width: int) -> str:
            raise RuntimeError("boom")

        scheduler = PreviewScheduler(build)
        with self.assertLogs("lazydiff.runtime.preview_worker", level="ERROR"):
            scheduler.schedule(PreviewRequest(7, ChangedPath("x.py"), 80))
            results = _wait_for_results(scheduler, 1)

        self.assertEqual(results[0].content, "error: could not render x.py")

"""Tests for the interactive loop wiring with a fake terminal."""

from __future__ import annotations

import contextlib
import os
import unittest
from unittest import mock

from lazydiff.runtime.loop import RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop
from lazydiff.runtime.preview_worker import PreviewRequest, PreviewResult
from lazydiff.runtime.state import initial_state
from lazydiff.tree_model import ChangedPath, build_display_lines
from lazydiff.ui_theme import PLAIN_THEME

A_GO = ChangedPath("a.go", staged=True)
D_GO = ChangedPath("c/d.go", unstaged=True)


class _FakeTerminal:
    def __init__(self) -> None:
        self.frames: list[str] = []
        self.raw_entered = 0

    def write(self, frame: str) -> None:
        self.frames.append(frame)

    @contextlib.contextmanager
    def raw_mode(self):
        self.raw_entered += 1
        yield


class RunMainLoopTests(unittest.TestCase):
    def _callbacks(self, scheduled: list[PreviewRequest], results: list[PreviewResult], **overrides):
        def drain() -> list[PreviewResult]:
            out = list(results)
            results.clear()
            return out

        values = dict(
            schedule_preview=scheduled.append,
            drain_previews=drain,
            open_full_diff=lambda file, width: None,
            terminal_size=lambda: os.terminal_size((100, 8)),
        )
        values.update(overrides)
        return RuntimeLoopCallbacks(**values)

    def test_moves_schedule_previews_and_quit_returns_state(self) -> None:
        terminal = _FakeTerminal()
        scheduled: list[PreviewRequest] = []
        state = initial_state(build_display_lines([A_GO, D_GO]))

        with mock.patch("lazydiff.runtime.loop.read_key", side_effect=["j", "q"]):
            final = run_main_loop(state, terminal, 0, PLAIN_THEME, self._callbacks(scheduled, []), RuntimeLoopTiming(1))

        self.assertEqual(terminal.raw_entered, 1)
        self.assertEqual([request.file for request in scheduled], [D_GO, A_GO])
        self.assertEqual([request.request_id for request in scheduled], [1, 2])
        self.assertEqual(final.nav.cursor, 2)
        self.assertEqual(len(terminal.frames), 2)
        self.assertIn("Changed Files", terminal.frames[0])

    def test_finished_previews_reach_the_screen(self) -> None:
        terminal = _FakeTerminal()
        scheduled: list[PreviewRequest] = []
        results: list[PreviewResult] = []
        state = initial_state(build_display_lines([A_GO]))

        def fake_read_key(fd: int, timeout_ms: int | None = None) -> str:
            if scheduled and not terminal.frames[1:]:
                results.append(PreviewResult(request=scheduled[-1], content="rendered-preview-text"))
                return ""
            return "q"

        with mock.patch("lazydiff.runtime.loop.read_key", side_effect=fake_read_key):
            run_main_loop(state, terminal, 0, PLAIN_THEME, self._callbacks(scheduled, results))

        self.assertIn("rendered-preview-text", terminal.frames[-1])

    def test_full_diff_error_is_routed_back_as_pager_closed(self) -> None:
        terminal = _FakeTerminal()
        scheduled: list[PreviewRequest] = []
        opened: list[tuple[ChangedPath, int]] = []
        state = initial_state(build_display_lines([A_GO]))

        def open_full_diff(file: ChangedPath, width: int) -> str | None:
            opened.append((file, width))
            return "error: less: not found"

        callbacks = self._callbacks(scheduled, [], open_full_diff=open_full_diff)
        with mock.patch("lazydiff.runtime.loop.read_key", side_effect=["ENTER_CR", "q"]):
            final = run_main_loop(state, terminal, 0, PLAIN_THEME, callbacks)

        self.assertEqual(opened, [(A_GO, 100)])
        self.assertEqual(final.preview, ("error: less: not found",))

"""Main interactive event loop for the terminal UI.

Turns terminal size changes, key presses, and finished previews into events,
feeds them through ``transition``, and runs the effects it returns. Feature
logic lives in ``transition`` and the injected callbacks.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass

from ..tree_model.types import ChangedPath
from ..ui_theme import DiffTheme
from .events import Event, KeyPressed, LoadPreview, OpenFullDiff, PagerClosed, PreviewLoaded, Quit, Resized
from .input import read_key
from .preview_worker import PreviewRequest, PreviewResult
from .screen import compose_frame
from .state import AppState
from .terminal import TerminalController
from .transition import transition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    input_poll_ms: int = 50


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``.

    ``open_full_diff`` returns a one-line error message or ``None``.
    """

    schedule_preview: Callable[[PreviewRequest], None]
    drain_previews: Callable[[], list[PreviewResult]]
    open_full_diff: Callable[[ChangedPath, int], str | None]
    terminal_size: Callable[[], os.terminal_size] = lambda: shutil.get_terminal_size((80, 24))


def _collect_events(
    last_size: tuple[int, int] | None,
    callbacks: RuntimeLoopCallbacks,
) -> tuple[tuple[int, int], list[Event]]:
    """Return the current size and any resize or preview events."""
    term = callbacks.terminal_size()
    size = (term.columns, term.lines)
    events: list[Event] = []
    if size != last_size:
        events.append(Resized(width=size[0], height=size[1]))
    for result in callbacks.drain_previews():
        events.append(
            PreviewLoaded(
                request_id=result.request.request_id,
                path=result.request.file.path,
                content=result.content,
            )
        )
    return size, events


def run_main_loop(
    state: AppState,
    terminal: TerminalController,
    stdin_fd: int,
    theme: DiffTheme,
    callbacks: RuntimeLoopCallbacks,
    timing: RuntimeLoopTiming | None = None,
) -> AppState:
    """Run the interactive loop until a ``Quit`` effect; return the final state.

    Each iteration polls the terminal size, drains finished previews, redraws
    when something changed, and waits briefly for one key.
    """
    loop_timing = timing or RuntimeLoopTiming()
    last_size: tuple[int, int] | None = None
    pending: deque[Event] = deque()
    dirty = True

    with terminal.raw_mode():
        while True:
            last_size, polled = _collect_events(last_size, callbacks)
            pending.extend(polled)

            if not pending:
                if dirty:
                    terminal.write(compose_frame(state, theme))
                    dirty = False
                key = read_key(stdin_fd, timeout_ms=loop_timing.input_poll_ms)
                if key:
                    pending.append(KeyPressed(key))

            while pending:
                event = pending.popleft()
                state, effects = transition(state, event)
                dirty = True
                for effect in effects:
                    if isinstance(effect, Quit):
                        return state
                    if isinstance(effect, LoadPreview):
                        callbacks.schedule_preview(
                            PreviewRequest(
                                request_id=effect.request_id,
                                file=effect.file,
                                width=effect.width,
                            )
                        )
                    elif isinstance(effect, OpenFullDiff):
                        error = callbacks.open_full_diff(effect.file, effect.width)
                        if error:
                            logger.warning("%s", error)
                        pending.append(PagerClosed(error=error))


__all__ = [
    "RuntimeLoopTiming",
    "RuntimeLoopCallbacks",
    "run_main_loop",
]

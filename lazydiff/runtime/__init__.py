"""Interactive runtime: pure state transitions plus the terminal shell around them.

``transition`` and ``AppState`` are importable without touching the terminal;
``run_browser`` imports the tty-dependent pieces lazily.
"""

from __future__ import annotations

from .events import KeyPressed, LoadPreview, OpenFullDiff, PagerClosed, PreviewLoaded, Quit, Resized
from .navigation import NavigationState, move_cursor, on_filter_changed, on_query_committed, selected_file
from .state import AppState, initial_state
from .transition import transition


def run_browser(*args, **kwargs):
    """Lazily import the browser entrypoint to keep termios out of plain imports."""
    from .app import run_browser as _run_browser

    return _run_browser(*args, **kwargs)


__all__ = [
    "AppState",
    "initial_state",
    "transition",
    "NavigationState",
    "move_cursor",
    "on_filter_changed",
    "on_query_committed",
    "selected_file",
    "KeyPressed",
    "Resized",
    "PreviewLoaded",
    "PagerClosed",
    "LoadPreview",
    "OpenFullDiff",
    "Quit",
    "run_browser",
]

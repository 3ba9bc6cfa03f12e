"""Pure state transitions for the interactive browser.

``transition(state, event)`` returns the next state and the effects the
shell must run. It never touches the terminal, git, or threads.
"""

from __future__ import annotations

from dataclasses import replace

from ..tree_model import compute_tree_width, filter_display_lines
from .events import (
    Effect,
    Event,
    KeyPressed,
    LoadPreview,
    OpenFullDiff,
    PagerClosed,
    PreviewLoaded,
    Quit,
    Resized,
)
from .navigation import move_cursor, on_filter_changed, on_query_committed, selected_file
from .state import AppState

ENTER_KEYS = frozenset({"ENTER_CR", "ENTER_LF"})
QUIT_KEYS = frozenset({"q", "CTRL_C"})
UP_KEYS = frozenset({"UP", "k"})
DOWN_KEYS = frozenset({"DOWN", "j"})

Result = tuple[AppState, list[Effect]]


def split_preview(content: str) -> tuple[str, ...]:
    """Split rendered preview text into display lines."""
    if not content:
        return ()
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return tuple(lines)


def request_preview(state: AppState) -> Result:
    """Ask for the selected file's preview, superseding any pending request.

    Directory rows and an empty tree clear the preview without a request.
    """
    if not state.ready:
        return state, []
    request_id = state.request_id + 1
    changed = selected_file(state.nav, state.lines, state.visible)
    if changed is None:
        return replace(state, request_id=request_id, preview=(), preview_scroll=0), []
    next_state = replace(state, request_id=request_id)
    return next_state, [LoadPreview(request_id=request_id, file=changed, width=state.render_width)]


def apply_query(state: AppState, query: str) -> AppState:
    """Re-filter rows for ``query`` and clamp the cursor into the result."""
    visible = tuple(filter_display_lines(state.lines, query))
    nav = on_filter_changed(state.nav, len(visible), state.viewport_height)
    return replace(state, query=query, visible=visible, nav=nav)


def scroll_preview(state: AppState, delta: int) -> AppState:
    max_scroll = max(0, len(state.preview) - state.height)
    scroll = max(0, min(max_scroll, state.preview_scroll + delta))
    return replace(state, preview_scroll=scroll)


def _handle_search_key(state: AppState, key: str) -> Result:
    if key in ENTER_KEYS:
        nav = on_query_committed(state.nav, state.lines, state.visible, state.viewport_height)
        return request_preview(replace(state, searching=False, nav=nav))
    if key == "ESC":
        return request_preview(apply_query(replace(state, searching=False), ""))
    if key == "CTRL_C":
        return state, [Quit()]
    if key == "BACKSPACE":
        if not state.query:
            return state, []
        return apply_query(state, state.query[:-1]), []
    if len(key) == 1 and key.isprintable():
        return apply_query(state, state.query + key), []
    return state, []


def _handle_normal_key(state: AppState, key: str) -> Result:
    if key in QUIT_KEYS:
        return state, [Quit()]
    if key == "ESC":
        if state.query:
            return request_preview(apply_query(state, ""))
        return state, [Quit()]
    if key in UP_KEYS or key in DOWN_KEYS:
        delta = -1 if key in UP_KEYS else 1
        nav = move_cursor(state.nav, delta, len(state.visible), state.viewport_height)
        moved = replace(state, nav=nav)
        if nav.cursor == state.nav.cursor:
            return moved, []
        return request_preview(moved)
    if key in ENTER_KEYS:
        changed = selected_file(state.nav, state.lines, state.visible)
        if changed is None or not state.ready:
            return state, []
        return state, [OpenFullDiff(file=changed, width=state.width)]
    if key == "/":
        return apply_query(replace(state, searching=True), ""), []
    if key == "CTRL_D":
        return scroll_preview(state, max(1, state.height // 2)), []
    if key == "CTRL_U":
        return scroll_preview(state, -max(1, state.height // 2)), []
    return state, []


def transition(state: AppState, event: Event) -> Result:
    """Return the next state and requested effects for one event."""
    if isinstance(event, KeyPressed):
        if state.searching:
            return _handle_search_key(state, event.key)
        return _handle_normal_key(state, event.key)

    if isinstance(event, Resized):
        width = max(1, event.width)
        height = max(1, event.height)
        resized = replace(
            state,
            width=width,
            height=height,
            tree_width=compute_tree_width(width),
            ready=True,
        )
        nav = on_filter_changed(resized.nav, len(resized.visible), resized.viewport_height)
        return request_preview(replace(resized, nav=nav))

    if isinstance(event, PreviewLoaded):
        if event.request_id != state.request_id:
            return state, []
        return replace(state, preview=split_preview(event.content), preview_scroll=0), []

    if isinstance(event, PagerClosed):
        if event.error:
            return replace(state, preview=(event.error,), preview_scroll=0), []
        return request_preview(state)

    return state, []


__all__ = [
    "transition",
    "request_preview",
    "apply_query",
    "scroll_preview",
    "split_preview",
]

"""Cursor and scroll bookkeeping over the visible tree rows.

This module has no UI concerns. Positions index into the filtered ``visible``
list, never into the full row list.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..tree_model.types import ChangedPath, DisplayLine


@dataclass(frozen=True)
class NavigationState:
    """Cursor position in the visible rows and first visible row of the viewport."""

    cursor: int = 0
    scroll: int = 0


def _scroll_to_cursor(cursor: int, scroll: int, viewport_height: int) -> int:
    """Smallest scroll change that keeps ``cursor`` inside the viewport."""
    height = max(1, viewport_height)
    if cursor < scroll:
        return cursor
    if cursor >= scroll + height:
        return cursor - height + 1
    return scroll


def move_cursor(
    nav: NavigationState,
    delta: int,
    visible_count: int,
    viewport_height: int,
) -> NavigationState:
    """Move the cursor by ``delta`` rows, clamped, scrolling minimally.

    With no visible rows the state is returned unchanged.
    """
    if visible_count <= 0:
        return nav
    cursor = max(0, min(visible_count - 1, nav.cursor + delta))
    return NavigationState(cursor=cursor, scroll=_scroll_to_cursor(cursor, nav.scroll, viewport_height))


def on_filter_changed(
    nav: NavigationState,
    visible_count: int,
    viewport_height: int | None = None,
) -> NavigationState:
    """Clamp the cursor into a resized visible list.

    The scroll offset never exceeds the cursor; when ``viewport_height`` is
    given the cursor is also kept inside the viewport.
    """
    cursor = max(0, min(nav.cursor, visible_count - 1))
    scroll = min(nav.scroll, cursor)
    if viewport_height is not None:
        scroll = _scroll_to_cursor(cursor, scroll, viewport_height)
    return NavigationState(cursor=cursor, scroll=scroll)


def first_file_position(lines: Sequence[DisplayLine], visible: Sequence[int]) -> int | None:
    """Return the position in ``visible`` of the first file row, if any."""
    for position, index in enumerate(visible):
        if lines[index].file is not None:
            return position
    return None


def on_query_committed(
    nav: NavigationState,
    lines: Sequence[DisplayLine],
    visible: Sequence[int],
    viewport_height: int,
) -> NavigationState:
    """Jump to the first visible file row; keep the cursor when there is none."""
    position = first_file_position(lines, visible)
    if position is None:
        return on_filter_changed(nav, len(visible), viewport_height)
    scroll = _scroll_to_cursor(position, min(nav.scroll, position), viewport_height)
    return NavigationState(cursor=position, scroll=scroll)


def selected_line(
    nav: NavigationState,
    lines: Sequence[DisplayLine],
    visible: Sequence[int],
) -> DisplayLine | None:
    if not visible or not 0 <= nav.cursor < len(visible):
        return None
    return lines[visible[nav.cursor]]


def selected_file(
    nav: NavigationState,
    lines: Sequence[DisplayLine],
    visible: Sequence[int],
) -> ChangedPath | None:
    """Changed-path record under the cursor, or ``None`` on a directory row."""
    line = selected_line(nav, lines, visible)
    return line.file if line is not None else None


__all__ = [
    "NavigationState",
    "move_cursor",
    "on_filter_changed",
    "first_file_position",
    "on_query_committed",
    "selected_line",
    "selected_file",
]

"""Frame composition for the two-pane browser.

Builds one frame string purely from ``AppState`` and the theme; writing it to
the terminal is the loop's job.
"""

from __future__ import annotations

from ..ansi import pad_ansi_line, styled
from ..tree_model import compute_preview_width, format_search_footer, format_tree_row
from ..ui_theme import DARK_THEME, DiffTheme
from .state import AppState

LOADING_TEXT = "Loading..."
TREE_TITLE = "Changed Files"
DIVIDER = "│"
CLEAR_SCREEN = "\033[H\033[J"


def tree_pane_rows(state: AppState, theme: DiffTheme) -> list[str]:
    """Title, visible tree rows, blank filler, and footer; ``height`` rows total."""
    width = state.tree_width
    rows = [pad_ansi_line(styled(TREE_TITLE, theme.title), width)]
    start = state.nav.scroll
    end = min(len(state.visible), start + state.viewport_height)
    for position in range(start, end):
        line = state.lines[state.visible[position]]
        row = format_tree_row(line, width, selected=position == state.nav.cursor, theme=theme)
        rows.append(pad_ansi_line(row, width))
    while len(rows) < state.height - 1:
        rows.append(" " * width)
    rows.append(pad_ansi_line(format_search_footer(state.query, state.searching, theme), width))
    return rows[: state.height]


def preview_pane_rows(state: AppState) -> list[str]:
    """Preview lines from the scroll offset, clipped and padded to the pane."""
    width = compute_preview_width(state.width, state.tree_width)
    rows: list[str] = []
    for row in range(state.height):
        index = state.preview_scroll + row
        text = state.preview[index] if index < len(state.preview) else ""
        rows.append(pad_ansi_line(text, width))
    return rows


def compose_rows(state: AppState, theme: DiffTheme | None = None) -> list[str]:
    """Return the screen as a list of rows."""
    active_theme = theme or DARK_THEME
    if not state.ready:
        return [LOADING_TEXT]
    divider = styled(DIVIDER, active_theme.border)
    tree_rows = tree_pane_rows(state, active_theme)
    preview_rows = preview_pane_rows(state)
    return [f"{tree}{divider}{preview}" for tree, preview in zip(tree_rows, preview_rows)]


def compose_frame(state: AppState, theme: DiffTheme | None = None) -> str:
    """Return the full escape-sequence frame for one redraw."""
    return CLEAR_SCREEN + "\r\n".join(compose_rows(state, theme))


__all__ = [
    "LOADING_TEXT",
    "TREE_TITLE",
    "tree_pane_rows",
    "preview_pane_rows",
    "compose_rows",
    "compose_frame",
]

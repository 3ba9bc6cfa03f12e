"""Formatting helpers for tree-pane rows and status badges."""

from __future__ import annotations

from ..ansi import ELLIPSIS, display_width, styled, take_columns
from ..ui_theme import DARK_THEME, DiffTheme
from .types import ChangedPath, DisplayLine

INDENT_UNIT = "  "


def format_status_badge(changed: ChangedPath, theme: DiffTheme | None = None) -> tuple[str, str]:
    """Return ``(plain, styled)`` badge text for a changed path.

    Badges are two columns wide so file names line up; records without any
    flag (base-branch mode) get no badge at all.
    """
    active_theme = theme or DARK_THEME
    label = changed.status_label()
    if not label:
        return "", ""
    colors = {
        "?": active_theme.badge_untracked,
        "S": active_theme.badge_staged,
        "M": active_theme.badge_unstaged,
    }
    badge = "".join(styled(ch, colors[ch]) for ch in label)
    if label in {"S", "M"}:
        return label + " ", badge + " "
    return label, badge


def plain_tree_row(line: DisplayLine) -> str:
    """Return the uncoloured row text for ``line``."""
    indent = INDENT_UNIT * line.indent
    if line.file is None:
        return indent + line.label
    badge, _ = format_status_badge(line.file)
    return f"{indent}{badge} {line.label}"


def _clip_plain(text: str, width: int) -> tuple[str, bool]:
    """Clip plain text to ``width`` columns, ending in an ellipsis when cut."""
    if display_width(text) <= width:
        return text, False
    if width <= 1:
        return ELLIPSIS[:width], True
    head, _used = take_columns(text, width - 1)
    return head + ELLIPSIS, True


def format_tree_row(
    line: DisplayLine,
    width: int,
    selected: bool = False,
    theme: DiffTheme | None = None,
) -> str:
    """Render one tree row clipped to ``width`` columns.

    The selected row is padded to the full width and drawn in the cursor
    style. Rows that do not fit are clipped and drawn without per-part colour.
    """
    active_theme = theme or DARK_THEME
    plain = plain_tree_row(line)
    clipped, truncated = _clip_plain(plain, width)
    if selected:
        padding = " " * max(0, width - display_width(clipped))
        return styled(clipped + padding, active_theme.cursor)
    if truncated:
        return clipped

    indent = INDENT_UNIT * line.indent
    if line.file is None:
        return indent + styled(line.label, active_theme.tree_dir)
    _badge_plain, badge = format_status_badge(line.file, active_theme)
    return f"{indent}{badge} {styled(line.label, active_theme.tree_file)}"


def format_search_footer(query: str, searching: bool, theme: DiffTheme | None = None) -> str:
    """Return the tree-pane footer: search prompt, active query, or key hints."""
    active_theme = theme or DARK_THEME
    if searching:
        return styled(f"/{query}█", active_theme.search)
    if query:
        return styled(f"/{query}", active_theme.search) + styled("  esc clear", active_theme.border)
    return styled("/ search  ⏎ view  q quit", active_theme.border)


__all__ = [
    "INDENT_UNIT",
    "format_status_badge",
    "plain_tree_row",
    "format_tree_row",
    "format_search_footer",
]

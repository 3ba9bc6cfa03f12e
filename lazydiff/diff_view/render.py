"""Render parsed diffs as width-adaptive terminal text.

Wide panes get an aligned two-column layout, narrow panes a unified one.
Text that does not parse as a diff is returned verbatim.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..ansi import ELLIPSIS, display_width, styled, take_columns
from ..errors import DiffParseError
from ..ui_theme import DARK_THEME, DiffTheme
from .cells import Tint, render_cell
from .highlight import Tokenizer, make_tokenizer
from .layout import (
    LINE_NUMBER_WIDTH,
    Cell,
    side_by_side_column_width,
    side_by_side_rows,
    unified_rows,
    unified_text_width,
)
from .parse import FileDiff, LineOp, TextFragment, parse_unified_diff

SIDE_BY_SIDE_MIN_WIDTH = 120
DEFAULT_WIDTH = 80
HEADER_RULE = "─"
GUTTER = " │ "
BINARY_NOTICE = "  Binary file"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiffPainter:
    """Theme, tokenizer, and filename used to paint one file's rows."""

    theme: DiffTheme
    tokenizer: Tokenizer
    filename: str

    def cell(self, text: str, width: int, tint: Tint, pad: bool = True) -> str:
        return render_cell(
            text,
            width,
            tint,
            theme=self.theme,
            tokenizer=self.tokenizer,
            filename=self.filename,
            pad=pad,
        )

    def number(self, value: int | None) -> str:
        """Right-aligned line number, or blank gutter space."""
        if value is None:
            return " " * LINE_NUMBER_WIDTH
        return styled(f"{value:>{LINE_NUMBER_WIDTH}}", self.theme.line_number)


def format_file_header(name: str, width: int, theme: DiffTheme) -> str:
    """``── name ───…`` filled to exactly ``width`` columns."""
    header = f"{HEADER_RULE}{HEADER_RULE} {name} "
    header_width = display_width(header)
    if header_width > width:
        head, used = take_columns(header, max(0, width - 1))
        header = head + ELLIPSIS + " " * max(0, width - 1 - used)
    else:
        header += HEADER_RULE * (width - header_width)
    return styled(header, theme.file_header)


def _render_side_by_side(fragment: TextFragment, width: int, painter: DiffPainter) -> list[str]:
    column_width = side_by_side_column_width(width)
    gutter = styled(GUTTER, painter.theme.gutter)

    def side(cell: Cell) -> str:
        return f"{painter.number(cell.number)} {painter.cell(cell.text, column_width, cell.tint)}"

    return [f"{side(row.left)}{gutter}{side(row.right)}" for row in side_by_side_rows(fragment)]


def _render_unified(fragment: TextFragment, width: int, painter: DiffPainter) -> list[str]:
    text_width = unified_text_width(width)
    theme = painter.theme
    out: list[str] = []
    for row in unified_rows(fragment):
        numbers = painter.number(row.old_number) + " " + painter.number(row.new_number)
        if row.op is LineOp.DELETE:
            marker = styled(" -", theme.delete_marker) + " "
            tint = Tint.DELETE
        elif row.op is LineOp.ADD:
            marker = styled(" +", theme.add_marker) + " "
            tint = Tint.ADD
        else:
            marker = "   "
            tint = Tint.NONE
        out.append(numbers + marker + painter.cell(row.text, text_width, tint, pad=False))
    return out


def render_file(
    file_diff: FileDiff,
    width: int,
    filename: str = "",
    *,
    theme: DiffTheme | None = None,
    tokenizer: Tokenizer | None = None,
) -> str:
    """Render one file section: header, then every hunk at ``width``."""
    active_theme = theme or DARK_THEME
    name = filename or file_diff.display_name
    out = [format_file_header(name, width, active_theme)]
    if file_diff.is_binary:
        out.append(styled(BINARY_NOTICE, active_theme.context_dim))
        return "\n".join(out) + "\n"

    painter = DiffPainter(
        theme=active_theme,
        tokenizer=tokenizer if tokenizer is not None else make_tokenizer(active_theme),
        filename=name,
    )
    for fragment in file_diff.fragments:
        if fragment.comment:
            comment, _used = take_columns(fragment.comment, width)
            out.append(styled(comment, active_theme.hunk_header))
        if width >= SIDE_BY_SIDE_MIN_WIDTH:
            out.extend(_render_side_by_side(fragment, width, painter))
        else:
            out.extend(_render_unified(fragment, width, painter))
    return "\n".join(out) + "\n"


def render_diff(
    raw: str,
    width: int,
    filename: str = "",
    *,
    theme: DiffTheme | None = None,
    tokenizer: Tokenizer | None = None,
) -> str:
    """Render raw unified-diff text for display at ``width`` columns.

    Falls back to ``raw`` unchanged when it does not parse or contains no
    file sections. A non-positive width means the default of 80.
    """
    if width <= 0:
        width = DEFAULT_WIDTH
    try:
        files = parse_unified_diff(raw)
    except DiffParseError as exc:
        logger.debug("showing raw diff text: %s", exc)
        return raw
    if not files:
        return raw

    active_theme = theme or DARK_THEME
    active_tokenizer = tokenizer if tokenizer is not None else make_tokenizer(active_theme)
    return "\n".join(
        render_file(file_diff, width, filename, theme=active_theme, tokenizer=active_tokenizer)
        for file_diff in files
    )


__all__ = [
    "SIDE_BY_SIDE_MIN_WIDTH",
    "DEFAULT_WIDTH",
    "DiffPainter",
    "format_file_header",
    "render_file",
    "render_diff",
]

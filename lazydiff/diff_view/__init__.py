"""Diff layout and rendering engine.

Parses unified diffs, groups and pairs hunk lines, and renders them as
side-by-side or unified terminal text for a given width.
"""

from __future__ import annotations

from .cells import Tint, render_cell
from .grouping import LineGroup, group_lines
from .highlight import PlainTokenizer, PygmentsTokenizer, StyledSpan, Tokenizer, make_tokenizer
from .layout import (
    BLANK_CELL,
    Cell,
    SideBySideRow,
    UnifiedRow,
    side_by_side_column_width,
    side_by_side_rows,
    unified_rows,
    unified_text_width,
)
from .parse import DiffLine, FileDiff, LineOp, TextFragment, parse_unified_diff
from .render import SIDE_BY_SIDE_MIN_WIDTH, render_diff, render_file

__all__ = [
    "Tint",
    "render_cell",
    "LineGroup",
    "group_lines",
    "StyledSpan",
    "Tokenizer",
    "PlainTokenizer",
    "PygmentsTokenizer",
    "make_tokenizer",
    "BLANK_CELL",
    "Cell",
    "SideBySideRow",
    "UnifiedRow",
    "side_by_side_column_width",
    "side_by_side_rows",
    "unified_rows",
    "unified_text_width",
    "DiffLine",
    "FileDiff",
    "LineOp",
    "TextFragment",
    "parse_unified_diff",
    "SIDE_BY_SIDE_MIN_WIDTH",
    "render_diff",
    "render_file",
]

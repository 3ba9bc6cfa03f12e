"""Fit one line of diff text into a fixed-width, optionally tinted cell.

Pipeline: tab expansion, tokenization, truncation with an ellipsis, and
right-padding with tinted spaces. Widths are display columns.
"""

from __future__ import annotations

from enum import Enum

from ..ansi import ELLIPSIS, display_width, expand_tabs, styled, take_columns
from ..ui_theme import DiffTheme
from .highlight import Tokenizer, tokenize_line


class Tint(Enum):
    """Background applied to a cell."""

    NONE = "none"
    ADD = "add"
    DELETE = "delete"


def tint_params(tint: Tint, theme: DiffTheme) -> str:
    """Background SGR parameters for ``tint``."""
    if tint is Tint.ADD:
        return theme.bg_add
    if tint is Tint.DELETE:
        return theme.bg_delete
    return ""


def render_cell(
    text: str,
    width: int,
    tint: Tint,
    *,
    theme: DiffTheme,
    tokenizer: Tokenizer,
    filename: str,
    pad: bool = True,
) -> str:
    """Render ``text`` into a cell of ``width`` columns.

    Text wider than ``width`` is cut to ``width - 1`` columns followed by an
    ellipsis. With ``pad`` the result is exactly ``width`` columns wide.
    """
    if width <= 0:
        return ""
    background = tint_params(tint, theme)
    text = expand_tabs(text)
    truncated = display_width(text) > width
    limit = width - 1 if truncated else width

    out: list[str] = []
    used = 0
    for span in tokenize_line(tokenizer, filename, text):
        piece, piece_width = take_columns(span.text, limit - used)
        if piece:
            out.append(styled(piece, span.sgr_params(), background))
        used += piece_width
        if len(piece) < len(span.text):
            break

    if truncated:
        out.append(styled(ELLIPSIS, theme.truncate, background))
        used += 1
    if pad and used < width:
        out.append(styled(" " * (width - used), background))
    return "".join(out)


__all__ = ["Tint", "tint_params", "render_cell"]

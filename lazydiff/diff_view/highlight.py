"""Syntax tokenization of single diff lines into styled spans.

Pygments supplies lexers (chosen by filename) and styles. Any tokenizer
failure degrades to one unstyled span; it never propagates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.style import Style
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from ..ansi import fg_params
from ..ui_theme import DiffTheme

DEFAULT_STYLE = "monokai"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StyledSpan:
    """A run of text with its foreground attributes."""

    text: str
    color: str | None = None
    bold: bool = False
    italic: bool = False
    underline: bool = False

    def sgr_params(self) -> str:
        """Foreground SGR parameters for this span (empty when unstyled)."""
        params: list[str] = []
        if self.bold:
            params.append("1")
        if self.italic:
            params.append("3")
        if self.underline:
            params.append("4")
        if self.color:
            try:
                params.append(fg_params(self.color))
            except ValueError:
                pass
        return ";".join(params)


class Tokenizer(Protocol):
    def tokenize(self, filename: str, text: str) -> list[StyledSpan]:
        """Split one line of ``text`` into styled spans."""
        ...


class PlainTokenizer:
    """Tokenizer that never styles anything."""

    def tokenize(self, filename: str, text: str) -> list[StyledSpan]:
        return [StyledSpan(text)] if text else []


class PygmentsTokenizer:
    """Pygments-backed tokenizer with per-filename lexer caching."""

    def __init__(self, style_name: str = DEFAULT_STYLE) -> None:
        self.style = _load_style(style_name)
        self._lexers: dict[str, Lexer] = {}

    def _lexer_for(self, filename: str) -> Lexer:
        lexer = self._lexers.get(filename)
        if lexer is not None:
            return lexer
        try:
            lexer = get_lexer_for_filename(filename, stripnl=False, ensurenl=False)
        except ClassNotFound:
            lexer = TextLexer(stripnl=False, ensurenl=False)
        self._lexers[filename] = lexer
        return lexer

    def tokenize(self, filename: str, text: str) -> list[StyledSpan]:
        spans: list[StyledSpan] = []
        for token_type, value in self._lexer_for(filename).get_tokens(text):
            if not value:
                continue
            attrs = self.style.style_for_token(token_type)
            spans.append(
                StyledSpan(
                    value,
                    color=attrs.get("color") or None,
                    bold=bool(attrs.get("bold")),
                    italic=bool(attrs.get("italic")),
                    underline=bool(attrs.get("underline")),
                )
            )
        return spans


def _load_style(style_name: str) -> type[Style]:
    """Return the named Pygments style, falling back to ``monokai``."""
    try:
        return get_style_by_name(style_name)
    except ClassNotFound:
        logger.debug("unknown pygments style %r, using %s", style_name, DEFAULT_STYLE)
        return get_style_by_name(DEFAULT_STYLE)


def make_tokenizer(theme: DiffTheme) -> Tokenizer:
    """Return the tokenizer matching a theme's syntax style."""
    if not theme.colorize:
        return PlainTokenizer()
    return PygmentsTokenizer(theme.syntax_style)


def tokenize_line(tokenizer: Tokenizer, filename: str, text: str) -> list[StyledSpan]:
    """Tokenize ``text`` and fall back to one plain span on any failure.

    Results whose spans do not reproduce ``text`` exactly are also replaced,
    so column math stays correct.
    """
    if not text:
        return []
    try:
        spans = tokenizer.tokenize(filename, text)
    except Exception as exc:
        logger.debug("tokenizer failed for %s: %s", filename, exc)
        return [StyledSpan(text)]
    if "".join(span.text for span in spans) != text:
        return [StyledSpan(text)]
    return spans


__all__ = [
    "DEFAULT_STYLE",
    "StyledSpan",
    "Tokenizer",
    "PlainTokenizer",
    "PygmentsTokenizer",
    "make_tokenizer",
    "tokenize_line",
]

"""ANSI-aware text measurement and line shaping utilities.

Widths are terminal display columns: escape sequences count zero, East Asian
wide characters count two. Nothing here ever splits a character.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
RESET = "\033[0m"
TAB_WIDTH = 4
ELLIPSIS = "…"


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks consume no columns and East Asian wide/fullwidth
    characters consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    """Remove escape sequences from ``text``."""
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    """Return visible column width of a possibly styled string."""
    return sum(char_display_width(ch) for ch in strip_ansi(text))


def expand_tabs(text: str) -> str:
    """Replace every tab with a fixed run of spaces."""
    return text.replace("\t", " " * TAB_WIDTH)


def take_columns(text: str, max_cols: int) -> tuple[str, int]:
    """Return the longest prefix of plain ``text`` fitting ``max_cols`` and its width."""
    out: list[str] = []
    col = 0
    for ch in text:
        w = char_display_width(ch)
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
    return "".join(out), col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n and col <= max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch)
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
        i += 1

    return "".join(out)


def pad_ansi_line(text: str, width: int) -> str:
    """Clip then right-pad a styled line to exactly ``width`` columns."""
    clipped = clip_ansi_line(text, width)
    if "\033" in clipped:
        clipped += RESET
    return clipped + " " * max(0, width - display_width(clipped))


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    """Parse ``#rrggbb`` (or ``rrggbb``) into an RGB triple."""
    value = color.lstrip("#")
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    if len(value) != 6:
        raise ValueError(f"invalid hex color: {color!r}")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def fg_params(color: str) -> str:
    """SGR parameters selecting a 24-bit foreground color."""
    red, green, blue = hex_to_rgb(color)
    return f"38;2;{red};{green};{blue}"


def bg_params(color: str) -> str:
    """SGR parameters selecting a 24-bit background color."""
    red, green, blue = hex_to_rgb(color)
    return f"48;2;{red};{green};{blue}"


def sgr(*params: str) -> str:
    """Join non-empty SGR parameter groups into one escape sequence."""
    joined = ";".join(param for param in params if param)
    return f"\033[{joined}m" if joined else ""


def styled(text: str, *params: str) -> str:
    """Wrap ``text`` in an SGR sequence and reset, or return it bare."""
    prefix = sgr(*params)
    if not prefix or not text:
        return text
    return f"{prefix}{text}{RESET}"


_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)

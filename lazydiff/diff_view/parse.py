"""Unified-diff parsing into per-file fragments.

Understands ``git diff`` output (extended headers, renames, binary notices)
as well as bare ``---``/``+++`` patches, and several file sections in one
text. Malformed hunks raise ``DiffParseError``; callers fall back to showing
the raw text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from ..errors import DiffParseError

_HUNK_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@ ?(.*)$")
DEV_NULL = "/dev/null"


class LineOp(Enum):
    """Operation of one hunk line, keyed by its unified-diff prefix."""

    CONTEXT = " "
    DELETE = "-"
    ADD = "+"


@dataclass(frozen=True)
class DiffLine:
    op: LineOp
    text: str


@dataclass
class TextFragment:
    """One hunk: starting positions, declared counts, and its lines."""

    old_position: int
    old_lines: int
    new_position: int
    new_lines: int
    comment: str = ""
    lines: list[DiffLine] = field(default_factory=list)


@dataclass
class FileDiff:
    """All hunks for one file section of a diff."""

    old_name: str = ""
    new_name: str = ""
    is_binary: bool = False
    is_new: bool = False
    is_deleted: bool = False
    fragments: list[TextFragment] = field(default_factory=list)

    @property
    def display_name(self) -> str:
        """Destination name, or the source name for deletions."""
        return self.new_name or self.old_name


def unquote_path(value: str) -> str:
    """Decode a git C-style quoted path (``"a\\303\\251.txt"``).

    Unquoted values are returned unchanged.
    """
    if len(value) < 2 or not (value.startswith('"') and value.endswith('"')):
        return value
    body = value[1:-1]
    try:
        raw = body.encode("latin-1", errors="backslashreplace").decode("unicode_escape")
        return raw.encode("latin-1").decode("utf-8")
    except UnicodeError:
        return body


def _strip_prefix(name: str) -> str:
    """Normalize a header path: unquote, drop ``a/``/``b/`` and ``/dev/null``."""
    name = unquote_path(name.split("\t", 1)[0].rstrip())
    if name == DEV_NULL:
        return ""
    if name.startswith(("a/", "b/")):
        return name[2:]
    return name


def _git_header_names(rest: str) -> tuple[str, str]:
    """Split ``a/old b/new`` from a ``diff --git`` line.

    Names with spaces are ambiguous; the symmetric split (old == new) is
    preferred, falling back to the last `` b/`` separator.
    """
    if rest.startswith('"'):
        end = rest.find('"', 1)
        while end > 0 and rest[end - 1] == "\\":
            end = rest.find('"', end + 1)
        if end > 0:
            return _strip_prefix(rest[: end + 1]), _strip_prefix(rest[end + 1 :].strip())
    if len(rest) % 2 == 1:
        half = len(rest) // 2
        old, new = rest[:half], rest[half + 1 :]
        if rest[half] == " " and old[2:] == new[2:]:
            return _strip_prefix(old), _strip_prefix(new)
    split_at = rest.rfind(" b/")
    if split_at < 0:
        return _strip_prefix(rest), _strip_prefix(rest)
    return _strip_prefix(rest[:split_at]), _strip_prefix(rest[split_at + 1 :])


def _split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, dropping one trailing ``\\r`` per line."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _parse_fragment(lines: list[str], start: int) -> tuple[TextFragment, int]:
    """Parse the hunk whose header is ``lines[start]``.

    Returns the fragment and the index of the first line after it.
    """
    match = _HUNK_RE.match(lines[start])
    if match is None:
        raise DiffParseError("malformed hunk header", start + 1)
    old_lines = int(match.group(2)) if match.group(2) is not None else 1
    new_lines = int(match.group(4)) if match.group(4) is not None else 1
    fragment = TextFragment(
        old_position=int(match.group(1)),
        old_lines=old_lines,
        new_position=int(match.group(3)),
        new_lines=new_lines,
        comment=match.group(5).strip(),
    )

    old_remaining = old_lines
    new_remaining = new_lines
    index = start + 1
    while index < len(lines) and (old_remaining > 0 or new_remaining > 0):
        line = lines[index]
        if line.startswith("\\"):
            index += 1
            continue
        prefix = line[:1] or " "
        if prefix == " ":
            op = LineOp.CONTEXT
            old_remaining -= 1
            new_remaining -= 1
        elif prefix == "-":
            op = LineOp.DELETE
            old_remaining -= 1
        elif prefix == "+":
            op = LineOp.ADD
            new_remaining -= 1
        else:
            raise DiffParseError(f"unexpected line in hunk: {line[:20]!r}", index + 1)
        if old_remaining < 0 or new_remaining < 0:
            raise DiffParseError("hunk has more lines than its header declares", index + 1)
        fragment.lines.append(DiffLine(op, line[1:]))
        index += 1

    if old_remaining > 0 or new_remaining > 0:
        raise DiffParseError("hunk ended before its declared line count", index)
    while index < len(lines) and lines[index].startswith("\\"):
        index += 1
    return fragment, index


def parse_unified_diff(text: str) -> list[FileDiff]:
    """Parse unified-diff ``text`` into file sections.

    This is the diff-syntax parser the layout engine is built on; it reads
    git's output directly rather than going through a patch library. Text
    with no recognizable file header yields an empty list.
    """
    lines = _split_lines(text)
    files: list[FileDiff] = []
    current: FileDiff | None = None
    has_patch_header = False
    in_binary_patch = False
    index = 0
    while index < len(lines):
        line = lines[index]

        if line.startswith("diff --git "):
            old_name, new_name = _git_header_names(line[len("diff --git ") :])
            current = FileDiff(old_name=old_name, new_name=new_name)
            files.append(current)
            has_patch_header = False
            in_binary_patch = False
            index += 1
            continue

        if in_binary_patch:
            index += 1
            continue

        if line.startswith("--- ") and index + 1 < len(lines) and lines[index + 1].startswith("+++ "):
            if current is None or has_patch_header or current.fragments:
                current = FileDiff()
                files.append(current)
            current.old_name = _strip_prefix(line[4:])
            current.new_name = _strip_prefix(lines[index + 1][4:])
            current.is_new = current.is_new or not current.old_name
            current.is_deleted = current.is_deleted or not current.new_name
            has_patch_header = True
            index += 2
            continue

        if line.startswith("@@"):
            if current is None:
                raise DiffParseError("hunk header before any file header", index + 1)
            fragment, index = _parse_fragment(lines, index)
            current.fragments.append(fragment)
            continue

        if current is not None and not current.fragments:
            if line.startswith("new file mode"):
                current.is_new = True
            elif line.startswith("deleted file mode"):
                current.is_deleted = True
            elif line.startswith(("rename from ", "copy from ")):
                current.old_name = unquote_path(line.split(" ", 2)[2])
            elif line.startswith(("rename to ", "copy to ")):
                current.new_name = unquote_path(line.split(" ", 2)[2])
            elif line.startswith("Binary files ") and line.endswith(" differ"):
                current.is_binary = True
            elif line.startswith("GIT binary patch"):
                current.is_binary = True
                in_binary_patch = True
        index += 1

    return files


__all__ = [
    "DEV_NULL",
    "LineOp",
    "DiffLine",
    "TextFragment",
    "FileDiff",
    "parse_unified_diff",
    "unquote_path",
]

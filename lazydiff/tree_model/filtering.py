"""Ancestor-preserving substring filter over flattened tree rows."""

from __future__ import annotations

from collections.abc import Sequence

from .types import DisplayLine


def line_matches(line: DisplayLine, folded_query: str) -> bool:
    """Test a row against an already casefolded query.

    File rows match on their full path, directory rows on their label.
    """
    haystack = line.file.path if line.file is not None else line.label
    return folded_query in haystack.casefold()


def ancestor_indices(lines: Sequence[DisplayLine], index: int) -> list[int]:
    """Return indices of the strict ancestor directories of ``lines[index]``.

    Walks backward tracking the smallest indent seen so far; a directory row
    indented strictly less than that minimum is the next ancestor up.
    """
    current_min = lines[index].indent
    found: list[int] = []
    for candidate in range(index - 1, -1, -1):
        if current_min <= 0:
            break
        line = lines[candidate]
        if line.is_dir and line.indent < current_min:
            found.append(candidate)
            current_min = line.indent
    return found


def filter_display_lines(lines: Sequence[DisplayLine], query: str) -> list[int]:
    """Return sorted indices of rows visible under ``query``.

    An empty query keeps every row. Otherwise rows matching the query are
    kept, and every matching file row also keeps its ancestor directories so
    the visible tree stays connected.
    """
    if not query:
        return list(range(len(lines)))

    folded_query = query.casefold()
    visible: set[int] = set()
    for index, line in enumerate(lines):
        if not line_matches(line, folded_query):
            continue
        visible.add(index)
        if line.file is not None:
            visible.update(ancestor_indices(lines, index))
    return sorted(visible)

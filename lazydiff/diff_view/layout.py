"""Row layout for hunks: aligned side-by-side rows and unified rows.

These functions only decide which text, line number, and tint goes where;
``render`` turns the rows into styled terminal text.
"""

from __future__ import annotations

from dataclasses import dataclass

from .cells import Tint
from .grouping import LineGroup, group_lines
from .parse import LineOp, TextFragment

LINE_NUMBER_WIDTH = 4
SIDE_BY_SIDE_GUTTER_WIDTH = 5
UNIFIED_GUTTER_WIDTH = 4
MIN_TEXT_WIDTH = 10


@dataclass(frozen=True)
class Cell:
    """One side of a side-by-side row."""

    number: int | None
    text: str
    tint: Tint


BLANK_CELL = Cell(None, "", Tint.NONE)


@dataclass(frozen=True)
class SideBySideRow:
    left: Cell
    right: Cell


@dataclass(frozen=True)
class UnifiedRow:
    op: LineOp
    old_number: int | None
    new_number: int | None
    text: str


def side_by_side_column_width(width: int) -> int:
    """Text width of each side, floored at a readable minimum."""
    usable = width - 2 * LINE_NUMBER_WIDTH - SIDE_BY_SIDE_GUTTER_WIDTH
    return max(MIN_TEXT_WIDTH, usable // 2)


def unified_text_width(width: int) -> int:
    """Text width of a unified row after both number gutters and the marker."""
    return max(MIN_TEXT_WIDTH, width - 2 * LINE_NUMBER_WIDTH - UNIFIED_GUTTER_WIDTH)


def side_by_side_rows(fragment: TextFragment) -> list[SideBySideRow]:
    """Lay out a hunk as aligned old/new rows.

    A delete group immediately followed by an add group forms one paired
    block: row ``j`` shows the ``j``-th deleted and added line, and a side
    that has run out shows an untinted blank cell. Only the very next group
    is ever paired.
    """
    groups: list[LineGroup] = group_lines(fragment.lines)
    old_number = fragment.old_position
    new_number = fragment.new_position
    rows: list[SideBySideRow] = []

    index = 0
    while index < len(groups):
        group = groups[index]
        if group.op is LineOp.CONTEXT:
            for text in group.lines:
                rows.append(
                    SideBySideRow(
                        Cell(old_number, text, Tint.NONE),
                        Cell(new_number, text, Tint.NONE),
                    )
                )
                old_number += 1
                new_number += 1
        elif group.op is LineOp.DELETE:
            added: tuple[str, ...] = ()
            if index + 1 < len(groups) and groups[index + 1].op is LineOp.ADD:
                added = groups[index + 1].lines
                index += 1
            for row in range(max(len(group.lines), len(added))):
                left = BLANK_CELL
                right = BLANK_CELL
                if row < len(group.lines):
                    left = Cell(old_number, group.lines[row], Tint.DELETE)
                    old_number += 1
                if row < len(added):
                    right = Cell(new_number, added[row], Tint.ADD)
                    new_number += 1
                rows.append(SideBySideRow(left, right))
        else:
            for text in group.lines:
                rows.append(SideBySideRow(BLANK_CELL, Cell(new_number, text, Tint.ADD)))
                new_number += 1
        index += 1
    return rows


def unified_rows(fragment: TextFragment) -> list[UnifiedRow]:
    """Lay out a hunk as one row per line in original order."""
    old_number = fragment.old_position
    new_number = fragment.new_position
    rows: list[UnifiedRow] = []
    for line in fragment.lines:
        if line.op is LineOp.CONTEXT:
            rows.append(UnifiedRow(line.op, old_number, new_number, line.text))
            old_number += 1
            new_number += 1
        elif line.op is LineOp.DELETE:
            rows.append(UnifiedRow(line.op, old_number, None, line.text))
            old_number += 1
        else:
            rows.append(UnifiedRow(line.op, None, new_number, line.text))
            new_number += 1
    return rows


__all__ = [
    "LINE_NUMBER_WIDTH",
    "SIDE_BY_SIDE_GUTTER_WIDTH",
    "UNIFIED_GUTTER_WIDTH",
    "MIN_TEXT_WIDTH",
    "Cell",
    "BLANK_CELL",
    "SideBySideRow",
    "UnifiedRow",
    "side_by_side_column_width",
    "unified_text_width",
    "side_by_side_rows",
    "unified_rows",
]

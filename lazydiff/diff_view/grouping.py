"""Collapse consecutive same-operation hunk lines into groups."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .parse import DiffLine, LineOp


@dataclass(frozen=True)
class LineGroup:
    op: LineOp
    lines: tuple[str, ...]


def group_lines(lines: Iterable[DiffLine]) -> list[LineGroup]:
    """Group ``lines`` so that boundaries fall only where the op changes."""
    groups: list[LineGroup] = []
    pending_op: LineOp | None = None
    pending: list[str] = []
    for line in lines:
        if line.op is not pending_op and pending_op is not None:
            groups.append(LineGroup(pending_op, tuple(pending)))
            pending = []
        pending_op = line.op
        pending.append(line.text)
    if pending_op is not None:
        groups.append(LineGroup(pending_op, tuple(pending)))
    return groups

"""Immutable application state for the interactive diff browser."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from ..tree_model import (
    DisplayLine,
    filter_display_lines,
    preview_render_width,
    tree_viewport_rows,
)
from .navigation import NavigationState, first_file_position


@dataclass(frozen=True)
class AppState:
    """Everything the screen is composed from.

    ``visible`` holds indices into ``lines`` and ``nav`` positions index into
    ``visible``. ``preview`` is the rendered diff split into lines, and
    ``request_id`` is the id of the most recently requested preview.
    """

    lines: tuple[DisplayLine, ...]
    visible: tuple[int, ...]
    query: str = ""
    searching: bool = False
    nav: NavigationState = field(default_factory=NavigationState)
    width: int = 0
    height: int = 0
    tree_width: int = 0
    ready: bool = False
    preview: tuple[str, ...] = ()
    preview_scroll: int = 0
    request_id: int = 0

    @property
    def viewport_height(self) -> int:
        """Tree rows that fit between the title and the footer."""
        return tree_viewport_rows(self.height)

    @property
    def render_width(self) -> int:
        """Width previews are rendered at."""
        return preview_render_width(self.width, self.tree_width)


def initial_state(lines: Sequence[DisplayLine]) -> AppState:
    """Build the start state: everything visible, cursor on the first file."""
    all_lines = tuple(lines)
    visible = tuple(filter_display_lines(all_lines, ""))
    position = first_file_position(all_lines, visible)
    return AppState(
        lines=all_lines,
        visible=visible,
        nav=NavigationState(cursor=position or 0, scroll=0),
    )


__all__ = ["AppState", "initial_state"]

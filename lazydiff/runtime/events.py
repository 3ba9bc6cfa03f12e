"""Events fed into ``transition`` and the effects it asks the shell to run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..tree_model.types import ChangedPath


@dataclass(frozen=True)
class KeyPressed:
    """One decoded key token from ``runtime.input.read_key``."""

    key: str


@dataclass(frozen=True)
class Resized:
    width: int
    height: int


@dataclass(frozen=True)
class PreviewLoaded:
    """Rendered preview text for a request; stale ids are ignored."""

    request_id: int
    path: str
    content: str


@dataclass(frozen=True)
class PagerClosed:
    """The full-diff pager exited; ``error`` is a one-line failure message."""

    error: str | None = None


Event = Union[KeyPressed, Resized, PreviewLoaded, PagerClosed]


@dataclass(frozen=True)
class LoadPreview:
    """Load and render the diff of ``file`` at ``width`` in the background."""

    request_id: int
    file: ChangedPath
    width: int


@dataclass(frozen=True)
class OpenFullDiff:
    """Show the full-file diff of ``file`` at ``width`` in the pager."""

    file: ChangedPath
    width: int


@dataclass(frozen=True)
class Quit:
    pass


Effect = Union[LoadPreview, OpenFullDiff, Quit]


__all__ = [
    "KeyPressed",
    "Resized",
    "PreviewLoaded",
    "PagerClosed",
    "Event",
    "LoadPreview",
    "OpenFullDiff",
    "Quit",
    "Effect",
]

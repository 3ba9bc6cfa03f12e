"""UI theme definitions and selection helpers.

Themes are immutable SGR parameter palettes chosen once at startup (dark or
light, detected from the terminal) and threaded into every render call. The
Pygments style used for syntax colouring is part of the theme.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace

from .ansi import bg_params, fg_params


@dataclass(frozen=True)
class DiffTheme:
    """Semantic SGR parameter strings used by renderers.

    Every field holds SGR parameters (``"1;38;2;…"``) rather than complete
    escape sequences so foreground and background can be combined per span.
    """

    name: str
    syntax_style: str
    bg_add: str
    bg_delete: str
    line_number: str
    hunk_header: str
    file_header: str
    gutter: str
    add_marker: str
    delete_marker: str
    context_dim: str
    truncate: str
    tree_dir: str
    tree_file: str
    cursor: str
    badge_staged: str
    badge_unstaged: str
    badge_untracked: str
    border: str
    search: str
    title: str

    @property
    def colorize(self) -> bool:
        """Whether this theme emits escape sequences at all."""
        return bool(self.syntax_style)


DARK_THEME = DiffTheme(
    name="dark",
    syntax_style="monokai",
    bg_add=bg_params("#122117"),
    bg_delete=bg_params("#2d1117"),
    line_number=fg_params("#484f58"),
    hunk_header="2;" + fg_params("#79c0ff"),
    file_header="1;" + fg_params("#e6edf3"),
    gutter=fg_params("#30363d"),
    add_marker=fg_params("#3fb950"),
    delete_marker=fg_params("#f85149"),
    context_dim=fg_params("#8b949e"),
    truncate=fg_params("#484f58"),
    tree_dir="1;" + fg_params("#79c0ff"),
    tree_file=fg_params("#e6edf3"),
    cursor="1;" + fg_params("#e6edf3") + ";" + bg_params("#30363d"),
    badge_staged=fg_params("#3fb950"),
    badge_unstaged=fg_params("#d29922"),
    badge_untracked=fg_params("#484f58"),
    border=fg_params("#30363d"),
    search=fg_params("#79c0ff"),
    title="1;" + fg_params("#e6edf3"),
)

LIGHT_THEME = DiffTheme(
    name="light",
    syntax_style="default",
    bg_add=bg_params("#dafbe1"),
    bg_delete=bg_params("#ffebe9"),
    line_number=fg_params("#57606a"),
    hunk_header="2;" + fg_params("#0969da"),
    file_header="1;" + fg_params("#1f2328"),
    gutter=fg_params("#d0d7de"),
    add_marker=fg_params("#1a7f37"),
    delete_marker=fg_params("#cf222e"),
    context_dim=fg_params("#656d76"),
    truncate=fg_params("#57606a"),
    tree_dir="1;" + fg_params("#0969da"),
    tree_file=fg_params("#1f2328"),
    cursor="1;" + fg_params("#1f2328") + ";" + bg_params("#ddf4ff"),
    badge_staged=fg_params("#1a7f37"),
    badge_unstaged=fg_params("#9a6700"),
    badge_untracked=fg_params("#57606a"),
    border=fg_params("#d0d7de"),
    search=fg_params("#0969da"),
    title="1;" + fg_params("#1f2328"),
)

PLAIN_THEME = DiffTheme(
    name="plain",
    syntax_style="",
    bg_add="",
    bg_delete="",
    line_number="",
    hunk_header="",
    file_header="",
    gutter="",
    add_marker="",
    delete_marker="",
    context_dim="",
    truncate="",
    tree_dir="",
    tree_file="",
    cursor="7",
    badge_staged="",
    badge_unstaged="",
    badge_untracked="",
    border="",
    search="",
    title="",
)

_THEMES: dict[str, DiffTheme] = {
    DARK_THEME.name: DARK_THEME,
    LIGHT_THEME.name: LIGHT_THEME,
}
AUTO_THEME_NAME = "auto"


def available_theme_names() -> tuple[str, ...]:
    """Return selectable theme names, ``auto`` first."""
    return (AUTO_THEME_NAME, *sorted(_THEMES.keys()))


def detect_dark_background(environ: Mapping[str, str] | None = None) -> bool:
    """Guess whether the terminal background is dark.

    Reads ``COLORFGBG`` (``fg;bg`` or ``fg;default;bg``); colour indexes 0-6
    and 8 are dark. Without a usable hint the terminal is assumed dark.
    """
    env = os.environ if environ is None else environ
    raw = env.get("COLORFGBG", "").strip()
    if not raw:
        return True
    background = raw.split(";")[-1]
    try:
        index = int(background)
    except ValueError:
        return True
    return index in {0, 1, 2, 3, 4, 5, 6, 8}


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to ``auto``."""
    if not name:
        return AUTO_THEME_NAME
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return AUTO_THEME_NAME


def resolve_theme(
    name: str | None,
    *,
    no_color: bool = False,
    syntax_style: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> DiffTheme:
    """Return the concrete theme for a requested name and colour mode."""
    if no_color:
        return PLAIN_THEME
    normalized = normalize_theme_name(name)
    if normalized == AUTO_THEME_NAME:
        theme = DARK_THEME if detect_dark_background(environ) else LIGHT_THEME
    else:
        theme = _THEMES[normalized]
    if syntax_style:
        theme = replace(theme, syntax_style=syntax_style)
    return theme


__all__ = [
    "DiffTheme",
    "DARK_THEME",
    "LIGHT_THEME",
    "PLAIN_THEME",
    "AUTO_THEME_NAME",
    "available_theme_names",
    "detect_dark_background",
    "normalize_theme_name",
    "resolve_theme",
]

"""Interactive browser bootstrap.

Wires git, the diff renderer, the preview worker, and the pager into
``run_main_loop``. Also hosts the non-interactive print path used by the CLI.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from ..ansi import sanitize_terminal_text
from ..config import DEFAULT_PAGER
from ..diff_view import render_diff
from ..diff_view.highlight import Tokenizer, make_tokenizer
from ..errors import CollaboratorError, NoChangesError
from ..tree_model import build_display_lines
from ..tree_model.types import ChangedPath
from ..ui_theme import DiffTheme
from ..vcs import load_diff_text
from .loop import RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop
from .preview_worker import PreviewScheduler
from .state import initial_state
from .terminal import TerminalController

logger = logging.getLogger(__name__)


@dataclass
class DiffRenderer:
    """Loads one file's diff from git and renders it for a given width.

    A renderer owns its tokenizer, so each thread should use its own.
    """

    theme: DiffTheme
    repo: Path | None = None
    base: str | None = None
    tokenizer: Tokenizer | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.tokenizer is None:
            self.tokenizer = make_tokenizer(self.theme)

    def render(self, changed: ChangedPath, width: int, full_file: bool = False) -> str:
        """Return rendered diff text, or a one-line message when git fails."""
        try:
            raw = load_diff_text(changed, full_file=full_file, base=self.base, repo=self.repo)
        except CollaboratorError as exc:
            logger.warning("diff for %s failed: %s", changed.path, exc)
            return exc.one_line()
        raw = sanitize_terminal_text(raw)
        return render_diff(raw, width, changed.path, theme=self.theme, tokenizer=self.tokenizer)


def open_in_pager(
    text: str,
    pager: str,
    disable_tui_mode: Callable[[], None],
    enable_tui_mode: Callable[[], None],
) -> str | None:
    """Pipe ``text`` into ``pager`` while temporarily leaving TUI mode.

    Returns an error message string instead of raising.
    """
    cmd = shlex.split(pager or DEFAULT_PAGER)
    if not cmd:
        return "error: pager command is empty"

    disable_tui_mode()
    try:
        subprocess.run(cmd, input=text, text=True, encoding="utf-8", errors="replace", check=False)
    except OSError as exc:
        return f"error: {cmd[0]}: {exc}"
    finally:
        enable_tui_mode()
    return None


def render_all(changed: Sequence[ChangedPath], width: int, renderer: DiffRenderer) -> str:
    """Render every changed file's diff, one section after another."""
    if not changed:
        raise NoChangesError()
    sections = [renderer.render(item, width) for item in changed]
    return "\n".join(section.rstrip("\n") for section in sections if section) + "\n"


def run_browser(
    changed: Sequence[ChangedPath],
    *,
    theme: DiffTheme,
    repo: Path | None = None,
    base: str | None = None,
    pager: str = DEFAULT_PAGER,
) -> None:
    """Run the interactive browser over ``changed`` until the user quits."""
    if not changed:
        raise NoChangesError()

    state = initial_state(build_display_lines(changed))
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)

    preview_renderer = DiffRenderer(theme=theme, repo=repo, base=base)
    pager_renderer = DiffRenderer(theme=theme, repo=repo, base=base)
    scheduler = PreviewScheduler(preview_renderer.render)

    def open_full_diff(file: ChangedPath, width: int) -> str | None:
        text = pager_renderer.render(file, width, full_file=True)
        return open_in_pager(text, pager, terminal.disable_tui_mode, terminal.enable_tui_mode)

    callbacks = RuntimeLoopCallbacks(
        schedule_preview=scheduler.schedule,
        drain_previews=scheduler.drain_results,
        open_full_diff=open_full_diff,
    )
    run_main_loop(state, terminal, stdin_fd, theme, callbacks, RuntimeLoopTiming())


__all__ = [
    "DiffRenderer",
    "open_in_pager",
    "render_all",
    "run_browser",
]

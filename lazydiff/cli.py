"""Command-line front door for lazydiff.

Parses CLI options, collects the changed files from git, and either prints
every diff or launches the interactive browser.
"""

from __future__ import annotations

import argparse
import shutil
import sys
from pathlib import Path

from .config import load_settings
from .errors import CollaboratorError, NoChangesError
from .logging_config import setup_logging
from .runtime import run_browser
from .runtime.app import DiffRenderer, render_all
from .ui_theme import available_theme_names, resolve_theme
from .vcs import changed_files, repo_root


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _default_render_width() -> int:
    """Resolve default render width from current terminal size."""
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazydiff",
        description="Browse changed files in a git working tree with side-by-side diffs.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Path inside the repository. Defaults to current directory.")
    parser.add_argument("--main", action="store_true", help="Diff the current branch against the base branch.")
    parser.add_argument("--base", metavar="BRANCH", default=None, help="Base branch for --main (default from config, main).")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--style", default=None, help="Pygments style name for syntax colouring.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--print", dest="print_only", action="store_true", help="Print every diff and exit.")
    parser.add_argument(
        "--max-cols",
        type=_positive_int,
        default=None,
        help="Column width for --print output (default: terminal width).",
    )
    parser.add_argument("--debug", action="store_true", help="Log debug messages.")
    return parser


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and show the diffs of the repository at ``path``.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used. Git failures are reported on stderr with exit status 1;
    an unchanged tree prints ``No changes.`` and exits normally.
    """
    args = build_parser().parse_args(argv)
    interactive = not args.print_only and sys.stdin.isatty() and sys.stdout.isatty()
    setup_logging(debug=args.debug, tui_mode=interactive)

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_dir():
        path = path.parent

    settings = load_settings()
    base = None
    if args.main or args.base:
        base = args.base or settings.base_branch
    theme = resolve_theme(
        args.theme or settings.theme,
        no_color=args.no_color,
        syntax_style=args.style or settings.style,
    )

    try:
        root = repo_root(path)
        changed = changed_files(root, base)
    except CollaboratorError as exc:
        print(exc.one_line(), file=sys.stderr)
        raise SystemExit(1) from exc

    try:
        if not interactive:
            max_cols = args.max_cols if args.max_cols is not None else _default_render_width()
            sys.stdout.write(render_all(changed, max_cols, DiffRenderer(theme=theme, repo=root, base=base)))
            return
        run_browser(changed, theme=theme, repo=root, base=base, pager=settings.pager)
    except NoChangesError as exc:
        print(exc)


if __name__ == "__main__":
    main()

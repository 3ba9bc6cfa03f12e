"""Git collaborator: changed-path discovery and raw diff text.

Every command runs through ``_run_git`` so failures surface as
``CollaboratorError`` with the command attached; nothing here renders.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from .diff_view.parse import DEV_NULL, unquote_path
from .errors import CollaboratorError
from .tree_model.types import ChangedPath

GIT_TIMEOUT_SECONDS = 30.0
FULL_FILE_CONTEXT = "-U99999"
RENAME_SEPARATOR = " -> "
UNTRACKED_CODE = "??"

logger = logging.getLogger(__name__)


def _run_git(
    args: list[str],
    cwd: Path | None = None,
    ok_returncodes: tuple[int, ...] = (0,),
    timeout_seconds: float = GIT_TIMEOUT_SECONDS,
) -> str:
    """Run one git command and return stdout, raising on failure."""
    logger.debug("running %s (cwd=%s)", " ".join(args), cwd)
    try:
        proc = subprocess.run(
            args,
            cwd=str(cwd) if cwd is not None else None,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout_seconds,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        raise CollaboratorError(args, str(exc)) from exc
    if proc.returncode not in ok_returncodes:
        message = proc.stderr.strip() or f"exited with status {proc.returncode}"
        logger.debug("%s failed: %s", " ".join(args), message)
        raise CollaboratorError(args, message, proc.returncode)
    return proc.stdout


def repo_root(path: Path) -> Path:
    """Return the top-level directory of the work tree containing ``path``."""
    output = _run_git(["git", "rev-parse", "--show-toplevel"], cwd=path)
    top = output.strip()
    if not top:
        raise CollaboratorError(["git", "rev-parse", "--show-toplevel"], "not a git work tree")
    return Path(top)


def _porcelain_path(raw: str) -> str:
    """Return the destination path of a porcelain path field, unquoted."""
    if RENAME_SEPARATOR in raw:
        raw = raw.split(RENAME_SEPARATOR)[-1]
    return unquote_path(raw.strip())


def parse_porcelain_status(output: str) -> list[ChangedPath]:
    """Parse ``git status --porcelain`` (v1) output into changed-path records.

    Index column ``X`` and work-tree column ``Y`` map to staged and unstaged;
    ``??`` marks untracked files. Repeated paths are merged and first-seen
    order is kept. Lines shorter than four characters are ignored.
    """
    order: list[str] = []
    flags: dict[str, tuple[bool, bool, bool]] = {}
    for line in output.splitlines():
        if len(line) < 4:
            continue
        code = line[:2]
        path = _porcelain_path(line[3:])
        if not path:
            continue
        x, y = code[0], code[1]
        untracked = code == UNTRACKED_CODE
        staged = not untracked and x not in {" ", "?"}
        unstaged = not untracked and y not in {" ", "?"}

        previous = flags.get(path)
        if previous is None:
            order.append(path)
            flags[path] = (staged, unstaged, untracked)
        else:
            flags[path] = (previous[0] or staged, previous[1] or unstaged, previous[2] or untracked)

    return [
        ChangedPath(path=path, staged=flags[path][0], unstaged=flags[path][1], untracked=flags[path][2])
        for path in order
    ]


def parse_name_only(output: str) -> list[ChangedPath]:
    """Parse ``git diff --name-only`` output; records carry no status flags."""
    seen: set[str] = set()
    records: list[ChangedPath] = []
    for line in output.splitlines():
        path = unquote_path(line.strip())
        if not path or path in seen:
            continue
        seen.add(path)
        records.append(ChangedPath(path=path))
    return records


def changed_files(repo: Path, base: str | None = None) -> list[ChangedPath]:
    """List changed paths in ``repo``.

    Without ``base`` this is the working-tree status, listing every file
    inside untracked directories; with ``base`` it is the set of files
    changed on the current branch since it forked from ``base``.
    """
    if base:
        output = _run_git(["git", "diff", "--name-only", f"{base}...HEAD"], cwd=repo)
        return parse_name_only(output)
    output = _run_git(["git", "status", "--porcelain", "--untracked-files=all"], cwd=repo)
    return parse_porcelain_status(output)


def diff_commands(
    changed: ChangedPath,
    full_file: bool = False,
    base: str | None = None,
) -> list[list[str]]:
    """Return the git commands whose outputs together form the file's diff.

    Order is unstaged, staged, then untracked; base-branch mode uses a single
    three-dot diff instead.
    """
    context = [FULL_FILE_CONTEXT] if full_file else []
    if base:
        return [["git", "diff", *context, f"{base}...HEAD", "--", changed.path]]

    commands: list[list[str]] = []
    if changed.unstaged:
        commands.append(["git", "diff", *context, "--", changed.path])
    if changed.staged:
        commands.append(["git", "diff", "--staged", *context, "--", changed.path])
    if changed.untracked:
        commands.append(["git", "diff", "--no-index", *context, "--", DEV_NULL, changed.path])
    return commands


def load_diff_text(
    changed: ChangedPath,
    full_file: bool = False,
    base: str | None = None,
    repo: Path | None = None,
) -> str:
    """Run ``diff_commands`` for ``changed`` and concatenate their outputs.

    ``git diff --no-index`` exits with status 1 when the files differ, which
    is the expected outcome for untracked files.
    """
    chunks: list[str] = []
    for command in diff_commands(changed, full_file=full_file, base=base):
        ok_returncodes = (0, 1) if "--no-index" in command else (0,)
        chunks.append(_run_git(command, cwd=repo, ok_returncodes=ok_returncodes))
    return "".join(chunks)


__all__ = [
    "FULL_FILE_CONTEXT",
    "repo_root",
    "parse_porcelain_status",
    "parse_name_only",
    "changed_files",
    "diff_commands",
    "load_diff_text",
]

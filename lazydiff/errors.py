"""Error taxonomy shared by the core and the terminal shell.

None of these are fatal inside the core: parse failures degrade to verbatim
text and collaborator failures degrade to a one-line message.
"""

from __future__ import annotations


class LazyDiffError(Exception):
    """Base exception for all lazydiff errors."""


class DiffParseError(LazyDiffError):
    """Raw diff text did not parse as a unified diff."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class CollaboratorError(LazyDiffError):
    """An external command (git, pager) failed."""

    def __init__(self, command: list[str], message: str, returncode: int | None = None) -> None:
        self.command = list(command)
        self.returncode = returncode
        super().__init__(message)

    def one_line(self) -> str:
        """Return a single display line describing the failure."""
        first = str(self).strip().splitlines()
        detail = first[0] if first else "command failed"
        return f"error: {' '.join(self.command[:3])}: {detail}"


class NoChangesError(LazyDiffError):
    """The working tree has no changed files."""

    def __init__(self) -> None:
        super().__init__("No changes.")


__all__ = [
    "LazyDiffError",
    "DiffParseError",
    "CollaboratorError",
    "NoChangesError",
]

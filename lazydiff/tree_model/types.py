"""Tree datatypes shared by tree-model and tree-pane modules."""

from __future__ import annotations

from dataclasses import dataclass, field

PATH_SEPARATOR = "/"


@dataclass(frozen=True)
class ChangedPath:
    """One changed path reported by the VCS status collaborator.

    The three flags are independent: a path can be both staged and unstaged.
    """

    path: str
    staged: bool = False
    unstaged: bool = False
    untracked: bool = False

    def status_label(self) -> str:
        """Return the short badge text (``?``, ``S``, ``M``, ``SM`` or empty)."""
        if self.untracked:
            return "?"
        label = ""
        if self.staged:
            label += "S"
        if self.unstaged:
            label += "M"
        return label


@dataclass
class TreeNode:
    """Directory (``file is None``) or leaf node of the changed-path tree."""

    name: str
    file: ChangedPath | None = None
    children: list[TreeNode] = field(default_factory=list)

    @property
    def is_dir(self) -> bool:
        return self.file is None


@dataclass(frozen=True)
class DisplayLine:
    """One flattened tree row; ``file is None`` marks a directory header."""

    indent: int
    label: str
    file: ChangedPath | None = None

    @property
    def is_dir(self) -> bool:
        return self.file is None

"""Tree construction from changed-path records and pre-order flattening."""

from __future__ import annotations

from collections.abc import Iterable

from .types import PATH_SEPARATOR, ChangedPath, DisplayLine, TreeNode


def _find_directory(nodes: list[TreeNode], name: str) -> TreeNode | None:
    """Return the directory child named ``name``; files never match."""
    for node in nodes:
        if node.file is None and node.name == name:
            return node
    return None


def _tree_sort_key(node: TreeNode) -> tuple[bool, str]:
    """Sort directories before files and then by name."""
    return (not node.is_dir, node.name)


def sort_tree(nodes: list[TreeNode]) -> None:
    """Recursively sort ``nodes`` and every directory's children in place."""
    nodes.sort(key=_tree_sort_key)
    for node in nodes:
        if node.is_dir:
            sort_tree(node.children)


def build_tree(paths: Iterable[ChangedPath]) -> list[TreeNode]:
    """Build the sorted forest of directory/file nodes for ``paths``.

    Each path is split on ``/``; all but the last segment become (shared)
    directory nodes and the last segment becomes a leaf referencing the
    record. Empty segments (``dir/``, ``a//b``) are dropped. A file and a
    directory with the same name at one level are both kept as separate nodes.
    """
    roots: list[TreeNode] = []
    for changed in paths:
        parts = [part for part in changed.path.split(PATH_SEPARATOR) if part]
        if not parts:
            continue
        siblings = roots
        for part in parts[:-1]:
            directory = _find_directory(siblings, part)
            if directory is None:
                directory = TreeNode(name=part)
                siblings.append(directory)
            siblings = directory.children
        siblings.append(TreeNode(name=parts[-1], file=changed))
    sort_tree(roots)
    return roots


def flatten(forest: Iterable[TreeNode], start_indent: int = 0) -> list[DisplayLine]:
    """Project the forest into indentation-annotated rows in pre-order."""
    lines: list[DisplayLine] = []

    def walk(nodes: Iterable[TreeNode], indent: int) -> None:
        """Emit a directory header before recursing into its children."""
        for node in nodes:
            if node.file is not None:
                lines.append(DisplayLine(indent=indent, label=node.name, file=node.file))
                continue
            lines.append(DisplayLine(indent=indent, label=node.name + PATH_SEPARATOR))
            walk(node.children, indent + 1)

    walk(forest, start_indent)
    return lines


def build_display_lines(paths: Iterable[ChangedPath]) -> list[DisplayLine]:
    """Shortcut for ``flatten(build_tree(paths))``."""
    return flatten(build_tree(paths))

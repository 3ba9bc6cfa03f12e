"""Tree-model creation, filtering, and row formatting.

Builds the directory/file forest from changed-path records, flattens it into
indentation-annotated rows, and filters rows while keeping ancestors.
"""

from __future__ import annotations

from .build import build_display_lines, build_tree, flatten, sort_tree
from .filtering import ancestor_indices, filter_display_lines, line_matches
from .layout import (
    compute_preview_width,
    compute_tree_width,
    preview_render_width,
    tree_viewport_rows,
)
from .rendering import format_search_footer, format_status_badge, format_tree_row, plain_tree_row
from .types import PATH_SEPARATOR, ChangedPath, DisplayLine, TreeNode

__all__ = [
    "PATH_SEPARATOR",
    "ChangedPath",
    "DisplayLine",
    "TreeNode",
    "build_tree",
    "flatten",
    "sort_tree",
    "build_display_lines",
    "filter_display_lines",
    "ancestor_indices",
    "line_matches",
    "compute_tree_width",
    "compute_preview_width",
    "preview_render_width",
    "tree_viewport_rows",
    "format_tree_row",
    "format_status_badge",
    "format_search_footer",
    "plain_tree_row",
]

"""Tree-pane and preview-pane width helpers."""

from __future__ import annotations

TREE_WIDTH_PERCENT = 30
MIN_TREE_WIDTH = 30
MAX_TREE_WIDTH = 50
MIN_PREVIEW_WIDTH = 20
MIN_PREVIEW_RENDER_WIDTH = 40
DIVIDER_WIDTH = 1
CHROME_ROWS = 2


def compute_tree_width(total_width: int) -> int:
    """Choose the tree-pane width: 30% of the terminal clamped to [30, 50]."""
    return max(MIN_TREE_WIDTH, min(MAX_TREE_WIDTH, total_width * TREE_WIDTH_PERCENT // 100))


def compute_preview_width(total_width: int, tree_width: int) -> int:
    """Columns left for the preview pane after the tree and divider."""
    return max(MIN_PREVIEW_WIDTH, total_width - tree_width - DIVIDER_WIDTH)


def preview_render_width(total_width: int, tree_width: int) -> int:
    """Width diffs are rendered at for the preview pane."""
    return max(MIN_PREVIEW_RENDER_WIDTH, compute_preview_width(total_width, tree_width))


def tree_viewport_rows(total_height: int) -> int:
    """Rows available for tree entries below the title and above the footer."""
    return max(1, total_height - CHROME_ROWS)

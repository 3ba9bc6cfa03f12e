"""Tests for cursor clamping, minimal scrolling, and search-commit jumps."""

from __future__ import annotations

import unittest

from lazydiff.runtime.navigation import (
    NavigationState,
    first_file_position,
    move_cursor,
    on_filter_changed,
    on_query_committed,
    selected_file,
)
from lazydiff.tree_model import ChangedPath, build_display_lines


class MoveCursorTests(unittest.TestCase):
    def test_clamps_at_both_ends(self) -> None:
        self.assertEqual(move_cursor(NavigationState(0, 0), -5, 10, 4), NavigationState(0, 0))
        self.assertEqual(move_cursor(NavigationState(9, 6), 5, 10, 4), NavigationState(9, 6))

    def test_scrolls_minimally_down_and_up(self) -> None:
        nav = NavigationState(3, 0)

        down = move_cursor(nav, 1, 10, 4)
        self.assertEqual(down, NavigationState(4, 1))

        up = move_cursor(NavigationState(2, 2), -1, 10, 4)
        self.assertEqual(up, NavigationState(1, 1))

    def test_empty_list_is_a_no_op(self) -> None:
        nav = NavigationState(0, 0)

        self.assertIs(move_cursor(nav, 1, 0, 4), nav)

    def test_cursor_always_inside_viewport(self) -> None:
        nav = NavigationState()
        for delta in (1, 1, 1, 7, -3, 20, -40, 2):
            nav = move_cursor(nav, delta, 12, 3)
            self.assertTrue(nav.scroll <= nav.cursor <= nav.scroll + 2, nav)
            self.assertTrue(0 <= nav.cursor < 12)


class FilterChangeTests(unittest.TestCase):
    def test_clamps_to_last_visible_row(self) -> None:
        self.assertEqual(on_filter_changed(NavigationState(8, 5), 3), NavigationState(2, 2))

    def test_empty_visible_list_resets_to_zero(self) -> None:
        self.assertEqual(on_filter_changed(NavigationState(4, 2), 0), NavigationState(0, 0))

    def test_viewport_is_restored_when_height_known(self) -> None:
        self.assertEqual(on_filter_changed(NavigationState(9, 0), 20, viewport_height=4), NavigationState(9, 6))


class QueryCommitTests(unittest.TestCase):
    def setUp(self) -> None:
        self.lines = build_display_lines([ChangedPath("a/b/c.txt"), ChangedPath("z.txt")])

    def test_jumps_to_first_file_row(self) -> None:
        visible = list(range(len(self.lines)))

        self.assertEqual(first_file_position(self.lines, visible), 2)
        self.assertEqual(on_query_committed(NavigationState(0, 0), self.lines, visible, 10), NavigationState(2, 0))

    def test_keeps_clamped_cursor_without_files(self) -> None:
        self.assertIsNone(first_file_position(self.lines, [0, 1]))
        self.assertEqual(on_query_committed(NavigationState(3, 0), self.lines, [0, 1], 10), NavigationState(1, 0))

    def test_selected_file_is_none_on_directories(self) -> None:
        visible = list(range(len(self.lines)))

        self.assertIsNone(selected_file(NavigationState(0, 0), self.lines, visible))
        self.assertEqual(selected_file(NavigationState(3, 0), self.lines, visible), ChangedPath("z.txt"))
        self.assertIsNone(selected_file(NavigationState(0, 0), self.lines, []))

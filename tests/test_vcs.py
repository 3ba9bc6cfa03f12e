"""Tests for porcelain parsing, diff command selection, and git integration."""

from __future__ import annotations

import shutil
import subprocess
import tempfile
import unittest
from pathlib import Path

from lazydiff.errors import CollaboratorError
from lazydiff.tree_model import ChangedPath, build_display_lines
from lazydiff.vcs import (
    changed_files,
    diff_commands,
    load_diff_text,
    parse_name_only,
    parse_porcelain_status,
    repo_root,
)


class ParsePorcelainTests(unittest.TestCase):
    def test_status_columns_map_to_flags(self) -> None:
        records = parse_porcelain_status("M  a.go\n?? b.txt\nMM c/d.go\n M e.py\n")

        self.assertEqual(
            records,
            [
                ChangedPath("a.go", staged=True),
                ChangedPath("b.txt", untracked=True),
                ChangedPath("c/d.go", staged=True, unstaged=True),
                ChangedPath("e.py", unstaged=True),
            ],
        )

    def test_rename_keeps_destination(self) -> None:
        self.assertEqual(parse_porcelain_status("R  old.py -> new/name.py\n"), [ChangedPath("new/name.py", staged=True)])

    def test_quoted_paths_are_unquoted(self) -> None:
        self.assertEqual(parse_porcelain_status('?? "with space.txt"\n'), [ChangedPath("with space.txt", untracked=True)])

    def test_short_lines_are_ignored(self) -> None:
        self.assertEqual(parse_porcelain_status("M \n\n?? \nA  x\n"), [ChangedPath("x", staged=True)])

    def test_duplicate_paths_merge_in_first_seen_order(self) -> None:
        records = parse_porcelain_status(" M z.txt\nA  a.txt\nM  z.txt\n")

        self.assertEqual(records, [ChangedPath("z.txt", staged=True, unstaged=True), ChangedPath("a.txt", staged=True)])

    def test_name_only_output(self) -> None:
        self.assertEqual(parse_name_only("a.txt\n\nb/c.txt\na.txt\n"), [ChangedPath("a.txt"), ChangedPath("b/c.txt")])


class DiffCommandTests(unittest.TestCase):
    def test_commands_follow_flags_in_fixed_order(self) -> None:
        changed = ChangedPath("f.py", staged=True, unstaged=True)

        self.assertEqual(
            diff_commands(changed),
            [["git", "diff", "--", "f.py"], ["git", "diff", "--staged", "--", "f.py"]],
        )

    def test_untracked_uses_no_index_against_dev_null(self) -> None:
        self.assertEqual(
            diff_commands(ChangedPath("n.txt", untracked=True), full_file=True),
            [["git", "diff", "--no-index", "-U99999", "--", "/dev/null", "n.txt"]],
        )

    def test_base_branch_mode_uses_three_dot_range(self) -> None:
        self.assertEqual(
            diff_commands(ChangedPath("f.py", unstaged=True), base="main"),
            [["git", "diff", "main...HEAD", "--", "f.py"]],
        )

    def test_record_without_flags_has_no_commands(self) -> None:
        self.assertEqual(diff_commands(ChangedPath("f.py")), [])


def _git(root: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=root, check=True, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)


def _init_repo(root: Path) -> None:
    _git(root, "init", "-q")
    _git(root, "config", "user.email", "tests@example.com")
    _git(root, "config", "user.name", "Tests")
    _git(root, "config", "commit.gpgsign", "false")


@unittest.skipIf(shutil.which("git") is None, "git is required for vcs integration tests")
class GitIntegrationTests(unittest.TestCase):
    def test_changed_files_and_diff_text(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _init_repo(root)
            (root / "a.txt").write_text("one\n", encoding="utf-8")
            _git(root, "add", "-A")
            _git(root, "commit", "-q", "-m", "initial")

            (root / "a.txt").write_text("two\n", encoding="utf-8")
            (root / "s.txt").write_text("staged\n", encoding="utf-8")
            _git(root, "add", "s.txt")
            (root / "u.txt").write_text("hello\n", encoding="utf-8")

            records = {record.path: record for record in changed_files(root)}

            self.assertEqual(records["a.txt"], ChangedPath("a.txt", unstaged=True))
            self.assertEqual(records["s.txt"], ChangedPath("s.txt", staged=True))
            self.assertEqual(records["u.txt"], ChangedPath("u.txt", untracked=True))

            modified = load_diff_text(records["a.txt"], repo=root)
            self.assertIn("-one", modified)
            self.assertIn("+two", modified)
            self.assertIn("+staged", load_diff_text(records["s.txt"], repo=root))
            self.assertIn("+hello", load_diff_text(records["u.txt"], repo=root))

    def test_untracked_directory_lists_each_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _init_repo(root)
            (root / "keep.txt").write_text("keep\n", encoding="utf-8")
            _git(root, "add", "-A")
            _git(root, "commit", "-q", "-m", "initial")
            (root / "newdir" / "deep").mkdir(parents=True)
            (root / "newdir" / "a.txt").write_text("alpha\n", encoding="utf-8")
            (root / "newdir" / "deep" / "b.txt").write_text("beta\n", encoding="utf-8")

            records = changed_files(root)

            self.assertEqual(
                sorted(records, key=lambda record: record.path),
                [
                    ChangedPath("newdir/a.txt", untracked=True),
                    ChangedPath("newdir/deep/b.txt", untracked=True),
                ],
            )
            lines = build_display_lines(records)
            self.assertEqual(
                [("  " * line.indent + line.label) for line in lines],
                ["newdir/", "  deep/", "    b.txt", "  a.txt"],
            )
            self.assertIn("+beta", load_diff_text(ChangedPath("newdir/deep/b.txt", untracked=True), repo=root))

    def test_repo_root_from_subdirectory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _init_repo(root)
            nested = root / "pkg" / "inner"
            nested.mkdir(parents=True)

            self.assertEqual(repo_root(nested).resolve(), root)

    def test_base_branch_mode_lists_branch_changes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _init_repo(root)
            (root / "a.txt").write_text("one\n", encoding="utf-8")
            (root / "b.txt").write_text("bee\n", encoding="utf-8")
            _git(root, "add", "-A")
            _git(root, "commit", "-q", "-m", "initial")
            _git(root, "branch", "-M", "main")
            _git(root, "checkout", "-q", "-b", "feature")
            (root / "b.txt").write_text("bee two\n", encoding="utf-8")
            _git(root, "commit", "-q", "-am", "change b")

            records = changed_files(root, base="main")

            self.assertEqual(records, [ChangedPath("b.txt")])
            self.assertIn("+bee two", load_diff_text(records[0], base="main", repo=root))

    def test_failures_raise_collaborator_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _init_repo(root)

            with self.assertRaises(CollaboratorError) as ctx:
                changed_files(root, base="no-such-branch")

        self.assertEqual(ctx.exception.command[:2], ["git", "diff"])
        self.assertNotEqual(ctx.exception.returncode, 0)
        self.assertTrue(ctx.exception.one_line().startswith("error: git diff --name-only: "))

"""Tests for the command-line front door."""

from __future__ import annotations

import argparse
import io
import os
import shutil
import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazydiff.cli import _positive_int, build_parser, main
from lazydiff.config import Settings


def _git(root: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=root, check=True, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)


def _committed_repo(root: Path) -> None:
    _git(root, "init", "-q")
    _git(root, "config", "user.email", "tests@example.com")
    _git(root, "config", "user.name", "Tests")
    _git(root, "config", "commit.gpgsign", "false")
    (root / "a.txt").write_text("one\n", encoding="utf-8")
    _git(root, "add", "-A")
    _git(root, "commit", "-q", "-m", "initial")


class ParserTests(unittest.TestCase):
    def test_positive_int(self) -> None:
        self.assertEqual(_positive_int("12"), 12)
        with self.assertRaises(argparse.ArgumentTypeError):
            _positive_int("0")
        with self.assertRaises(argparse.ArgumentTypeError):
            _positive_int("wide")

    def test_defaults(self) -> None:
        args = build_parser().parse_args([])

        self.assertIsNone(args.path)
        self.assertFalse(args.main)
        self.assertFalse(args.print_only)
        self.assertIsNone(args.max_cols)

    def test_missing_path_exits_with_message(self) -> None:
        with mock.patch("lazydiff.cli.load_settings", return_value=Settings()):
            with self.assertRaises(SystemExit) as ctx:
                main(["--print", "/definitely/not/here"])

        self.assertEqual(str(ctx.exception.code), "Path not found: /definitely/not/here")


@unittest.skipIf(shutil.which("git") is None, "git is required for CLI integration tests")
class PrintModeTests(unittest.TestCase):
    def _run(self, argv: list[str]) -> tuple[str, str]:
        stdout = io.StringIO()
        stderr = io.StringIO()
        with mock.patch("lazydiff.cli.load_settings", return_value=Settings()):
            with mock.patch("sys.stdout", stdout), mock.patch("sys.stderr", stderr):
                main(argv)
        return stdout.getvalue(), stderr.getvalue()

    def test_print_renders_every_changed_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _committed_repo(root)
            (root / "a.txt").write_text("two\n", encoding="utf-8")
            (root / "new.txt").write_text("fresh\n", encoding="utf-8")

            output, _ = self._run(["--print", "--no-color", "--max-cols", "80", str(root)])

        self.assertNotIn("\033[", output)
        self.assertIn("── a.txt ", output)
        self.assertIn("── new.txt ", output)
        self.assertIn("- one", output)
        self.assertIn("+ two", output)
        self.assertIn("+ fresh", output)

    def test_file_path_uses_its_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _committed_repo(root)
            (root / "a.txt").write_text("two\n", encoding="utf-8")

            output, _ = self._run(["--print", "--no-color", "--max-cols", "80", str(root / "a.txt")])

        self.assertIn("+ two", output)

    def test_clean_tree_prints_no_changes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _committed_repo(root)

            output, _ = self._run(["--print", str(root)])

        self.assertEqual(output, "No changes.\n")

    def test_outside_repository_exits_with_status_one(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            env = {"GIT_CEILING_DIRECTORIES": str(root.parent)}
            with mock.patch.dict(os.environ, env):
                with self.assertRaises(SystemExit) as ctx:
                    self._run(["--print", str(root)])

        self.assertEqual(ctx.exception.code, 1)

"""Regression tests for raw-key decoding.

Covers ESC timing, arrow sequences, control keys, and multi-byte characters.
"""

from __future__ import annotations

import os
import time
import unittest

from lazydiff.runtime import input as input_mod


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def _read_all(self, payload: bytes, count: int) -> list[str]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, payload)
            return [input_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        started = time.monotonic()
        keys = self._read_all(b"\x1b", 1)
        elapsed = time.monotonic() - started

        self.assertEqual(keys, ["ESC"])
        self.assertLess(elapsed, 0.2)

    def test_arrow_sequences(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[A\x1b[B\x1bOA", 3), ["UP", "DOWN", "UP"])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(self._read_all(b"\x1bq", 2), ["ESC", "q"])

    def test_control_keys(self) -> None:
        keys = self._read_all(b"\x03\x04\x15\x7f\x08\r\n", 7)

        self.assertEqual(keys, ["CTRL_C", "CTRL_D", "CTRL_U", "BACKSPACE", "BACKSPACE", "ENTER_CR", "ENTER_LF"])

    def test_multibyte_character_is_one_key(self) -> None:
        self.assertEqual(self._read_all("é/".encode("utf-8"), 2), ["é", "/"])

    def test_unknown_csi_sequence_is_consumed(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[5~j", 2), ["", "j"])

    def test_timeout_returns_empty_string(self) -> None:
        self.assertEqual(self._read_all(b"", 1), [""])

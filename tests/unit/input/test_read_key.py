"""Regression tests for raw-key decoding.

Covers ESC timing, navigation and Alt sequences, UTF-8 text, and SGR mouse
reports as they arrive from a terminal in raw mode.
"""

import os
import time
import unittest

from quickopen.input import reader


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        reader._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        reader._PENDING_BYTES.clear()

    def _read_all(self, payload: bytes, count: int = 1) -> list[str]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, payload)
            return [reader.read_key(read_fd, timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        started = time.monotonic()
        keys = self._read_all(b"\x1b")
        elapsed = time.monotonic() - started

        self.assertEqual(keys, ["ESC"])
        self.assertLess(elapsed, 0.2)

    def test_timeout_without_input_returns_empty_token(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            key = reader.read_key(read_fd, timeout_ms=10)
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(key, "")

    def test_alt_letter_is_unknown_and_keeps_following_key(self) -> None:
        self.assertEqual(self._read_all(b"\x1ba", count=2), [reader.UNKNOWN_KEY, "a"])

    def test_arrow_and_paging_sequences(self) -> None:
        cases = {
            b"\x1b[A": "UP",
            b"\x1b[B": "DOWN",
            b"\x1bOA": "UP",
            b"\x1b[H": "HOME",
            b"\x1b[1~": "HOME",
            b"\x1b[F": "END",
            b"\x1b[5~": "PAGE_UP",
            b"\x1b[6~": "PAGE_DOWN",
        }
        for payload, expected in cases.items():
            with self.subTest(payload=payload):
                self.assertEqual(self._read_all(payload), [expected])

    def test_alt_arrows_in_both_encodings(self) -> None:
        cases = {
            b"\x1b[1;3D": "ALT_LEFT",
            b"\x1b[1;3C": "ALT_RIGHT",
            b"\x1b[1;9D": "ALT_LEFT",
            b"\x1bb": "ALT_LEFT",
            b"\x1bf": "ALT_RIGHT",
        }
        for payload, expected in cases.items():
            with self.subTest(payload=payload):
                self.assertEqual(self._read_all(payload), [expected])

    def test_alt_enter_is_recognized(self) -> None:
        self.assertEqual(self._read_all(b"\x1b\r"), ["ALT_ENTER"])

    def test_control_keys(self) -> None:
        self.assertEqual(
            self._read_all(b"\r\x7f\x15\x03", count=4),
            ["ENTER_CR", "BACKSPACE", "CTRL_U", "CTRL_C"],
        )

    def test_multibyte_character_is_one_token(self) -> None:
        self.assertEqual(self._read_all("é".encode("utf-8") + b"x", count=2), ["é", "x"])

    def test_sgr_mouse_clicks_and_wheel(self) -> None:
        self.assertEqual(
            self._read_all(b"\x1b[<0;5;7M\x1b[<0;5;7m\x1b[<64;2;3M\x1b[<65;2;3M", count=4),
            [
                "MOUSE_LEFT_DOWN:5:7",
                "MOUSE_LEFT_UP:5:7",
                "MOUSE_WHEEL_UP:2:3",
                "MOUSE_WHEEL_DOWN:2:3",
            ],
        )

    def test_malformed_mouse_report_is_unknown(self) -> None:
        self.assertEqual(self._read_all(b"\x1b[<0;x;7M"), [reader.UNKNOWN_KEY])

    def test_unbound_sequences_are_unknown_not_escape(self) -> None:
        cases = {
            b"\x1b[3~": "delete",
            b"\x1b[2~": "insert",
            b"\x1bOP": "F1",
            b"\x1b[15~": "F5",
            b"\x1b[": "truncated CSI",
        }
        for payload, label in cases.items():
            with self.subTest(key=label):
                self.assertEqual(self._read_all(payload), [reader.UNKNOWN_KEY])


if __name__ == "__main__":
    unittest.main()

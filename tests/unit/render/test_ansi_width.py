"""Tests for ANSI-aware width measurement and clipping."""

import unittest

from quickopen.ansi import clip_ansi_line, display_width


class AnsiWidthTests(unittest.TestCase):
    def test_escape_sequences_have_no_width(self) -> None:
        self.assertEqual(display_width("\033[1;38;5;81mab\033[0m"), 2)

    def test_wide_and_combining_characters(self) -> None:
        self.assertEqual(display_width("日本"), 4)
        self.assertEqual(display_width("é"), 1)

    def test_clip_keeps_trailing_reset(self) -> None:
        self.assertEqual(clip_ansi_line("\033[1mabcdef\033[0m", 3), "\033[1mabc\033[0m")

    def test_clip_never_splits_wide_character(self) -> None:
        self.assertEqual(clip_ansi_line("日本語", 3), "日")
        self.assertEqual(clip_ansi_line("日x", 1), "")

    def test_clip_to_nothing(self) -> None:
        self.assertEqual(clip_ansi_line("abc", 0), "")
        self.assertEqual(clip_ansi_line("", 5), "")


if __name__ == "__main__":
    unittest.main()

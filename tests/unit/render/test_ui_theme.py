"""Tests for palette lookup."""

import unittest

from quickopen.ui_theme import (
    DEFAULT_THEME,
    OCEAN_THEME,
    PLAIN_THEME,
    available_theme_names,
    normalize_theme_name,
    resolve_theme,
)


class ThemeLookupTests(unittest.TestCase):
    def test_available_names_exclude_plain(self) -> None:
        self.assertEqual(available_theme_names(), ("default", "ocean"))

    def test_names_are_normalized(self) -> None:
        self.assertEqual(normalize_theme_name(" Ocean "), "ocean")
        self.assertEqual(normalize_theme_name("solarized"), "default")
        self.assertEqual(normalize_theme_name(None), "default")

    def test_resolve_theme(self) -> None:
        self.assertIs(resolve_theme("ocean"), OCEAN_THEME)
        self.assertIs(resolve_theme(None), DEFAULT_THEME)
        self.assertIs(resolve_theme("ocean", no_color=True), PLAIN_THEME)


if __name__ == "__main__":
    unittest.main()

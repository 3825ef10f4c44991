"""Tests for directory listing, recency ordering, and metadata fallbacks."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest import mock

from quickopen import listing
from quickopen.listing import MISSING_RECENCY_KEY, list_directory, parent_directory, recency_key

_SECOND_NS = 1_000_000_000


def _touch(path: Path, atime_s: int, mtime_s: int | None = None) -> None:
    mtime_s = atime_s if mtime_s is None else mtime_s
    os.utime(path, ns=(atime_s * _SECOND_NS, mtime_s * _SECOND_NS))


class ListDirectoryTests(unittest.TestCase):
    def test_entries_sort_by_descending_access_time(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for name, atime in (("old.txt", 1_000), ("newest.txt", 3_000), ("middle.txt", 2_000)):
                (root / name).write_text(name, encoding="utf-8")
                _touch(root / name, atime)

            entries = list_directory(root)

            self.assertEqual([entry.display_name for entry in entries], ["newest.txt", "middle.txt", "old.txt"])
            keys = [entry.recency_key for entry in entries]
            self.assertEqual(keys, sorted(keys, reverse=True))
            self.assertEqual(len(set(keys)), len(keys))

    def test_access_time_wins_over_modify_time(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "read_recently.txt").write_text("a", encoding="utf-8")
            (root / "written_recently.txt").write_text("b", encoding="utf-8")
            _touch(root / "read_recently.txt", atime_s=5_000, mtime_s=1_000)
            _touch(root / "written_recently.txt", atime_s=2_000, mtime_s=4_000)

            entries = list_directory(root)

            self.assertEqual(entries[0].display_name, "read_recently.txt")
            self.assertEqual(entries[0].recency_key, 5_000 * _SECOND_NS)

    def test_equal_keys_keep_the_same_order_across_calls(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for name in ("b.txt", "a.txt", "c.txt"):
                (root / name).write_text(name, encoding="utf-8")
                _touch(root / name, 1_500)

            first = [entry.display_name for entry in list_directory(root)]
            second = [entry.display_name for entry in list_directory(root)]

            self.assertEqual(first, second)
            self.assertEqual(first, ["a.txt", "b.txt", "c.txt"])

    def test_entries_carry_type_and_full_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "Cherry").mkdir()
            (root / "Apple.txt").write_text("a", encoding="utf-8")

            entries = {entry.display_name: entry for entry in list_directory(root)}

            self.assertTrue(entries["Cherry"].is_directory)
            self.assertFalse(entries["Apple.txt"].is_directory)
            self.assertEqual(entries["Apple.txt"].full_path, root / "Apple.txt")

    def test_listing_is_not_recursive(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "sub").mkdir()
            (root / "sub" / "nested.txt").write_text("n", encoding="utf-8")

            names = [entry.display_name for entry in list_directory(root)]

            self.assertEqual(names, ["sub"])

    def test_hidden_entries_follow_show_hidden(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / ".env").write_text("x", encoding="utf-8")
            (root / "visible.txt").write_text("y", encoding="utf-8")

            shown = {entry.display_name for entry in list_directory(root)}
            hidden = {entry.display_name for entry in list_directory(root, show_hidden=False)}

            self.assertEqual(shown, {".env", "visible.txt"})
            self.assertEqual(hidden, {"visible.txt"})

    def test_symlinked_directory_is_a_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "real").mkdir()
            (root / "link").symlink_to(root / "real", target_is_directory=True)

            entries = {entry.display_name: entry for entry in list_directory(root)}

            self.assertTrue(entries["link"].is_directory)

    def test_broken_symlink_is_still_listed(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "dangling").symlink_to(root / "missing-target")

            entries = list_directory(root)

            self.assertEqual([entry.display_name for entry in entries], ["dangling"])
            self.assertFalse(entries[0].is_directory)

    def test_entries_without_metadata_are_skipped(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "good.txt").write_text("g", encoding="utf-8")
            (root / "bad.txt").write_text("b", encoding="utf-8")
            real_child_stat = listing._child_stat

            def flaky_stat(child: os.DirEntry) -> os.stat_result | None:
                if child.name == "bad.txt":
                    return None
                return real_child_stat(child)

            with mock.patch("quickopen.listing._child_stat", side_effect=flaky_stat):
                names = [entry.display_name for entry in list_directory(root)]

            self.assertEqual(names, ["good.txt"])

    def test_unreadable_directory_raises_os_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "gone"

            with self.assertRaises(OSError):
                list_directory(missing)

    def test_listing_a_file_raises_os_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "file.txt"
            target.write_text("x", encoding="utf-8")

            with self.assertRaises(OSError):
                list_directory(target)


class RecencyKeyTests(unittest.TestCase):
    def test_falls_back_to_modify_time(self) -> None:
        fake = SimpleNamespace(st_atime_ns=0, st_mtime_ns=42)
        self.assertEqual(recency_key(fake), 42)

    def test_missing_times_use_sentinel(self) -> None:
        self.assertEqual(recency_key(SimpleNamespace(st_atime_ns=0, st_mtime_ns=0)), MISSING_RECENCY_KEY)
        self.assertEqual(recency_key(SimpleNamespace()), MISSING_RECENCY_KEY)


class ParentDirectoryTests(unittest.TestCase):
    def test_filesystem_root_has_no_parent(self) -> None:
        root = Path(Path.cwd().anchor)
        self.assertIsNone(parent_directory(root))

    def test_parent_is_canonical(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            child = Path(tmp).resolve() / "child"
            child.mkdir()

            self.assertEqual(parent_directory(child), Path(tmp).resolve())


if __name__ == "__main__":
    unittest.main()

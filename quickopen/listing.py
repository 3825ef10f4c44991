"""Directory listing for the browser view.

Reads the immediate children of one directory, attaches a recency key to
each, and sorts most-recently-touched first. Reads are synchronous and run on
the UI thread; listings are expected to hold tens to low hundreds of entries.
"""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

MISSING_RECENCY_KEY = 0


@dataclass(frozen=True)
class Entry:
    """One child of a listed directory."""

    display_name: str
    full_path: Path
    is_directory: bool
    recency_key: int = MISSING_RECENCY_KEY


def recency_key(stat_result: os.stat_result) -> int:
    """Return access time in ns, else modify time, else ``MISSING_RECENCY_KEY``."""
    for field_name in ("st_atime_ns", "st_mtime_ns"):
        value = getattr(stat_result, field_name, None)
        if isinstance(value, int) and value > 0:
            return value
    return MISSING_RECENCY_KEY


def _child_stat(child: os.DirEntry) -> os.stat_result | None:
    """Stat ``child`` through symlinks, falling back to the link itself."""
    try:
        return child.stat()
    except OSError:
        pass
    try:
        return child.stat(follow_symlinks=False)
    except OSError as exc:
        logger.debug("skipping %s: metadata unavailable (%s)", child.path, exc)
        return None


def _sort_key(entry: Entry) -> tuple[int, str, str]:
    return (-entry.recency_key, entry.display_name, str(entry.full_path))


def list_directory(directory: Path, show_hidden: bool = True) -> list[Entry]:
    """List children of ``directory`` sorted by descending recency.

    Entries whose metadata cannot be read are skipped. Equal recency keys fall
    back to name order so repeated listings of an unchanged directory come out
    identical.

    Raises ``OSError`` when ``directory`` itself cannot be read.
    """
    entries: list[Entry] = []
    with os.scandir(directory) as children:
        for child in children:
            name = child.name
            if not show_hidden and name.startswith("."):
                continue
            stat_result = _child_stat(child)
            if stat_result is None:
                continue
            entries.append(
                Entry(
                    display_name=name,
                    full_path=Path(child.path),
                    is_directory=stat.S_ISDIR(stat_result.st_mode),
                    recency_key=recency_key(stat_result),
                )
            )

    entries.sort(key=_sort_key)
    return entries


def parent_directory(directory: Path) -> Path | None:
    """Return the canonical parent of ``directory``, or ``None`` at the root."""
    parent = directory.parent
    if parent == directory:
        return None
    try:
        return parent.resolve(strict=True)
    except (OSError, RuntimeError):
        return None


__all__ = [
    "Entry",
    "MISSING_RECENCY_KEY",
    "list_directory",
    "parent_directory",
    "recency_key",
]

"""Back/forward history of browsing snapshots.

This module intentionally has no UI concerns. Snapshots are immutable; the
history only appends, truncates, and moves its cursor.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

MAX_HISTORY_ENTRIES = 256


@dataclass(frozen=True)
class HistorySnapshot:
    directory: Path
    filter_text: str = ""
    selected_index: int = 0


class NavigationHistory:
    """Stack of snapshots with a cursor, browser style.

    ``cursor`` ranges over ``0..len(history)``. A cursor equal to the length
    means the user is at the live state past the recorded snapshots; any
    smaller value points at the snapshot currently shown.
    """

    def __init__(self, max_entries: int = MAX_HISTORY_ENTRIES) -> None:
        # Two slots at least: going back from the live state records it too.
        self.max_entries = max(2, max_entries)
        self._snapshots: list[HistorySnapshot] = []
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._snapshots)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def snapshots(self) -> tuple[HistorySnapshot, ...]:
        return tuple(self._snapshots)

    @property
    def can_go_back(self) -> bool:
        return self._cursor > 0

    @property
    def can_go_forward(self) -> bool:
        return self._cursor + 1 < len(self._snapshots)

    def _drop_oldest(self) -> int:
        """Trim to ``max_entries`` from the old end; return how many were dropped."""
        overflow = max(0, len(self._snapshots) - self.max_entries)
        del self._snapshots[:overflow]
        return overflow

    def push(self, snapshot: HistorySnapshot) -> None:
        """Record ``snapshot`` and drop everything forward of the cursor."""
        del self._snapshots[self._cursor :]
        self._snapshots.append(snapshot)
        self._drop_oldest()
        self._cursor = len(self._snapshots)

    def back(self, current: HistorySnapshot) -> HistorySnapshot | None:
        """Step back one snapshot.

        Leaving the live state records ``current`` at the end so that
        ``forward`` can return to it. Returns ``None`` at the oldest snapshot.
        """
        if not self.can_go_back:
            return None
        if self._cursor == len(self._snapshots):
            self._snapshots.append(current)
            self._cursor -= self._drop_oldest()
        self._cursor -= 1
        return self._snapshots[self._cursor]

    def forward(self) -> HistorySnapshot | None:
        """Step forward one snapshot; ``None`` at the newest one."""
        if not self.can_go_forward:
            return None
        self._cursor += 1
        return self._snapshots[self._cursor]


__all__ = ["HistorySnapshot", "MAX_HISTORY_ENTRIES", "NavigationHistory"]

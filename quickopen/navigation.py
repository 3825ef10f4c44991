"""Browsing state: current directory, filter text, selection, and history.

``NavigationState`` is the single owner of what the user is looking at. The
runtime loop applies one command at a time and calls ``visible_entries`` once
per frame, which re-reads the directory and rebuilds the visible rows.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .commands import (
    Activate,
    Backspace,
    ClearFilter,
    Command,
    GoBack,
    GoForward,
    JumpToStart,
    MoveSelection,
    Quit,
    SelectRow,
    TypeText,
)
from .history import HistorySnapshot, NavigationHistory
from .listing import Entry, list_directory, parent_directory
from .matcher import MatchRun, match

logger = logging.getLogger(__name__)

PARENT_ROW_LABEL = ".."

Lister = Callable[..., list[Entry]]


@dataclass(frozen=True)
class VisibleRow:
    """One displayed row with the highlight runs for its name."""

    display_name: str
    full_path: Path
    is_directory: bool
    runs: tuple[MatchRun, ...]
    is_parent: bool = False
    entry: Entry | None = None


@dataclass(frozen=True)
class SessionExit:
    """Request to end the session, optionally opening ``open_path`` first."""

    open_path: Path | None = None


def _canonical(path: Path) -> Path:
    try:
        return path.resolve()
    except (OSError, RuntimeError):
        return path


def parent_row(parent: Path) -> VisibleRow:
    return VisibleRow(
        display_name=PARENT_ROW_LABEL,
        full_path=parent,
        is_directory=True,
        runs=(MatchRun(PARENT_ROW_LABEL),),
        is_parent=True,
    )


class NavigationState:
    """Directory, filter, and selection for one browsing session.

    Invariant: ``selected_index`` is a valid index into ``visible_rows`` when
    rows exist and ``0`` otherwise. Rows are cleared on every directory
    transition and rebuilt by the next ``visible_entries`` call.
    """

    def __init__(
        self,
        start_directory: Path,
        *,
        show_hidden: bool = True,
        lister: Lister = list_directory,
        history: NavigationHistory | None = None,
    ) -> None:
        self.current_directory = _canonical(start_directory)
        self.filter_text = ""
        self.selected_index = 0
        self.show_hidden = show_hidden
        self.history = history if history is not None else NavigationHistory()
        self.visible_rows: list[VisibleRow] = []
        self.listing_error: OSError | None = None
        self._lister = lister
        self._entries: list[Entry] = []

    @property
    def entry_count(self) -> int:
        """Number of listed entries before filtering."""
        return len(self._entries)

    @property
    def match_count(self) -> int:
        return sum(1 for row in self.visible_rows if not row.is_parent)

    def snapshot(self) -> HistorySnapshot:
        return HistorySnapshot(
            directory=self.current_directory,
            filter_text=self.filter_text,
            selected_index=self.selected_index,
        )

    def _clamp_selection(self) -> None:
        if not self.visible_rows:
            self.selected_index = 0
            return
        self.selected_index = max(0, min(self.selected_index, len(self.visible_rows) - 1))

    def _rebuild_rows(self) -> list[VisibleRow]:
        rows: list[VisibleRow] = []
        parent = parent_directory(self.current_directory)
        if parent is not None:
            rows.append(parent_row(parent))
        for entry in self._entries:
            runs = match(self.filter_text, entry.display_name)
            if runs is None:
                continue
            rows.append(
                VisibleRow(
                    display_name=entry.display_name,
                    full_path=entry.full_path,
                    is_directory=entry.is_directory,
                    runs=runs,
                    entry=entry,
                )
            )
        self.visible_rows = rows
        self._clamp_selection()
        return rows

    def visible_entries(self) -> list[VisibleRow]:
        """Re-read the current directory and rebuild the visible rows.

        The parent row comes first when the directory has a resolvable parent,
        followed by listed entries that pass the filter, in listing order.
        A directory that cannot be read leaves only the parent row and records
        the error in ``listing_error``.
        """
        try:
            entries = self._lister(self.current_directory, show_hidden=self.show_hidden)
        except OSError as exc:
            if self.listing_error is None:
                logger.warning("cannot list %s: %s", self.current_directory, exc)
            entries = []
            self.listing_error = exc
        else:
            self.listing_error = None
        self._entries = entries
        return self._rebuild_rows()

    def set_filter(self, text: str) -> None:
        """Replace the filter and re-filter the current listing."""
        self.filter_text = text
        self._rebuild_rows()

    def append_filter(self, text: str) -> None:
        self.set_filter(self.filter_text + text)

    def backspace_filter(self) -> None:
        if self.filter_text:
            self.set_filter(self.filter_text[:-1])

    def clear_filter(self) -> None:
        self.set_filter("")

    def move_selection(self, delta: int) -> None:
        self.selected_index += delta
        self._clamp_selection()

    def reset_selection_to_start(self) -> None:
        self.selected_index = 0

    def select(self, index: int) -> None:
        self.selected_index = index
        self._clamp_selection()

    def _change_directory(self, snapshot: HistorySnapshot) -> None:
        self.current_directory = snapshot.directory
        self.filter_text = snapshot.filter_text
        self.selected_index = snapshot.selected_index
        self._entries = []
        self.visible_rows = []
        self.listing_error = None

    def enter(self, row: VisibleRow, force_external: bool = False) -> SessionExit | None:
        """Descend into a directory row, or request opening a file row.

        Descending records the current state in history, clears the filter,
        and keeps the selection index; the next listing re-clamps it. Files,
        and any row when ``force_external`` is set, leave the state untouched
        and return a ``SessionExit`` carrying the path to open.
        """
        if force_external or not row.is_directory:
            return SessionExit(open_path=row.full_path)

        self.history.push(self.snapshot())
        logger.debug("entering %s", row.full_path)
        self._change_directory(
            HistorySnapshot(
                directory=_canonical(row.full_path),
                filter_text="",
                selected_index=self.selected_index,
            )
        )
        return None

    def enter_selected(self, force_external: bool = False) -> SessionExit | None:
        if not self.visible_rows:
            return None
        return self.enter(self.visible_rows[self.selected_index], force_external=force_external)

    def back(self) -> bool:
        """Restore the previous snapshot verbatim; ``False`` when there is none."""
        snapshot = self.history.back(self.snapshot())
        if snapshot is None:
            return False
        self._change_directory(snapshot)
        return True

    def forward(self) -> bool:
        snapshot = self.history.forward()
        if snapshot is None:
            return False
        self._change_directory(snapshot)
        return True

    def apply(self, command: Command) -> SessionExit | None:
        """Apply one input command; a returned ``SessionExit`` ends the session."""
        if isinstance(command, TypeText):
            self.append_filter(command.text)
        elif isinstance(command, Backspace):
            self.backspace_filter()
        elif isinstance(command, ClearFilter):
            self.clear_filter()
        elif isinstance(command, MoveSelection):
            self.move_selection(command.delta)
        elif isinstance(command, JumpToStart):
            self.reset_selection_to_start()
        elif isinstance(command, SelectRow):
            self.select(command.index)
        elif isinstance(command, Activate):
            if command.index is not None:
                self.select(command.index)
            return self.enter_selected(force_external=command.force_external)
        elif isinstance(command, GoBack):
            self.back()
        elif isinstance(command, GoForward):
            self.forward()
        elif isinstance(command, Quit):
            return SessionExit()
        return None


__all__ = [
    "NavigationState",
    "PARENT_ROW_LABEL",
    "SessionExit",
    "VisibleRow",
    "parent_row",
]

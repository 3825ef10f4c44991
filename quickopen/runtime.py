"""Main interactive event loop for the browser.

Each iteration runs the whole pipeline once: list and filter the current
directory, render, read one key, translate it to a command, and apply it.
Everything happens on this thread except the final OS open dispatch.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .commands import Command
from .input import (
    MOUSE_LEFT_DOWN_PREFIX,
    ClickTracker,
    parse_mouse_position,
    read_key,
    translate_key,
)
from .navigation import NavigationState, SessionExit
from .opener import dispatch_open
from .render import RenderContext, list_view_rows, render_frame, row_index_for_screen_row, scroll_start
from .terminal import TerminalController
from .ui_theme import UITheme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeTiming:
    """Timing constants controlling interactive loop behavior."""

    double_click_seconds: float
    idle_refresh_ms: int = 500
    open_handoff_seconds: float = 2.0


class BrowserSession:
    """One interactive session over a ``NavigationState``.

    Collaborators are injected so the loop can run against fake terminals,
    scripted keys, and a recording opener in tests.
    """

    def __init__(
        self,
        state: NavigationState,
        theme: UITheme,
        terminal: TerminalController,
        timing: RuntimeTiming,
        *,
        read_key: Callable[..., str] = read_key,
        dispatch_open: Callable[[Path], threading.Thread] = dispatch_open,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self.state = state
        self.theme = theme
        self.terminal = terminal
        self.timing = timing
        self.list_start = 0
        self._read_key = read_key
        self._dispatch_open = dispatch_open
        self._clicks = ClickTracker(timing.double_click_seconds, monotonic=monotonic)

    def _render(self, columns: int, lines: int) -> int:
        state = self.state
        state.visible_entries()
        view_rows = list_view_rows(lines)
        self.list_start = scroll_start(state.selected_index, self.list_start, view_rows, len(state.visible_rows))
        render_frame(
            RenderContext(
                rows=state.visible_rows,
                selected_index=state.selected_index,
                list_start=self.list_start,
                filter_text=state.filter_text,
                current_directory=state.current_directory,
                width=columns,
                height=lines,
                theme=self.theme,
                match_count=state.match_count,
                entry_count=state.entry_count,
                listing_error=state.listing_error,
            ),
            self.terminal.stdout_fd,
        )
        return view_rows

    def command_for_key(self, key: str, view_rows: int) -> Command | None:
        """Translate a key token, resolving clicks against the rows on screen."""
        if not key.startswith(MOUSE_LEFT_DOWN_PREFIX):
            command = translate_key(key, page_rows=view_rows)
            if command is not None:
                # Any other input cancels a held click.
                self._clicks.reset()
            return command
        _col, row = parse_mouse_position(key)
        if row is None:
            return None
        rows = self.state.visible_rows
        index = row_index_for_screen_row(row, self.list_start, view_rows, len(rows))
        if index is None:
            return None
        return self._clicks.click(index, self.state.selected_index, rows[index].is_directory)

    def _key_timeout_ms(self) -> int:
        """Idle timeout, shortened so a held click is released on time."""
        remaining = self._clicks.seconds_until_expiry()
        if remaining is None:
            return self.timing.idle_refresh_ms
        return max(1, min(self.timing.idle_refresh_ms, math.ceil(remaining * 1000)))

    def run(self) -> SessionExit:
        """Run until a command ends the session, then dispatch any open."""
        exit_request: SessionExit | None = None
        with self.terminal.raw_mode():
            while exit_request is None:
                term = self.terminal.size()
                view_rows = self._render(term.columns, term.lines)
                command = self._clicks.expired_activation()
                if command is None:
                    key = self._read_key(self.terminal.stdin_fd, timeout_ms=self._key_timeout_ms())
                    if not key:
                        continue
                    command = self.command_for_key(key, view_rows)
                    if command is None:
                        continue
                exit_request = self.state.apply(command)

        if exit_request.open_path is not None:
            worker = self._dispatch_open(exit_request.open_path)
            # Give the spawn a moment to happen before the process exits.
            worker.join(self.timing.open_handoff_seconds)
        return exit_request


def run_browser(
    start_directory: Path,
    theme: UITheme,
    timing: RuntimeTiming,
    stdin_fd: int,
    stdout_fd: int,
    show_hidden: bool = True,
) -> SessionExit:
    """Create navigation state and a terminal, then run one session."""
    state = NavigationState(start_directory, show_hidden=show_hidden)
    terminal = TerminalController(stdin_fd, stdout_fd)
    logger.debug("session starting in %s", state.current_directory)
    return BrowserSession(state, theme, terminal, timing).run()

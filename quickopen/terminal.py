"""Terminal control for one browsing session.

Raw input, the alternate screen, a hidden cursor, and SGR click reporting are
switched on together and restored together, even when the loop raises.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty

FALLBACK_SIZE = (80, 24)

ALT_SCREEN_ON = b"\x1b[?1049h"
ALT_SCREEN_OFF = b"\x1b[?1049l"
CURSOR_HIDE = b"\x1b[?25l"
CURSOR_SHOW = b"\x1b[?25h"
# Button press/release reporting only; drag tracking is not needed for a list.
MOUSE_CLICKS_ON = b"\x1b[?1000h\x1b[?1006h"
MOUSE_CLICKS_OFF = b"\x1b[?1000l\x1b[?1006l"

SESSION_START = ALT_SCREEN_ON + CURSOR_HIDE + MOUSE_CLICKS_ON
SESSION_END = MOUSE_CLICKS_OFF + CURSOR_SHOW + ALT_SCREEN_OFF


class TerminalController:
    """Owns the tty attributes of ``stdin_fd`` for the life of a session."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def size(self) -> os.terminal_size:
        """Current size in cells, ``FALLBACK_SIZE`` when it cannot be queried."""
        return shutil.get_terminal_size(FALLBACK_SIZE)

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, SESSION_START)

    def disable_tui_mode(self) -> None:
        os.write(self.stdout_fd, SESSION_END)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Bracket the session loop with enable/disable of TUI mode."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()

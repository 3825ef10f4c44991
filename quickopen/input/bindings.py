"""Key and mouse bindings: key tokens in, ``Command`` values out.

``translate_key`` is a pure mapping. Mouse clicks need a little memory to
recognise double-clicks, which lives in ``ClickTracker`` with an injectable
clock.
"""

from __future__ import annotations

import time
from collections.abc import Callable

from ..commands import (
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

DEFAULT_DOUBLE_CLICK_SECONDS = 0.35
MOUSE_LEFT_DOWN_PREFIX = "MOUSE_LEFT_DOWN:"

_FIXED_BINDINGS: dict[str, Command] = {
    "UP": MoveSelection(-1),
    "DOWN": MoveSelection(1),
    "HOME": JumpToStart(),
    "BACKSPACE": Backspace(),
    "CTRL_U": ClearFilter(),
    "ENTER_CR": Activate(),
    "ENTER_LF": Activate(),
    "ALT_ENTER": Activate(force_external=True),
    "ALT_LEFT": GoBack(),
    "ALT_RIGHT": GoForward(),
    "ESC": Quit(),
    "CTRL_C": Quit(),
}


def parse_mouse_position(mouse_key: str) -> tuple[int | None, int | None]:
    """Return the 1-based ``(col, row)`` of a mouse token, if well formed."""
    parts = mouse_key.split(":")
    if len(parts) < 3:
        return None, None
    try:
        return int(parts[1]), int(parts[2])
    except ValueError:
        return None, None


def translate_key(key: str, page_rows: int = 10) -> Command | None:
    """Map one key token to a command, or ``None`` for unbound keys."""
    command = _FIXED_BINDINGS.get(key)
    if command is not None:
        return command
    if key == "PAGE_UP":
        return MoveSelection(-max(1, page_rows))
    if key == "PAGE_DOWN":
        return MoveSelection(max(1, page_rows))
    if key.startswith("MOUSE_WHEEL_UP:"):
        return MoveSelection(-1)
    if key.startswith("MOUSE_WHEEL_DOWN:"):
        return MoveSelection(1)
    if len(key) == 1 and key.isprintable():
        return TypeText(key)
    return None


class ClickTracker:
    """Turn row clicks into select/activate commands.

    A first click on a row selects it. Clicking the row that is already
    selected activates it. A second click on the same row within
    ``double_click_seconds`` is a double-click: directories are handed to the
    OS default handler instead of being entered, other rows are activated.

    A single click on the selected directory row cannot be told apart from
    the start of a double-click, so it is held until the window closes and
    then released by ``expired_activation``.
    """

    def __init__(
        self,
        double_click_seconds: float = DEFAULT_DOUBLE_CLICK_SECONDS,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self._double_click_seconds = double_click_seconds
        self._monotonic = monotonic
        self.last_click_idx = -1
        self.last_click_time = 0.0
        self.pending_idx: int | None = None

    def reset(self) -> None:
        self.last_click_idx = -1
        self.last_click_time = 0.0
        self.pending_idx = None

    def click(self, row_index: int, selected_index: int, is_directory: bool) -> Command | None:
        """Return the command for one click; ``None`` while a click is held."""
        now = self._monotonic()
        is_double = (
            row_index == self.last_click_idx
            and (now - self.last_click_time) <= self._double_click_seconds
        )
        if is_double:
            self.reset()
            return Activate(row_index, force_external=is_directory)

        self.last_click_idx = row_index
        self.last_click_time = now
        self.pending_idx = None
        if row_index != selected_index:
            return SelectRow(row_index)
        if is_directory:
            self.pending_idx = row_index
            return None
        self.reset()
        return Activate(row_index)

    def seconds_until_expiry(self) -> float | None:
        """Time left before a held click is released, or ``None`` if none is held."""
        if self.pending_idx is None:
            return None
        elapsed = self._monotonic() - self.last_click_time
        return max(0.0, self._double_click_seconds - elapsed)

    def expired_activation(self) -> Command | None:
        """Release a held click as ``Activate`` once no second click came."""
        remaining = self.seconds_until_expiry()
        if remaining is None or remaining > 0.0:
            return None
        index = self.pending_idx
        self.reset()
        return Activate(index)


__all__ = [
    "ClickTracker",
    "DEFAULT_DOUBLE_CLICK_SECONDS",
    "MOUSE_LEFT_DOWN_PREFIX",
    "parse_mouse_position",
    "translate_key",
]

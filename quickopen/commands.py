"""Commands understood by ``NavigationState``.

Input translation produces these values and nothing else, so key handling
stays a pure mapping that can be tested without a terminal.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TypeText:
    text: str


@dataclass(frozen=True)
class Backspace:
    pass


@dataclass(frozen=True)
class ClearFilter:
    pass


@dataclass(frozen=True)
class MoveSelection:
    delta: int


@dataclass(frozen=True)
class JumpToStart:
    pass


@dataclass(frozen=True)
class SelectRow:
    index: int


@dataclass(frozen=True)
class Activate:
    """Enter the row at ``index`` (the selected row when ``None``).

    ``force_external`` hands even a directory to the OS default handler.
    """

    index: int | None = None
    force_external: bool = False


@dataclass(frozen=True)
class GoBack:
    pass


@dataclass(frozen=True)
class GoForward:
    pass


@dataclass(frozen=True)
class Quit:
    pass


Command = (
    TypeText
    | Backspace
    | ClearFilter
    | MoveSelection
    | JumpToStart
    | SelectRow
    | Activate
    | GoBack
    | GoForward
    | Quit
)


__all__ = [
    "Activate",
    "Backspace",
    "ClearFilter",
    "Command",
    "GoBack",
    "GoForward",
    "JumpToStart",
    "MoveSelection",
    "Quit",
    "SelectRow",
    "TypeText",
]

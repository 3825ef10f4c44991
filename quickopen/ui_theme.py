"""Color palettes for the browser screen.

A palette assigns one SGR prefix to each screen element. Empty strings mean
"leave unstyled", which is how the plain palette serves `--no-color`.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """SGR prefixes for each element of the browser screen."""

    name: str
    reverse: str
    reset: str
    prompt: str
    filter_text: str
    filter_placeholder: str
    directory_label: str
    entry_dir: str
    entry_file: str
    entry_parent: str
    match_hit: str
    status: str
    status_error: str


DEFAULT_THEME = UITheme(
    name="default",
    reverse="\033[7m",
    reset="\033[0m",
    prompt="\033[38;5;44m",
    filter_text="\033[1;38;5;81m",
    filter_placeholder="\033[2;38;5;250m",
    directory_label="\033[38;5;109m",
    entry_dir="\033[1;38;5;130m",
    entry_file="\033[38;5;252m",
    entry_parent="\033[2;38;5;250m",
    match_hit="\033[1;4;38;5;229m",
    status="\033[2;38;5;250m",
    status_error="\033[38;5;203m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reverse="\033[7m",
    reset="\033[0m",
    prompt="\033[38;5;39m",
    filter_text="\033[1;38;5;45m",
    filter_placeholder="\033[2;38;5;110m",
    directory_label="\033[38;5;73m",
    entry_dir="\033[1;38;5;45m",
    entry_file="\033[38;5;252m",
    entry_parent="\033[2;38;5;110m",
    match_hit="\033[1;4;38;5;153m",
    status="\033[2;38;5;110m",
    status_error="\033[38;5;215m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reverse="",
    reset="",
    prompt="",
    filter_text="",
    filter_placeholder="",
    directory_label="",
    entry_dir="",
    entry_file="",
    entry_parent="",
    match_hit="",
    status="",
    status_error="",
)

_THEMES: dict[str, UITheme] = {theme.name: theme for theme in (DEFAULT_THEME, OCEAN_THEME)}


def available_theme_names() -> tuple[str, ...]:
    return tuple(sorted(_THEMES))


def normalize_theme_name(name: str | None) -> str:
    """Known theme name for ``name``, case-insensitively; ``default`` otherwise."""
    candidate = (name or "").strip().lower()
    return candidate if candidate in _THEMES else DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Palette for ``name``; ``no_color`` always selects the plain palette."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]

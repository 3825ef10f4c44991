"""Frame composition for the browser view.

Layout, top to bottom: filter prompt, current directory, entry rows, status
row. Helpers here are side-effect free except ``render_frame``, which writes a
fully composed frame to a file descriptor.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .ansi import clip_ansi_line, display_width
from .matcher import merge_runs
from .navigation import VisibleRow
from .ui_theme import UITheme

HEADER_ROWS = 2
FOOTER_ROWS = 1
FILTER_PROMPT = "> "
FILTER_PLACEHOLDER = "type to filter"
SELECTED_MARKER = "> "
UNSELECTED_MARKER = "  "
STATUS_HINT = "Enter open │ Alt+←/→ history │ Esc quit"


@dataclass(frozen=True)
class RenderContext:
    rows: list[VisibleRow]
    selected_index: int
    list_start: int
    filter_text: str
    current_directory: Path
    width: int
    height: int
    theme: UITheme
    match_count: int = 0
    entry_count: int = 0
    listing_error: OSError | None = None


def list_view_rows(height: int) -> int:
    """Number of entry rows that fit in a terminal ``height`` rows tall."""
    return max(1, height - HEADER_ROWS - FOOTER_ROWS)


def scroll_start(selected_index: int, list_start: int, view_rows: int, total_rows: int) -> int:
    """Return the first visible row index keeping the selection on screen."""
    start = list_start
    if selected_index < start:
        start = selected_index
    elif selected_index >= start + view_rows:
        start = selected_index - view_rows + 1
    return max(0, min(start, max(0, total_rows - view_rows)))


def row_index_for_screen_row(
    screen_row: int,
    list_start: int,
    view_rows: int,
    total_rows: int,
) -> int | None:
    """Map a 1-based terminal row to a visible-row index, if it shows one."""
    offset = screen_row - HEADER_ROWS - 1
    if not (0 <= offset < view_rows):
        return None
    index = list_start + offset
    if index >= total_rows:
        return None
    return index


def selected_with_ansi(text: str, theme: UITheme) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text or not theme.reverse:
        return text
    # Keep reverse video active even when the text contains internal resets.
    return theme.reverse + text.replace("\033[0m", "\033[0;7m") + theme.reset


def format_row_name(row: VisibleRow, theme: UITheme) -> str:
    """Style a row's name, emphasising filter hits."""
    if row.is_parent:
        base = theme.entry_parent
    elif row.is_directory:
        base = theme.entry_dir
    else:
        base = theme.entry_file

    out: list[str] = []
    for run in merge_runs(row.runs):
        style = theme.match_hit if run.matched else base
        out.append(f"{style}{run.text}{theme.reset}" if style else run.text)
    if row.is_directory and not row.is_parent:
        out.append(f"{base}/{theme.reset}" if base else "/")
    return "".join(out)


def format_row(row: VisibleRow, theme: UITheme, selected: bool, width: int) -> str:
    marker = SELECTED_MARKER if selected else UNSELECTED_MARKER
    line = clip_ansi_line(marker + format_row_name(row, theme), width)
    if not selected:
        return line
    padding = " " * max(0, width - display_width(line))
    return selected_with_ansi(line + padding, theme)


def format_filter_line(filter_text: str, theme: UITheme, width: int) -> str:
    prompt = f"{theme.prompt}{FILTER_PROMPT}{theme.reset}" if theme.prompt else FILTER_PROMPT
    if filter_text:
        body = f"{theme.filter_text}{filter_text}{theme.reset}" if theme.filter_text else filter_text
    else:
        body = (
            f"{theme.filter_placeholder}{FILTER_PLACEHOLDER}{theme.reset}"
            if theme.filter_placeholder
            else FILTER_PLACEHOLDER
        )
    return clip_ansi_line(prompt + body, width)


def build_status_line(left_text: str, width: int, right_text: str = STATUS_HINT) -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def format_status_line(context: RenderContext) -> str:
    theme = context.theme
    if context.listing_error is not None:
        error = context.listing_error
        reason = error.strerror or str(error)
        text = clip_ansi_line(f"cannot read {context.current_directory}: {reason}", context.width)
        return f"{theme.status_error}{text}{theme.reset}" if theme.status_error else text
    text = build_status_line(f"{context.match_count}/{context.entry_count}", context.width)
    return f"{theme.status}{text}{theme.reset}" if theme.status else text


def build_frame(context: RenderContext) -> list[str]:
    """Compose every screen line of one frame, top to bottom."""
    theme = context.theme
    width = max(1, context.width)
    lines: list[str] = [format_filter_line(context.filter_text, theme, width)]

    directory_text = clip_ansi_line(str(context.current_directory), width)
    lines.append(
        f"{theme.directory_label}{directory_text}{theme.reset}" if theme.directory_label else directory_text
    )

    view_rows = list_view_rows(context.height)
    visible = context.rows[context.list_start : context.list_start + view_rows]
    for offset, row in enumerate(visible):
        index = context.list_start + offset
        lines.append(format_row(row, theme, index == context.selected_index, width))
    lines.extend("" for _ in range(view_rows - len(visible)))

    lines.append(format_status_line(context))
    return lines


def render_frame(context: RenderContext, fd: int) -> None:
    """Clear the screen and write one composed frame to ``fd``."""
    out = "\033[H\033[J" + "\r\n".join(build_frame(context))
    os.write(fd, out.encode("utf-8", errors="replace"))


def format_plain_rows(rows: list[VisibleRow]) -> list[str]:
    """Rows as plain text, directories marked with a trailing slash."""
    out: list[str] = []
    for row in rows:
        if row.is_directory and not row.is_parent:
            out.append(f"{row.display_name}/")
        else:
            out.append(row.display_name)
    return out

"""Width measurement and clipping for styled terminal text.

Escape sequences occupy no cells. Rows mix them with names that may contain
wide or combining characters, so clipping counts cells rather than code points.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
# Capturing split: even items are plain text, odd items are escapes.
_ANSI_SPLIT_RE = re.compile(f"({ANSI_ESCAPE_RE.pattern})")


def char_display_width(ch: str) -> int:
    """Cells taken by ``ch``: 0 for combining marks, 2 for wide/fullwidth."""
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in ("W", "F"):
        return 2
    return 1


def display_width(text: str) -> int:
    return sum(char_display_width(ch) for ch in ANSI_ESCAPE_RE.sub("", text))


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Cut ``text`` to ``max_cols`` cells, keeping every escape sequence.

    Escapes after the cut are kept so a trailing reset still closes the
    styles opened before it. A wide character that would straddle the edge
    is dropped along with everything visible after it.
    """
    if max_cols <= 0 or not text:
        return ""

    kept: list[str] = []
    remaining = max_cols
    full = False
    for index, part in enumerate(_ANSI_SPLIT_RE.split(text)):
        if index % 2:
            kept.append(part)
            continue
        if full:
            continue
        for ch in part:
            width = char_display_width(ch)
            if width > remaining:
                full = True
                break
            kept.append(ch)
            remaining -= width
    return "".join(kept)

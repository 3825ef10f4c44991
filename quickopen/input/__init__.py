"""Input-layer public API: raw key decoding and command bindings.

Exports are split between low-level terminal decoding (``read_key``) and the
pure key-to-command mapping used by the runtime loop.
"""

from .reader import ESC_SEQUENCE_TIMEOUT_MS, UNKNOWN_KEY, _PENDING_BYTES, read_key
from .bindings import (
    ClickTracker,
    DEFAULT_DOUBLE_CLICK_SECONDS,
    MOUSE_LEFT_DOWN_PREFIX,
    parse_mouse_position,
    translate_key,
)

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "UNKNOWN_KEY",
    "ClickTracker",
    "DEFAULT_DOUBLE_CLICK_SECONDS",
    "MOUSE_LEFT_DOWN_PREFIX",
    "parse_mouse_position",
    "translate_key",
]

"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing, Alt combos, UTF-8 text, and SGR mouse events.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
# Escape sequences that parse but are not bound, or arrive truncated.
UNKNOWN_KEY = "UNKNOWN"
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\x15": "CTRL_U",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\t": "TAB",
    b"\r": "ENTER_CR",
    b"\n": "ENTER_LF",
}

_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

_CSI_TILDE_KEYS: dict[bytes, str] = {
    b"1": "HOME",
    b"7": "HOME",
    b"4": "END",
    b"8": "END",
    b"5": "PAGE_UP",
    b"6": "PAGE_DOWN",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _read_text(fd: int, lead: bytes) -> str:
    """Decode a possibly multi-byte UTF-8 character starting with ``lead``."""
    data = lead
    for _ in range(_utf8_length(lead[0]) - 1):
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            break
        data += part
    return data.decode("utf-8", errors="replace")


def _read_sgr_mouse(fd: int) -> str:
    # SGR mouse: ESC [ < btn ; col ; row (M/m)
    payload = []
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return UNKNOWN_KEY
        if part in {b"M", b"m"}:
            break
        payload.append(part)
        if len(payload) > 64:
            return UNKNOWN_KEY
    try:
        btn_s, col_s, row_s = b"".join(payload).decode("ascii").split(";")
        btn = int(btn_s)
        col = int(col_s)
        row = int(row_s)
    except ValueError:
        return UNKNOWN_KEY
    button = btn & 0b11
    is_wheel = (btn & 0b0100_0000) != 0
    if is_wheel:
        if button == 0:
            return f"MOUSE_WHEEL_UP:{col}:{row}"
        if button == 1:
            return f"MOUSE_WHEEL_DOWN:{col}:{row}"
        return "MOUSE"
    if button == 0 and not btn & 0b0010_0000:
        suffix = "DOWN" if part == b"M" else "UP"
        return f"MOUSE_LEFT_{suffix}:{col}:{row}"
    return "MOUSE"


def _read_csi(fd: int) -> str:
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return UNKNOWN_KEY
    if seq in _CSI_FINAL_KEYS:
        return _CSI_FINAL_KEYS[seq]
    if seq == b"<":
        return _read_sgr_mouse(fd)
    if not seq.isdigit():
        return UNKNOWN_KEY

    params = seq
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return UNKNOWN_KEY
        if part.isdigit() or part == b";":
            params += part
            if len(params) > 16:
                return UNKNOWN_KEY
            continue
        final = part
        break

    if final == b"~":
        return _CSI_TILDE_KEYS.get(params, UNKNOWN_KEY)
    # Modified arrows: ESC [ 1 ; <mod> <final>, where 3 and 9 mean Alt.
    _, _, modifier = params.partition(b";")
    if modifier in {b"3", b"9"} and final == b"D":
        return "ALT_LEFT"
    if modifier in {b"3", b"9"} and final == b"C":
        return "ALT_RIGHT"
    return _CSI_FINAL_KEYS.get(final, UNKNOWN_KEY)


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token from ``fd``; ``""`` when ``timeout_ms`` elapses.

    ``"ESC"`` is only returned for a lone Escape press. Sequences that are not
    recognised decode to ``UNKNOWN_KEY``.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    if ch in _CONTROL_KEYS:
        return _CONTROL_KEYS[ch]

    if ch != b"\x1b":
        return _read_text(fd, ch)

    # Escape, Alt combos, and CSI sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq in {b"b", b"B"}:
        return "ALT_LEFT"
    if seq in {b"f", b"F"}:
        return "ALT_RIGHT"
    if seq in {b"\r", b"\n"}:
        return "ALT_ENTER"
    if seq == b"O":
        ss3 = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if ss3 is None:
            return UNKNOWN_KEY
        return _CSI_FINAL_KEYS.get(ss3, UNKNOWN_KEY)
    if seq != b"[":
        # Alt+<key>: unbound, but the key itself is still delivered next.
        _PENDING_BYTES.append(seq)
        return UNKNOWN_KEY
    return _read_csi(fd)

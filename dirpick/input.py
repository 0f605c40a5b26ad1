"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing, navigation keys, and SGR mouse wheel events.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
CSI_MAX_LENGTH = 32
UNKNOWN_KEY = "UNKNOWN"
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\x04": "CTRL_D",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
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
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _read_utf8_tail(fd: int, first: bytes) -> str:
    """Complete a multi-byte UTF-8 character whose lead byte is ``first``."""
    lead = first[0]
    if lead >= 0xF0:
        needed = 3
    elif lead >= 0xE0:
        needed = 2
    elif lead >= 0xC0:
        needed = 1
    else:
        needed = 0
    data = first
    for _ in range(needed):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        data += nxt
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


def _read_csi_tail(fd: int, first: bytes) -> tuple[bytes, bytes | None]:
    """Consume a CSI sequence through its final byte (0x40-0x7E).

    Returns the parameter bytes and the final byte, or ``None`` as the final
    byte when the sequence is truncated or overlong.
    """
    params = b""
    ch: bytes | None = first
    while ch is not None:
        if 0x40 <= ch[0] <= 0x7E:
            return params, ch
        params += ch
        if len(params) > CSI_MAX_LENGTH:
            break
        ch = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    return params, None


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token from ``fd``.

    Returns ``""`` when ``timeout_ms`` elapses without input or the stream is
    closed. Escape sequences that are not recognized are consumed whole and
    reported as ``UNKNOWN_KEY``; ``"ESC"`` means a bare escape press.
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
        return _read_utf8_tail(fd, ch)

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"O":
        # SS3 form sent by some terminals in application cursor mode.
        seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if seq is None:
            return UNKNOWN_KEY
        return _CSI_FINAL_KEYS.get(seq, UNKNOWN_KEY)
    if seq != b"[":
        _PENDING_BYTES.append(seq)
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return UNKNOWN_KEY
    if seq == b"<":
        return _read_sgr_mouse(fd)
    params, final = _read_csi_tail(fd, seq)
    if final is None:
        return UNKNOWN_KEY
    if not params and final in _CSI_FINAL_KEYS:
        return _CSI_FINAL_KEYS[final]
    if final == b"~" and params in _CSI_TILDE_KEYS:
        return _CSI_TILDE_KEYS[params]
    return UNKNOWN_KEY

"""Raw terminal key decoding into symbolic key tokens."""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
REPLACEMENT_CHAR = "\ufffd"

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
    b"4": "END",
    b"5": "PGUP",
    b"6": "PGDN",
    b"7": "HOME",
    b"8": "END",
}

# One byte per fd read ahead while decoding a sequence that turned out not
# to belong to it; the next read returns it first.
_pending: dict[int, bytes] = {}


def _read_byte(fd: int, timeout_ms: int | None) -> bytes:
    pending = _pending.pop(fd, b"")
    if pending:
        return pending
    if timeout_ms is not None:
        ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
        if not ready:
            return b""
    return os.read(fd, 1)


def _unread_byte(fd: int, byte: bytes) -> None:
    if byte:
        _pending[fd] = byte


def _utf8_length(lead: int) -> int:
    """Sequence length announced by a UTF-8 lead byte, 0 when it cannot lead."""
    if 0xC0 <= lead < 0xE0:
        return 2
    if 0xE0 <= lead < 0xF0:
        return 3
    if 0xF0 <= lead < 0xF8:
        return 4
    return 0


def _read_utf8(fd: int, lead: bytes) -> str:
    length = _utf8_length(lead[0])
    if not length:
        return REPLACEMENT_CHAR
    data = lead
    for _ in range(length - 1):
        byte = _read_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if not byte or not 0x80 <= byte[0] < 0xC0:
            # Truncated sequence: the byte that broke it starts the next key.
            _unread_byte(fd, byte)
            return REPLACEMENT_CHAR
        data += byte
    text = data.decode("utf-8", errors="replace")
    return text if len(text) == 1 else REPLACEMENT_CHAR


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key from ``fd`` and return its token.

    Returns ``""`` on timeout or EOF. Arrow, paging, and Home/End escape
    sequences decode to names such as ``"UP"`` or ``"PGDN"``; a lone escape
    is ``"ESC"``; printable input is returned as the character itself.
    Malformed UTF-8 yields one ``"\\ufffd"`` per broken sequence and never
    consumes the byte that follows it.
    """
    ch = _read_byte(fd, timeout_ms)
    if not ch:
        return ""
    if ch in {b"\r", b"\n"}:
        return "ENTER"
    if ch == b"\x03":
        return "CTRL_C"
    if ch != b"\x1b":
        if ch[0] >= 0x80:
            return _read_utf8(fd, ch)
        return ch.decode("ascii")

    seq = _read_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq not in {b"[", b"O"}:
        _unread_byte(fd, seq)
        return "ESC"
    final = _read_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if not final:
        return "ESC"
    if final in _CSI_FINAL_KEYS:
        return _CSI_FINAL_KEYS[final]
    if final in _CSI_TILDE_KEYS:
        terminator = _read_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if terminator == b"~":
            return _CSI_TILDE_KEYS[final]
    return "ESC"


__all__ = ["ESC_SEQUENCE_TIMEOUT_MS", "REPLACEMENT_CHAR", "read_key"]

"""Terminal control for the slide viewer.

Raw mode plus the alternate screen while the viewer runs, a reverse-video
status row, and inline PNG placement through the kitty graphics protocol.
"""

from __future__ import annotations

import base64
import contextlib
import os
import termios
import tty
from pathlib import Path

ENTER_SCREEN = b"\x1b[?1049h\x1b[?25l"
LEAVE_SCREEN = b"\x1b[?25h\x1b[?1049l"
CLEAR_SCREEN = b"\x1b[2J\x1b[H"
KITTY_DELETE_ALL = b"\x1b_Ga=d,d=A,q=2;\x1b\\"


def kitty_png_sequence(image_path: Path, row: int, col: int, columns: int, rows: int) -> bytes:
    """Build the kitty ``a=T`` transmit-and-place sequence for a PNG file.

    The image is referenced by path (``t=f``), so only the base64 path
    travels over the tty. Cursor position is saved and restored around it.
    """
    encoded_path = base64.b64encode(str(image_path).encode("utf-8")).decode("ascii")
    return (
        f"\x1b7\x1b[{max(1, row)};{max(1, col)}H"
        f"\x1b_Ga=T,t=f,f=100,q=2,c={max(1, columns)},r={max(1, rows)};{encoded_path}\x1b\\"
        "\x1b8"
    ).encode("ascii")


class TerminalController:
    """Own the viewer's tty: mode switches, status row, and image placement."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def _write(self, data: bytes) -> None:
        os.write(self.stdout_fd, data)

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        self._write(ENTER_SCREEN)

    def disable_tui_mode(self) -> None:
        self._write(LEAVE_SCREEN)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Run the body in raw alternate-screen mode, restoring the tty after."""
        self.enable_tui_mode()
        try:
            yield
        finally:
            self.disable_tui_mode()

    def supports_kitty_graphics(self) -> bool:
        if os.environ.get("TERM", "") == "xterm-kitty":
            return True
        return bool(os.environ.get("KITTY_WINDOW_ID"))

    def clear_screen(self) -> None:
        self._write(CLEAR_SCREEN)

    def kitty_clear_images(self) -> None:
        self._write(KITTY_DELETE_ALL)

    def kitty_draw_png(self, image_path: Path, col: int, row: int, width_cells: int, height_cells: int) -> None:
        """Place ``image_path`` with its top-left cell at ``(row, col)``."""
        self._write(kitty_png_sequence(image_path, row, col, width_cells, height_cells))

    def write_status(self, text: str, row: int, width: int) -> None:
        """Draw ``text`` on ``row`` padded or clipped to ``width`` columns."""
        width = max(0, width)
        clipped = text[:width].ljust(width)
        self._write(f"\x1b[{max(1, row)};1H\x1b[7m{clipped}\x1b[0m".encode("utf-8", errors="replace"))


__all__ = ["TerminalController", "kitty_png_sequence"]

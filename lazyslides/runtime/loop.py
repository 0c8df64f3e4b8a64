"""Interactive viewer loop: draw, read one key, dispatch its command.

The loop is wiring only; navigation semantics live in the session and the
keymap dispatcher. Terminal and key reading are injected for testability.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable, Mapping
from pathlib import Path

from ..errors import AccessError, NavigationError, NoParentDirectory, OutOfRange
from ..input.keymap import DEFAULT_SKIP_STEP, NavigationCommand, dispatch_command
from ..preview import is_png
from .logs import console_logging_suspended
from .session import ViewerSession
from .terminal import TerminalController

logger = logging.getLogger(__name__)

EXIT_KEYS = frozenset({"CTRL_C"})


def describe_error(exc: NavigationError) -> str:
    """User-facing status text for a failed navigation step."""
    if isinstance(exc, (OutOfRange, NoParentDirectory)):
        return "Cannot move further"
    if isinstance(exc, AccessError):
        reason = f": {exc.reason}" if exc.reason else ""
        return f"Cannot read {exc.path}{reason}"
    return str(exc)


def build_status_line(session: ViewerSession, message: str = "") -> str:
    """Compose ``[index/total] path (filter)`` plus an optional message."""
    path = session.get_current()
    index, total = session.position()
    status = f"[{index}/{total}] {path} ({session.filter_spec.describe()})"
    if message:
        status = f"{status} | {message}"
    return status


def _draw(
    session: ViewerSession,
    terminal: TerminalController,
    kitty_enabled: bool,
    message: str,
    terminal_size: Callable[[], os.terminal_size],
) -> None:
    size = terminal_size()
    rows = max(2, size.lines)
    terminal.clear_screen()
    if kitty_enabled:
        terminal.kitty_clear_images()
        current = session.get_current()
        if is_png(current):
            terminal.kitty_draw_png(current, col=1, row=1, width_cells=size.columns, height_cells=rows - 1)
    terminal.write_status(build_status_line(session, message), row=rows, width=size.columns)


def run_viewer_loop(
    session: ViewerSession,
    terminal: TerminalController,
    read_key: Callable[[], str],
    keymap: Mapping[str, NavigationCommand],
    skip_step: int = DEFAULT_SKIP_STEP,
    terminal_size: Callable[[], os.terminal_size] = shutil.get_terminal_size,
) -> Path:
    """Run until a quit key or end of input, then return the current file.

    Console log output is held back while the terminal is in raw mode; only
    file handlers see records logged during the session.
    """
    kitty_enabled = terminal.supports_kitty_graphics()
    message = ""
    try:
        session.show(0)
    except NavigationError as exc:
        message = describe_error(exc)

    with console_logging_suspended(), terminal.raw_mode():
        while True:
            _draw(session, terminal, kitty_enabled, message, terminal_size)
            key = read_key()
            if not key or key in EXIT_KEYS:
                break
            command = keymap.get(key)
            if command is None:
                continue
            if command is NavigationCommand.QUIT:
                break
            try:
                dispatch_command(session, command, skip_step)
            except NavigationError as exc:
                logger.info("%s failed: %s", command.value, exc)
                message = describe_error(exc)
            else:
                message = ""
    return session.get_current()


__all__ = ["EXIT_KEYS", "build_status_line", "describe_error", "run_viewer_loop"]

"""Interactive viewer bootstrap: session, terminal, keymap, then the loop."""

from __future__ import annotations

import sys
from pathlib import Path

from ..file_tree_model import FilterSpec
from ..input import read_key
from .config import load_keymap, load_skip_step
from .loop import run_viewer_loop
from .session import ViewerSession
from .terminal import TerminalController


def run_viewer(start: Path, filter_spec: FilterSpec, root: Path | None = None) -> Path:
    """Open a session at ``start`` and browse it in the terminal.

    Returns the file the viewer was on when it exited. Session construction
    errors propagate before the terminal enters raw mode.
    """
    session = ViewerSession.open(start, filter_spec, root=root)
    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    return run_viewer_loop(
        session,
        terminal,
        read_key=lambda: read_key(stdin_fd),
        keymap=load_keymap(),
        skip_step=load_skip_step(),
    )


__all__ = ["run_viewer"]

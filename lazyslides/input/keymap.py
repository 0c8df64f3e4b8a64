"""Key-to-command table for viewer navigation.

Keys map to ``NavigationCommand`` members rather than callbacks; one
branch chain in ``dispatch_command`` turns a command into a session call.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from pathlib import Path

from ..runtime.session import ViewerSession

DEFAULT_SKIP_STEP = 10


class NavigationCommand(Enum):
    """Navigation actions a key can be bound to, named as in config files."""

    NEXT_IMAGE = "NEXT_IMAGE"
    PREV_IMAGE = "PREV_IMAGE"
    SKIP_FORWARD = "SKIP_FORWARD"
    SKIP_BACKWARD = "SKIP_BACKWARD"
    NEXT_DIRECTORY = "NEXT_DIRECTORY"
    PREV_DIRECTORY = "PREV_DIRECTORY"
    FIRST_IMAGE = "FIRST_IMAGE"
    LAST_IMAGE = "LAST_IMAGE"
    RELOAD = "RELOAD"
    QUIT = "QUIT"

    @classmethod
    def from_name(cls, name: str) -> NavigationCommand | None:
        try:
            return cls(name.strip().upper())
        except ValueError:
            return None


DEFAULT_KEYSET: dict[str, str] = {
    "RIGHT": "NEXT_IMAGE",
    "l": "NEXT_IMAGE",
    " ": "NEXT_IMAGE",
    "LEFT": "PREV_IMAGE",
    "h": "PREV_IMAGE",
    "PGDN": "SKIP_FORWARD",
    "PGUP": "SKIP_BACKWARD",
    "DOWN": "NEXT_DIRECTORY",
    "j": "NEXT_DIRECTORY",
    "UP": "PREV_DIRECTORY",
    "k": "PREV_DIRECTORY",
    "HOME": "FIRST_IMAGE",
    "g": "FIRST_IMAGE",
    "END": "LAST_IMAGE",
    "G": "LAST_IMAGE",
    "r": "RELOAD",
    "q": "QUIT",
    "ESC": "QUIT",
}


def build_keymap(keyset: Mapping[object, object]) -> dict[str, NavigationCommand]:
    """Resolve ``{key: action-name}`` into ``{key: NavigationCommand}``.

    Entries with non-string keys or values, empty keys, or unknown action
    names are dropped.
    """
    keymap: dict[str, NavigationCommand] = {}
    for key, action in keyset.items():
        if not isinstance(key, str) or not key or not isinstance(action, str):
            continue
        command = NavigationCommand.from_name(action)
        if command is None:
            continue
        keymap[key] = command
    return keymap


DEFAULT_KEYMAP: dict[str, NavigationCommand] = build_keymap(DEFAULT_KEYSET)


def dispatch_command(
    session: ViewerSession,
    command: NavigationCommand,
    skip_step: int = DEFAULT_SKIP_STEP,
) -> Path | None:
    """Run ``command`` against ``session`` and return the landing path.

    ``QUIT`` returns ``None``. Navigation errors propagate to the caller.
    """
    if command is NavigationCommand.NEXT_IMAGE:
        return session.show(1).path
    if command is NavigationCommand.PREV_IMAGE:
        return session.show(-1).path
    if command is NavigationCommand.SKIP_FORWARD:
        return session.show(skip_step).path
    if command is NavigationCommand.SKIP_BACKWARD:
        return session.show(-skip_step).path
    if command is NavigationCommand.NEXT_DIRECTORY:
        return session.step_next_directory()
    if command is NavigationCommand.PREV_DIRECTORY:
        return session.step_prev_directory()
    if command is NavigationCommand.FIRST_IMAGE:
        return session.move_first()
    if command is NavigationCommand.LAST_IMAGE:
        return session.move_last()
    if command is NavigationCommand.RELOAD:
        return session.reload()
    return None


__all__ = [
    "DEFAULT_KEYMAP",
    "DEFAULT_KEYSET",
    "DEFAULT_SKIP_STEP",
    "NavigationCommand",
    "build_keymap",
    "dispatch_command",
]

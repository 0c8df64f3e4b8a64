"""Input-layer public API: terminal key decoding and the navigation keymap."""

from .reader import ESC_SEQUENCE_TIMEOUT_MS, REPLACEMENT_CHAR, read_key
from .keymap import (
    DEFAULT_KEYMAP,
    DEFAULT_KEYSET,
    DEFAULT_SKIP_STEP,
    NavigationCommand,
    build_keymap,
    dispatch_command,
)

__all__ = [
    "read_key",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "REPLACEMENT_CHAR",
    "DEFAULT_KEYMAP",
    "DEFAULT_KEYSET",
    "DEFAULT_SKIP_STEP",
    "NavigationCommand",
    "build_keymap",
    "dispatch_command",
]

"""Error taxonomy for directory listing, tree walks, and cursor navigation.

``NavigationError`` subclasses are what the navigation surface raises.
``PreviewError`` subclasses come from the image payload renderer.
"""

from __future__ import annotations

from pathlib import Path


class NavigationError(Exception):
    """Base class for every failure raised by navigation operations."""


class AccessError(NavigationError):
    """A directory could not be read (permission, missing, not a directory)."""

    def __init__(self, path: Path, reason: str | None = None) -> None:
        self.path = path
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"cannot read directory {path}{detail}")


class NoParentDirectory(NavigationError):
    """Ascending past the filesystem root or the configured root boundary."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"no parent directory above {path}")


class EmptyBuffer(NavigationError):
    """The cursor has no loaded listing to point into."""

    def __init__(self, message: str = "files are not in buffer") -> None:
        super().__init__(message)


class OutOfRange(NavigationError):
    """Nothing further is reachable in the requested direction."""

    def __init__(self, direction: str, origin: Path | None = None) -> None:
        self.direction = direction
        self.origin = origin
        where = f" (from {origin})" if origin is not None else ""
        super().__init__(f"no further image {direction}{where}")


class PreviewError(Exception):
    """Base class for image payload rendering failures."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(message)


class UnsupportedFormat(PreviewError):
    """The file extension does not map to a displayable image type."""


class ImageReadError(PreviewError):
    """Image bytes could not be read from disk."""


__all__ = [
    "NavigationError",
    "AccessError",
    "NoParentDirectory",
    "EmptyBuffer",
    "OutOfRange",
    "PreviewError",
    "UnsupportedFormat",
    "ImageReadError",
]

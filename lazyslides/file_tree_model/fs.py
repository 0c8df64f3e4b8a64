"""Filesystem scanning for filtered, path-ordered directory listings.

Every call re-reads the directory; nothing is cached between calls.
"""

from __future__ import annotations

import os
from pathlib import Path

from ..errors import AccessError
from .types import DirectoryChild, FilterSpec


def path_sort_key(path: Path) -> bytes:
    """Ordering key shared by listings and tree walks: the full path as OS bytes.

    Names that are not valid UTF-8 sort by their raw bytes, not by the
    surrogate code points ``str`` gives them.
    """
    return os.fsencode(path)


def list_directory_children(directory: Path) -> list[DirectoryChild]:
    """Scan immediate children of ``directory`` in one ``scandir`` pass.

    Directories are detected without following symlinks so a symlink loop can
    never make tree walks infinite. Files are detected following symlinks.
    Raises ``AccessError`` when the directory itself cannot be scanned.
    """
    children: list[DirectoryChild] = []
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                try:
                    is_dir = entry.is_dir(follow_symlinks=False)
                except OSError:
                    is_dir = False
                try:
                    is_file = not is_dir and entry.is_file()
                except OSError:
                    is_file = False
                children.append(
                    DirectoryChild(
                        name=entry.name,
                        path=Path(entry.path),
                        is_dir=is_dir,
                        is_file=is_file,
                    )
                )
    except OSError as exc:
        raise AccessError(directory, exc.strerror or str(exc)) from exc

    children.sort(key=lambda child: path_sort_key(child.path))
    return children


def list_files(directory: Path, filter_spec: FilterSpec) -> tuple[Path, ...]:
    """Return regular files in ``directory`` accepted by ``filter_spec``.

    The result is sorted by full path bytes and may be empty.
    """
    return tuple(
        child.path
        for child in list_directory_children(directory)
        if child.is_file and filter_spec.accepts(child.path)
    )


def list_subdirectories(directory: Path) -> tuple[Path, ...]:
    """Return immediate child directories of ``directory`` in path order."""
    return tuple(child.path for child in list_directory_children(directory) if child.is_dir)


__all__ = [
    "path_sort_key",
    "list_directory_children",
    "list_files",
    "list_subdirectories",
]

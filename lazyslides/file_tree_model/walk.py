"""Pre-order directory walks: lexicographically next/previous directory.

The walker is filter-agnostic. It only orders directories; skipping
directories without eligible files is the cursor's retry loop.

Order is depth-first pre-order over full paths in byte order: a directory comes
before its children, and children come before the directory's greater
siblings. ``next_directory`` and ``prev_directory`` are exact inverses over
that order. Both walk ancestors with explicit loops so stack depth never
depends on nesting depth.

Listing failures met during a walk are logged and treated as "no
candidates here"; they never abort the walk.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from ..errors import AccessError, NoParentDirectory
from .fs import list_subdirectories, path_sort_key
from .types import Direction

logger = logging.getLogger(__name__)


def parent_directory(directory: Path, root: Path | None = None) -> Path:
    """Return the parent of ``directory`` or raise ``NoParentDirectory``.

    ``root`` is an optional boundary that is never ascended past.
    """
    if root is not None and directory == root:
        raise NoParentDirectory(directory)
    parent = directory.parent
    if parent == directory:
        raise NoParentDirectory(directory)
    return parent


def _subdirectories_or_empty(directory: Path) -> tuple[Path, ...]:
    try:
        return list_subdirectories(directory)
    except AccessError as exc:
        logger.warning("Skipping unreadable directory %s (%s)", directory, exc.reason)
        return ()


def last_descendant(directory: Path) -> Path:
    """Follow greatest-child links from ``directory`` down to a leaf directory."""
    current = directory
    while True:
        children = _subdirectories_or_empty(current)
        if not children:
            return current
        current = children[-1]


def next_directory(directory: Path, root: Path | None = None) -> Path | None:
    """Return the directory after ``directory`` in pre-order, or ``None``.

    Descends into the first child when there is one; otherwise climbs the
    ancestor chain looking for the first sibling greater than the directory
    being left at each level.
    """
    children = _subdirectories_or_empty(directory)
    if children:
        return children[0]

    current = directory
    while True:
        try:
            parent = parent_directory(current, root)
        except NoParentDirectory:
            return None
        current_key = path_sort_key(current)
        for sibling in _subdirectories_or_empty(parent):
            if path_sort_key(sibling) > current_key:
                return sibling
        current = parent


def prev_directory(directory: Path, root: Path | None = None) -> Path | None:
    """Return the directory before ``directory`` in pre-order, or ``None``.

    The greatest lesser sibling wins, entered at its deepest last descendant.
    Without a lesser sibling the parent itself is the previous directory.
    """
    try:
        parent = parent_directory(directory, root)
    except NoParentDirectory:
        return None

    directory_key = path_sort_key(directory)
    for sibling in reversed(_subdirectories_or_empty(parent)):
        if path_sort_key(sibling) < directory_key:
            return last_descendant(sibling)
    return parent


def adjacent_directory(directory: Path, direction: Direction, root: Path | None = None) -> Path | None:
    if direction is Direction.FORWARD:
        return next_directory(directory, root)
    return prev_directory(directory, root)


def iter_directories(start: Path, direction: Direction, root: Path | None = None) -> Iterator[Path]:
    """Yield successive walker results from ``start`` until exhaustion."""
    current = start
    while True:
        candidate = adjacent_directory(current, direction, root)
        if candidate is None:
            return
        yield candidate
        current = candidate


__all__ = [
    "parent_directory",
    "last_descendant",
    "next_directory",
    "prev_directory",
    "adjacent_directory",
    "iter_directories",
]

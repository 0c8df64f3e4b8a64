"""Domain model for filtered directory listings and ordered tree walks.

This package contains non-UI primitives:
- filter specs and directory-entry datatypes
- filesystem listing helpers (files and subdirectories, path ordered)
- pre-order next/previous directory walks
"""

from __future__ import annotations

from .types import ALL_FILES_EXTENSION, Direction, DirectoryChild, FilterSpec, normalize_extension
from .fs import list_directory_children, list_files, list_subdirectories, path_sort_key
from .walk import (
    adjacent_directory,
    iter_directories,
    last_descendant,
    next_directory,
    parent_directory,
    prev_directory,
)

__all__ = [
    "ALL_FILES_EXTENSION",
    "Direction",
    "DirectoryChild",
    "FilterSpec",
    "normalize_extension",
    "path_sort_key",
    "list_directory_children",
    "list_files",
    "list_subdirectories",
    "parent_directory",
    "last_descendant",
    "next_directory",
    "prev_directory",
    "adjacent_directory",
    "iter_directories",
]

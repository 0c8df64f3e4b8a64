"""Domain datatypes for filtered directory listings."""

from __future__ import annotations

import fnmatch
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

ALL_FILES_EXTENSION = "*"


class Direction(Enum):
    """Traversal direction through the flattened file sequence."""

    FORWARD = "forward"
    BACKWARD = "backward"

    @property
    def step(self) -> int:
        return 1 if self is Direction.FORWARD else -1

    @classmethod
    def for_offset(cls, offset: int) -> Direction:
        """Return ``BACKWARD`` for negative offsets, otherwise ``FORWARD``."""
        return cls.BACKWARD if offset < 0 else cls.FORWARD


def normalize_extension(extension: str) -> str:
    """Lower-case ``extension`` and strip surrounding space and leading dots."""
    return extension.strip().lstrip(".").lower()


@dataclass(frozen=True)
class FilterSpec:
    """File acceptance rule: an extension allow-list or one glob pattern.

    Exactly one of ``extensions`` and ``pattern`` is meaningful. Extension
    matching is case-insensitive and looks at the final suffix only; glob
    matching is case-sensitive shell-glob semantics on the file name.
    """

    extensions: frozenset[str] = frozenset()
    pattern: str | None = None

    def __post_init__(self) -> None:
        if self.extensions and self.pattern is not None:
            raise ValueError("a filter takes either extensions or a glob pattern, not both")

    @classmethod
    def from_extensions(cls, extensions: Iterable[str]) -> FilterSpec:
        normalized = frozenset(
            normalized
            for normalized in (normalize_extension(ext) for ext in extensions)
            if normalized
        )
        return cls(extensions=normalized)

    @classmethod
    def from_glob(cls, pattern: str) -> FilterSpec:
        if not pattern:
            raise ValueError("glob pattern must not be empty")
        return cls(pattern=pattern)

    @classmethod
    def all_files(cls) -> FilterSpec:
        return cls(extensions=frozenset({ALL_FILES_EXTENSION}))

    @property
    def is_glob(self) -> bool:
        return self.pattern is not None

    def accepts(self, path: Path) -> bool:
        """Return whether the file name of ``path`` satisfies this filter."""
        if self.pattern is not None:
            return fnmatch.fnmatchcase(path.name, self.pattern)
        if ALL_FILES_EXTENSION in self.extensions:
            return True
        suffix = path.suffix
        if not suffix:
            return False
        return normalize_extension(suffix) in self.extensions

    def describe(self) -> str:
        """Short human-readable label used in status rows and logs."""
        if self.pattern is not None:
            return self.pattern
        return ",".join(sorted(self.extensions)) or "<none>"


@dataclass(frozen=True)
class DirectoryChild:
    """One entry observed while scanning a directory."""

    name: str
    path: Path
    is_dir: bool
    is_file: bool


__all__ = [
    "ALL_FILES_EXTENSION",
    "Direction",
    "DirectoryChild",
    "FilterSpec",
    "normalize_extension",
]

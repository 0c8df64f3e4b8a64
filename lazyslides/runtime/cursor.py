"""Navigation cursor over the flattened, filtered file sequence.

The cursor holds exactly one non-empty directory listing plus an index into
it. Moves past either end of the listing reload the adjacent directory in
walk order, skipping directories without eligible files. Every mutating
operation computes its landing first and commits it only on success, so a
failed move leaves the cursor where it was.
"""

from __future__ import annotations

import logging
from bisect import bisect_left
from pathlib import Path

from ..errors import AccessError, EmptyBuffer, OutOfRange
from ..file_tree_model import (
    Direction,
    FilterSpec,
    iter_directories,
    list_files,
    parent_directory,
    path_sort_key,
)

logger = logging.getLogger(__name__)


def anchor_index(listing: tuple[Path, ...], anchor: Path) -> int:
    """Index of ``anchor`` in ``listing``, else of the first entry not less than it.

    Falls back to ``0`` when every entry sorts before ``anchor``.
    """
    keys = [path_sort_key(path) for path in listing]
    index = bisect_left(keys, path_sort_key(anchor))
    return index if index < len(listing) else 0


class NavigationCursor:
    """Stateful pointer into the directory listing currently loaded.

    ``root`` optionally bounds tree walks: directories above it are never
    visited. Construction loads the starting file's directory and raises
    ``AccessError`` when it is unreadable or ``EmptyBuffer`` when it holds no
    eligible file.
    """

    def __init__(self, start: Path, filter_spec: FilterSpec, root: Path | None = None) -> None:
        start = Path(start).expanduser().resolve()
        if root is not None:
            root = Path(root).expanduser().resolve()
            if not start.is_relative_to(root):
                raise ValueError(f"{start} is not inside root {root}")

        if start.is_dir():
            directory = start
        else:
            directory = parent_directory(start)

        listing = list_files(directory, filter_spec)
        if not listing:
            raise EmptyBuffer(f"no files matching {filter_spec.describe()} in {directory}")

        self._root = root
        self._filter_spec = filter_spec
        self._directory = directory
        self._listing = listing
        self._index = 0 if start == directory else anchor_index(listing, start)
        logger.debug(
            "Cursor opened in %s (%d files, index %d, filter %s)",
            directory,
            len(listing),
            self._index,
            filter_spec.describe(),
        )

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def listing(self) -> tuple[Path, ...]:
        return self._listing

    @property
    def index(self) -> int:
        return self._index

    @property
    def filter_spec(self) -> FilterSpec:
        return self._filter_spec

    @property
    def root(self) -> Path | None:
        return self._root

    def current(self) -> Path:
        """Return the file under the cursor."""
        if not 0 <= self._index < len(self._listing):
            raise EmptyBuffer()
        return self._listing[self._index]

    def position(self) -> tuple[int, int]:
        """Return the 1-based index and the listing length."""
        return self._index + 1, len(self._listing)

    def _commit(self, directory: Path, listing: tuple[Path, ...], index: int) -> Path:
        if directory != self._directory:
            logger.debug("Changed directory to %s (%d files)", directory, len(listing))
        self._directory = directory
        self._listing = listing
        self._index = index
        return listing[index]

    def _find_landing(
        self,
        origin: Path,
        direction: Direction,
        filter_spec: FilterSpec,
    ) -> tuple[Path, tuple[Path, ...]]:
        """Walk from ``origin`` to the nearest directory with eligible files."""
        for candidate in iter_directories(origin, direction, self._root):
            try:
                listing = list_files(candidate, filter_spec)
            except AccessError as exc:
                logger.warning("Skipping unreadable directory %s (%s)", candidate, exc.reason)
                continue
            if listing:
                return candidate, listing
            logger.debug("Skipping %s: no files matching %s", candidate, filter_spec.describe())
        raise OutOfRange(direction.value, origin)

    def move_by(self, offset: int) -> Path:
        """Move ``offset`` files along the flattened sequence and return the landing.

        Crossing into another directory enters at its first (forward) or last
        (backward) file and keeps consuming the remaining offset from there.
        """
        current = self.current()
        if offset == 0:
            return current

        directory = self._directory
        listing = self._listing
        target = self._index + offset
        if offset > 0:
            while target >= len(listing):
                target -= len(listing)
                directory, listing = self._find_landing(directory, Direction.FORWARD, self._filter_spec)
        else:
            while target < 0:
                directory, listing = self._find_landing(directory, Direction.BACKWARD, self._filter_spec)
                target += len(listing)
        return self._commit(directory, listing, target)

    def change_directory(self, direction: Direction) -> Path:
        """Jump to the adjacent non-empty directory, ignoring file offsets."""
        directory, listing = self._find_landing(self._directory, direction, self._filter_spec)
        index = 0 if direction is Direction.FORWARD else len(listing) - 1
        return self._commit(directory, listing, index)

    def next_directory(self) -> Path:
        return self.change_directory(Direction.FORWARD)

    def prev_directory(self) -> Path:
        return self.change_directory(Direction.BACKWARD)

    def move_first(self) -> Path:
        return self._commit(self._directory, self._listing, 0)

    def move_last(self) -> Path:
        return self._commit(self._directory, self._listing, len(self._listing) - 1)

    def _reload_with(self, filter_spec: FilterSpec) -> tuple[Path, tuple[Path, ...], int]:
        anchor = self.current()
        listing = list_files(self._directory, filter_spec)
        if listing:
            return self._directory, listing, anchor_index(listing, anchor)

        # Backward first; forward only once nothing precedes this directory.
        try:
            directory, listing = self._find_landing(self._directory, Direction.BACKWARD, filter_spec)
            return directory, listing, len(listing) - 1
        except OutOfRange:
            logger.debug(
                "Nothing before %s under %s, falling back to a forward search",
                self._directory,
                filter_spec.describe(),
            )
        directory, listing = self._find_landing(self._directory, Direction.FORWARD, filter_spec)
        return directory, listing, 0

    def reload(self) -> Path:
        """Re-read the current directory, keeping the current file when possible."""
        return self._commit(*self._reload_with(self._filter_spec))

    def set_filter(self, filter_spec: FilterSpec) -> Path:
        """Replace the filter and reload; the old filter stays on failure."""
        landing = self._reload_with(filter_spec)
        self._filter_spec = filter_spec
        logger.debug("Filter changed to %s", filter_spec.describe())
        return self._commit(*landing)


__all__ = ["NavigationCursor", "anchor_index"]

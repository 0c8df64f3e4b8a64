"""Lock-guarded viewer session: the navigation surface callers talk to.

One session owns one cursor and one renderer. Each public method holds the
session lock for its whole duration, so at most one navigation step is in
flight at a time.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..errors import PreviewError
from ..file_tree_model import Direction, FilterSpec
from ..preview import render_data_uri
from .cursor import NavigationCursor

logger = logging.getLogger(__name__)

Renderer = Callable[[Path], str]


@dataclass(frozen=True)
class ShownImage:
    """A file the session landed on plus its rendered payload."""

    path: Path
    payload: str
    position: tuple[int, int]


class ViewerSession:
    """Serialize navigation calls over a single ``NavigationCursor``."""

    def __init__(self, cursor: NavigationCursor, renderer: Renderer = render_data_uri) -> None:
        self._cursor = cursor
        self._renderer = renderer
        self._lock = threading.Lock()

    @classmethod
    def open(
        cls,
        start: Path,
        filter_spec: FilterSpec,
        root: Path | None = None,
        renderer: Renderer = render_data_uri,
    ) -> ViewerSession:
        """Create the cursor for ``start`` and wrap it in a session."""
        return cls(NavigationCursor(start, filter_spec, root=root), renderer=renderer)

    @property
    def filter_spec(self) -> FilterSpec:
        with self._lock:
            return self._cursor.filter_spec

    def get_current(self) -> Path:
        with self._lock:
            return self._cursor.current()

    def position(self) -> tuple[int, int]:
        with self._lock:
            return self._cursor.position()

    def move_by(self, offset: int) -> Path:
        with self._lock:
            return self._cursor.move_by(offset)

    def step_next_directory(self) -> Path:
        with self._lock:
            return self._cursor.change_directory(Direction.FORWARD)

    def step_prev_directory(self) -> Path:
        with self._lock:
            return self._cursor.change_directory(Direction.BACKWARD)

    def move_first(self) -> Path:
        with self._lock:
            return self._cursor.move_first()

    def move_last(self) -> Path:
        with self._lock:
            return self._cursor.move_last()

    def set_filter(self, filter_spec: FilterSpec) -> Path:
        with self._lock:
            return self._cursor.set_filter(filter_spec)

    def reload(self) -> Path:
        with self._lock:
            return self._cursor.reload()

    def show(self, offset: int = 0) -> ShownImage:
        """Move by ``offset`` and render, stepping past files that fail to render.

        Unrenderable files are skipped one at a time in the direction of
        ``offset`` (forward for ``0``) until one renders; ``OutOfRange``
        propagates when the tree runs out first.
        """
        step = Direction.for_offset(offset).step
        with self._lock:
            path = self._cursor.move_by(offset)
            while True:
                try:
                    payload = self._renderer(path)
                except PreviewError as exc:
                    logger.info("Skipping %s: %s", path, exc)
                    path = self._cursor.move_by(step)
                    continue
                logger.debug("Current image: %s", path)
                return ShownImage(path=path, payload=payload, position=self._cursor.position())


__all__ = ["Renderer", "ShownImage", "ViewerSession"]

"""Public runtime entry points.

This package groups the navigation cursor and session, the interactive
viewer bootstrap (`run_viewer`), and the loop it drives.
"""

from __future__ import annotations

from .cursor import NavigationCursor
from .session import ShownImage, ViewerSession


def run_viewer(*args, **kwargs):
    """Lazily import viewer entrypoint to avoid terminal imports on package import."""
    from .app import run_viewer as _run_viewer

    return _run_viewer(*args, **kwargs)


__all__ = [
    "NavigationCursor",
    "ShownImage",
    "ViewerSession",
    "run_viewer",
]

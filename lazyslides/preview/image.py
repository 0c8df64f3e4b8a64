"""Image payload rendering: resolved file path to a base64 ``data:`` URI."""

from __future__ import annotations

import base64
from pathlib import Path

from ..errors import ImageReadError, UnsupportedFormat

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

IMAGE_MIME_TYPES: dict[str, str] = {
    "bmp": "image/bmp",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
}


def image_mime_type(path: Path) -> str:
    """Return the MIME type for ``path`` or raise ``UnsupportedFormat``."""
    suffix = path.suffix.lstrip(".").lower()
    if not suffix:
        raise UnsupportedFormat(path, f"No extension: {path.name}")
    mime_type = IMAGE_MIME_TYPES.get(suffix)
    if mime_type is None:
        raise UnsupportedFormat(path, f"Unsupported file: {suffix}")
    return mime_type


def render_data_uri(path: Path) -> str:
    """Read ``path`` and encode it as ``data:<mime>;base64,<payload>``."""
    mime_type = image_mime_type(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise ImageReadError(path, f"Cannot read {path}: {exc.strerror or exc}") from exc
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def is_png(path: Path) -> bool:
    """Return whether ``path`` starts with the PNG signature."""
    try:
        with path.open("rb") as handle:
            return handle.read(len(PNG_SIGNATURE)) == PNG_SIGNATURE
    except OSError:
        return False


__all__ = [
    "IMAGE_MIME_TYPES",
    "PNG_SIGNATURE",
    "image_mime_type",
    "is_png",
    "render_data_uri",
]

"""Preview payload builders for files the cursor lands on."""

from __future__ import annotations

from .image import IMAGE_MIME_TYPES, image_mime_type, is_png, render_data_uri

__all__ = [
    "IMAGE_MIME_TYPES",
    "image_mime_type",
    "is_png",
    "render_data_uri",
]

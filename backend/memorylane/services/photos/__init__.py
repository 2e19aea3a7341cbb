"""Photo sanitizing module."""

from .service import (
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    FALLBACK_ASPECT_RATIO,
    sanitize_photo,
    sanitize_photos,
)

__all__ = [
    "DEFAULT_HEIGHT",
    "DEFAULT_WIDTH",
    "FALLBACK_ASPECT_RATIO",
    "sanitize_photo",
    "sanitize_photos",
]

"""Photo metadata sanitizing.

Upload clients send loosely shaped photo dicts: camelCase or snake_case keys,
missing dimensions, no aspect ratio at all. Everything that reaches the layout
planner must carry a positive aspect ratio, so payloads are normalized here
before they are stored.
"""

import logging
import math
from typing import Any, Optional
from uuid import uuid4

from memorylane.models import Photo

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 1000
DEFAULT_HEIGHT = 750
FALLBACK_ASPECT_RATIO = 4 / 3


def _positive_number(value: Any) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) and number > 0 else None


def sanitize_photo(raw: Any) -> Optional[Photo]:
    """Build a ``Photo`` from an untrusted payload.

    Returns None when the payload is not a dict or has no URL.
    """
    if not isinstance(raw, dict):
        return None
    url = raw.get("url")
    if not url or not str(url).strip():
        return None

    raw_width = _positive_number(raw.get("width"))
    raw_height = _positive_number(raw.get("height"))

    aspect_ratio = _positive_number(raw.get("aspect_ratio")) or _positive_number(
        raw.get("aspectRatio")
    )
    if aspect_ratio is None and raw_width and raw_height:
        aspect_ratio = _positive_number(raw_width / raw_height)
    if aspect_ratio is None:
        aspect_ratio = FALLBACK_ASPECT_RATIO

    return Photo(
        id=str(raw.get("id") or uuid4().hex),
        url=str(url),
        caption=str(raw["caption"]) if raw.get("caption") else None,
        width=int(raw_width) if raw_width and raw_width >= 1 else DEFAULT_WIDTH,
        height=int(raw_height) if raw_height and raw_height >= 1 else DEFAULT_HEIGHT,
        aspect_ratio=aspect_ratio,
    )


def sanitize_photos(raw_photos: Any) -> list[Photo]:
    """Sanitize a list of photo payloads, dropping unusable entries."""
    if not isinstance(raw_photos, list):
        return []
    photos = []
    for raw in raw_photos:
        photo = sanitize_photo(raw)
        if photo is None:
            logger.info("[PHOTOS] Dropping photo without url")
            continue
        photos.append(photo)
    return photos

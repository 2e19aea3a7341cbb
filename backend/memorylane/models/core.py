"""Core data models for MemoryLane.

This module contains the Pydantic models shared by the cache, ranking and
layout services and by the API layer: photos, memory events, scored search
results, layout rows and the structured error payload.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class Theme(str, Enum):
    """Visual themes a memory page can be rendered with."""

    MODERN = "modern"
    CLASSIC = "classic"
    PLAYFUL = "playful"
    DARK = "dark"
    MINIMALIST = "minimalist"
    VINTAGE = "vintage"
    WHIMSICAL = "whimsical"


class Photo(BaseModel):
    """A single photo attached to a memory event.

    Only ``aspect_ratio`` takes part in layout math. Width and height are
    carried through so the rendering layer can request the right asset size.
    """

    id: str = Field(..., min_length=1, description="Photo identifier")
    url: str = Field(..., min_length=1, description="Public URL of the image")
    caption: Optional[str] = Field(None, description="Optional caption")
    width: int = Field(default=1000, gt=0, description="Original width in pixels")
    height: int = Field(default=750, gt=0, description="Original height in pixels")
    aspect_ratio: float = Field(..., gt=0, description="width / height")


class MemoryEvent(BaseModel):
    """A shareable memory page (birthday album, anniversary, ...).

    Counters are only ever changed by the event store; the ranking and layout
    services treat events as read-only.
    """

    id: str = Field(..., min_length=1, description="Unique event identifier")
    user_id: str = Field(..., min_length=1, description="Owner of the event")
    title: str = Field(..., description="Page title")
    occasion: str = Field(default="", description="Birthday, Anniversary, ...")
    recipient_name: str = Field(default="", description="Who the page is for")
    message: str = Field(default="", description="Free-form message")
    photos: list[Photo] = Field(default_factory=list, description="Photos in display order")
    theme: Theme = Field(default=Theme.MODERN, description="Rendering theme")
    views: int = Field(default=0, ge=0, description="View counter")
    likes: int = Field(default=0, ge=0, description="Like counter")
    created_at: datetime = Field(..., description="When the event was created")
    is_public: bool = Field(default=True, description="Visible through its share code")
    share_code: str = Field(default="", description="Code used in public share links")


class ScoredEvent(BaseModel):
    """A search hit: an event together with its engagement score."""

    event: MemoryEvent
    score: float = Field(..., ge=0, description="views * 1 + likes * 2")


class LayoutRow(BaseModel):
    """One row of the justified photo grid.

    Every photo in the row is rendered ``height`` units tall and
    ``height * aspect_ratio`` units wide.
    """

    photos: list[Photo] = Field(..., min_length=1, description="Photos in this row, in order")
    height: float = Field(..., gt=0, description="Rendered row height")


class ErrorCode(str, Enum):
    """Error codes surfaced to API clients."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    API_ERROR = "API_ERROR"


class AppError(BaseModel):
    """Structured error returned inside API response envelopes."""

    code: ErrorCode
    message: str = Field(..., description="Technical message for logs/debugging")
    user_message: str = Field(..., description="Message safe to show to end users")
    details: Optional[dict[str, Any]] = None

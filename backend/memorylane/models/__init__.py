"""MemoryLane data models."""

from .core import (
    AppError,
    ErrorCode,
    LayoutRow,
    MemoryEvent,
    Photo,
    ScoredEvent,
    Theme,
)

__all__ = [
    "AppError",
    "ErrorCode",
    "LayoutRow",
    "MemoryEvent",
    "Photo",
    "ScoredEvent",
    "Theme",
]

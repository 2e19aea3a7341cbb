"""Event serving module.

Event persistence interface plus the cache-aside serving component.
"""

from .service import (
    EventNotFoundError,
    EventPermissionError,
    EventService,
    EventServiceError,
)
from .store import EventStore, InMemoryEventStore

__all__ = [
    "EventNotFoundError",
    "EventPermissionError",
    "EventService",
    "EventServiceError",
    "EventStore",
    "InMemoryEventStore",
]

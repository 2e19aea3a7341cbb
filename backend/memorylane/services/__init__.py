"""MemoryLane Services.

Service layer components:
- Cache: bounded in-process LRU cache behind a get/put interface
- Ranking: engagement-weighted search over memory events
- Layout: dynamic-programming planner for justified photo rows
- Photos: sanitizing of uploaded photo metadata
- Events: event store interface and the cache-aside serving component
"""

from .cache import CacheService, LRUCacheService
from .ranking import engagement_score, matches_query, rank_events
from .layout import DEFAULT_TARGET_ROW_HEIGHT, RowLayoutPlanner, compute_layout
from .photos import sanitize_photo, sanitize_photos
from .events import (
    EventNotFoundError,
    EventPermissionError,
    EventService,
    EventServiceError,
    EventStore,
    InMemoryEventStore,
)

__all__ = [
    # Cache
    "CacheService",
    "LRUCacheService",
    # Ranking
    "engagement_score",
    "matches_query",
    "rank_events",
    # Layout
    "DEFAULT_TARGET_ROW_HEIGHT",
    "RowLayoutPlanner",
    "compute_layout",
    # Photos
    "sanitize_photo",
    "sanitize_photos",
    # Events
    "EventNotFoundError",
    "EventPermissionError",
    "EventService",
    "EventServiceError",
    "EventStore",
    "InMemoryEventStore",
]

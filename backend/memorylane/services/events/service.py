"""Event serving layer.

Ties the event store to the cache, ranking and layout services:

- Reads are cache-aside: look up the cache, fall back to the store and
  repopulate the cache on a miss.
- Every write (update, view, like) overwrites the cached record with the
  fresh one from the store. Deletes tombstone the cache entry with ``None``.
- Search ranks the candidate events by engagement.
- Layout runs the row planner over an event's photos.

The cache is handed in by whoever builds the service. It is not thread-safe
on its own, so every access goes through this service's lock.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import uuid4

from memorylane.models import LayoutRow, MemoryEvent, ScoredEvent, Theme
from memorylane.services.cache import CacheService
from memorylane.services.events.store import CounterField, EventStore
from memorylane.services.layout import DEFAULT_TARGET_ROW_HEIGHT, RowLayoutPlanner
from memorylane.services.photos import sanitize_photos
from memorylane.services.ranking import rank_events

logger = logging.getLogger(__name__)


class EventServiceError(ValueError):
    """Base class for errors raised by ``EventService``."""


class EventNotFoundError(EventServiceError):
    def __init__(self, event_id: str) -> None:
        super().__init__(f"Event not found: {event_id}")
        self.event_id = event_id


class EventPermissionError(EventServiceError):
    def __init__(self, event_id: str, user_id: str) -> None:
        super().__init__(f"User {user_id} does not own event {event_id}")
        self.event_id = event_id
        self.user_id = user_id


class EventService:
    """Serving component owning the event cache."""

    def __init__(
        self,
        store: EventStore,
        cache: CacheService[MemoryEvent],
        target_row_height: float = DEFAULT_TARGET_ROW_HEIGHT,
    ) -> None:
        self._store = store
        self._cache = cache
        self._lock = threading.Lock()
        self._planner = RowLayoutPlanner(target_row_height)

    @property
    def cache(self) -> CacheService[MemoryEvent]:
        return self._cache

    def _cache_get(self, event_id: str) -> Optional[MemoryEvent]:
        with self._lock:
            return self._cache.get(CacheService.build_event_key(event_id))

    def _cache_put(self, event_id: str, event: Optional[MemoryEvent]) -> None:
        # The cache keeps its own copy; callers may mutate what they were given
        if event is not None:
            event = event.model_copy(deep=True)
        with self._lock:
            self._cache.put(CacheService.build_event_key(event_id), event)

    def _get_owned(self, event_id: str, user_id: str) -> MemoryEvent:
        event = self._store.get(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        if event.user_id != user_id:
            logger.info(f"[EVENTS] User {user_id} not authorized for event {event_id}")
            raise EventPermissionError(event_id, user_id)
        return event

    def get_event(self, event_id: str) -> MemoryEvent:
        """Fetch an event, serving from cache when possible.

        Raises:
            EventNotFoundError: If the store has no such event.
        """
        cached = self._cache_get(event_id)
        if cached is not None:
            logger.info(f"[CACHE] HIT for {event_id}")
            return cached.model_copy(deep=True)

        logger.info(f"[CACHE] MISS for {event_id} - fetching store")
        event = self._store.get(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        self._cache_put(event_id, event)
        return event

    def create_event(
        self,
        user_id: str,
        title: str,
        occasion: str = "",
        recipient_name: str = "",
        message: str = "",
        photos: Optional[list[Any]] = None,
        theme: Theme = Theme.MODERN,
    ) -> MemoryEvent:
        event = MemoryEvent(
            id=uuid4().hex,
            user_id=user_id,
            title=title,
            occasion=occasion,
            recipient_name=recipient_name,
            message=message,
            photos=sanitize_photos(photos),
            theme=theme,
            views=0,
            likes=0,
            created_at=datetime.now(timezone.utc),
            is_public=True,
            share_code=uuid4().hex,
        )
        stored = self._store.save(event)
        self._cache_put(stored.id, stored)
        logger.info(f"[EVENTS] Created {stored.id} with {len(stored.photos)} photos")
        return stored

    def update_event(
        self,
        event_id: str,
        user_id: str,
        title: str,
        occasion: str = "",
        recipient_name: str = "",
        message: str = "",
        photos: Optional[list[Any]] = None,
        theme: Theme = Theme.MODERN,
    ) -> MemoryEvent:
        """Replace the editable fields of an event owned by ``user_id``.

        Counters, ownership, share code and creation time are kept.
        """
        event = self._get_owned(event_id, user_id)
        updated = event.model_copy(
            update={
                "title": title,
                "occasion": occasion,
                "recipient_name": recipient_name,
                "message": message,
                "photos": sanitize_photos(photos),
                "theme": theme,
            }
        )
        stored = self._store.save(updated)
        self._cache_put(event_id, stored)
        logger.info(f"[EVENTS] Updated {event_id}")
        return stored

    def delete_event(self, event_id: str, user_id: str) -> None:
        self._get_owned(event_id, user_id)
        self._store.delete(event_id)
        # Tombstone: the slot stays, reads come back as a miss
        self._cache_put(event_id, None)
        logger.info(f"[EVENTS] Deleted {event_id}")

    def _increment(self, event_id: str, field: CounterField) -> MemoryEvent:
        event = self._store.increment(event_id, field)
        if event is None:
            raise EventNotFoundError(event_id)
        self._cache_put(event_id, event)
        return event

    def record_view(self, event_id: str) -> MemoryEvent:
        return self._increment(event_id, "views")

    def record_like(self, event_id: str) -> MemoryEvent:
        return self._increment(event_id, "likes")

    def list_user_events(self, user_id: str) -> list[MemoryEvent]:
        """All events owned by ``user_id``, newest first."""
        events = self._store.list_by_user(user_id)
        events.sort(key=lambda event: (-event.created_at.timestamp(), event.id))
        return events

    def search(self, query: str = "", user_id: Optional[str] = None) -> list[ScoredEvent]:
        """Rank ``user_id``'s events (or all events) against ``query``."""
        candidates = (
            self._store.list_by_user(user_id) if user_id else self._store.list_all()
        )
        return rank_events(candidates, query)

    def layout_for_event(
        self,
        event_id: str,
        container_width: float,
        target_row_height: Optional[float] = None,
    ) -> list[LayoutRow]:
        event = self.get_event(event_id)
        planner = (
            RowLayoutPlanner(target_row_height)
            if target_row_height is not None
            else self._planner
        )
        return planner.compute_layout(event.photos, container_width)

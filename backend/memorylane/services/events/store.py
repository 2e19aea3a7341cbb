"""Event store interface and in-memory implementation.

The store is the system of record for memory events. The serving layer only
relies on this interface; a document database adapter would implement it the
same way ``InMemoryEventStore`` does.
"""

from abc import ABC, abstractmethod
from typing import Literal, Optional

from memorylane.models import MemoryEvent

CounterField = Literal["views", "likes"]


class EventStore(ABC):
    """Abstract base class for event persistence."""

    @abstractmethod
    def get(self, event_id: str) -> Optional[MemoryEvent]:
        pass

    @abstractmethod
    def list_all(self) -> list[MemoryEvent]:
        pass

    @abstractmethod
    def list_by_user(self, user_id: str) -> list[MemoryEvent]:
        pass

    @abstractmethod
    def save(self, event: MemoryEvent) -> MemoryEvent:
        """Insert or replace an event, returning the stored version."""
        pass

    @abstractmethod
    def delete(self, event_id: str) -> bool:
        """Delete an event. Returns False if it didn't exist."""
        pass

    @abstractmethod
    def increment(self, event_id: str, field: CounterField) -> Optional[MemoryEvent]:
        """Atomically add one to a counter and return the updated event."""
        pass


class InMemoryEventStore(EventStore):
    """Dict-backed store.

    Events are copied on the way in and out so that callers can never change
    stored state by mutating a returned object.
    """

    def __init__(self, events: Optional[list[MemoryEvent]] = None) -> None:
        self._events: dict[str, MemoryEvent] = {}
        for event in events or []:
            self.save(event)

    def get(self, event_id: str) -> Optional[MemoryEvent]:
        event = self._events.get(event_id)
        return event.model_copy(deep=True) if event is not None else None

    def list_all(self) -> list[MemoryEvent]:
        return [event.model_copy(deep=True) for event in self._events.values()]

    def list_by_user(self, user_id: str) -> list[MemoryEvent]:
        return [
            event.model_copy(deep=True)
            for event in self._events.values()
            if event.user_id == user_id
        ]

    def save(self, event: MemoryEvent) -> MemoryEvent:
        self._events[event.id] = event.model_copy(deep=True)
        return event.model_copy(deep=True)

    def delete(self, event_id: str) -> bool:
        return self._events.pop(event_id, None) is not None

    def increment(self, event_id: str, field: CounterField) -> Optional[MemoryEvent]:
        event = self._events.get(event_id)
        if event is None:
            return None
        updated = event.model_copy(update={field: getattr(event, field) + 1})
        self._events[event_id] = updated
        return updated.model_copy(deep=True)

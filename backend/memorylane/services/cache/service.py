"""Cache service implementation.

This module provides the abstract cache interface used by the serving layer
and a bounded in-process LRU implementation.

Contract:
- ``get`` returns the cached value or ``None`` on a miss. A hit marks the key
  as most recently used; a miss changes nothing.
- ``put`` stores a value as most recently used. Updating an existing key never
  evicts. Inserting a new key into a full cache first evicts the least
  recently used entry (earliest surviving insertion/access order).
- There is no delete operation. Overwriting a key with ``None`` is the way to
  tombstone an entry: it keeps its slot and reads back as a miss.

The LRU implementation is not synchronized. Callers sharing one instance
across threads must hold their own lock around each call.
"""

import logging
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

V = TypeVar("V")


class CacheService(ABC, Generic[V]):
    """Abstract base class for key/value caches.

    The serving layer depends on this ``{get, put}`` capability only, so the
    concrete structure can be swapped (for example a small-capacity instance
    in tests).
    """

    @abstractmethod
    def get(self, key: str) -> Optional[V]:
        """Retrieve cached value by key.

        Args:
            key: The cache key to look up.

        Returns:
            The cached value if found, None otherwise.
        """
        pass

    @abstractmethod
    def put(self, key: str, value: Optional[V]) -> None:
        """Store value in cache.

        Args:
            key: The cache key to store under.
            value: The value to cache. ``None`` tombstones the key.
        """
        pass

    @staticmethod
    def build_event_key(event_id: str) -> str:
        """Generate cache key for a memory event.

        Example:
            >>> CacheService.build_event_key("65f1c0ffee")
            'event:65f1c0ffee'
        """
        return f"event:{event_id}"


class LRUCacheService(CacheService[V]):
    """Fixed-capacity least-recently-used cache.

    Backed by an ``OrderedDict`` whose order is recency: the first key is the
    least recently used, the last key the most recently used. Lookups,
    refreshes (``move_to_end``) and evictions (``popitem(last=False)``) are
    all O(1).
    """

    def __init__(self, capacity: int = 50) -> None:
        """Initialize the cache.

        Args:
            capacity: Maximum number of entries, tombstones included.

        Raises:
            ValueError: If capacity is smaller than 1.
        """
        if capacity < 1:
            raise ValueError(f"Cache capacity must be at least 1, got {capacity}")
        self._cache: OrderedDict[str, Optional[V]] = OrderedDict()
        self._capacity = capacity

    def get(self, key: str) -> Optional[V]:
        if key not in self._cache:
            return None
        self._cache.move_to_end(key)
        return self._cache[key]

    def put(self, key: str, value: Optional[V]) -> None:
        if key in self._cache:
            self._cache.move_to_end(key)
        elif len(self._cache) >= self._capacity:
            evicted, _ = self._cache.popitem(last=False)
            logger.debug(f"[CACHE] Evicted {evicted}")
        self._cache[key] = value

    def keys(self) -> list[str]:
        """Keys from least to most recently used."""
        return list(self._cache.keys())

    def log_state(self) -> None:
        logger.debug(f"[CACHE] State ({len(self)}/{self._capacity}): {self.keys()}")

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, key: object) -> bool:
        # Membership test only, does not refresh recency
        return key in self._cache

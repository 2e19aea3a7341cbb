"""Unit tests for the cache service.

Tests the CacheService interface helpers and the LRUCacheService implementation.
"""

import pytest

from memorylane.services.cache import CacheService, LRUCacheService


class TestCacheKeys:
    """Tests for cache key building."""

    def test_build_event_key(self) -> None:
        assert CacheService.build_event_key("abc123") == "event:abc123"

    def test_lru_is_a_cache_service(self) -> None:
        assert isinstance(LRUCacheService(), CacheService)


class TestLRUCacheServiceInit:
    """Tests for LRUCacheService construction."""

    def test_default_capacity(self) -> None:
        cache = LRUCacheService()
        assert cache.capacity == 50
        assert len(cache) == 0

    def test_custom_capacity(self) -> None:
        assert LRUCacheService(capacity=3).capacity == 3

    @pytest.mark.parametrize("capacity", [0, -1])
    def test_non_positive_capacity_fails_fast(self, capacity: int) -> None:
        with pytest.raises(ValueError):
            LRUCacheService(capacity=capacity)


class TestLRUCacheServiceBehavior:
    """Tests for get/put and eviction semantics."""

    def setup_method(self) -> None:
        self.cache: LRUCacheService[int] = LRUCacheService(capacity=2)

    def test_miss_returns_none(self) -> None:
        assert self.cache.get("missing") is None

    def test_miss_does_not_change_state(self) -> None:
        self.cache.put("a", 1)
        self.cache.put("b", 2)
        self.cache.get("missing")
        assert self.cache.keys() == ["a", "b"]

    def test_hit_returns_value(self) -> None:
        self.cache.put("a", 1)
        assert self.cache.get("a") == 1

    def test_inserting_past_capacity_evicts_first_key(self) -> None:
        cache: LRUCacheService[int] = LRUCacheService(capacity=3)
        for i, key in enumerate(["k1", "k2", "k3", "k4"]):
            cache.put(key, i)
        assert cache.get("k1") is None
        assert cache.get("k2") == 1
        assert cache.get("k3") == 2
        assert cache.get("k4") == 3
        assert len(cache) == 3

    def test_get_refreshes_recency(self) -> None:
        self.cache.put("a", 1)
        self.cache.put("b", 2)
        assert self.cache.get("a") == 1
        self.cache.put("c", 3)
        assert self.cache.get("b") is None
        assert self.cache.get("a") == 1
        assert self.cache.get("c") == 3

    def test_update_replaces_value_without_eviction(self) -> None:
        self.cache.put("a", 1)
        self.cache.put("b", 2)
        self.cache.put("a", 10)
        assert len(self.cache) == 2
        assert self.cache.get("a") == 10
        assert self.cache.get("b") == 2

    def test_update_makes_key_newest(self) -> None:
        self.cache.put("a", 1)
        self.cache.put("b", 2)
        self.cache.put("a", 10)
        self.cache.put("c", 3)
        assert "b" not in self.cache
        assert self.cache.keys() == ["a", "c"]

    def test_eviction_follows_insertion_order_when_untouched(self) -> None:
        cache: LRUCacheService[int] = LRUCacheService(capacity=3)
        for key in ["x", "y", "z"]:
            cache.put(key, 0)
        cache.put("w", 0)
        cache.put("v", 0)
        assert cache.keys() == ["z", "w", "v"]

    def test_size_never_exceeds_capacity(self) -> None:
        for i in range(10):
            self.cache.put(f"k{i}", i)
            assert len(self.cache) <= 2


class TestLRUCacheServiceTombstones:
    """Tests for deletion-by-overwrite."""

    def setup_method(self) -> None:
        self.cache: LRUCacheService[str] = LRUCacheService(capacity=2)

    def test_tombstone_reads_as_miss(self) -> None:
        self.cache.put("a", "value")
        self.cache.put("a", None)
        assert self.cache.get("a") is None

    def test_tombstone_keeps_its_slot(self) -> None:
        self.cache.put("a", "value")
        self.cache.put("b", "value")
        self.cache.put("a", None)
        assert len(self.cache) == 2
        assert "a" in self.cache

    def test_tombstone_can_be_evicted(self) -> None:
        self.cache.put("a", None)
        self.cache.put("b", "value")
        self.cache.put("c", "value")
        assert "a" not in self.cache
        assert self.cache.keys() == ["b", "c"]

    def test_contains_does_not_refresh(self) -> None:
        self.cache.put("a", "1")
        self.cache.put("b", "2")
        assert "a" in self.cache
        self.cache.put("c", "3")
        assert "a" not in self.cache

"""Cache service module.

Provides the ``{get, put}`` cache interface and its bounded LRU implementation.
"""

from .service import CacheService, LRUCacheService

__all__ = [
    "CacheService",
    "LRUCacheService",
]

"""
Cache tiers.

Every tier implements the CacheBackend contract; the package ships an
in-memory tier and a Redis tier.
"""

from fusioncache.cache.base import CacheBackend, CacheEntry
from fusioncache.cache.memory import (
    DEFAULT_EXPIRATION,
    NO_EXPIRATION,
    ExpiringStore,
    InMemoryCache,
)
from fusioncache.cache.redis import RedisCache

__all__ = [
    "CacheBackend",
    "CacheEntry",
    "DEFAULT_EXPIRATION",
    "NO_EXPIRATION",
    "ExpiringStore",
    "InMemoryCache",
    "RedisCache",
]

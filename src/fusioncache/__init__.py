"""
Two-tier cache: an in-process tier in front of Redis, filled on demand by
loader functions.
"""

from fusioncache.cache import CacheBackend, ExpiringStore, InMemoryCache, RedisCache
from fusioncache.errors import (
    CacheMissError,
    CacheTierError,
    CacheValueError,
    ConfigurationError,
    FusionCacheError,
    LocalCacheError,
    LocalNotFoundError,
    RemoteCacheError,
    RemoteNotFoundError,
)
from fusioncache.factory import (
    new_default_fusion_cache,
    new_default_memory_cache,
    new_default_redis_cache,
    new_default_redis_cache_from_client,
)
from fusioncache.fusion import FusionCache, Loader

__version__ = "0.1.0"

__all__ = [
    "CacheBackend",
    "CacheMissError",
    "CacheTierError",
    "CacheValueError",
    "ConfigurationError",
    "ExpiringStore",
    "FusionCache",
    "FusionCacheError",
    "InMemoryCache",
    "LocalCacheError",
    "LocalNotFoundError",
    "Loader",
    "RedisCache",
    "RemoteCacheError",
    "RemoteNotFoundError",
    "new_default_fusion_cache",
    "new_default_memory_cache",
    "new_default_redis_cache",
    "new_default_redis_cache_from_client",
]

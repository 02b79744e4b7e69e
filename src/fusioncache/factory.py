"""Constructors for default tiers and a process-wide FusionCache."""

import logging

import redis.asyncio as redis

from fusioncache.cache.memory import ExpiringStore, InMemoryCache
from fusioncache.cache.redis import RedisCache
from fusioncache.config import settings
from fusioncache.errors import ConfigurationError
from fusioncache.fusion import FusionCache

logger = logging.getLogger(__name__)

# Global cache instance
_cache_instance: FusionCache[str, str] | None = None


def new_default_memory_cache(
    default_expiration: float = 0,
    cleanup_interval: float = 0,
    max_size: int | None = None,
) -> InMemoryCache:
    """
    Create the default local tier.

    Args:
        default_expiration: Store default TTL in seconds (<= 0 = never)
        cleanup_interval: Seconds between expiry sweeps (<= 0 = no sweep)
        max_size: Maximum number of entries (None = unlimited)
    """
    return InMemoryCache(
        ExpiringStore(
            default_expiration=default_expiration,
            cleanup_interval=cleanup_interval,
            max_size=max_size,
        )
    )


def new_default_redis_cache(url: str, **kwargs) -> RedisCache:
    """
    Create the default remote tier from a Redis URL.

    Raises:
        ConfigurationError: If the URL cannot be parsed
    """
    return RedisCache.from_url(url, **kwargs)


def new_default_redis_cache_from_client(client: redis.Redis) -> RedisCache:
    """Wrap an existing Redis client. The caller keeps ownership of it."""
    return RedisCache(client)


def new_default_fusion_cache(
    url: str,
    default_expiration: float = 0,
    cleanup_interval: float = 0,
) -> FusionCache[str, str]:
    """
    Create a FusionCache over the default memory and Redis tiers.

    The memory sweep does not run until ``await cache.start()`` is called
    from inside the event loop.

    Args:
        url: Redis connection URL
        default_expiration: Memory store default TTL in seconds
        cleanup_interval: Memory store sweep interval in seconds

    Raises:
        ConfigurationError: If the URL cannot be parsed
    """
    return FusionCache(
        new_default_memory_cache(default_expiration, cleanup_interval),
        new_default_redis_cache(url),
    )


def create_fusion_cache(url: str | None = None) -> FusionCache[str, str]:
    """
    Create a FusionCache from settings.

    Args:
        url: Redis URL, defaults to ``settings.redis_url``

    Raises:
        ConfigurationError: If no Redis URL is configured or it is invalid
    """
    redis_url = url or settings.redis_url
    if not redis_url:
        raise ConfigurationError(
            "Redis URL not configured. "
            "Set FUSIONCACHE_REDIS_URL to enable the remote tier."
        )

    local = new_default_memory_cache(
        default_expiration=settings.memory_default_expiration,
        cleanup_interval=settings.memory_cleanup_interval,
        max_size=settings.memory_max_size,
    )
    remote = new_default_redis_cache(
        redis_url,
        prefix=settings.redis_prefix,
        max_connections=settings.redis_max_connections,
        socket_timeout=settings.redis_socket_timeout,
        socket_connect_timeout=settings.redis_socket_connect_timeout,
    )
    return FusionCache(local, remote)


def get_fusion_cache() -> FusionCache[str, str]:
    """
    Get the global cache instance.

    Creates the cache on first access using configuration settings.

    Returns:
        FusionCache instance
    """
    global _cache_instance

    if _cache_instance is None:
        _cache_instance = create_fusion_cache()
        logger.info(
            f"Initialized fusion cache "
            f"({_cache_instance.local.name} + {_cache_instance.remote.name})"
        )

    return _cache_instance


async def initialize_fusion_cache() -> FusionCache[str, str]:
    """
    Initialize the global cache and start the local expiry sweep.

    Call this during application startup, from inside the event loop.
    """
    cache = get_fusion_cache()
    await cache.start()

    return cache


async def shutdown_fusion_cache() -> None:
    """Close the global cache and its connections."""
    global _cache_instance

    if _cache_instance is not None:
        await _cache_instance.close()
        _cache_instance = None
        logger.info("Cache shutdown complete")


def reset_fusion_cache() -> None:
    """
    Reset the global cache instance.

    Useful for testing or when configuration changes.
    """
    global _cache_instance
    _cache_instance = None

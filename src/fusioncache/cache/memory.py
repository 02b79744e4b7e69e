"""In-memory tier: an expiring key/value store and its cache adapter."""

import asyncio
import logging
from typing import Any

from fusioncache.cache.base import CacheBackend, CacheEntry
from fusioncache.errors import CacheValueError, LocalNotFoundError

logger = logging.getLogger(__name__)

# Expiration sentinels accepted by ExpiringStore.set
DEFAULT_EXPIRATION: float = 0
NO_EXPIRATION: float = -1


class ExpiringStore:
    """
    Dictionary-backed store with per-entry expiration.

    A default expiration of zero or less means entries never expire unless
    a positive TTL is passed to ``set``. Expired entries are dropped lazily
    on read, by ``cleanup_expired``, or by the background sweep started
    with ``start_cleanup_task`` when ``cleanup_interval`` is positive.
    """

    def __init__(
        self,
        default_expiration: float = DEFAULT_EXPIRATION,
        cleanup_interval: float = 0,
        max_size: int | None = None,
    ) -> None:
        """
        Initialize the store.

        Args:
            default_expiration: TTL in seconds used for DEFAULT_EXPIRATION
            cleanup_interval: Seconds between background sweeps (<= 0 = none)
            max_size: Maximum number of entries (None = unlimited)
        """
        self._store: dict[Any, CacheEntry] = {}
        self._default_expiration = default_expiration
        self._cleanup_interval = cleanup_interval
        self._max_size = max_size
        self._cleanup_task: asyncio.Task | None = None
        self._lock = asyncio.Lock()

    @property
    def default_expiration(self) -> float:
        return self._default_expiration

    @property
    def cleanup_interval(self) -> float:
        return self._cleanup_interval

    def _resolve_ttl(self, ttl_seconds: float) -> float | None:
        if ttl_seconds == DEFAULT_EXPIRATION:
            ttl_seconds = self._default_expiration
        return ttl_seconds if ttl_seconds > 0 else None

    async def get(self, key: Any) -> tuple[Any, bool]:
        """Return ``(value, found)`` for a key."""
        async with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None, False

            if entry.is_expired:
                del self._store[key]
                return None, False

            return entry.value, True

    async def set(
        self,
        key: Any,
        value: Any,
        ttl_seconds: float = DEFAULT_EXPIRATION,
    ) -> None:
        """Store a value, replacing any existing entry."""
        async with self._lock:
            if (
                self._max_size
                and key not in self._store
                and len(self._store) >= self._max_size
            ):
                self._evict_oldest()

            self._store[key] = CacheEntry(
                key=key,
                value=value,
                ttl_seconds=self._resolve_ttl(ttl_seconds),
            )

    async def delete(self, key: Any) -> bool:
        """Delete a key. Returns False if it was not present."""
        async with self._lock:
            return self._store.pop(key, None) is not None

    async def flush(self) -> int:
        """Remove every entry and return how many were dropped."""
        async with self._lock:
            count = len(self._store)
            self._store.clear()
            return count

    def item_count(self) -> int:
        """Number of entries, including expired ones not yet swept."""
        return len(self._store)

    def _evict_oldest(self) -> None:
        """Evict the oldest entry (caller must hold lock)."""
        if not self._store:
            return

        oldest_key = min(
            self._store.keys(),
            key=lambda k: self._store[k].created_at,
        )
        del self._store[oldest_key]

    async def cleanup_expired(self) -> int:
        """Remove all expired entries."""
        async with self._lock:
            expired_keys = [k for k, v in self._store.items() if v.is_expired]
            for key in expired_keys:
                del self._store[key]

            if expired_keys:
                logger.debug(f"Cleaned up {len(expired_keys)} expired cache entries")

            return len(expired_keys)

    async def start_cleanup_task(self) -> None:
        """Start the background sweep if an interval is configured."""
        if self._cleanup_task is not None or self._cleanup_interval <= 0:
            return

        async def cleanup_loop() -> None:
            while True:
                await asyncio.sleep(self._cleanup_interval)
                try:
                    await self.cleanup_expired()
                except Exception as e:
                    logger.error(f"Cache cleanup error: {e}")

        self._cleanup_task = asyncio.create_task(cleanup_loop())

    async def close(self) -> None:
        """Stop the background sweep and drop all entries."""
        if self._cleanup_task:
            self._cleanup_task.cancel()
            try:
                await self._cleanup_task
            except asyncio.CancelledError:
                pass
            self._cleanup_task = None
        self._store.clear()


class InMemoryCache(CacheBackend[str, str]):
    """
    Local tier adapter over an ExpiringStore.

    Values written through ``set_item`` are stored with NO_EXPIRATION,
    whatever default expiration the underlying store was built with.
    Only ``str`` values are accepted.
    """

    def __init__(self, store: ExpiringStore | None = None) -> None:
        self._store = store if store is not None else ExpiringStore()

    @property
    def name(self) -> str:
        return "memory"

    @property
    def store(self) -> ExpiringStore:
        return self._store

    async def get_item(self, key: str) -> str:
        value, found = await self._store.get(key)
        if not found:
            raise LocalNotFoundError(key)
        return value

    async def set_item(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise CacheValueError(
                f"memory cache stores str values, got {type(value).__name__}"
            )
        await self._store.set(key, value, NO_EXPIRATION)

    async def health_check(self) -> dict[str, Any]:
        """Return health status with store statistics."""
        return {
            "backend": self.name,
            "connected": True,
            "total_entries": self._store.item_count(),
            "default_expiration": self._store.default_expiration,
            "cleanup_interval": self._store.cleanup_interval,
        }

    async def start(self) -> None:
        await self._store.start_cleanup_task()

    async def close(self) -> None:
        await self._store.close()

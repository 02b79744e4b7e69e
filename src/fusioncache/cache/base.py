"""Abstract base class for cache tiers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CacheEntry:
    """
    A value held by the local expiring store.

    Attributes:
        key: Cache key
        value: Cached data
        created_at: When the entry was written
        ttl_seconds: Time-to-live in seconds (None = never expires)
    """

    key: Any
    value: Any
    created_at: datetime = field(default_factory=_utcnow)
    ttl_seconds: float | None = None

    @property
    def expires_at(self) -> datetime | None:
        """Get expiration time, or None if no TTL."""
        if self.ttl_seconds is None:
            return None
        return self.created_at + timedelta(seconds=self.ttl_seconds)

    @property
    def is_expired(self) -> bool:
        """Check if entry has expired."""
        if self.expires_at is None:
            return False
        return _utcnow() > self.expires_at

    @property
    def ttl_remaining(self) -> float | None:
        """Get remaining TTL in seconds, or None if no expiry."""
        if self.expires_at is None:
            return None
        return max(0.0, (self.expires_at - _utcnow()).total_seconds())


class CacheBackend(ABC, Generic[K, V]):
    """
    Capability contract every cache tier satisfies.

    Only ``get_item`` and ``set_item`` are required. A miss is reported by
    raising the tier's ``CacheMissError`` subclass, never by returning a
    sentinel value, so falsy payloads such as ``""`` or ``0`` are ordinary
    hits.
    """

    @property
    def name(self) -> str:
        """Short identifier for logs and health output."""
        return type(self).__name__

    @abstractmethod
    async def get_item(self, key: K) -> V:
        """
        Get the value stored for a key.

        Args:
            key: Cache key

        Returns:
            The stored value

        Raises:
            CacheMissError: The tier's not-found sentinel
            Exception: Any operational failure
        """
        ...

    @abstractmethod
    async def set_item(self, key: K, value: V) -> None:
        """
        Store a value for a key.

        Args:
            key: Cache key
            value: Value to store

        Raises:
            Exception: If the tier could not store the value
        """
        ...

    async def health_check(self) -> dict[str, Any]:
        """
        Perform a health check on the tier.

        Returns:
            Dict with health status info
        """
        return {"backend": self.name}

    async def start(self) -> None:
        """Start background work, such as expiry sweeps. Needs a running loop."""
        return None

    async def close(self) -> None:
        """Release resources held by the tier."""
        return None

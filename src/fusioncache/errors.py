"""Exception hierarchy for fusioncache.

Two families matter to the orchestrator:

- ``CacheMissError`` subclasses are soft misses. Each tier has its own
  sentinel (``LocalNotFoundError`` / ``RemoteNotFoundError``) and only the
  matching one is treated as "not found" for that tier.
- Everything else raised by a tier is operational and fatal to the call.
"""

from typing import Any


class FusionCacheError(Exception):
    """Base class for all fusioncache errors."""


class ConfigurationError(FusionCacheError):
    """Raised when a cache cannot be built from the supplied configuration."""


class CacheValueError(FusionCacheError, TypeError):
    """Raised when a default adapter is asked to store an unsupported value."""


class CacheMissError(FusionCacheError):
    """
    A tier has no value for the requested key.

    Attributes:
        key: The key that was looked up
        tier: Tier role ("local" or "remote")
    """

    tier = "unknown"

    def __init__(self, key: Any) -> None:
        self.key = key
        super().__init__(f"{self.tier} cache: key not found: {key!r}")


class LocalNotFoundError(CacheMissError):
    """The local (in-process) tier has no value for the key."""

    tier = "local"


class RemoteNotFoundError(CacheMissError):
    """The remote (Redis) tier has no value for the key."""

    tier = "remote"


class CacheTierError(FusionCacheError):
    """An operational failure inside a tier (connection, timeout, decode)."""

    tier = "unknown"

    def __init__(self, message: str) -> None:
        super().__init__(f"{self.tier} cache: {message}")


class LocalCacheError(CacheTierError):
    tier = "local"


class RemoteCacheError(CacheTierError):
    tier = "remote"

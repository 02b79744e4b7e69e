"""Redis tier adapter."""

import logging
from typing import Any

import redis.asyncio as redis
from redis.exceptions import RedisError

from fusioncache.cache.base import CacheBackend
from fusioncache.errors import (
    CacheValueError,
    ConfigurationError,
    RemoteCacheError,
    RemoteNotFoundError,
)

logger = logging.getLogger(__name__)


class RedisCache(CacheBackend[str, str]):
    """
    Remote tier adapter over a ``redis.asyncio`` client.

    Values are plain strings written without expiration. A missing key
    raises RemoteNotFoundError; any client failure is re-raised as
    RemoteCacheError with the original exception chained.
    """

    def __init__(
        self,
        client: redis.Redis,
        prefix: str = "",
        owns_client: bool = False,
    ) -> None:
        """
        Initialize the adapter.

        Args:
            client: Connected or lazily-connecting Redis client
            prefix: Key prefix for namespacing
            owns_client: Close the client in ``close()``
        """
        self._client = client
        self._prefix = prefix
        self._owns_client = owns_client

    @classmethod
    def from_url(
        cls,
        url: str,
        prefix: str = "",
        max_connections: int = 10,
        socket_timeout: float | None = 5.0,
        socket_connect_timeout: float | None = 5.0,
    ) -> "RedisCache":
        """
        Build an adapter from a connection URL.

        The URL is parsed eagerly but no connection is opened. Pool and
        timeout arguments are defaults: options given in the URL query
        string (e.g. ``?max_connections=50``) take precedence.

        Raises:
            ConfigurationError: If the URL cannot be parsed
        """
        try:
            client = redis.from_url(
                url,
                max_connections=max_connections,
                socket_timeout=socket_timeout,
                socket_connect_timeout=socket_connect_timeout,
                decode_responses=True,
            )
        except ValueError as e:
            raise ConfigurationError(f"failed to parse redis url: {e}") from e

        return cls(client, prefix=prefix, owns_client=True)

    @property
    def name(self) -> str:
        return "redis"

    @property
    def client(self) -> redis.Redis:
        return self._client

    def _get_key(self, key: str) -> str:
        """Get prefixed key."""
        return f"{self._prefix}{key}"

    async def get_item(self, key: str) -> str:
        try:
            data = await self._client.get(self._get_key(key))
        except (RedisError, UnicodeDecodeError) as e:
            # decode_responses clients fail inside the parser on non-UTF-8 data
            logger.error(f"Redis GET error for {key}: {e}")
            raise RemoteCacheError(f"GET {key!r} failed: {e}") from e

        if data is None:
            raise RemoteNotFoundError(key)

        if isinstance(data, bytes):
            try:
                return data.decode("utf-8")
            except UnicodeDecodeError as e:
                raise RemoteCacheError(f"GET {key!r} returned undecodable data") from e
        return data

    async def set_item(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise CacheValueError(
                f"redis cache stores str values, got {type(value).__name__}"
            )

        try:
            await self._client.set(self._get_key(key), value)
        except RedisError as e:
            logger.error(f"Redis SET error for {key}: {e}")
            raise RemoteCacheError(f"SET {key!r} failed: {e}") from e

    async def health_check(self) -> dict[str, Any]:
        """Ping Redis and report the result."""
        try:
            await self._client.ping()
        except RedisError as e:
            return {
                "backend": self.name,
                "connected": False,
                "error": str(e),
            }
        return {"backend": self.name, "connected": True}

    async def close(self) -> None:
        """Close the Redis connection if this adapter created it."""
        if not self._owns_client:
            return
        try:
            await self._client.aclose()
        except RedisError as e:
            logger.error(f"Error closing Redis connection: {e}")

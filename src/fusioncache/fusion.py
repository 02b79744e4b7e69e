"""Two-tier read-through / write-through cache."""

import inspect
import logging
from typing import Any, Awaitable, Callable, Generic, Union

from fusioncache.cache.base import CacheBackend, K, V
from fusioncache.errors import LocalNotFoundError, RemoteNotFoundError

logger = logging.getLogger(__name__)

Loader = Callable[[K], Union[V, Awaitable[V]]]
"""Loader called with the key on a full miss. May be sync or async."""


class FusionCache(Generic[K, V]):
    """
    Local tier in front of a remote tier, with optional loaders behind both.

    Reads try the local tier, then the remote tier, then each generator in
    turn, writing what they find back into the tiers already consulted.
    Writes go to the local tier first and the remote tier second.

    Only ``LocalNotFoundError`` from the local tier and
    ``RemoteNotFoundError`` from the remote tier count as misses. Any other
    exception from a tier or a generator propagates unchanged, and nothing
    is retried or rolled back.

    The instance keeps no mutable state, so one cache may be shared by any
    number of concurrent tasks. Cancel or time out a call with the usual
    asyncio tools; cancellation reaches whichever tier or generator call is
    in flight.
    """

    def __init__(
        self,
        local: CacheBackend[K, V],
        remote: CacheBackend[K, V],
    ) -> None:
        if local is None:
            raise ValueError("local cache tier is required")
        if remote is None:
            raise ValueError("remote cache tier is required")
        self._local = local
        self._remote = remote

    @property
    def local(self) -> CacheBackend[K, V]:
        return self._local

    @property
    def remote(self) -> CacheBackend[K, V]:
        return self._remote

    async def get(self, key: K, *generators: Loader) -> V | None:
        """
        Read a value through both tiers and the generator chain.

        Args:
            key: Cache key
            *generators: Loaders tried in order when both tiers miss. The
                first one to return wins; the first one to raise aborts the
                call.

        Returns:
            The cached or generated value, or None when both tiers miss
            and no generator was supplied.
        """
        try:
            value = await self._local.get_item(key)
        except LocalNotFoundError:
            pass
        else:
            logger.debug(f"Local hit for {key!r}")
            return value

        try:
            value = await self._remote.get_item(key)
        except RemoteNotFoundError:
            pass
        else:
            logger.debug(f"Remote hit for {key!r}, promoting to local")
            await self._local.set_item(key, value)
            return value

        for generator in generators:
            value = generator(key)
            if inspect.isawaitable(value):
                value = await value
            logger.debug(f"Generated value for {key!r}, filling both tiers")
            await self._local.set_item(key, value)
            await self._remote.set_item(key, value)
            return value

        logger.debug(f"Miss for {key!r}")
        return None

    async def set(self, key: K, value: V) -> None:
        """
        Write a value to the local tier, then the remote tier.

        A local failure leaves the remote tier untouched. A remote failure
        leaves the value in the local tier.
        """
        await self._local.set_item(key, value)
        await self._remote.set_item(key, value)

    async def health_check(self) -> dict[str, Any]:
        """
        Collect health information from both tiers.

        Returns:
            Dict with a "local" and a "remote" entry
        """
        return {
            "local": await self._local.health_check(),
            "remote": await self._remote.health_check(),
        }

    async def start(self) -> None:
        """
        Start background work in both tiers.

        Call once from inside the event loop; the default memory tier
        begins its expiry sweep here.
        """
        await self._local.start()
        await self._remote.start()

    async def close(self) -> None:
        """Close both tiers."""
        await self._local.close()
        await self._remote.close()

"""Tests for construction helpers and the process-wide cache."""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest
from pydantic import ValidationError

from fusioncache.cache.memory import InMemoryCache
from fusioncache.cache.redis import RedisCache
from fusioncache.config import Settings
from fusioncache.errors import ConfigurationError
from fusioncache.factory import (
    create_fusion_cache,
    get_fusion_cache,
    initialize_fusion_cache,
    new_default_fusion_cache,
    new_default_memory_cache,
    new_default_redis_cache,
    new_default_redis_cache_from_client,
    reset_fusion_cache,
    shutdown_fusion_cache,
)
from fusioncache.fusion import FusionCache


def _settings(**overrides) -> Settings:
    values = {"redis_url": "redis://localhost:6379/0", "redis_prefix": "test:"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestDefaultConstructors:
    """Tests for the new_default_* helpers."""

    def test_memory_cache(self) -> None:
        """Test the memory tier carries the store parameters."""
        cache = new_default_memory_cache(default_expiration=30, cleanup_interval=60)

        assert isinstance(cache, InMemoryCache)
        assert cache.store.default_expiration == 30
        assert cache.store.cleanup_interval == 60

    def test_redis_cache(self) -> None:
        """Test the Redis tier is built from a URL."""
        cache = new_default_redis_cache("redis://localhost:6379/0")
        assert isinstance(cache, RedisCache)

    def test_redis_cache_invalid_url(self) -> None:
        """Test a malformed URL is reported, not fatal to the process."""
        with pytest.raises(ConfigurationError):
            new_default_redis_cache("not a url")

    @pytest.mark.asyncio
    async def test_redis_cache_from_client(self) -> None:
        """Test wrapping a caller-owned client."""
        client = AsyncMock()
        cache = new_default_redis_cache_from_client(client)

        assert cache.client is client
        await cache.close()
        client.aclose.assert_not_called()

    def test_fusion_cache(self) -> None:
        """Test the default fusion cache wires memory in front of Redis."""
        cache = new_default_fusion_cache("redis://localhost:6379/0", 10, 20)

        assert isinstance(cache, FusionCache)
        assert isinstance(cache.local, InMemoryCache)
        assert isinstance(cache.remote, RedisCache)
        assert cache.local.store.default_expiration == 10

    @pytest.mark.asyncio
    async def test_fusion_cache_start_runs_sweep(self) -> None:
        """Test start() begins the memory sweep configured at construction."""
        cache = new_default_fusion_cache("redis://localhost:6379/0", 0, 0.02)
        assert cache.local.store._cleanup_task is None

        await cache.start()
        await cache.local.store.set("short_lived", "value", ttl_seconds=0.01)
        await asyncio.sleep(0.1)

        assert cache.local.store._cleanup_task is not None
        assert cache.local.store.item_count() == 0
        await cache.local.close()

    def test_fusion_cache_invalid_url(self) -> None:
        """Test ConfigurationError propagates from the convenience constructor."""
        with pytest.raises(ConfigurationError, match="redis url"):
            new_default_fusion_cache("ftp://localhost", 0, 0)


class TestSettingsDrivenCache:
    """Tests for cache creation from settings."""

    def test_create_from_settings(self) -> None:
        """Test settings flow into both tiers."""
        with patch("fusioncache.factory.settings", _settings(memory_max_size=5)):
            cache = create_fusion_cache()

        assert cache.remote._get_key("k") == "test:k"
        assert cache.local.store._max_size == 5

    def test_create_without_url_raises(self) -> None:
        """Test a missing Redis URL is a configuration error."""
        with patch("fusioncache.factory.settings", _settings(redis_url=None)):
            with pytest.raises(ConfigurationError, match="FUSIONCACHE_REDIS_URL"):
                create_fusion_cache()

    def test_explicit_url_overrides_settings(self) -> None:
        """Test an explicit URL is used even when settings have none."""
        with patch("fusioncache.factory.settings", _settings(redis_url=None)):
            cache = create_fusion_cache("redis://localhost:6379/1")

        assert cache.remote.client.connection_pool.connection_kwargs["db"] == 1

    def test_get_fusion_cache_singleton(self) -> None:
        """Test get_fusion_cache returns same instance."""
        with patch("fusioncache.factory.settings", _settings()):
            cache1 = get_fusion_cache()
            cache2 = get_fusion_cache()

        assert cache1 is cache2

    def test_reset_fusion_cache(self) -> None:
        """Test reset_fusion_cache clears singleton."""
        with patch("fusioncache.factory.settings", _settings()):
            cache1 = get_fusion_cache()
            reset_fusion_cache()
            cache2 = get_fusion_cache()

        assert cache1 is not cache2

    @pytest.mark.asyncio
    async def test_initialize_and_shutdown(self) -> None:
        """Test startup starts the sweep and shutdown tears it down."""
        with patch(
            "fusioncache.factory.settings", _settings(memory_cleanup_interval=60)
        ):
            cache = await initialize_fusion_cache()

        assert cache.local.store._cleanup_task is not None

        with patch.object(cache.remote.client, "aclose", AsyncMock()) as aclose:
            await shutdown_fusion_cache()

        aclose.assert_awaited_once()
        assert cache.local.store._cleanup_task is None


class TestSettings:
    """Tests for Settings defaults and environment loading."""

    def test_defaults(self) -> None:
        """Test defaults leave the local tier without expiry."""
        s = Settings(_env_file=None)
        assert s.memory_default_expiration == 0
        assert s.memory_cleanup_interval == 0
        assert s.redis_max_connections == 10
        assert s.log_level == "INFO"

    def test_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test FUSIONCACHE_* variables are read."""
        monkeypatch.setenv("FUSIONCACHE_REDIS_URL", "redis://cache:6379/2")
        monkeypatch.setenv("FUSIONCACHE_MEMORY_MAX_SIZE", "100")

        s = Settings(_env_file=None)

        assert s.redis_url == "redis://cache:6379/2"
        assert s.memory_max_size == 100

    def test_log_level_normalised(self) -> None:
        """Test log_level is accepted in any case and stored upper-case."""
        s = Settings(_env_file=None, log_level="debug")
        assert s.log_level == "DEBUG"

    def test_log_level_rejects_unknown(self) -> None:
        """Test an unknown log_level fails validation."""
        with pytest.raises(ValidationError, match="log_level"):
            Settings(_env_file=None, log_level="verbose")

"""Pytest configuration and fixtures."""

from typing import Any

import pytest

from fusioncache.cache.base import CacheBackend
from fusioncache.errors import CacheMissError, LocalNotFoundError, RemoteNotFoundError
from fusioncache.factory import reset_fusion_cache


class DictCache(CacheBackend[str, Any]):
    """Dict-backed tier that records calls and can be told to fail."""

    def __init__(self, miss_error: type[CacheMissError], name: str) -> None:
        self.data: dict[str, Any] = {}
        self.calls: list[tuple[str, str]] = []
        self.get_error: Exception | None = None
        self.set_error: Exception | None = None
        self._miss_error = miss_error
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    async def get_item(self, key: str) -> Any:
        self.calls.append(("get", key))
        if self.get_error is not None:
            raise self.get_error
        if key not in self.data:
            raise self._miss_error(key)
        return self.data[key]

    async def set_item(self, key: str, value: Any) -> None:
        self.calls.append(("set", key))
        if self.set_error is not None:
            raise self.set_error
        self.data[key] = value


class ForbiddenCache(CacheBackend[str, Any]):
    """Tier that fails the test if it is touched."""

    async def get_item(self, key: str) -> Any:
        pytest.fail(f"get_item({key!r}) should not have been called")

    async def set_item(self, key: str, value: Any) -> None:
        pytest.fail(f"set_item({key!r}) should not have been called")


@pytest.fixture
def local() -> DictCache:
    """Local tier double."""
    return DictCache(LocalNotFoundError, "local-double")


@pytest.fixture
def remote() -> DictCache:
    """Remote tier double."""
    return DictCache(RemoteNotFoundError, "remote-double")


@pytest.fixture
def forbidden() -> ForbiddenCache:
    """Tier double that must never be called."""
    return ForbiddenCache()


@pytest.fixture
def forbidden_loader():
    """Loader that must never be called."""

    def loader(key: str) -> str:
        pytest.fail(f"loader should not have been called for {key!r}")

    return loader


@pytest.fixture(autouse=True)
def _reset_global_cache():
    """Make sure no test leaks the process-wide cache into another."""
    reset_fusion_cache()
    yield
    reset_fusion_cache()

"""Shared fixtures."""

import pytest

from shapeguard.config import get_settings
from shapeguard.storage import MemoryStore, database


@pytest.fixture(autouse=True)
def reset_global_store(monkeypatch: pytest.MonkeyPatch):
    """Every test starts with fresh settings and no global store."""
    get_settings.cache_clear()
    monkeypatch.setattr(database, "_store", None)
    yield
    get_settings.cache_clear()


@pytest.fixture
async def memory_store() -> MemoryStore:
    store = MemoryStore()
    await store.connect()
    return store

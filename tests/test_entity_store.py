"""Tests for the entity stores."""

from pathlib import Path

import pytest

from shapeguard.core import Entity, Types
from shapeguard.storage import (
    EntityStore,
    MemoryStore,
    SQLiteStore,
    close_store,
    get_store,
)


class Ledger(Entity):
    schema = {"total": Types.number.is_required}


@pytest.fixture
async def sqlite_store(tmp_path: Path):
    store = SQLiteStore(tmp_path / "test.db")
    await store.connect()
    yield store
    await store.disconnect()


@pytest.fixture(params=["memory", "sqlite"])
async def store(request, memory_store: MemoryStore, tmp_path: Path):
    if request.param == "memory":
        yield memory_store
        return
    sqlite = SQLiteStore(tmp_path / "param.db")
    await sqlite.connect()
    yield sqlite
    await sqlite.disconnect()


class TestEntityStore:
    """CRUD behavior shared by every backend."""

    @pytest.mark.asyncio
    async def test_satisfies_protocol(self, store) -> None:
        assert isinstance(store, EntityStore)

    @pytest.mark.asyncio
    async def test_put_and_get(self, store) -> None:
        await store.put("Ledger", "l1", {"_id": "l1", "total": 3})

        assert await store.get("Ledger", "l1") == {"_id": "l1", "total": 3}

    @pytest.mark.asyncio
    async def test_get_nonexistent_returns_none(self, store) -> None:
        assert await store.get("Ledger", "missing") is None

    @pytest.mark.asyncio
    async def test_kinds_are_separate(self, store) -> None:
        await store.put("Ledger", "x", {"total": 1})

        assert await store.get("Other", "x") is None

    @pytest.mark.asyncio
    async def test_put_overwrites(self, store) -> None:
        await store.put("Ledger", "l1", {"total": 1})
        await store.put("Ledger", "l1", {"total": 2})

        assert await store.get("Ledger", "l1") == {"total": 2}
        assert await store.count("Ledger") == 1

    @pytest.mark.asyncio
    async def test_returned_data_is_a_copy(self, store) -> None:
        await store.put("Ledger", "l1", {"items": [1]})

        fetched = await store.get("Ledger", "l1")
        fetched["items"].append(2)

        assert await store.get("Ledger", "l1") == {"items": [1]}

    @pytest.mark.asyncio
    async def test_list_newest_first(self, store) -> None:
        for i in range(3):
            await store.put("Ledger", f"l{i}", {"total": i})

        records = await store.list_records("Ledger")

        assert [r["total"] for r in records] == [2, 1, 0]

    @pytest.mark.asyncio
    async def test_list_limit_offset(self, store) -> None:
        for i in range(5):
            await store.put("Ledger", f"l{i}", {"total": i})

        records = await store.list_records("Ledger", limit=2, offset=1)

        assert [r["total"] for r in records] == [3, 2]

    @pytest.mark.asyncio
    async def test_delete(self, store) -> None:
        await store.put("Ledger", "l1", {"total": 1})

        assert await store.delete("Ledger", "l1")
        assert not await store.delete("Ledger", "l1")
        assert await store.count("Ledger") == 0


class TestSQLiteStore:
    def test_store_classes_define_cleanly(self) -> None:
        """Method names must not shadow builtins used in annotations."""
        for store_type in (SQLiteStore, MemoryStore):
            assert not hasattr(store_type, "list")
            assert callable(store_type.list_records)

    @pytest.mark.asyncio
    async def test_persists_across_connections(self, tmp_path: Path) -> None:
        path = tmp_path / "durable.db"
        first = SQLiteStore(path)
        await first.connect()
        await first.put("Ledger", "l1", {"total": 9})
        await first.disconnect()

        second = SQLiteStore(path)
        await second.connect()
        try:
            assert await second.get("Ledger", "l1") == {"total": 9}
        finally:
            await second.disconnect()

    @pytest.mark.asyncio
    async def test_requires_connection(self, tmp_path: Path) -> None:
        store = SQLiteStore(tmp_path / "closed.db")

        with pytest.raises(RuntimeError, match="not connected"):
            await store.get("Ledger", "l1")

    @pytest.mark.asyncio
    async def test_entity_round_trip(self, sqlite_store: SQLiteStore, monkeypatch) -> None:
        monkeypatch.setattr(Ledger, "store", sqlite_store)

        await Ledger({"_id": "l1", "total": 4}).save()
        found = await Ledger.find("l1")

        assert found.total == 4


class TestGlobalStore:
    @pytest.mark.asyncio
    async def test_defaults_to_memory(self) -> None:
        store = await get_store()

        assert isinstance(store, MemoryStore)
        assert await get_store() is store
        await close_store()

    @pytest.mark.asyncio
    async def test_sqlite_from_settings(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setenv("SHAPEGUARD_STORE_BACKEND", "sqlite")
        monkeypatch.setenv("SHAPEGUARD_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path}/global.db")

        store = await get_store()
        try:
            assert isinstance(store, SQLiteStore)
            assert store.db_path == tmp_path / "global.db"
        finally:
            await close_store()

    @pytest.mark.asyncio
    async def test_entities_use_global_store(self) -> None:
        await Ledger({"_id": "g1", "total": 1}).save()

        store = await get_store()
        assert await store.get("Ledger", "g1") == {"_id": "g1", "total": 1}
        assert (await Ledger.find("g1")).total == 1
        await close_store()

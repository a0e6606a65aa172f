"""
SQLite entity store and process-wide store management.

Records are persisted as the JSON dump of a StoredEntity, keyed by
(kind, entity_id). Uses aiosqlite.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncGenerator

from shapeguard.config import get_settings
from shapeguard.storage.base import EntityStore, StoredEntity
from shapeguard.storage.memory import MemoryStore

logger = logging.getLogger(__name__)


class SQLiteStore:
    """Async SQLite entity store."""

    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path)
        self._connection: Any = None

    async def connect(self) -> None:
        """Open the connection and run migrations."""
        import aiosqlite

        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._connection = await aiosqlite.connect(self.db_path)
        self._connection.row_factory = aiosqlite.Row
        await self._connection.execute("PRAGMA journal_mode = WAL")

        await self._run_migrations()

    async def disconnect(self) -> None:
        if self._connection:
            await self._connection.close()
            self._connection = None

    async def _run_migrations(self) -> None:
        if not self._connection:
            raise RuntimeError("Database not connected")

        await self._connection.execute("""
            CREATE TABLE IF NOT EXISTS _migrations (
                id INTEGER PRIMARY KEY,
                name TEXT UNIQUE NOT NULL,
                applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        migrations = [
            ("001_create_entities", self._migration_001_create_entities),
        ]

        for name, migration_fn in migrations:
            cursor = await self._connection.execute(
                "SELECT 1 FROM _migrations WHERE name = ?", (name,)
            )
            if await cursor.fetchone():
                continue

            logger.info(f"Applying migration {name}")
            await migration_fn()
            await self._connection.execute(
                "INSERT INTO _migrations (name) VALUES (?)", (name,)
            )
            await self._connection.commit()

    async def _migration_001_create_entities(self) -> None:
        """Create the entities table."""
        await self._connection.execute("""
            CREATE TABLE IF NOT EXISTS entities (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                kind TEXT NOT NULL,
                entity_id TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                record_json TEXT NOT NULL,
                UNIQUE (kind, entity_id)
            )
        """)

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[Any, None]:
        """Commit on success, roll back on error."""
        if not self._connection:
            raise RuntimeError("Database not connected")

        try:
            yield self._connection
            await self._connection.commit()
        except Exception:
            await self._connection.rollback()
            raise

    async def get(self, kind: str, entity_id: str) -> dict[str, Any] | None:
        row = await self._fetch_one(
            "SELECT record_json FROM entities WHERE kind = ? AND entity_id = ?",
            (kind, str(entity_id)),
        )
        if row:
            return StoredEntity.model_validate_json(row["record_json"]).data
        return None

    async def put(self, kind: str, entity_id: str, data: dict[str, Any]) -> None:
        record = StoredEntity(kind=kind, entity_id=str(entity_id), data=data)
        async with self.transaction() as conn:
            # Delete + insert keeps the autoincrement id ordered by last write
            await conn.execute(
                "DELETE FROM entities WHERE kind = ? AND entity_id = ?",
                (kind, record.entity_id),
            )
            await conn.execute(
                """
                INSERT INTO entities (kind, entity_id, record_json)
                VALUES (?, ?, ?)
                """,
                (kind, record.entity_id, record.model_dump_json()),
            )

    async def delete(self, kind: str, entity_id: str) -> bool:
        async with self.transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM entities WHERE kind = ? AND entity_id = ?",
                (kind, str(entity_id)),
            )
        return cursor.rowcount > 0

    async def list_records(
        self, kind: str, limit: int = 50, offset: int = 0
    ) -> list[dict[str, Any]]:
        """List records of one kind, newest first."""
        rows = await self._fetch_all(
            """
            SELECT record_json FROM entities
            WHERE kind = ?
            ORDER BY id DESC
            LIMIT ? OFFSET ?
            """,
            (kind, limit, offset),
        )
        return [StoredEntity.model_validate_json(row["record_json"]).data for row in rows]

    async def count(self, kind: str) -> int:
        row = await self._fetch_one(
            "SELECT COUNT(*) AS count FROM entities WHERE kind = ?", (kind,)
        )
        return row["count"] if row else 0

    async def _fetch_one(
        self, query: str, params: tuple[Any, ...]
    ) -> dict[str, Any] | None:
        if not self._connection:
            raise RuntimeError("Database not connected")

        cursor = await self._connection.execute(query, params)
        row = await cursor.fetchone()
        if row:
            return dict(row)
        return None

    async def _fetch_all(
        self, query: str, params: tuple[Any, ...]
    ) -> list[dict[str, Any]]:
        if not self._connection:
            raise RuntimeError("Database not connected")

        cursor = await self._connection.execute(query, params)
        rows = await cursor.fetchall()
        return [dict(row) for row in rows]


# Global store instance
_store: MemoryStore | SQLiteStore | None = None


async def get_store() -> EntityStore:
    """Get the global entity store, connecting it on first use."""
    global _store

    if _store is None:
        settings = get_settings()
        if settings.store_backend == "sqlite":
            _store = SQLiteStore(settings.database_path)
        else:
            _store = MemoryStore()
        await _store.connect()

    return _store


async def close_store() -> None:
    """Disconnect and forget the global entity store."""
    global _store

    if _store:
        await _store.disconnect()
        _store = None

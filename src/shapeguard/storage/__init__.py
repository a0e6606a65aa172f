"""shapeguard Storage Layer - entity persistence."""

from shapeguard.storage.base import EntityStore, StoredEntity
from shapeguard.storage.database import SQLiteStore, close_store, get_store
from shapeguard.storage.memory import MemoryStore

__all__ = [
    "EntityStore",
    "MemoryStore",
    "SQLiteStore",
    "StoredEntity",
    "close_store",
    "get_store",
]

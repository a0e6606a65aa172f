"""In-process entity store."""

from typing import Any

from shapeguard.storage.base import StoredEntity


class MemoryStore:
    """Dict-backed store; records are copied in and out so callers cannot alias them."""

    def __init__(self) -> None:
        self._records: dict[tuple[str, str], StoredEntity] = {}

    async def connect(self) -> None:
        return None

    async def disconnect(self) -> None:
        self._records.clear()

    async def get(self, kind: str, entity_id: str) -> dict[str, Any] | None:
        record = self._records.get((kind, str(entity_id)))
        if record is None:
            return None
        return record.model_copy(deep=True).data

    async def put(self, kind: str, entity_id: str, data: dict[str, Any]) -> None:
        key = (kind, str(entity_id))
        record = StoredEntity(kind=kind, entity_id=key[1], data=data)
        # Re-insert so iteration order follows last write
        self._records.pop(key, None)
        self._records[key] = record.model_copy(deep=True)

    async def delete(self, kind: str, entity_id: str) -> bool:
        return self._records.pop((kind, str(entity_id)), None) is not None

    async def list_records(
        self, kind: str, limit: int = 50, offset: int = 0
    ) -> list[dict[str, Any]]:
        # Newest first
        records = [r for (k, _), r in reversed(self._records.items()) if k == kind]
        return [r.model_copy(deep=True).data for r in records[offset : offset + limit]]

    async def count(self, kind: str) -> int:
        return sum(1 for k, _ in self._records if k == kind)

"""Entity store contract and the persisted record model."""

from datetime import datetime, timezone
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StoredEntity(BaseModel):
    """One persisted entity record."""

    kind: str  # registered entity name, e.g. "User"
    entity_id: str
    data: dict[str, Any] = Field(default_factory=dict)
    updated_at: datetime = Field(default_factory=_utcnow)


@runtime_checkable
class EntityStore(Protocol):
    """Async key-value persistence for raw entity records."""

    async def get(self, kind: str, entity_id: str) -> dict[str, Any] | None: ...
    async def put(self, kind: str, entity_id: str, data: dict[str, Any]) -> None: ...
    async def delete(self, kind: str, entity_id: str) -> bool: ...
    async def list_records(
        self, kind: str, limit: int = 50, offset: int = 0
    ) -> list[dict[str, Any]]: ...
    async def count(self, kind: str) -> int: ...

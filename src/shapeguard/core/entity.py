"""
Entity base class.

An entity declares its fields as a ``schema`` of checkers and gets:

- construction from a raw mapping, decoding every field whose checker
  decodes synchronously,
- ``load()`` which additionally awaits eager (deferred) fields,
- ``validate()`` self-validation, the hook reference checkers call,
- ``check()`` to collect every field's error instead of stopping at the first,
- ``find()`` / ``save()`` / ``delete()`` through an EntityStore.

Subclasses register themselves by name so references can name them
before they are defined::

    class Post(Entity):
        schema = {
            "title": Types.string.is_required,
            "author": Types.reference("User", eager=True),
        }
"""

import asyncio
import logging
from collections.abc import Mapping
from datetime import date
from typing import Any, ClassVar
from uuid import uuid4

from shapeguard.core.checkers import (
    Checker,
    DecodingChecker,
    EntityArrayOf,
    EntityDictOf,
    Reference,
)
from shapeguard.core.errors import CheckError, ValidationResult
from shapeguard.core.registry import ID_FIELD, registry
from shapeguard.storage import EntityStore, get_store

logger = logging.getLogger(__name__)


class Entity:
    """Base class for constructible, self-validating, id-addressable records."""

    schema: ClassVar[dict[str, Checker]] = {}

    # Per-class store override; None means the global store
    store: ClassVar[EntityStore | None] = None

    kind: ClassVar[str] = "Entity"

    def __init_subclass__(cls, kind: str | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        shadowed = sorted(set(cls.schema) & _RESERVED_NAMES)
        if shadowed:
            raise TypeError(
                f"{cls.__name__}.schema fields {shadowed} collide with Entity attributes"
            )
        cls.kind = kind or cls.__name__
        registry.register(cls, cls.kind)

    def __init__(self, raw: Mapping[str, Any] | None = None, **fields: Any):
        data = dict(raw or {})
        data.update(fields)
        self._id = data.get(ID_FIELD)
        # Raw payloads of deferred fields, kept until load() resolves them
        self._pending: dict[str, Any] = {}
        for name, checker in self.schema.items():
            value = data.get(name)
            if isinstance(checker, DecodingChecker):
                if checker.deferred:
                    if value is not None:
                        self._pending[name] = value
                    value = None
                else:
                    value = checker.decode(value)
            setattr(self, name, value)

    @property
    def id(self) -> str | None:
        return self._id

    @classmethod
    async def load(cls, raw: Mapping[str, Any] | None = None) -> "Entity":
        """
        Construct from ``raw``, following nested and referenced entities.

        Eager fields are fetched by identifier; embedded entities are
        loaded recursively so eager fields inside them resolve too.
        """
        entity = cls(raw)
        data = raw or {}
        for name, checker in cls.schema.items():
            if isinstance(checker, DecodingChecker) and checker.produces_entity:
                setattr(entity, name, await _load_value(checker, data.get(name)))
                entity._pending.pop(name, None)
        return entity

    def validate(self) -> None:
        """Run every field checker against the current values; raise on the first failure."""
        for name, checker in self.schema.items():
            checker.validate(getattr(self, name, None), name)

    def check(self) -> ValidationResult:
        """Run every field checker independently and collect all failures."""
        errors: list[CheckError] = []
        for name, checker in self.schema.items():
            try:
                checker.validate(getattr(self, name, None), name)
            except CheckError as e:
                errors.append(e)
        return ValidationResult(valid=not errors, errors=errors)

    def to_raw(self) -> dict[str, Any]:
        """Inverse of construction: a JSON-ready mapping of this entity."""
        raw: dict[str, Any] = {}
        if self._id is not None:
            raw[ID_FIELD] = self._id
        for name, checker in self.schema.items():
            value = getattr(self, name, None)
            if value is None and name in self._pending:
                # Not loaded yet: keep the reference as it was given
                raw[name] = self._pending[name]
                continue
            by_id = isinstance(checker, DecodingChecker) and checker.deferred
            raw[name] = _encode(value, by_id)
        return raw

    @classmethod
    async def _resolve_store(cls) -> EntityStore:
        if cls.store is not None:
            return cls.store
        return await get_store()

    @classmethod
    async def find(cls, entity_id: Any) -> "Entity | None":
        """Look up the canonical record by identifier."""
        store = await cls._resolve_store()
        record = await store.get(cls.kind, str(entity_id))
        if record is None:
            logger.debug(f"{cls.kind} {entity_id!r} not in store")
            return None
        return await cls.load(record)

    async def save(self) -> "Entity":
        """Validate and persist, assigning an identifier when missing."""
        if self._id is None:
            self._id = uuid4().hex
        self.validate()
        store = await self._resolve_store()
        await store.put(self.kind, self._id, self.to_raw())
        return self

    async def delete(self) -> bool:
        if self._id is None:
            return False
        store = await self._resolve_store()
        return await store.delete(self.kind, self._id)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_raw() == other.to_raw()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_raw()!r})"


def _encode(value: Any, by_id: bool) -> Any:
    if isinstance(value, Entity):
        if by_id:
            return {ID_FIELD: value.id}
        return value.to_raw()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [_encode(item, by_id) for item in value]
    if isinstance(value, dict):
        return {key: _encode(item, by_id) for key, item in value.items()}
    return value


# Schema fields may not shadow anything the base class defines
_RESERVED_NAMES = frozenset(dir(Entity)) | {ID_FIELD, "_pending"}


async def _load_value(checker: DecodingChecker, raw: Any) -> Any:
    """Async counterpart of ``checker.decode`` that loads entities recursively."""
    if isinstance(checker, EntityArrayOf):
        items = [] if raw is None else list(raw)
        loaded = await asyncio.gather(*(_load_value(checker.element, item) for item in items))
        return list(loaded)
    if isinstance(checker, EntityDictOf):
        entries = {} if raw is None else dict(raw)
        keys = list(entries.keys())
        loaded = await asyncio.gather(
            *(_load_value(checker.value_checker, entries[key]) for key in keys)
        )
        return dict(zip(keys, loaded))
    if checker.deferred:
        return await checker.decode(raw)
    if isinstance(checker, Reference):
        if raw is None:
            return None
        entity_type = checker.entity
        if isinstance(raw, entity_type):
            return raw
        return await entity_type.load(raw)
    return checker.decode(raw)

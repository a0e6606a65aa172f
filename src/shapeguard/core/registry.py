"""
Entity registry.

Reference checkers may name their target entity by string so that two
entity types can refer to each other. The name is resolved here on first
use, after both classes exist.
"""

import logging

from shapeguard.core.errors import UnknownEntity

logger = logging.getLogger(__name__)

# Raw entity records carry their identifier under this key
ID_FIELD = "_id"


class EntityRegistry:
    """Maps entity names to entity classes."""

    def __init__(self) -> None:
        self._entities: dict[str, type] = {}

    def register(self, entity_type: type, name: str | None = None) -> None:
        key = name or entity_type.__name__
        if key in self._entities and self._entities[key] is not entity_type:
            logger.warning(f"Entity name {key!r} re-registered by {entity_type!r}")
        self._entities[key] = entity_type

    def unregister(self, name: str) -> bool:
        return self._entities.pop(name, None) is not None

    def get(self, name: str) -> type | None:
        return self._entities.get(name)

    def resolve(self, target: type | str) -> type:
        """Return ``target`` itself if it is a class, else look it up by name."""
        if isinstance(target, type):
            return target
        entity_type = self._entities.get(target)
        if entity_type is None:
            raise UnknownEntity(f"No entity registered under {target!r}")
        return entity_type

    def names(self) -> list[str]:
        return list(self._entities.keys())


registry = EntityRegistry()

"""
Reference checkers: fields that hold another entity.

Validation never re-derives the target's shape; it calls the entity's own
``validate()``. Decoding has two strategies chosen when the checker is
built:

- ``Reference`` (default) trusts the embedded payload and constructs the
  target entity from it synchronously.
- ``EagerReference`` ignores the payload except for its identifier and
  refetches the canonical record through ``target.find(id)``. Its
  ``decode`` is a coroutine and must be awaited.
"""

import inspect
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict

from shapeguard.core.checkers.base import DecodingChecker
from shapeguard.core.errors import CheckError, NestedValidationFailure, TypeMismatch
from shapeguard.core.registry import ID_FIELD, registry

logger = logging.getLogger(__name__)


class ReferenceOptions(BaseModel):
    """Options fixed at reference construction time."""

    model_config = ConfigDict(frozen=True)

    # Refetch the referenced entity by id instead of decoding the payload
    eager: bool = False


@dataclass(frozen=True)
class Reference(DecodingChecker):
    """Reference to an entity type, given as a class or a registered name."""

    target: type | str
    options: ReferenceOptions = field(default_factory=ReferenceOptions)

    @property
    def entity(self) -> type:
        return registry.resolve(self.target)

    @property
    def produces_entity(self) -> bool:
        return True

    def _check_present(self, value: Any, name: str) -> None:
        entity_type = self.entity
        if not isinstance(value, entity_type):
            raise TypeMismatch(
                name,
                f"{name} is supposed to be {entity_type.__name__}, "
                f"but got {type(value).__name__}",
            )
        try:
            value.validate()
        except CheckError as e:
            raise NestedValidationFailure(name, e) from e

    def decode(self, raw: Any) -> Any:
        if raw is None:
            return None
        entity_type = self.entity
        if isinstance(raw, entity_type):
            return raw
        return entity_type(raw)


@dataclass(frozen=True)
class EagerReference(Reference):
    """Reference decoded by looking the entity up by identifier."""

    options: ReferenceOptions = field(
        default_factory=lambda: ReferenceOptions(eager=True)
    )

    @property
    def deferred(self) -> bool:
        return True

    async def decode(self, raw: Any) -> Any:
        if not raw:
            return None
        if isinstance(raw, Mapping):
            entity_id = raw.get(ID_FIELD)
        else:
            entity_id = getattr(raw, ID_FIELD, None)
        if entity_id is None:
            return None

        entity_type = self.entity
        logger.debug(f"Eager lookup of {entity_type.__name__} {entity_id!r}")
        found = entity_type.find(entity_id)
        if inspect.isawaitable(found):
            found = await found
        if found is None:
            logger.warning(f"{entity_type.__name__} {entity_id!r} not found")
        return found


def reference(
    target: type | str,
    options: ReferenceOptions | None = None,
    *,
    eager: bool | None = None,
) -> Reference:
    """
    Build a reference checker.

    Args:
        target: Entity class, or the name it is registered under
        options: Reference options; ``eager`` overrides ``options.eager``

    Returns:
        EagerReference when eager, otherwise Reference
    """
    options = options or ReferenceOptions()
    if eager is not None:
        options = options.model_copy(update={"eager": eager})
    if options.eager:
        return EagerReference(target, options)
    return Reference(target, options)

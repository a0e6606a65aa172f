"""
Composite checkers: array-of, dict-of and shape.

Composites fan out to their child checkers and let the first failure
propagate. Array-of and dict-of become decoders only when their child
produces entities; in that case they expose the child's entity type and
decode every element. When the child decodes asynchronously (an eager
reference) the container's ``decode`` returns one awaitable that resolves
once every element is decoded, preserving order and keys.
"""

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from shapeguard.core.checkers.base import Checker, DecodingChecker
from shapeguard.core.errors import NotADictionary, NotAnArray, TypeMismatch


@dataclass(frozen=True)
class ArrayOf(Checker):
    """Array whose elements each satisfy ``element``."""

    element: Checker

    def _check_present(self, value: Any, name: str) -> None:
        if not isinstance(value, (list, tuple)):
            raise NotAnArray(name)
        for index, item in enumerate(value):
            self.element.validate_optional(item, f"{name}[{index}]")


@dataclass(frozen=True)
class EntityArrayOf(ArrayOf, DecodingChecker):
    """Array of entities; decodes each element with the element checker."""

    element: DecodingChecker

    @property
    def entity(self) -> type | None:
        return self.element.entity

    @property
    def produces_entity(self) -> bool:
        return True

    @property
    def deferred(self) -> bool:
        return self.element.deferred

    def decode(self, raw: Any = None) -> Any:
        items = [] if raw is None else list(raw)
        if self.deferred:
            return self._decode_all(items)
        return [self.element.decode(item) for item in items]

    async def _decode_all(self, items: list[Any]) -> list[Any]:
        decoded = await asyncio.gather(*(self.element.decode(item) for item in items))
        return list(decoded)


@dataclass(frozen=True)
class DictOf(Checker):
    """
    Plain dictionary whose values each satisfy ``value_checker``.

    Only exact ``dict`` instances are accepted; subclasses such as
    OrderedDict or defaultdict are rejected on purpose.
    """

    value_checker: Checker

    def _check_present(self, value: Any, name: str) -> None:
        if type(value) is not dict:
            raise NotADictionary(name, type(value).__name__)
        for key, item in value.items():
            self.value_checker.validate_optional(item, f"{name}[{key}]")


@dataclass(frozen=True)
class EntityDictOf(DictOf, DecodingChecker):
    """Dictionary of entities; decodes every value, keeping keys."""

    value_checker: DecodingChecker

    @property
    def entity(self) -> type | None:
        return self.value_checker.entity

    @property
    def produces_entity(self) -> bool:
        return True

    @property
    def deferred(self) -> bool:
        return self.value_checker.deferred

    def decode(self, raw: Any = None) -> Any:
        entries = {} if raw is None else dict(raw)
        if self.deferred:
            return self._decode_all(entries)
        return {key: self.value_checker.decode(item) for key, item in entries.items()}

    async def _decode_all(self, entries: dict[str, Any]) -> dict[str, Any]:
        keys = list(entries.keys())
        decoded = await asyncio.gather(
            *(self.value_checker.decode(entries[key]) for key in keys)
        )
        return dict(zip(keys, decoded))


@dataclass(frozen=True)
class Shape(Checker):
    """
    Nested schema: a mapping of field name to checker.

    Each field's own checker decides whether that field is required; the
    shape only fans out. Shapes do not decode.
    """

    fields: Mapping[str, Checker] = field(default_factory=dict)

    def _check_present(self, value: Any, name: str) -> None:
        if isinstance(value, (str, bytes, bool, int, float)):
            raise TypeMismatch(name, f"{name} is not a shape")
        for field_name, checker in self.fields.items():
            if isinstance(value, Mapping):
                item = value.get(field_name)
            else:
                item = getattr(value, field_name, None)
            checker.validate(item, f"{name}.{field_name}")


def _produces_entity(checker: Checker) -> bool:
    return isinstance(checker, DecodingChecker) and checker.produces_entity


def array_of(element: Checker) -> ArrayOf:
    """Build an array checker; entity-producing elements make it decodable."""
    if _produces_entity(element):
        return EntityArrayOf(element)
    return ArrayOf(element)


def dict_of(value_checker: Checker) -> DictOf:
    """Build a dictionary checker; entity-producing values make it decodable."""
    if _produces_entity(value_checker):
        return EntityDictOf(value_checker)
    return DictOf(value_checker)


def shape(fields: Mapping[str, Checker] | None = None) -> Shape:
    return Shape(dict(fields or {}))

"""
Checker primitives.

A checker describes the expected shape of one field. Every checker carries
a single validation core, ``_check(required, value, name)``; the optional
and required entry points are that core bound with a flag, so one checker
value can sit in optional and required positions without aliasing.

Checkers are frozen dataclasses and hold no per-call state, so the same
instance is safe to share across concurrent validations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any

from shapeguard.core.errors import RequiredMissing


@dataclass(frozen=True)
class Checker(ABC):
    """Base class for every checker variant."""

    required: bool = field(default=False, kw_only=True)

    def _check(self, required: bool, value: Any, name: str) -> None:
        if value is None:
            if required:
                raise RequiredMissing(name)
            return
        self._check_present(value, name)

    @abstractmethod
    def _check_present(self, value: Any, name: str) -> None:
        """Validate a value that is known to be present."""
        ...

    def validate(self, value: Any, name: str) -> None:
        """
        Validate ``value`` for the field ``name``.

        Honors this checker's own required flag. Raises a CheckError on
        failure and returns None on success.
        """
        self._check(self.required, value, name)

    def validate_optional(self, value: Any, name: str) -> None:
        self._check(False, value, name)

    def validate_required(self, value: Any, name: str) -> None:
        self._check(True, value, name)

    def __call__(self, value: Any, name: str) -> None:
        self.validate(value, name)

    @property
    def is_required(self) -> "Checker":
        """The same checker, with absent values treated as failures."""
        if self.required:
            return self
        return replace(self, required=True)


@dataclass(frozen=True)
class DecodingChecker(Checker):
    """
    A checker that can also turn raw input into a typed value.

    Only variants that legitimately decode derive from this class, so
    callers test ``isinstance(checker, DecodingChecker)`` instead of probing
    for optional attributes.
    """

    @property
    def entity(self) -> type | None:
        """Entity type produced by decode, or None for non-entity values."""
        return None

    @property
    def produces_entity(self) -> bool:
        """True when decode yields entities, without resolving lazy targets."""
        return False

    @property
    def deferred(self) -> bool:
        """True when ``decode`` returns an awaitable instead of a value."""
        return False

    @abstractmethod
    def decode(self, raw: Any) -> Any:
        ...

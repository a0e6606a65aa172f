"""shapeguard Core - checkers, entities and the error taxonomy."""

from shapeguard.core.checkers import (
    Checker,
    DecodingChecker,
    ReferenceOptions,
    Types,
)
from shapeguard.core.entity import Entity
from shapeguard.core.errors import (
    CheckError,
    DecodeFailure,
    NestedValidationFailure,
    NotADictionary,
    NotAnArray,
    RequiredMissing,
    TypeMismatch,
    UnknownEntity,
    ValidationResult,
)
from shapeguard.core.registry import ID_FIELD, EntityRegistry, registry

__all__ = [
    "CheckError",
    "Checker",
    "DecodeFailure",
    "DecodingChecker",
    "Entity",
    "EntityRegistry",
    "ID_FIELD",
    "NestedValidationFailure",
    "NotADictionary",
    "NotAnArray",
    "ReferenceOptions",
    "RequiredMissing",
    "TypeMismatch",
    "Types",
    "UnknownEntity",
    "ValidationResult",
    "registry",
]

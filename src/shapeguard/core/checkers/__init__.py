"""Checkers - composable validators and decoders for entity fields."""

from types import SimpleNamespace

from shapeguard.core.checkers.base import Checker, DecodingChecker
from shapeguard.core.checkers.composite import (
    ArrayOf,
    DictOf,
    EntityArrayOf,
    EntityDictOf,
    Shape,
    array_of,
    dict_of,
    shape,
)
from shapeguard.core.checkers.date import DateChecker, date_checker
from shapeguard.core.checkers.reference import (
    EagerReference,
    Reference,
    ReferenceOptions,
    reference,
)
from shapeguard.core.checkers.scalar import (
    ScalarChecker,
    array,
    boolean,
    create_type_checker,
    number,
    obj,
    string,
)

Types = SimpleNamespace(
    # Simple type checkers
    array=array,
    bool=boolean,
    number=number,
    object=obj,
    string=string,
    # Decodable type checker
    date=date_checker,
    # Recursive type checker builders
    array_of=array_of,
    dict_of=dict_of,
    reference=reference,
    shape=shape,
)

__all__ = [
    "ArrayOf",
    "Checker",
    "DateChecker",
    "DecodingChecker",
    "DictOf",
    "EagerReference",
    "EntityArrayOf",
    "EntityDictOf",
    "Reference",
    "ReferenceOptions",
    "ScalarChecker",
    "Shape",
    "Types",
    "array_of",
    "create_type_checker",
    "dict_of",
    "reference",
    "shape",
]

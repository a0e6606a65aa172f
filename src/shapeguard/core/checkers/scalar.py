"""Scalar checkers built from a type label and a predicate."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from shapeguard.core.checkers.base import Checker
from shapeguard.core.errors import TypeMismatch


@dataclass(frozen=True)
class ScalarChecker(Checker):
    """Checks a present value with ``predicate``; fails as "<name> is not <typename>"."""

    typename: str
    predicate: Callable[[Any], bool] = field(compare=False, repr=False)

    def _check_present(self, value: Any, name: str) -> None:
        if not self.predicate(value):
            raise TypeMismatch(name, f"{name} is not {self.typename}")


def create_type_checker(typename: str, predicate: Callable[[Any], bool]) -> ScalarChecker:
    """Build an optional scalar checker; use ``.is_required`` for the required form."""
    return ScalarChecker(typename, predicate)


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def _is_number(value: Any) -> bool:
    # bool is an int subclass but is not a number here
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_string(value: Any) -> bool:
    return isinstance(value, str)


def _is_object(value: Any) -> bool:
    # Deliberately loose: any non-scalar passes, sequences included.
    return not isinstance(value, (str, bytes, bool, int, float)) and not callable(value)


array = create_type_checker("array", _is_array)
boolean = create_type_checker("bool", _is_bool)
number = create_type_checker("number", _is_number)
obj = create_type_checker("object", _is_object)
string = create_type_checker("string", _is_string)

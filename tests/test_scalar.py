"""Tests for scalar checkers and the required/optional entry points."""

import pytest

from shapeguard.core import RequiredMissing, TypeMismatch, Types
from shapeguard.core.checkers import create_type_checker


class TestScalarCheckers:
    """Each scalar kind accepts its values and rejects others."""

    @pytest.mark.parametrize(
        "checker,value",
        [
            (Types.array, [1, 2]),
            (Types.array, ()),
            (Types.bool, False),
            (Types.number, 0),
            (Types.number, 3.5),
            (Types.string, ""),
            (Types.object, {"a": 1}),
        ],
    )
    def test_valid_values_pass(self, checker, value) -> None:
        assert checker.validate(value, "field") is None

    @pytest.mark.parametrize(
        "checker,value,label",
        [
            (Types.array, "abc", "array"),
            (Types.bool, 1, "bool"),
            (Types.number, "1", "number"),
            (Types.number, True, "number"),
            (Types.string, 5, "string"),
            (Types.object, "text", "object"),
        ],
    )
    def test_invalid_values_fail(self, checker, value, label) -> None:
        with pytest.raises(TypeMismatch) as exc_info:
            checker.validate(value, "field")

        assert exc_info.value.message == f"field is not {label}"
        assert exc_info.value.field == "field"
        assert exc_info.value.code == "INVALID_TYPE"

    def test_object_accepts_arrays(self) -> None:
        """The object check is loose on purpose."""
        assert Types.object.validate([1, 2], "field") is None


class TestRequired:
    """Absent values pass optional checkers and fail required ones."""

    @pytest.mark.parametrize(
        "checker",
        [Types.array, Types.bool, Types.number, Types.object, Types.string, Types.date],
    )
    def test_absent_value(self, checker) -> None:
        assert checker.validate(None, "name") is None

        with pytest.raises(RequiredMissing) as exc_info:
            checker.is_required.validate(None, "name")
        assert "required" in exc_info.value.message
        assert exc_info.value.message == "name is marked as required"

    def test_required_variant_does_not_alias(self) -> None:
        """Deriving the required form leaves the original optional."""
        required = Types.string.is_required

        assert required.required
        assert not Types.string.required
        assert Types.string.validate(None, "x") is None
        assert required.is_required is required

    def test_explicit_entry_points(self) -> None:
        Types.number.validate_optional(None, "n")
        with pytest.raises(RequiredMissing):
            Types.number.validate_required(None, "n")

    def test_required_still_checks_type(self) -> None:
        with pytest.raises(TypeMismatch):
            Types.number.is_required("one", "n")


class TestCreateTypeChecker:
    def test_custom_predicate(self) -> None:
        even = create_type_checker("even", lambda v: isinstance(v, int) and v % 2 == 0)

        even.validate(4, "n")
        with pytest.raises(TypeMismatch, match="n is not even"):
            even.validate(3, "n")

"""
Error taxonomy for checkers and entities.

Checkers raise at the point of detection. Composite checkers never catch
what their children raise, so the first failing element or field aborts
the whole call. Only the entity boundary (a reference checker delegating
to an entity's own validation) re-raises as NestedValidationFailure.
"""

from dataclasses import dataclass, field


class CheckError(ValueError):
    """A single validation failure for one (qualified) field name."""

    code = "INVALID"

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(field={self.field!r}, message={self.message!r})"


class RequiredMissing(CheckError):
    code = "MISSING_FIELD"

    def __init__(self, field: str):
        super().__init__(field, f"{field} is marked as required")


class TypeMismatch(CheckError):
    code = "INVALID_TYPE"


class NotAnArray(CheckError):
    code = "NOT_AN_ARRAY"

    def __init__(self, field: str):
        super().__init__(field, f"{field} is not an array")


class NotADictionary(CheckError):
    code = "NOT_A_DICTIONARY"

    def __init__(self, field: str, actual: str):
        super().__init__(
            field, f"{field} is supposed to be a dictionary but {actual}"
        )
        self.actual = actual


class NestedValidationFailure(CheckError):
    """A referenced entity failed its own validation."""

    code = "NESTED_INVALID"

    def __init__(self, field: str, cause: CheckError):
        super().__init__(field, f"{field} is invalid: {cause.message}")
        self.cause = cause


class DecodeFailure(CheckError):
    """A raw value could not be turned into its decoded form."""

    code = "DECODE_FAILED"


class UnknownEntity(LookupError):
    """A reference names an entity type that was never registered."""


@dataclass
class ValidationResult:
    """Aggregated result of checking several fields independently."""

    valid: bool
    errors: list[CheckError] = field(default_factory=list)

    @property
    def messages(self) -> list[str]:
        return [error.message for error in self.errors]

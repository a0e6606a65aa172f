"""shapeguard - composable schema checkers that validate and decode entities."""

from shapeguard.config import configure_logging
from shapeguard.core import (
    CheckError,
    Entity,
    ReferenceOptions,
    Types,
    ValidationResult,
)

configure_logging()

__version__ = "0.1.0"

__all__ = ["CheckError", "Entity", "ReferenceOptions", "Types", "ValidationResult"]

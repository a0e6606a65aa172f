"""
Date checker.

Validation goes by exact type identity (``date`` or ``datetime``) rather
than a predicate, and the checker decodes raw scalars into ``datetime``.
Numeric raw values are epoch milliseconds, the unit JSON clients emit.
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any

from shapeguard.core.checkers.base import DecodingChecker
from shapeguard.core.errors import DecodeFailure, TypeMismatch


@dataclass(frozen=True)
class DateChecker(DecodingChecker):
    """Checks for date values and decodes ISO strings or epoch millis."""

    def _check_present(self, value: Any, name: str) -> None:
        if type(value) in (datetime, date):
            return
        raise TypeMismatch(
            name, f"{name} is supposed to be a date, but got {type(value).__name__}"
        )

    def decode(self, raw: Any) -> date | None:
        if raw is None:
            return None
        if isinstance(raw, (datetime, date)):
            return raw
        if isinstance(raw, bool):
            raise DecodeFailure("date", f"Cannot decode a date from bool: {raw}")
        if isinstance(raw, (int, float)):
            try:
                return datetime.fromtimestamp(raw / 1000, tz=timezone.utc)
            except (OSError, OverflowError, ValueError) as e:
                raise DecodeFailure("date", f"Timestamp out of range: {raw}") from e
        if isinstance(raw, str):
            text = raw.strip()
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            try:
                return datetime.fromisoformat(text)
            except ValueError as e:
                raise DecodeFailure("date", f"Invalid date format: {raw}") from e
        raise DecodeFailure(
            "date", f"Cannot decode a date from {type(raw).__name__}"
        )


date_checker = DateChecker()

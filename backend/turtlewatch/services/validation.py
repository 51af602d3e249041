"""
TurtleWatch Backend - Payload Validation Helpers
=================================================

What:  Required-field and enumeration checks shared by the services.

Rules:
    - A field is missing when it is absent, null, or a blank string.
      Zero is a value (a measurement or count of 0 is legitimate).
    - Enumerated strings are trimmed and lowercased before the check.
"""

from typing import Any, Iterable, Optional

from pydantic import BaseModel

from turtlewatch.exceptions import ValidationError


def is_missing(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def require_fields(payload: BaseModel, fields: Iterable[str]) -> None:
    """Raise one ValidationError naming every missing field, in order."""
    missing = [name for name in fields if is_missing(getattr(payload, name, None))]
    if missing:
        raise ValidationError.missing(missing)


def normalize_choice(
    value: Optional[str],
    allowed: Iterable[str],
    default: str,
    field: str,
) -> str:
    """
    Lowercase an enumerated value, fall back to `default` when absent,
    and reject anything outside `allowed`.

        normalize_choice("MALE", SEXES, "unknown", "sex")  → "male"
        normalize_choice(None, SEXES, "unknown", "sex")    → "unknown"
        normalize_choice("xyz", SEXES, "unknown", "sex")   → ValidationError
    """
    if is_missing(value):
        return default
    normalized = value.strip().lower()
    choices = tuple(allowed)
    if normalized not in choices:
        raise ValidationError(
            message=f"Invalid {field} '{value}'. Must be one of: {', '.join(choices)}",
            field=field,
        )
    return normalized

from __future__ import annotations

from typing import Any

from ..core.exceptions import MissingRequiredField, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_field(value: Any, field_name: str) -> Any:
    """Reject None/blank values with MissingRequiredField."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MissingRequiredField(field_name)
    return value.strip() if isinstance(value, str) else value


def require_int_in_range(value: Any, field_name: str, low: int, high: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if number < low or number > high:
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    return number

from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_non_negative(value: float, field_name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field_name} must be a number") from exc
    if number < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return number


def require_positive(value: float, field_name: str) -> float:
    number = require_non_negative(value, field_name)
    if number == 0:
        raise ValidationError(f"{field_name} must be greater than zero")
    return number

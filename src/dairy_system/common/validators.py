from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_max_length(value: str, field_name: str, max_len: int) -> str:
    if value is not None and len(value) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters")
    return value


def require_decimal(value: Any, field_name: str) -> Decimal:
    if value is None or value == "":
        raise ValidationError(f"{field_name} is required")
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not number.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    return number


def require_positive(value: Any, field_name: str) -> Decimal:
    number = require_decimal(value, field_name)
    if number <= 0:
        raise ValidationError(f"{field_name} must be greater than zero")
    return number


def require_non_negative(value: Any, field_name: str) -> Decimal:
    number = require_decimal(value, field_name)
    if number < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return number


def optional_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def require_int(value: Any, field_name: str) -> int:
    number = optional_int(value, field_name)
    if number is None:
        raise ValidationError(f"{field_name} is required")
    return number

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from ..core.exceptions import ValidationError
from .validators import require_non_negative, require_positive

CENT = Decimal("0.01")

# Largest values the NUMERIC(8,2) and NUMERIC(12,2) columns can hold.
MAX_NUMERIC_8_2 = Decimal("999999.99")
MAX_NUMERIC_12_2 = Decimal("9999999999.99")


def round_money(value: Decimal) -> Decimal:
    """Round to paise/cents the way the NUMERIC(..,2) columns store amounts."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def require_at_most(amount: Decimal, field_name: str, maximum: Optional[Decimal]) -> Decimal:
    if maximum is not None and amount > maximum:
        raise ValidationError(f"{field_name} must not exceed {maximum}")
    return amount


def positive_amount(value: Any, field_name: str, maximum: Optional[Decimal] = None) -> Decimal:
    amount = round_money(require_positive(value, field_name))
    if amount <= 0:
        raise ValidationError(f"{field_name} must be greater than zero")
    return require_at_most(amount, field_name, maximum)


def non_negative_amount(value: Any, field_name: str, maximum: Optional[Decimal] = None) -> Decimal:
    return require_at_most(round_money(require_non_negative(value, field_name)), field_name, maximum)

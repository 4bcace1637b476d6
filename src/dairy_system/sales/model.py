from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Sale:
    """A recorded transfer of milk from the cooperative to a customer."""

    id: Optional[int]
    customer_id: int
    shift_id: Optional[int]
    date: date
    qty_ltr: Decimal
    unit_price: Decimal
    discount: Decimal
    paid_amt: Decimal
    due_amt: Decimal
    created_by: Optional[int] = None

    @property
    def gross_amt(self) -> Decimal:
        return self.qty_ltr * self.unit_price


@dataclass(frozen=True)
class SaleReportRow:
    id: int
    date: date
    customer_id: int
    customer_name: str
    shift_name: Optional[str]
    qty_ltr: Decimal
    unit_price: Decimal
    discount: Decimal
    paid_amt: Decimal
    due_amt: Decimal

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import PaymentMethod


@dataclass(frozen=True)
class FarmerPayment:
    """Money paid out by the cooperative to a farmer against collections."""

    id: Optional[int]
    farmer_id: int
    date: date
    amount: Decimal
    method: PaymentMethod = PaymentMethod.CASH
    reference: Optional[str] = None
    notes: Optional[str] = None
    created_by: Optional[int] = None

    @property
    def party_id(self) -> int:
        return self.farmer_id


@dataclass(frozen=True)
class CustomerPayment:
    """Money received from a customer against outstanding sales."""

    id: Optional[int]
    customer_id: int
    date: date
    amount: Decimal
    method: PaymentMethod = PaymentMethod.CASH
    reference: Optional[str] = None
    notes: Optional[str] = None
    created_by: Optional[int] = None

    @property
    def party_id(self) -> int:
        return self.customer_id


@dataclass(frozen=True)
class Balance:
    party_id: int
    party_name: str
    total_due: Decimal
    total_paid: Decimal
    balance: Decimal

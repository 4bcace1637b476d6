from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import CustomerPayment, FarmerPayment


class PaymentFarmerRepository(Protocol):
    def list_all(
        self,
        *,
        party_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 500,
    ) -> Sequence[FarmerPayment]:
        raise NotImplementedError

    def get_by_id(self, payment_id: int) -> Optional[FarmerPayment]:
        raise NotImplementedError

    def add(self, payment: FarmerPayment) -> int:
        raise NotImplementedError

    def update(self, payment: FarmerPayment) -> bool:
        raise NotImplementedError

    def delete(self, payment_id: int) -> bool:
        raise NotImplementedError

    def total_for(self, party_id: int) -> Decimal:
        raise NotImplementedError


class PaymentCustomerRepository(Protocol):
    def list_all(
        self,
        *,
        party_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 500,
    ) -> Sequence[CustomerPayment]:
        raise NotImplementedError

    def get_by_id(self, payment_id: int) -> Optional[CustomerPayment]:
        raise NotImplementedError

    def add(self, payment: CustomerPayment) -> int:
        raise NotImplementedError

    def update(self, payment: CustomerPayment) -> bool:
        raise NotImplementedError

    def delete(self, payment_id: int) -> bool:
        raise NotImplementedError

    def total_for(self, party_id: int) -> Decimal:
        raise NotImplementedError

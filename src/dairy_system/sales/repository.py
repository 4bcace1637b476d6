from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import Sale, SaleReportRow


class SaleRepository(Protocol):
    def list_all(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        customer_id: Optional[int] = None,
        limit: int = 500,
    ) -> Sequence[Sale]:
        raise NotImplementedError

    def get_by_id(self, sale_id: int) -> Optional[Sale]:
        raise NotImplementedError

    def add(self, sale: Sale) -> int:
        raise NotImplementedError

    def update(self, sale: Sale) -> bool:
        raise NotImplementedError

    def delete(self, sale_id: int) -> bool:
        raise NotImplementedError

    def get_report_rows(self, *, start_date: date, end_date: date) -> Sequence[SaleReportRow]:
        raise NotImplementedError

    def total_due_for_customer(self, customer_id: int) -> Decimal:
        raise NotImplementedError

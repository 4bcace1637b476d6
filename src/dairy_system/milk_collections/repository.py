from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import CollectionReportRow, MilkCollection


class CollectionRepository(Protocol):
    def list_all(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        farmer_id: Optional[int] = None,
        limit: int = 500,
    ) -> Sequence[MilkCollection]:
        raise NotImplementedError

    def get_by_id(self, collection_id: int) -> Optional[MilkCollection]:
        raise NotImplementedError

    def add(self, collection: MilkCollection) -> int:
        raise NotImplementedError

    def update(self, collection: MilkCollection) -> bool:
        raise NotImplementedError

    def delete(self, collection_id: int) -> bool:
        raise NotImplementedError

    def get_report_rows(self, *, start_date: date, end_date: date) -> Sequence[CollectionReportRow]:
        raise NotImplementedError

    def total_due_for_farmer(self, farmer_id: int) -> Decimal:
        raise NotImplementedError

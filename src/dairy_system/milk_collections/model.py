from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class MilkCollection:
    """A recorded delivery of milk from a farmer to the cooperative."""

    id: Optional[int]
    farmer_id: int
    shift_id: Optional[int]
    date: date
    qty_ltr: Decimal
    fat_pct: Decimal
    price_per_ltr: Decimal
    due_amt: Decimal
    notes: Optional[str] = None
    created_by: Optional[int] = None


@dataclass(frozen=True)
class CollectionReportRow:
    """Flattened row for Excel/PDF reports (joined with farmer and shift)."""

    id: int
    date: date
    farmer_code: str
    farmer_name: str
    shift_name: Optional[str]
    qty_ltr: Decimal
    fat_pct: Decimal
    price_per_ltr: Decimal
    due_amt: Decimal

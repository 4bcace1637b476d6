from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional

from ..audit.service import AuditService
from ..common.datetime_utils import parse_iso_date
from ..common.money import MAX_NUMERIC_8_2, MAX_NUMERIC_12_2, non_negative_amount, positive_amount, require_at_most, round_money
from ..common.validators import optional_int, require_int
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import AuditAction
from ..core.exceptions import NotFoundError, ValidationError
from .model import MilkCollection
from .repository import CollectionRepository

MAX_FAT_PCT = Decimal("99.99")


def compute_collection_due(qty_ltr: Decimal, price_per_ltr: Decimal) -> Decimal:
    """Amount owed to the farmer for one delivery."""
    return require_at_most(round_money(qty_ltr * price_per_ltr), "due_amt", MAX_NUMERIC_12_2)


class CollectionService:
    """Use case: record milk delivered by farmers."""

    def __init__(self, collections: CollectionRepository, audit: AuditService):
        self._collections = collections
        self._audit = audit

    def list_all(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        farmer_id: Optional[int] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ):
        if start_date and end_date and start_date > end_date:
            raise ValidationError("start must not be after end")
        return self._collections.list_all(start_date=start_date, end_date=end_date, farmer_id=farmer_id, limit=limit)

    def get(self, collection_id: int) -> MilkCollection:
        collection = self._collections.get_by_id(collection_id)
        if not collection:
            raise NotFoundError(f"Milk collection {collection_id} not found")
        return collection

    def _build(self, collection_id: Optional[int], data: dict) -> MilkCollection:
        qty = positive_amount(data.get("qty_ltr"), "qty_ltr", MAX_NUMERIC_8_2)
        fat = non_negative_amount(data.get("fat_pct"), "fat_pct")
        if fat > MAX_FAT_PCT:
            raise ValidationError("fat_pct must be below 100")
        price = positive_amount(data.get("price_per_ltr"), "price_per_ltr", MAX_NUMERIC_8_2)

        raw_date = data.get("date")
        return MilkCollection(
            id=collection_id,
            farmer_id=require_int(data.get("farmer_id"), "farmer_id"),
            shift_id=optional_int(data.get("shift_id"), "shift_id"),
            date=parse_iso_date(raw_date, "date") if raw_date else date.today(),
            qty_ltr=qty,
            fat_pct=fat,
            price_per_ltr=price,
            due_amt=compute_collection_due(qty, price),
            notes=(data.get("notes") or None),
            created_by=optional_int(data.get("created_by"), "created_by"),
        )

    def create(self, data: dict, *, actor: str) -> MilkCollection:
        collection = self._build(None, data)
        with self._audit.change():
            collection = replace(collection, id=self._collections.add(collection))
            self._audit.record(
                entity="milk_collection",
                entity_id=collection.id,
                action=AuditAction.CREATE,
                actor=actor,
                details=collection,
            )
        return collection

    def update(self, collection_id: int, data: dict, *, actor: str) -> MilkCollection:
        self.get(collection_id)
        collection = self._build(collection_id, data)
        with self._audit.change():
            if not self._collections.update(collection):
                raise NotFoundError(f"Milk collection {collection_id} not found")
            self._audit.record(
                entity="milk_collection",
                entity_id=collection_id,
                action=AuditAction.UPDATE,
                actor=actor,
                details=collection,
            )
        return collection

    def delete(self, collection_id: int, *, actor: str) -> None:
        with self._audit.change():
            if not self._collections.delete(collection_id):
                raise NotFoundError(f"Milk collection {collection_id} not found")
            self._audit.record(entity="milk_collection", entity_id=collection_id, action=AuditAction.DELETE, actor=actor)

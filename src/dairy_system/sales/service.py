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
from .model import Sale
from .repository import SaleRepository


def compute_sale_due(qty_ltr: Decimal, unit_price: Decimal, discount: Decimal, paid_amt: Decimal) -> Decimal:
    """Outstanding amount after discount and the payment taken at the counter."""
    gross = require_at_most(round_money(qty_ltr * unit_price), "sale amount", MAX_NUMERIC_12_2)
    if discount > gross:
        raise ValidationError("discount must not exceed the sale amount")
    net = gross - discount
    if paid_amt > net:
        raise ValidationError("paid_amt must not exceed the amount after discount")
    return round_money(net - paid_amt)


class SaleService:
    """Use case: record milk sold to customers."""

    def __init__(self, sales: SaleRepository, audit: AuditService):
        self._sales = sales
        self._audit = audit

    def list_all(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        customer_id: Optional[int] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ):
        if start_date and end_date and start_date > end_date:
            raise ValidationError("start must not be after end")
        return self._sales.list_all(start_date=start_date, end_date=end_date, customer_id=customer_id, limit=limit)

    def get(self, sale_id: int) -> Sale:
        sale = self._sales.get_by_id(sale_id)
        if not sale:
            raise NotFoundError(f"Sale {sale_id} not found")
        return sale

    def _build(self, sale_id: Optional[int], data: dict) -> Sale:
        qty = positive_amount(data.get("qty_ltr"), "qty_ltr", MAX_NUMERIC_8_2)
        unit_price = positive_amount(data.get("unit_price"), "unit_price", MAX_NUMERIC_8_2)
        discount = non_negative_amount(data.get("discount") or 0, "discount", MAX_NUMERIC_8_2)
        paid = non_negative_amount(data.get("paid_amt") or 0, "paid_amt", MAX_NUMERIC_12_2)

        raw_date = data.get("date")
        return Sale(
            id=sale_id,
            customer_id=require_int(data.get("customer_id"), "customer_id"),
            shift_id=optional_int(data.get("shift_id"), "shift_id"),
            date=parse_iso_date(raw_date, "date") if raw_date else date.today(),
            qty_ltr=qty,
            unit_price=unit_price,
            discount=discount,
            paid_amt=paid,
            due_amt=compute_sale_due(qty, unit_price, discount, paid),
            created_by=optional_int(data.get("created_by"), "created_by"),
        )

    def create(self, data: dict, *, actor: str) -> Sale:
        sale = self._build(None, data)
        with self._audit.change():
            sale = replace(sale, id=self._sales.add(sale))
            self._audit.record(entity="sale", entity_id=sale.id, action=AuditAction.CREATE, actor=actor, details=sale)
        return sale

    def update(self, sale_id: int, data: dict, *, actor: str) -> Sale:
        self.get(sale_id)
        sale = self._build(sale_id, data)
        with self._audit.change():
            if not self._sales.update(sale):
                raise NotFoundError(f"Sale {sale_id} not found")
            self._audit.record(entity="sale", entity_id=sale_id, action=AuditAction.UPDATE, actor=actor, details=sale)
        return sale

    def delete(self, sale_id: int, *, actor: str) -> None:
        with self._audit.change():
            if not self._sales.delete(sale_id):
                raise NotFoundError(f"Sale {sale_id} not found")
            self._audit.record(entity="sale", entity_id=sale_id, action=AuditAction.DELETE, actor=actor)

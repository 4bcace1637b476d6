from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

import psycopg2

from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.pg_base import db_cursor, fetchall, fetchone, is_foreign_key_violation
from .model import Sale, SaleReportRow
from .repository import SaleRepository

_COLUMNS = "id, customer_id, shift_id, date, qty_ltr, unit_price, discount, paid_amt, due_amt, created_by"


def _to_sale(r: dict) -> Sale:
    return Sale(
        id=int(r["id"]),
        customer_id=int(r["customer_id"]),
        shift_id=r.get("shift_id"),
        date=r["date"],
        qty_ltr=Decimal(r["qty_ltr"]),
        unit_price=Decimal(r["unit_price"]),
        discount=Decimal(r.get("discount") or 0),
        paid_amt=Decimal(r["paid_amt"]),
        due_amt=Decimal(r["due_amt"]),
        created_by=r.get("created_by"),
    )


def _params(sale: Sale) -> tuple:
    return (
        sale.customer_id,
        sale.shift_id,
        sale.date,
        sale.qty_ltr,
        sale.unit_price,
        sale.discount,
        sale.paid_amt,
        sale.due_amt,
        sale.created_by,
    )


class PgSaleRepository(SaleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        customer_id: Optional[int] = None,
        limit: int = 500,
    ) -> Sequence[Sale]:
        where: list[str] = []
        params: list = []
        if start_date is not None:
            where.append("date >= %s")
            params.append(start_date)
        if end_date is not None:
            where.append("date <= %s")
            params.append(end_date)
        if customer_id is not None:
            where.append("customer_id = %s")
            params.append(customer_id)

        sql = f"SELECT {_COLUMNS} FROM sale"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY date DESC, id DESC LIMIT %s"
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_sale(r) for r in fetchall(cur)]

    def get_by_id(self, sale_id: int) -> Optional[Sale]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM sale WHERE id=%s", (sale_id,))
            r = fetchone(cur)
            return _to_sale(r) if r else None

    def add(self, sale: Sale) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO sale(customer_id, shift_id, date, qty_ltr, unit_price,
                                     discount, paid_amt, due_amt, created_by)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    RETURNING id
                    """,
                    _params(sale),
                )
                return int(fetchone(cur)["id"])
        except psycopg2.IntegrityError as e:
            if is_foreign_key_violation(e):
                raise ValidationError("Unknown customer, shift or employee") from e
            raise

    def update(self, sale: Sale) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE sale
                    SET customer_id=%s, shift_id=%s, date=%s, qty_ltr=%s, unit_price=%s,
                        discount=%s, paid_amt=%s, due_amt=%s, created_by=%s
                    WHERE id=%s
                    """,
                    _params(sale) + (sale.id,),
                )
                return cur.rowcount > 0
        except psycopg2.IntegrityError as e:
            if is_foreign_key_violation(e):
                raise ValidationError("Unknown customer, shift or employee") from e
            raise

    def delete(self, sale_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM sale WHERE id=%s", (sale_id,))
            return cur.rowcount > 0

    def get_report_rows(self, *, start_date: date, end_date: date) -> Sequence[SaleReportRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT sl.id, sl.date, sl.customer_id, c.name AS customer_name, s.name AS shift_name,
                       sl.qty_ltr, sl.unit_price, sl.discount, sl.paid_amt, sl.due_amt
                FROM sale sl
                JOIN customer c ON c.id = sl.customer_id
                LEFT JOIN shift s ON s.id = sl.shift_id
                WHERE sl.date BETWEEN %s AND %s
                ORDER BY sl.date, c.name, sl.id
                """,
                (start_date, end_date),
            )
            return [
                SaleReportRow(
                    id=int(r["id"]),
                    date=r["date"],
                    customer_id=int(r["customer_id"]),
                    customer_name=r["customer_name"],
                    shift_name=r.get("shift_name"),
                    qty_ltr=Decimal(r["qty_ltr"]),
                    unit_price=Decimal(r["unit_price"]),
                    discount=Decimal(r.get("discount") or 0),
                    paid_amt=Decimal(r["paid_amt"]),
                    due_amt=Decimal(r["due_amt"]),
                )
                for r in fetchall(cur)
            ]

    def total_due_for_customer(self, customer_id: int) -> Decimal:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COALESCE(SUM(due_amt), 0) AS total FROM sale WHERE customer_id=%s", (customer_id,))
            return Decimal(fetchone(cur)["total"])

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

import psycopg2

from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.pg_base import db_cursor, fetchall, fetchone, is_foreign_key_violation
from .model import CollectionReportRow, MilkCollection
from .repository import CollectionRepository

_COLUMNS = "id, farmer_id, shift_id, date, qty_ltr, fat_pct, price_per_ltr, due_amt, notes, created_by"


def _to_collection(r: dict) -> MilkCollection:
    return MilkCollection(
        id=int(r["id"]),
        farmer_id=int(r["farmer_id"]),
        shift_id=r.get("shift_id"),
        date=r["date"],
        qty_ltr=Decimal(r["qty_ltr"]),
        fat_pct=Decimal(r["fat_pct"]),
        price_per_ltr=Decimal(r["price_per_ltr"]),
        due_amt=Decimal(r["due_amt"]),
        notes=r.get("notes"),
        created_by=r.get("created_by"),
    )


class PgCollectionRepository(CollectionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        farmer_id: Optional[int] = None,
        limit: int = 500,
    ) -> Sequence[MilkCollection]:
        where: list[str] = []
        params: list = []
        if start_date is not None:
            where.append("date >= %s")
            params.append(start_date)
        if end_date is not None:
            where.append("date <= %s")
            params.append(end_date)
        if farmer_id is not None:
            where.append("farmer_id = %s")
            params.append(farmer_id)

        sql = f"SELECT {_COLUMNS} FROM milk_collection"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY date DESC, id DESC LIMIT %s"
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_collection(r) for r in fetchall(cur)]

    def get_by_id(self, collection_id: int) -> Optional[MilkCollection]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM milk_collection WHERE id=%s", (collection_id,))
            r = fetchone(cur)
            return _to_collection(r) if r else None

    def add(self, collection: MilkCollection) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO milk_collection(farmer_id, shift_id, date, qty_ltr, fat_pct,
                                                price_per_ltr, due_amt, notes, created_by)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    RETURNING id
                    """,
                    (
                        collection.farmer_id,
                        collection.shift_id,
                        collection.date,
                        collection.qty_ltr,
                        collection.fat_pct,
                        collection.price_per_ltr,
                        collection.due_amt,
                        collection.notes,
                        collection.created_by,
                    ),
                )
                return int(fetchone(cur)["id"])
        except psycopg2.IntegrityError as e:
            if is_foreign_key_violation(e):
                raise ValidationError("Unknown farmer, shift or employee") from e
            raise

    def update(self, collection: MilkCollection) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE milk_collection
                    SET farmer_id=%s, shift_id=%s, date=%s, qty_ltr=%s, fat_pct=%s,
                        price_per_ltr=%s, due_amt=%s, notes=%s, created_by=%s
                    WHERE id=%s
                    """,
                    (
                        collection.farmer_id,
                        collection.shift_id,
                        collection.date,
                        collection.qty_ltr,
                        collection.fat_pct,
                        collection.price_per_ltr,
                        collection.due_amt,
                        collection.notes,
                        collection.created_by,
                        collection.id,
                    ),
                )
                return cur.rowcount > 0
        except psycopg2.IntegrityError as e:
            if is_foreign_key_violation(e):
                raise ValidationError("Unknown farmer, shift or employee") from e
            raise

    def delete(self, collection_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM milk_collection WHERE id=%s", (collection_id,))
            return cur.rowcount > 0

    def get_report_rows(self, *, start_date: date, end_date: date) -> Sequence[CollectionReportRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT mc.id, mc.date, f.code AS farmer_code, f.name AS farmer_name,
                       s.name AS shift_name, mc.qty_ltr, mc.fat_pct, mc.price_per_ltr, mc.due_amt
                FROM milk_collection mc
                JOIN farmer f ON f.id = mc.farmer_id
                LEFT JOIN shift s ON s.id = mc.shift_id
                WHERE mc.date BETWEEN %s AND %s
                ORDER BY mc.date, f.code, mc.id
                """,
                (start_date, end_date),
            )
            return [
                CollectionReportRow(
                    id=int(r["id"]),
                    date=r["date"],
                    farmer_code=r["farmer_code"],
                    farmer_name=r["farmer_name"],
                    shift_name=r.get("shift_name"),
                    qty_ltr=Decimal(r["qty_ltr"]),
                    fat_pct=Decimal(r["fat_pct"]),
                    price_per_ltr=Decimal(r["price_per_ltr"]),
                    due_amt=Decimal(r["due_amt"]),
                )
                for r in fetchall(cur)
            ]

    def total_due_for_farmer(self, farmer_id: int) -> Decimal:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COALESCE(SUM(due_amt), 0) AS total FROM milk_collection WHERE farmer_id=%s",
                (farmer_id,),
            )
            return Decimal(fetchone(cur)["total"])

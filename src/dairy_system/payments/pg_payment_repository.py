from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Optional, Sequence

import psycopg2

from ..core.enums import PaymentMethod
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.pg_base import db_cursor, fetchall, fetchone, is_foreign_key_violation
from .model import CustomerPayment, FarmerPayment
from .repository import PaymentCustomerRepository, PaymentFarmerRepository


class _PgPaymentRepository:
    """Shared SQL for payment_farmer / payment_customer; they differ only in table and party column."""

    table: str
    party_column: str

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @property
    def _columns(self) -> str:
        return f"id, {self.party_column}, date, amount, method, reference, notes, created_by"

    def _to_model(self, r: dict) -> Any:
        raise NotImplementedError

    def list_all(
        self,
        *,
        party_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 500,
    ) -> Sequence[Any]:
        where: list[str] = []
        params: list = []
        if party_id is not None:
            where.append(f"{self.party_column} = %s")
            params.append(party_id)
        if start_date is not None:
            where.append("date >= %s")
            params.append(start_date)
        if end_date is not None:
            where.append("date <= %s")
            params.append(end_date)

        sql = f"SELECT {self._columns} FROM {self.table}"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY date DESC, id DESC LIMIT %s"
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [self._to_model(r) for r in fetchall(cur)]

    def get_by_id(self, payment_id: int) -> Optional[Any]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {self._columns} FROM {self.table} WHERE id=%s", (payment_id,))
            r = fetchone(cur)
            return self._to_model(r) if r else None

    def add(self, payment) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    INSERT INTO {self.table}({self.party_column}, date, amount, method, reference, notes, created_by)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    RETURNING id
                    """,
                    (
                        payment.party_id,
                        payment.date,
                        payment.amount,
                        payment.method.value,
                        payment.reference,
                        payment.notes,
                        payment.created_by,
                    ),
                )
                return int(fetchone(cur)["id"])
        except psycopg2.IntegrityError as e:
            if is_foreign_key_violation(e):
                raise ValidationError(f"Unknown {self.party_column.replace('_id', '')} or employee") from e
            raise

    def update(self, payment) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    UPDATE {self.table}
                    SET {self.party_column}=%s, date=%s, amount=%s, method=%s, reference=%s, notes=%s, created_by=%s
                    WHERE id=%s
                    """,
                    (
                        payment.party_id,
                        payment.date,
                        payment.amount,
                        payment.method.value,
                        payment.reference,
                        payment.notes,
                        payment.created_by,
                        payment.id,
                    ),
                )
                return cur.rowcount > 0
        except psycopg2.IntegrityError as e:
            if is_foreign_key_violation(e):
                raise ValidationError(f"Unknown {self.party_column.replace('_id', '')} or employee") from e
            raise

    def delete(self, payment_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM {self.table} WHERE id=%s", (payment_id,))
            return cur.rowcount > 0

    def total_for(self, party_id: int) -> Decimal:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT COALESCE(SUM(amount), 0) AS total FROM {self.table} WHERE {self.party_column}=%s",
                (party_id,),
            )
            return Decimal(fetchone(cur)["total"])


class PgPaymentFarmerRepository(_PgPaymentRepository, PaymentFarmerRepository):
    table = "payment_farmer"
    party_column = "farmer_id"

    def _to_model(self, r: dict) -> FarmerPayment:
        return FarmerPayment(
            id=int(r["id"]),
            farmer_id=int(r["farmer_id"]),
            date=r["date"],
            amount=Decimal(r["amount"]),
            method=PaymentMethod(r["method"]),
            reference=r.get("reference"),
            notes=r.get("notes"),
            created_by=r.get("created_by"),
        )


class PgPaymentCustomerRepository(_PgPaymentRepository, PaymentCustomerRepository):
    table = "payment_customer"
    party_column = "customer_id"

    def _to_model(self, r: dict) -> CustomerPayment:
        return CustomerPayment(
            id=int(r["id"]),
            customer_id=int(r["customer_id"]),
            date=r["date"],
            amount=Decimal(r["amount"]),
            method=PaymentMethod(r["method"]),
            reference=r.get("reference"),
            notes=r.get("notes"),
            created_by=r.get("created_by"),
        )

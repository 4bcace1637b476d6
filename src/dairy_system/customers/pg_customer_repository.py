from __future__ import annotations

from typing import Optional, Sequence

import psycopg2

from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.pg_base import db_cursor, fetchall, fetchone, is_foreign_key_violation
from .model import Customer
from .repository import CustomerRepository


def _to_customer(r: dict) -> Customer:
    return Customer(id=int(r["id"]), name=r["name"], contact=r["contact"], branch_id=r.get("branch_id"))


class PgCustomerRepository(CustomerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, branch_id: Optional[int] = None) -> Sequence[Customer]:
        with db_cursor(self._conn_factory) as (_, cur):
            if branch_id is None:
                cur.execute("SELECT id, name, contact, branch_id FROM customer ORDER BY name")
            else:
                cur.execute(
                    "SELECT id, name, contact, branch_id FROM customer WHERE branch_id=%s ORDER BY name",
                    (branch_id,),
                )
            return [_to_customer(r) for r in fetchall(cur)]

    def get_by_id(self, customer_id: int) -> Optional[Customer]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, contact, branch_id FROM customer WHERE id=%s", (customer_id,))
            r = fetchone(cur)
            return _to_customer(r) if r else None

    def add(self, customer: Customer) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO customer(name, contact, branch_id) VALUES(%s,%s,%s) RETURNING id",
                    (customer.name, customer.contact, customer.branch_id),
                )
                return int(fetchone(cur)["id"])
        except psycopg2.IntegrityError as e:
            if is_foreign_key_violation(e):
                raise ValidationError("Unknown branch") from e
            raise

    def update(self, customer: Customer) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "UPDATE customer SET name=%s, contact=%s, branch_id=%s WHERE id=%s",
                    (customer.name, customer.contact, customer.branch_id, customer.id),
                )
                return cur.rowcount > 0
        except psycopg2.IntegrityError as e:
            if is_foreign_key_violation(e):
                raise ValidationError("Unknown branch") from e
            raise

    def delete(self, customer_id: int) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("DELETE FROM customer WHERE id=%s", (customer_id,))
                return cur.rowcount > 0
        except psycopg2.IntegrityError as e:
            if is_foreign_key_violation(e):
                raise ValidationError("Customer has recorded sales or payments") from e
            raise

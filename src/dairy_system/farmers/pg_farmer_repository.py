from __future__ import annotations

from typing import Optional, Sequence

import psycopg2

from ..core.exceptions import DuplicateError, ValidationError
from ..database.connection import DatabaseConnection
from ..database.pg_base import db_cursor, fetchall, fetchone, is_foreign_key_violation, is_unique_violation
from .model import Farmer
from .repository import FarmerRepository

_COLUMNS = "id, name, code, contact, bank_id, branch_id"


def _to_farmer(r: dict) -> Farmer:
    return Farmer(
        id=int(r["id"]),
        name=r["name"],
        code=r["code"],
        contact=r["contact"],
        bank_id=r.get("bank_id"),
        branch_id=r.get("branch_id"),
    )


def _translate(e: psycopg2.IntegrityError, farmer: Farmer) -> Exception:
    if is_unique_violation(e):
        return DuplicateError(f"Farmer code {farmer.code} already exists")
    if is_foreign_key_violation(e):
        return ValidationError("Unknown branch")
    return e


class PgFarmerRepository(FarmerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, branch_id: Optional[int] = None) -> Sequence[Farmer]:
        with db_cursor(self._conn_factory) as (_, cur):
            if branch_id is None:
                cur.execute(f"SELECT {_COLUMNS} FROM farmer ORDER BY code")
            else:
                cur.execute(f"SELECT {_COLUMNS} FROM farmer WHERE branch_id=%s ORDER BY code", (branch_id,))
            return [_to_farmer(r) for r in fetchall(cur)]

    def get_by_id(self, farmer_id: int) -> Optional[Farmer]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM farmer WHERE id=%s", (farmer_id,))
            r = fetchone(cur)
            return _to_farmer(r) if r else None

    def get_by_code(self, code: str) -> Optional[Farmer]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM farmer WHERE code=%s", (code,))
            r = fetchone(cur)
            return _to_farmer(r) if r else None

    def add(self, farmer: Farmer) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO farmer(name, code, contact, bank_id, branch_id)
                    VALUES(%s,%s,%s,%s,%s)
                    RETURNING id
                    """,
                    (farmer.name, farmer.code, farmer.contact, farmer.bank_id, farmer.branch_id),
                )
                return int(fetchone(cur)["id"])
        except psycopg2.IntegrityError as e:
            raise _translate(e, farmer) from e

    def update(self, farmer: Farmer) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE farmer
                    SET name=%s, code=%s, contact=%s, bank_id=%s, branch_id=%s
                    WHERE id=%s
                    """,
                    (farmer.name, farmer.code, farmer.contact, farmer.bank_id, farmer.branch_id, farmer.id),
                )
                return cur.rowcount > 0
        except psycopg2.IntegrityError as e:
            raise _translate(e, farmer) from e

    def delete(self, farmer_id: int) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("DELETE FROM farmer WHERE id=%s", (farmer_id,))
                return cur.rowcount > 0
        except psycopg2.IntegrityError as e:
            if is_foreign_key_violation(e):
                raise ValidationError("Farmer has recorded collections or payments") from e
            raise

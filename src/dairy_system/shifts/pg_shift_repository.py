from __future__ import annotations

from typing import Optional, Sequence

import psycopg2

from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.pg_base import db_cursor, fetchall, fetchone, is_foreign_key_violation
from .model import Shift
from .repository import ShiftRepository


def _to_shift(r: dict) -> Shift:
    return Shift(id=int(r["id"]), name=r["name"], start_time=r.get("start_time"), end_time=r.get("end_time"))


class PgShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, start_time, end_time FROM shift ORDER BY start_time NULLS LAST, id")
            return [_to_shift(r) for r in fetchall(cur)]

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, start_time, end_time FROM shift WHERE id=%s", (shift_id,))
            r = fetchone(cur)
            return _to_shift(r) if r else None

    def add(self, shift: Shift) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO shift(name, start_time, end_time) VALUES(%s,%s,%s) RETURNING id",
                (shift.name, shift.start_time, shift.end_time),
            )
            return int(fetchone(cur)["id"])

    def update(self, shift: Shift) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE shift SET name=%s, start_time=%s, end_time=%s WHERE id=%s",
                (shift.name, shift.start_time, shift.end_time, shift.id),
            )
            return cur.rowcount > 0

    def delete(self, shift_id: int) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("DELETE FROM shift WHERE id=%s", (shift_id,))
                return cur.rowcount > 0
        except psycopg2.IntegrityError as e:
            if is_foreign_key_violation(e):
                raise ValidationError("Shift is used by recorded collections or sales") from e
            raise

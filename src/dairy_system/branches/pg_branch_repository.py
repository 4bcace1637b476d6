from __future__ import annotations

from typing import Optional, Sequence

import psycopg2

from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.pg_base import db_cursor, fetchall, fetchone, is_foreign_key_violation
from .model import Branch
from .repository import BranchRepository


def _to_branch(r: dict) -> Branch:
    return Branch(id=int(r["id"]), name=r["name"], address=r.get("address"), contact=r.get("contact"))


class PgBranchRepository(BranchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Branch]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, address, contact FROM branch ORDER BY id")
            return [_to_branch(r) for r in fetchall(cur)]

    def get_by_id(self, branch_id: int) -> Optional[Branch]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, address, contact FROM branch WHERE id=%s", (branch_id,))
            r = fetchone(cur)
            return _to_branch(r) if r else None

    def add(self, branch: Branch) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO branch(name, address, contact) VALUES(%s,%s,%s) RETURNING id",
                (branch.name, branch.address, branch.contact),
            )
            return int(fetchone(cur)["id"])

    def update(self, branch: Branch) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE branch SET name=%s, address=%s, contact=%s WHERE id=%s",
                (branch.name, branch.address, branch.contact, branch.id),
            )
            return cur.rowcount > 0

    def delete(self, branch_id: int) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("DELETE FROM branch WHERE id=%s", (branch_id,))
                return cur.rowcount > 0
        except psycopg2.IntegrityError as e:
            if is_foreign_key_violation(e):
                raise ValidationError("Branch still has farmers, customers or employees") from e
            raise

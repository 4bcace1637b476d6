from __future__ import annotations

from typing import Optional, Sequence

import psycopg2

from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.pg_base import db_cursor, fetchall, fetchone, is_foreign_key_violation
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "id, name, contact, branch_id, role"


def _to_employee(r: dict) -> Employee:
    return Employee(
        id=int(r["id"]),
        name=r["name"],
        contact=r["contact"],
        branch_id=r.get("branch_id"),
        role=Role(r["role"]),
    )


class PgEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, branch_id: Optional[int] = None) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            if branch_id is None:
                cur.execute(f"SELECT {_COLUMNS} FROM employee ORDER BY id")
            else:
                cur.execute(f"SELECT {_COLUMNS} FROM employee WHERE branch_id=%s ORDER BY id", (branch_id,))
            return [_to_employee(r) for r in fetchall(cur)]

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employee WHERE id=%s", (employee_id,))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def add(self, employee: Employee) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO employee(name, contact, branch_id, role)
                    VALUES(%s,%s,%s,%s)
                    RETURNING id
                    """,
                    (employee.name, employee.contact, employee.branch_id, employee.role.value),
                )
                return int(fetchone(cur)["id"])
        except psycopg2.IntegrityError as e:
            if is_foreign_key_violation(e):
                raise ValidationError("Unknown branch") from e
            raise

    def update(self, employee: Employee) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "UPDATE employee SET name=%s, contact=%s, branch_id=%s, role=%s WHERE id=%s",
                    (employee.name, employee.contact, employee.branch_id, employee.role.value, employee.id),
                )
                return cur.rowcount > 0
        except psycopg2.IntegrityError as e:
            if is_foreign_key_violation(e):
                raise ValidationError("Unknown branch") from e
            raise

    def delete(self, employee_id: int) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("DELETE FROM employee WHERE id=%s", (employee_id,))
                return cur.rowcount > 0
        except psycopg2.IntegrityError as e:
            if is_foreign_key_violation(e):
                raise ValidationError("Employee is referenced by recorded transactions") from e
            raise

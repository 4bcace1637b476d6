from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable

from ..common.logger import get_logger
from ..core.constants import DB_SCHEMA
from .connection import DatabaseConnection

logger = get_logger(__name__)

DEFAULT_SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes and -- comments).
    buf: list[str] = []
    in_single = False
    in_comment = False
    prev = ""

    for ch in sql:
        if in_comment:
            if ch == "\n":
                in_comment = False
                buf.append(ch)
            prev = ch
            continue

        if ch == "-" and prev == "-" and not in_single:
            buf.pop()
            in_comment = True
            prev = ""
            continue

        if ch == "'":
            in_single = not in_single

        if ch == ";" and not in_single:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            prev = ch
            continue

        buf.append(ch)
        prev = ch

    tail = "".join(buf).strip()
    if tail:
        yield tail


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path = DEFAULT_SCHEMA_PATH) -> int:
    sql = Path(schema_path).read_text(encoding="utf-8")
    statements = list(_iter_sql_statements(sql))

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()

    logger.info("Applied %s (%d statements)", Path(schema_path).name, len(statements))
    return len(statements)


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute(
            "SELECT table_name FROM information_schema.tables WHERE table_schema=%s ORDER BY table_name",
            (DB_SCHEMA,),
        )
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()


def check_connection(conn_factory: DatabaseConnection) -> Any:
    """Run ``SELECT 1`` and return the scalar."""
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SELECT 1")
        row = cur.fetchone()
        return row[0] if row else None
    finally:
        conn.close()

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, List, Optional

import psycopg2
from psycopg2 import errorcodes
from psycopg2.extras import RealDictCursor

from .connection import DatabaseConnection

# (factory, connection) of the transaction opened by ``transaction()`` in this context.
_active: ContextVar[Optional[tuple]] = ContextVar("dairy_active_transaction", default=None)


def _joined_connection(conn_factory: DatabaseConnection):
    active = _active.get()
    if active is not None and active[0] is conn_factory:
        return active[1]
    return None


@contextmanager
def transaction(conn_factory: DatabaseConnection):
    """Run every ``db_cursor`` block inside on one connection, committed once at the end.

    Nested calls join the outer transaction.
    """
    if _joined_connection(conn_factory) is not None:
        yield
        return

    conn = conn_factory.connect()
    token = _active.set((conn_factory, conn))
    try:
        yield
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        _active.reset(token)
        conn.close()


@contextmanager
def db_cursor(conn_factory: DatabaseConnection):
    joined = _joined_connection(conn_factory)
    if joined is not None:
        # Commit/rollback belong to the enclosing transaction().
        cur = joined.cursor(cursor_factory=RealDictCursor)
        try:
            yield joined, cur
        finally:
            cur.close()
        return

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(cursor_factory=RealDictCursor)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return dict(row) if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return [dict(r) for r in rows or []]


def is_unique_violation(exc: Exception) -> bool:
    return isinstance(exc, psycopg2.IntegrityError) and getattr(exc, "pgcode", None) == errorcodes.UNIQUE_VIOLATION


def is_foreign_key_violation(exc: Exception) -> bool:
    return isinstance(exc, psycopg2.IntegrityError) and getattr(exc, "pgcode", None) == errorcodes.FOREIGN_KEY_VIOLATION

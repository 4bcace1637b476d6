from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import AuditAction
from ..database.connection import DatabaseConnection
from ..database.pg_base import db_cursor, fetchall, fetchone
from .model import AuditEntry
from .repository import AuditLogRepository


class PgAuditLogRepository(AuditLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add(
        self,
        *,
        entity: str,
        entity_id: Optional[int],
        action: AuditAction,
        actor: str,
        details: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO audit_log(entity, entity_id, action, actor, details)
                VALUES(%s,%s,%s,%s,%s)
                RETURNING id
                """,
                (entity, entity_id, action.value, actor, details),
            )
            return int(fetchone(cur)["id"])

    def list_recent(self, *, entity: Optional[str] = None, limit: int = 100) -> Sequence[AuditEntry]:
        sql = "SELECT id, entity, entity_id, action, actor, details, created_at FROM audit_log"
        params: list = []
        if entity:
            sql += " WHERE entity=%s"
            params.append(entity)
        sql += " ORDER BY created_at DESC, id DESC LIMIT %s"
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [
                AuditEntry(
                    id=int(r["id"]),
                    entity=r["entity"],
                    entity_id=r.get("entity_id"),
                    action=AuditAction(r["action"]),
                    actor=r["actor"],
                    details=r.get("details"),
                    created_at=r.get("created_at"),
                )
                for r in fetchall(cur)
            ]

from __future__ import annotations

import json
from contextlib import nullcontext
from typing import Any, Callable, ContextManager, Optional

from ..common.logger import get_logger
from ..common.serialization import to_jsonable
from ..core.constants import DEFAULT_AUDIT_LIMIT
from ..core.enums import AuditAction
from .repository import AuditLogRepository

logger = get_logger(__name__)


class AuditService:
    """Writes one audit_log row per create/update/delete.

    ``transaction`` opens the unit of work shared by a data change and its audit row;
    services wrap both in ``with audit.change():`` so neither is kept without the other.
    """

    def __init__(self, audit: AuditLogRepository, transaction: Optional[Callable[[], ContextManager]] = None):
        self._audit = audit
        self._transaction = transaction or nullcontext

    def change(self) -> ContextManager:
        return self._transaction()

    def record(
        self,
        *,
        entity: str,
        entity_id: Optional[int],
        action: AuditAction,
        actor: str,
        details: Any = None,
    ) -> int:
        payload = json.dumps(to_jsonable(details), ensure_ascii=False) if details is not None else None
        entry_id = self._audit.add(
            entity=entity,
            entity_id=entity_id,
            action=action,
            actor=actor or "system",
            details=payload,
        )
        logger.info("audit %s %s#%s by %s", action.value, entity, entity_id, actor)
        return entry_id

    def list_recent(self, *, entity: Optional[str] = None, limit: int = DEFAULT_AUDIT_LIMIT):
        return self._audit.list_recent(entity=entity, limit=max(1, min(int(limit), 1000)))

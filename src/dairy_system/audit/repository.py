from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import AuditAction
from .model import AuditEntry


class AuditLogRepository(Protocol):
    def add(
        self,
        *,
        entity: str,
        entity_id: Optional[int],
        action: AuditAction,
        actor: str,
        details: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def list_recent(self, *, entity: Optional[str] = None, limit: int = 100) -> Sequence[AuditEntry]:
        raise NotImplementedError

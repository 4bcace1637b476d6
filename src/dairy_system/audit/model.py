from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AuditAction


@dataclass(frozen=True)
class AuditEntry:
    """One row of audit_log: who changed which entity, and how."""

    id: int
    entity: str
    entity_id: Optional[int]
    action: AuditAction
    actor: str
    details: Optional[str]
    created_at: Optional[datetime]

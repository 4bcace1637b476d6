from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..audit.service import AuditService
from ..common.validators import require_max_length, require_non_empty
from ..core.enums import AuditAction
from ..core.exceptions import NotFoundError
from .model import Branch
from .repository import BranchRepository


class BranchService:
    def __init__(self, branches: BranchRepository, audit: AuditService):
        self._branches = branches
        self._audit = audit

    def list_all(self):
        return self._branches.list_all()

    def get(self, branch_id: int) -> Branch:
        branch = self._branches.get_by_id(branch_id)
        if not branch:
            raise NotFoundError(f"Branch {branch_id} not found")
        return branch

    def create(self, *, name: str, address: Optional[str], contact: Optional[str], actor: str) -> Branch:
        name = require_max_length(require_non_empty(name, "Branch name"), "Branch name", 100)
        branch = Branch(id=None, name=name, address=address or None, contact=contact or None)
        with self._audit.change():
            branch = replace(branch, id=self._branches.add(branch))
            self._audit.record(entity="branch", entity_id=branch.id, action=AuditAction.CREATE, actor=actor, details=branch)
        return branch

    def update(self, branch_id: int, *, name: str, address: Optional[str], contact: Optional[str], actor: str) -> Branch:
        self.get(branch_id)
        name = require_max_length(require_non_empty(name, "Branch name"), "Branch name", 100)
        branch = Branch(id=branch_id, name=name, address=address or None, contact=contact or None)
        with self._audit.change():
            if not self._branches.update(branch):
                raise NotFoundError(f"Branch {branch_id} not found")
            self._audit.record(entity="branch", entity_id=branch_id, action=AuditAction.UPDATE, actor=actor, details=branch)
        return branch

    def delete(self, branch_id: int, *, actor: str) -> None:
        with self._audit.change():
            if not self._branches.delete(branch_id):
                raise NotFoundError(f"Branch {branch_id} not found")
            self._audit.record(entity="branch", entity_id=branch_id, action=AuditAction.DELETE, actor=actor)

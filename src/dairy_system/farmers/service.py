from __future__ import annotations

from dataclasses import replace
from typing import Any, Optional

from ..audit.service import AuditService
from ..common.validators import optional_int, require_max_length, require_non_empty
from ..core.enums import AuditAction
from ..core.exceptions import DuplicateError, NotFoundError
from .model import Farmer
from .repository import FarmerRepository


class FarmerService:
    """Use case: manage the farmer register. Farmer codes are unique."""

    def __init__(self, farmers: FarmerRepository, audit: AuditService):
        self._farmers = farmers
        self._audit = audit

    def list_all(self, *, branch_id: Optional[int] = None):
        return self._farmers.list_all(branch_id=branch_id)

    def get(self, farmer_id: int) -> Farmer:
        farmer = self._farmers.get_by_id(farmer_id)
        if not farmer:
            raise NotFoundError(f"Farmer {farmer_id} not found")
        return farmer

    def _build(self, farmer_id: Optional[int], *, name, code, contact, bank_id, branch_id) -> Farmer:
        code = require_max_length(require_non_empty(code, "Farmer code"), "Farmer code", 20).upper()
        return Farmer(
            id=farmer_id,
            name=require_max_length(require_non_empty(name, "Farmer name"), "Farmer name", 100),
            code=code,
            contact=require_max_length(require_non_empty(contact, "Contact"), "Contact", 50),
            bank_id=optional_int(bank_id, "bank_id"),
            branch_id=optional_int(branch_id, "branch_id"),
        )

    def _ensure_code_free(self, code: str, *, own_id: Optional[int] = None) -> None:
        existing = self._farmers.get_by_code(code)
        if existing and existing.id != own_id:
            raise DuplicateError(f"Farmer code {code} already exists")

    def create(self, *, name: str, code: str, contact: str, bank_id: Any = None, branch_id: Any = None, actor: str) -> Farmer:
        farmer = self._build(None, name=name, code=code, contact=contact, bank_id=bank_id, branch_id=branch_id)
        self._ensure_code_free(farmer.code)
        with self._audit.change():
            farmer = replace(farmer, id=self._farmers.add(farmer))
            self._audit.record(entity="farmer", entity_id=farmer.id, action=AuditAction.CREATE, actor=actor, details=farmer)
        return farmer

    def update(
        self,
        farmer_id: int,
        *,
        name: str,
        code: str,
        contact: str,
        bank_id: Any = None,
        branch_id: Any = None,
        actor: str,
    ) -> Farmer:
        self.get(farmer_id)
        farmer = self._build(farmer_id, name=name, code=code, contact=contact, bank_id=bank_id, branch_id=branch_id)
        self._ensure_code_free(farmer.code, own_id=farmer_id)
        with self._audit.change():
            if not self._farmers.update(farmer):
                raise NotFoundError(f"Farmer {farmer_id} not found")
            self._audit.record(entity="farmer", entity_id=farmer_id, action=AuditAction.UPDATE, actor=actor, details=farmer)
        return farmer

    def delete(self, farmer_id: int, *, actor: str) -> None:
        with self._audit.change():
            if not self._farmers.delete(farmer_id):
                raise NotFoundError(f"Farmer {farmer_id} not found")
            self._audit.record(entity="farmer", entity_id=farmer_id, action=AuditAction.DELETE, actor=actor)

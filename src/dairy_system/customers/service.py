from __future__ import annotations

from dataclasses import replace
from typing import Any, Optional

from ..audit.service import AuditService
from ..common.validators import optional_int, require_max_length, require_non_empty
from ..core.enums import AuditAction
from ..core.exceptions import NotFoundError
from .model import Customer
from .repository import CustomerRepository


class CustomerService:
    def __init__(self, customers: CustomerRepository, audit: AuditService):
        self._customers = customers
        self._audit = audit

    def list_all(self, *, branch_id: Optional[int] = None):
        return self._customers.list_all(branch_id=branch_id)

    def get(self, customer_id: int) -> Customer:
        customer = self._customers.get_by_id(customer_id)
        if not customer:
            raise NotFoundError(f"Customer {customer_id} not found")
        return customer

    def _build(self, customer_id: Optional[int], *, name, contact, branch_id) -> Customer:
        return Customer(
            id=customer_id,
            name=require_max_length(require_non_empty(name, "Customer name"), "Customer name", 100),
            contact=require_max_length(require_non_empty(contact, "Contact"), "Contact", 50),
            branch_id=optional_int(branch_id, "branch_id"),
        )

    def create(self, *, name: str, contact: str, branch_id: Any = None, actor: str) -> Customer:
        customer = self._build(None, name=name, contact=contact, branch_id=branch_id)
        with self._audit.change():
            customer = replace(customer, id=self._customers.add(customer))
            self._audit.record(entity="customer", entity_id=customer.id, action=AuditAction.CREATE, actor=actor, details=customer)
        return customer

    def update(self, customer_id: int, *, name: str, contact: str, branch_id: Any = None, actor: str) -> Customer:
        self.get(customer_id)
        customer = self._build(customer_id, name=name, contact=contact, branch_id=branch_id)
        with self._audit.change():
            if not self._customers.update(customer):
                raise NotFoundError(f"Customer {customer_id} not found")
            self._audit.record(entity="customer", entity_id=customer_id, action=AuditAction.UPDATE, actor=actor, details=customer)
        return customer

    def delete(self, customer_id: int, *, actor: str) -> None:
        with self._audit.change():
            if not self._customers.delete(customer_id):
                raise NotFoundError(f"Customer {customer_id} not found")
            self._audit.record(entity="customer", entity_id=customer_id, action=AuditAction.DELETE, actor=actor)

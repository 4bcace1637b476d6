from __future__ import annotations

from dataclasses import replace
from typing import Any, Optional

from ..audit.service import AuditService
from ..common.validators import optional_int, require_max_length, require_non_empty
from ..core.enums import AuditAction, Role
from ..core.exceptions import NotFoundError, ValidationError
from .model import Employee
from .repository import EmployeeRepository


def _parse_role(value: Any) -> Role:
    for role in Role:
        if str(value or "").strip().lower() == role.value.lower():
            return role
    raise ValidationError("Invalid employee role")


class EmployeeService:
    def __init__(self, employees: EmployeeRepository, audit: AuditService):
        self._employees = employees
        self._audit = audit

    def list_all(self, *, branch_id: Optional[int] = None):
        return self._employees.list_all(branch_id=branch_id)

    def get(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id} not found")
        return employee

    def _build(self, employee_id: Optional[int], *, name, contact, branch_id, role) -> Employee:
        return Employee(
            id=employee_id,
            name=require_max_length(require_non_empty(name, "Employee name"), "Employee name", 100),
            contact=require_max_length(require_non_empty(contact, "Contact"), "Contact", 50),
            branch_id=optional_int(branch_id, "branch_id"),
            role=_parse_role(role),
        )

    def create(self, *, name: str, contact: str, branch_id: Any, role: Any, actor: str) -> Employee:
        employee = self._build(None, name=name, contact=contact, branch_id=branch_id, role=role)
        with self._audit.change():
            employee = replace(employee, id=self._employees.add(employee))
            self._audit.record(entity="employee", entity_id=employee.id, action=AuditAction.CREATE, actor=actor, details=employee)
        return employee

    def update(self, employee_id: int, *, name: str, contact: str, branch_id: Any, role: Any, actor: str) -> Employee:
        self.get(employee_id)
        employee = self._build(employee_id, name=name, contact=contact, branch_id=branch_id, role=role)
        with self._audit.change():
            if not self._employees.update(employee):
                raise NotFoundError(f"Employee {employee_id} not found")
            self._audit.record(entity="employee", entity_id=employee_id, action=AuditAction.UPDATE, actor=actor, details=employee)
        return employee

    def delete(self, employee_id: int, *, actor: str) -> None:
        with self._audit.change():
            if not self._employees.delete(employee_id):
                raise NotFoundError(f"Employee {employee_id} not found")
            self._audit.record(entity="employee", entity_id=employee_id, action=AuditAction.DELETE, actor=actor)

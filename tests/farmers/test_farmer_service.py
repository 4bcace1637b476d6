from __future__ import annotations

import pytest

from dairy_system.audit.service import AuditService
from dairy_system.core.exceptions import DuplicateError, NotFoundError, ValidationError
from dairy_system.farmers.service import FarmerService


@pytest.fixture
def svc(repos):
    return FarmerService(repos.farmers, AuditService(repos.audit))


def test_create_uppercases_code(svc):
    farmer = svc.create(name="Farmer B", code="f002", contact="123", branch_id=1, actor="admin")

    assert farmer.code == "F002"
    assert farmer.id == 2


def test_duplicate_code_is_rejected_case_insensitively(svc, repos):
    with pytest.raises(DuplicateError):
        svc.create(name="Someone", code="f001", contact="123", actor="admin")

    assert len(repos.farmers.rows) == 1


def test_update_may_keep_own_code(svc):
    farmer = svc.update(1, name="Farmer A Renamed", code="F001", contact="7777777777", branch_id=1, actor="admin")

    assert farmer.name == "Farmer A Renamed"


def test_update_to_another_farmers_code_is_rejected(svc):
    svc.create(name="Farmer B", code="F002", contact="123", actor="admin")

    with pytest.raises(DuplicateError):
        svc.update(2, name="Farmer B", code="F001", contact="123", actor="admin")


@pytest.mark.parametrize("field", ["name", "code", "contact"])
def test_required_fields(svc, field):
    values = {"name": "Farmer C", "code": "F003", "contact": "123"}
    values[field] = "   "

    with pytest.raises(ValidationError):
        svc.create(**values, actor="admin")


def test_delete_unknown_farmer(svc):
    with pytest.raises(NotFoundError):
        svc.delete(404, actor="admin")

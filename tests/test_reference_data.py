from __future__ import annotations

from datetime import time

import pytest

from dairy_system.audit.service import AuditService
from dairy_system.core.enums import Role
from dairy_system.core.exceptions import NotFoundError, ValidationError
from dairy_system.employees.service import EmployeeService
from dairy_system.shifts.service import ShiftService


def test_shift_times_are_parsed(repos):
    svc = ShiftService(repos.shifts, AuditService(repos.audit))

    shift = svc.create(name="Evening", start_time="17:00", end_time="20:30:00", actor="admin")

    assert shift.start_time == time(17, 0)
    assert shift.end_time == time(20, 30)


@pytest.mark.parametrize("start,end", [("06:00", "06:00"), ("6am", "10:00")])
def test_invalid_shift_window_is_rejected(repos, start, end):
    svc = ShiftService(repos.shifts, AuditService(repos.audit))

    with pytest.raises(ValidationError):
        svc.create(name="Bad", start_time=start, end_time=end, actor="admin")


def test_employee_role_is_case_insensitive(repos):
    svc = EmployeeService(repos.employees, AuditService(repos.audit))

    employee = svc.create(name="Ravi", contact="123", branch_id=1, role="collector", actor="admin")

    assert employee.role == Role.COLLECTOR


def test_unknown_employee_role_is_rejected(repos):
    svc = EmployeeService(repos.employees, AuditService(repos.audit))

    with pytest.raises(ValidationError):
        svc.create(name="Ravi", contact="123", branch_id=1, role="janitor", actor="admin")


def test_update_unknown_employee(repos):
    svc = EmployeeService(repos.employees, AuditService(repos.audit))

    with pytest.raises(NotFoundError):
        svc.update(7, name="X", contact="1", branch_id=None, role="Admin", actor="admin")


def test_branch_crud_over_http(auth_client):
    created = auth_client.post("/api/branches", json={"name": "North", "address": "Road 2", "contact": "1"})
    assert created.status_code == 201
    bid = created.get_json()["data"]["id"]

    renamed = auth_client.put(f"/api/branches/{bid}", json={"name": "North Depot", "address": "Road 2", "contact": "1"})
    assert renamed.get_json()["data"]["name"] == "North Depot"

    names = [b["name"] for b in auth_client.get("/api/branches").get_json()["data"]]
    assert names == ["Main Branch", "North Depot"]

    assert auth_client.delete(f"/api/branches/{bid}").status_code == 200
    assert auth_client.get(f"/api/branches/{bid}").status_code == 404


def test_customers_and_shifts_are_listed(auth_client):
    customers = auth_client.get("/api/customers").get_json()["data"]
    shifts = auth_client.get("/api/shifts").get_json()["data"]

    assert customers[0]["name"] == "Customer X"
    assert shifts[0] == {"id": 1, "name": "Morning", "start_time": "06:00", "end_time": "10:00"}


def test_employee_created_over_form_post(auth_client):
    resp = auth_client.post("/api/employees", data={"name": "Asha", "contact": "99", "branch_id": "1", "role": "Sales"})

    assert resp.status_code == 201
    assert resp.get_json()["data"]["role"] == "Sales"

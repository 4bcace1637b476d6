from __future__ import annotations

from contextlib import contextmanager
from dataclasses import replace
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Optional

import pytest

from dairy_system.audit.model import AuditEntry
from dairy_system.auth.service import TokenService
from dairy_system.branches.model import Branch
from dairy_system.container import Repositories, assemble
from dairy_system.core.enums import Role
from dairy_system.customers.model import Customer
from dairy_system.employees.model import Employee
from dairy_system.farmers.model import Farmer
from dairy_system.main import create_app
from dairy_system.milk_collections.model import CollectionReportRow
from dairy_system.sales.model import SaleReportRow
from dairy_system.shifts.model import Shift

TEST_JWT = {
    "key": "test-jwt-key-with-enough-length-for-hs256",
    "issuer": "dairy-system-test",
    "audience": "dairy-system-test-clients",
}


class InMemoryStore:
    def __init__(self, rows=()):
        self.rows: dict[int, object] = {}
        self._next_id = 1
        for row in rows:
            self.add(row)

    def get_by_id(self, row_id: int):
        return self.rows.get(row_id)

    def add(self, row) -> int:
        row_id = self._next_id
        self._next_id += 1
        self.rows[row_id] = replace(row, id=row_id)
        return row_id

    def update(self, row) -> bool:
        if row.id not in self.rows:
            return False
        self.rows[row.id] = row
        return True

    def delete(self, row_id: int) -> bool:
        return self.rows.pop(row_id, None) is not None


class InMemoryBranches(InMemoryStore):
    def list_all(self):
        return list(self.rows.values())


class InMemoryEmployees(InMemoryStore):
    def list_all(self, *, branch_id=None):
        return [e for e in self.rows.values() if branch_id is None or e.branch_id == branch_id]


class InMemoryFarmers(InMemoryStore):
    def list_all(self, *, branch_id=None):
        return [f for f in self.rows.values() if branch_id is None or f.branch_id == branch_id]

    def get_by_code(self, code: str) -> Optional[Farmer]:
        return next((f for f in self.rows.values() if f.code == code), None)


class InMemoryCustomers(InMemoryStore):
    def list_all(self, *, branch_id=None):
        return [c for c in self.rows.values() if branch_id is None or c.branch_id == branch_id]


class InMemoryShifts(InMemoryStore):
    def list_all(self):
        return list(self.rows.values())


def _in_range(d: date, start, end) -> bool:
    return (start is None or d >= start) and (end is None or d <= end)


class InMemoryCollections(InMemoryStore):
    def __init__(self, farmers: InMemoryFarmers, shifts: InMemoryShifts):
        super().__init__()
        self._farmers = farmers
        self._shifts = shifts

    def list_all(self, *, start_date=None, end_date=None, farmer_id=None, limit=500):
        rows = [
            c
            for c in self.rows.values()
            if _in_range(c.date, start_date, end_date) and (farmer_id is None or c.farmer_id == farmer_id)
        ]
        return sorted(rows, key=lambda c: (c.date, c.id), reverse=True)[:limit]

    def get_report_rows(self, *, start_date, end_date):
        out = []
        for c in sorted(self.rows.values(), key=lambda c: (c.date, c.id)):
            if not _in_range(c.date, start_date, end_date):
                continue
            farmer = self._farmers.get_by_id(c.farmer_id)
            shift = self._shifts.get_by_id(c.shift_id) if c.shift_id else None
            out.append(
                CollectionReportRow(
                    id=c.id,
                    date=c.date,
                    farmer_code=farmer.code,
                    farmer_name=farmer.name,
                    shift_name=shift.name if shift else None,
                    qty_ltr=c.qty_ltr,
                    fat_pct=c.fat_pct,
                    price_per_ltr=c.price_per_ltr,
                    due_amt=c.due_amt,
                )
            )
        return out

    def total_due_for_farmer(self, farmer_id: int) -> Decimal:
        return sum((c.due_amt for c in self.rows.values() if c.farmer_id == farmer_id), Decimal(0))


class InMemorySales(InMemoryStore):
    def __init__(self, customers: InMemoryCustomers, shifts: InMemoryShifts):
        super().__init__()
        self._customers = customers
        self._shifts = shifts

    def list_all(self, *, start_date=None, end_date=None, customer_id=None, limit=500):
        rows = [
            s
            for s in self.rows.values()
            if _in_range(s.date, start_date, end_date) and (customer_id is None or s.customer_id == customer_id)
        ]
        return sorted(rows, key=lambda s: (s.date, s.id), reverse=True)[:limit]

    def get_report_rows(self, *, start_date, end_date):
        out = []
        for s in sorted(self.rows.values(), key=lambda s: (s.date, s.id)):
            if not _in_range(s.date, start_date, end_date):
                continue
            customer = self._customers.get_by_id(s.customer_id)
            shift = self._shifts.get_by_id(s.shift_id) if s.shift_id else None
            out.append(
                SaleReportRow(
                    id=s.id,
                    date=s.date,
                    customer_id=s.customer_id,
                    customer_name=customer.name,
                    shift_name=shift.name if shift else None,
                    qty_ltr=s.qty_ltr,
                    unit_price=s.unit_price,
                    discount=s.discount,
                    paid_amt=s.paid_amt,
                    due_amt=s.due_amt,
                )
            )
        return out

    def total_due_for_customer(self, customer_id: int) -> Decimal:
        return sum((s.due_amt for s in self.rows.values() if s.customer_id == customer_id), Decimal(0))


class InMemoryPayments(InMemoryStore):
    def list_all(self, *, party_id=None, start_date=None, end_date=None, limit=500):
        rows = [
            p
            for p in self.rows.values()
            if (party_id is None or p.party_id == party_id) and _in_range(p.date, start_date, end_date)
        ]
        return sorted(rows, key=lambda p: (p.date, p.id), reverse=True)[:limit]

    def total_for(self, party_id: int) -> Decimal:
        return sum((p.amount for p in self.rows.values() if p.party_id == party_id), Decimal(0))


class InMemoryAudit:
    def __init__(self):
        self.entries: list[AuditEntry] = []

    def add(self, *, entity, entity_id, action, actor, details=None) -> int:
        entry = AuditEntry(
            id=len(self.entries) + 1,
            entity=entity,
            entity_id=entity_id,
            action=action,
            actor=actor,
            details=details,
            created_at=datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc),
        )
        self.entries.append(entry)
        return entry.id

    def list_recent(self, *, entity=None, limit=100):
        rows = [e for e in reversed(self.entries) if entity is None or e.entity == entity]
        return rows[:limit]


class InMemoryTransaction:
    """Snapshots every store and restores it when the block raises, like a database rollback."""

    def __init__(self, stores, audit: InMemoryAudit):
        self._stores = stores
        self._audit = audit

    @contextmanager
    def __call__(self):
        snapshot = [(s, dict(s.rows), s._next_id) for s in self._stores]
        entries = list(self._audit.entries)
        try:
            yield
        except Exception:
            for store, rows, next_id in snapshot:
                store.rows = rows
                store._next_id = next_id
            self._audit.entries = entries
            raise


@pytest.fixture
def repos() -> Repositories:
    branches = InMemoryBranches([Branch(id=None, name="Main Branch", address="123 Dairy Lane", contact="9876543210")])
    employees = InMemoryEmployees([Employee(id=None, name="Admin User", contact="9999999999", branch_id=1, role=Role.ADMIN)])
    farmers = InMemoryFarmers([Farmer(id=None, name="Farmer A", code="F001", contact="7777777777", branch_id=1)])
    customers = InMemoryCustomers([Customer(id=None, name="Customer X", contact="5555555555", branch_id=1)])
    shifts = InMemoryShifts([Shift(id=None, name="Morning", start_time=time(6, 0), end_time=time(10, 0))])
    collections = InMemoryCollections(farmers, shifts)
    sales = InMemorySales(customers, shifts)
    farmer_payments = InMemoryPayments()
    customer_payments = InMemoryPayments()
    audit = InMemoryAudit()
    stores = [branches, employees, farmers, customers, shifts, collections, sales, farmer_payments, customer_payments]

    return Repositories(
        branches=branches,
        employees=employees,
        farmers=farmers,
        customers=customers,
        shifts=shifts,
        collections=collections,
        sales=sales,
        farmer_payments=farmer_payments,
        customer_payments=customer_payments,
        audit=audit,
        transaction=InMemoryTransaction(stores, audit),
    )


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(**TEST_JWT, expires_minutes=5)


@pytest.fixture
def container(repos, token_service):
    return assemble(repos, token_service=token_service)


@pytest.fixture
def app(container):
    return create_app("dairy_system.settings.testing", container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_client(client):
    response = client.post("/login", data={"username": "admin", "password": "admin123"})
    assert response.status_code == 302
    return client


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 1, 6, 30, tzinfo=timezone.utc)

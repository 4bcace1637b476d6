from __future__ import annotations

from decimal import Decimal

import pytest

from dairy_system.audit.service import AuditService
from dairy_system.core.enums import AuditAction
from dairy_system.core.exceptions import NotFoundError, ValidationError
from dairy_system.sales.service import SaleService, compute_sale_due


def _payload(**overrides):
    data = {
        "customer_id": 1,
        "shift_id": 1,
        "date": "2026-03-01",
        "qty_ltr": "20",
        "unit_price": "50",
        "discount": "10",
        "paid_amt": "500",
    }
    data.update(overrides)
    return data


@pytest.fixture
def svc(repos):
    return SaleService(repos.sales, AuditService(repos.audit))


def test_due_is_gross_minus_discount_minus_paid():
    due = compute_sale_due(Decimal("20"), Decimal("50"), Decimal("10"), Decimal("500"))

    assert due == Decimal("490.00")


def test_fully_paid_sale_has_zero_due():
    assert compute_sale_due(Decimal("2"), Decimal("45"), Decimal("0"), Decimal("90")) == Decimal("0.00")


def test_discount_above_gross_is_rejected():
    with pytest.raises(ValidationError):
        compute_sale_due(Decimal("1"), Decimal("50"), Decimal("50.01"), Decimal("0"))


def test_payment_above_net_is_rejected():
    with pytest.raises(ValidationError):
        compute_sale_due(Decimal("1"), Decimal("50"), Decimal("5"), Decimal("45.01"))


def test_create_defaults_discount_and_paid_to_zero(svc):
    sale = svc.create(_payload(discount=None, paid_amt=None), actor="admin")

    assert sale.discount == Decimal("0.00")
    assert sale.paid_amt == Decimal("0.00")
    assert sale.due_amt == Decimal("1000.00")


def test_create_and_update_write_audit_rows(svc, repos):
    sale = svc.create(_payload(), actor="admin")
    svc.update(sale.id, _payload(paid_amt="990"), actor="clerk")

    assert [e.action for e in repos.audit.entries] == [AuditAction.CREATE, AuditAction.UPDATE]
    assert repos.audit.entries[-1].actor == "clerk"
    assert repos.sales.get_by_id(sale.id).due_amt == Decimal("0.00")


def test_negative_discount_is_rejected(svc):
    with pytest.raises(ValidationError):
        svc.create(_payload(discount="-1"), actor="admin")


def test_get_missing_sale_raises(svc):
    with pytest.raises(NotFoundError):
        svc.get(42)


@pytest.mark.parametrize(
    "overrides",
    [
        {"qty_ltr": "1000000"},
        {"unit_price": "1000000"},
        {"discount": "1000000"},
        {"paid_amt": "10000000000"},
        {"qty_ltr": "999999.99", "unit_price": "999999.99", "discount": "0", "paid_amt": "0"},
    ],
)
def test_amounts_beyond_column_precision_are_rejected(svc, repos, overrides):
    with pytest.raises(ValidationError, match="must not exceed"):
        svc.create(_payload(**overrides), actor="admin")

    assert repos.sales.rows == {}


def test_failed_audit_write_leaves_no_sale(repos, monkeypatch):
    svc = SaleService(repos.sales, AuditService(repos.audit, transaction=repos.transaction))

    def boom(**kwargs):
        raise RuntimeError("audit_log is unavailable")

    monkeypatch.setattr(repos.audit, "add", boom)

    with pytest.raises(RuntimeError):
        svc.create(_payload(), actor="admin")

    assert repos.sales.rows == {}

from __future__ import annotations

from decimal import Decimal

import pytest

from dairy_system.audit.service import AuditService
from dairy_system.core.enums import PaymentMethod
from dairy_system.core.exceptions import NotFoundError, ValidationError
from dairy_system.farmers.model import Farmer
from dairy_system.milk_collections.service import CollectionService
from dairy_system.payments.service import PaymentService
from dairy_system.sales.service import SaleService


@pytest.fixture
def audit(repos):
    return AuditService(repos.audit)


@pytest.fixture
def svc(repos, audit):
    return PaymentService(
        repos.farmer_payments,
        repos.customer_payments,
        collections=repos.collections,
        sales=repos.sales,
        farmers=repos.farmers,
        customers=repos.customers,
        audit=audit,
    )


def test_farmer_balance_is_collections_minus_payments(svc, repos, audit):
    collections = CollectionService(repos.collections, audit)
    collections.create({"farmer_id": 1, "qty_ltr": "10", "fat_pct": "4", "price_per_ltr": "40"}, actor="admin")
    collections.create({"farmer_id": 1, "qty_ltr": "5", "fat_pct": "4", "price_per_ltr": "42"}, actor="admin")

    svc.record_farmer_payment({"farmer_id": 1, "amount": "300", "date": "2026-03-02"}, actor="admin")

    balance = svc.farmer_balance(1)
    assert balance.party_name == "Farmer A"
    assert balance.total_due == Decimal("610.00")
    assert balance.total_paid == Decimal("300.00")
    assert balance.balance == Decimal("310.00")


def test_customer_balance_is_sale_dues_minus_receipts(svc, repos, audit):
    sales = SaleService(repos.sales, audit)
    sales.create({"customer_id": 1, "qty_ltr": "10", "unit_price": "50", "paid_amt": "100"}, actor="admin")

    svc.record_customer_payment({"customer_id": 1, "amount": "150", "method": "upi"}, actor="admin")

    balance = svc.customer_balance(1)
    assert balance.total_due == Decimal("400.00")
    assert balance.total_paid == Decimal("150.00")
    assert balance.balance == Decimal("250.00")


def test_method_defaults_to_cash(svc):
    payment = svc.record_farmer_payment({"farmer_id": 1, "amount": "10"}, actor="admin")

    assert payment.method == PaymentMethod.CASH


def test_unknown_method_is_rejected(svc):
    with pytest.raises(ValidationError):
        svc.record_farmer_payment({"farmer_id": 1, "amount": "10", "method": "barter"}, actor="admin")


def test_payment_for_unknown_party_is_rejected(svc):
    with pytest.raises(ValidationError):
        svc.record_farmer_payment({"farmer_id": 9, "amount": "10"}, actor="admin")
    with pytest.raises(ValidationError):
        svc.record_customer_payment({"customer_id": 9, "amount": "10"}, actor="admin")


@pytest.mark.parametrize("amount", ["0", "-5", None, "10000000000"])
def test_amount_must_be_positive(svc, amount):
    with pytest.raises(ValidationError):
        svc.record_customer_payment({"customer_id": 1, "amount": amount}, actor="admin")


def test_list_filters_by_party(svc, repos):
    repos.farmers.add(Farmer(id=None, name="Farmer B", code="F002", contact="1"))
    svc.record_farmer_payment({"farmer_id": 1, "amount": "10"}, actor="admin")
    svc.record_farmer_payment({"farmer_id": 2, "amount": "20"}, actor="admin")

    rows = svc.list_farmer_payments(farmer_id=2)

    assert [p.amount for p in rows] == [Decimal("20.00")]


def test_balance_of_unknown_farmer_raises(svc):
    with pytest.raises(NotFoundError):
        svc.farmer_balance(9)


def test_delete_payment(svc):
    payment = svc.record_customer_payment({"customer_id": 1, "amount": "10"}, actor="admin")

    svc.delete_customer_payment(payment.id, actor="admin")

    with pytest.raises(NotFoundError):
        svc.get_customer_payment(payment.id)

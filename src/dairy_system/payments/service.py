from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any, Optional

from ..audit.service import AuditService
from ..common.datetime_utils import parse_iso_date
from ..common.money import MAX_NUMERIC_12_2, positive_amount, round_money
from ..common.validators import optional_int, require_int, require_max_length
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import AuditAction, PaymentMethod
from ..core.exceptions import NotFoundError, ValidationError
from ..customers.repository import CustomerRepository
from ..farmers.repository import FarmerRepository
from ..milk_collections.repository import CollectionRepository
from ..sales.repository import SaleRepository
from .model import Balance, CustomerPayment, FarmerPayment
from .repository import PaymentCustomerRepository, PaymentFarmerRepository


def _parse_method(value: Any) -> PaymentMethod:
    if value in (None, ""):
        return PaymentMethod.CASH
    try:
        return PaymentMethod(str(value).strip().upper())
    except ValueError:
        raise ValidationError("Invalid payment method")


def _common_fields(data: dict) -> dict:
    raw_date = data.get("date")
    reference = data.get("reference") or None
    if reference:
        require_max_length(reference, "reference", 100)
    return {
        "date": parse_iso_date(raw_date, "date") if raw_date else date.today(),
        "amount": positive_amount(data.get("amount"), "amount", MAX_NUMERIC_12_2),
        "method": _parse_method(data.get("method")),
        "reference": reference,
        "notes": data.get("notes") or None,
        "created_by": optional_int(data.get("created_by"), "created_by"),
    }


class PaymentService:
    """Use case: payments to farmers, receipts from customers, and running balances.

    Balance of a farmer = collections owed to them - payments made.
    Balance of a customer = sale dues - receipts.
    """

    def __init__(
        self,
        farmer_payments: PaymentFarmerRepository,
        customer_payments: PaymentCustomerRepository,
        *,
        collections: CollectionRepository,
        sales: SaleRepository,
        farmers: FarmerRepository,
        customers: CustomerRepository,
        audit: AuditService,
    ):
        self._farmer_payments = farmer_payments
        self._customer_payments = customer_payments
        self._collections = collections
        self._sales = sales
        self._farmers = farmers
        self._customers = customers
        self._audit = audit

    # ---- farmers

    def list_farmer_payments(
        self,
        *,
        farmer_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ):
        return self._farmer_payments.list_all(party_id=farmer_id, start_date=start_date, end_date=end_date, limit=limit)

    def get_farmer_payment(self, payment_id: int) -> FarmerPayment:
        payment = self._farmer_payments.get_by_id(payment_id)
        if not payment:
            raise NotFoundError(f"Farmer payment {payment_id} not found")
        return payment

    def _build_farmer_payment(self, payment_id: Optional[int], data: dict) -> FarmerPayment:
        farmer_id = require_int(data.get("farmer_id"), "farmer_id")
        if not self._farmers.get_by_id(farmer_id):
            raise ValidationError(f"Farmer {farmer_id} does not exist")
        return FarmerPayment(id=payment_id, farmer_id=farmer_id, **_common_fields(data))

    def record_farmer_payment(self, data: dict, *, actor: str) -> FarmerPayment:
        payment = self._build_farmer_payment(None, data)
        with self._audit.change():
            payment = replace(payment, id=self._farmer_payments.add(payment))
            self._audit.record(entity="payment_farmer", entity_id=payment.id, action=AuditAction.CREATE, actor=actor, details=payment)
        return payment

    def update_farmer_payment(self, payment_id: int, data: dict, *, actor: str) -> FarmerPayment:
        self.get_farmer_payment(payment_id)
        payment = self._build_farmer_payment(payment_id, data)
        with self._audit.change():
            if not self._farmer_payments.update(payment):
                raise NotFoundError(f"Farmer payment {payment_id} not found")
            self._audit.record(entity="payment_farmer", entity_id=payment_id, action=AuditAction.UPDATE, actor=actor, details=payment)
        return payment

    def delete_farmer_payment(self, payment_id: int, *, actor: str) -> None:
        with self._audit.change():
            if not self._farmer_payments.delete(payment_id):
                raise NotFoundError(f"Farmer payment {payment_id} not found")
            self._audit.record(entity="payment_farmer", entity_id=payment_id, action=AuditAction.DELETE, actor=actor)

    def farmer_balance(self, farmer_id: int) -> Balance:
        farmer = self._farmers.get_by_id(farmer_id)
        if not farmer:
            raise NotFoundError(f"Farmer {farmer_id} not found")
        due = round_money(self._collections.total_due_for_farmer(farmer_id))
        paid = round_money(self._farmer_payments.total_for(farmer_id))
        return Balance(party_id=farmer_id, party_name=farmer.name, total_due=due, total_paid=paid, balance=due - paid)

    # ---- customers

    def list_customer_payments(
        self,
        *,
        customer_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ):
        return self._customer_payments.list_all(party_id=customer_id, start_date=start_date, end_date=end_date, limit=limit)

    def get_customer_payment(self, payment_id: int) -> CustomerPayment:
        payment = self._customer_payments.get_by_id(payment_id)
        if not payment:
            raise NotFoundError(f"Customer payment {payment_id} not found")
        return payment

    def _build_customer_payment(self, payment_id: Optional[int], data: dict) -> CustomerPayment:
        customer_id = require_int(data.get("customer_id"), "customer_id")
        if not self._customers.get_by_id(customer_id):
            raise ValidationError(f"Customer {customer_id} does not exist")
        return CustomerPayment(id=payment_id, customer_id=customer_id, **_common_fields(data))

    def record_customer_payment(self, data: dict, *, actor: str) -> CustomerPayment:
        payment = self._build_customer_payment(None, data)
        with self._audit.change():
            payment = replace(payment, id=self._customer_payments.add(payment))
            self._audit.record(entity="payment_customer", entity_id=payment.id, action=AuditAction.CREATE, actor=actor, details=payment)
        return payment

    def update_customer_payment(self, payment_id: int, data: dict, *, actor: str) -> CustomerPayment:
        self.get_customer_payment(payment_id)
        payment = self._build_customer_payment(payment_id, data)
        with self._audit.change():
            if not self._customer_payments.update(payment):
                raise NotFoundError(f"Customer payment {payment_id} not found")
            self._audit.record(entity="payment_customer", entity_id=payment_id, action=AuditAction.UPDATE, actor=actor, details=payment)
        return payment

    def delete_customer_payment(self, payment_id: int, *, actor: str) -> None:
        with self._audit.change():
            if not self._customer_payments.delete(payment_id):
                raise NotFoundError(f"Customer payment {payment_id} not found")
            self._audit.record(entity="payment_customer", entity_id=payment_id, action=AuditAction.DELETE, actor=actor)

    def customer_balance(self, customer_id: int) -> Balance:
        customer = self._customers.get_by_id(customer_id)
        if not customer:
            raise NotFoundError(f"Customer {customer_id} not found")
        due = round_money(self._sales.total_due_for_customer(customer_id))
        paid = round_money(self._customer_payments.total_for(customer_id))
        return Balance(party_id=customer_id, party_name=customer.name, total_due=due, total_paid=paid, balance=due - paid)

from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Employee roles stored in employee.role."""

    ADMIN = "Admin"
    MANAGER = "Manager"
    COLLECTOR = "Collector"
    SALES = "Sales"


class PaymentMethod(str, Enum):
    CASH = "CASH"
    BANK = "BANK"
    UPI = "UPI"
    CHEQUE = "CHEQUE"


class AuditAction(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Any, Optional

from .audit.pg_audit_repository import PgAuditLogRepository
from .audit.service import AuditService
from .auth.service import AuthService, TokenService
from .branches.pg_branch_repository import PgBranchRepository
from .branches.service import BranchService
from .customers.pg_customer_repository import PgCustomerRepository
from .customers.service import CustomerService
from .database.connection import DatabaseConnection
from .database.pg_base import transaction
from .employees.pg_employee_repository import PgEmployeeRepository
from .employees.service import EmployeeService
from .farmers.pg_farmer_repository import PgFarmerRepository
from .farmers.service import FarmerService
from .milk_collections.pg_collection_repository import PgCollectionRepository
from .milk_collections.service import CollectionService
from .payments.pg_payment_repository import PgPaymentCustomerRepository, PgPaymentFarmerRepository
from .payments.service import PaymentService
from .reports.excel_report import ExcelReportService
from .reports.pdf_report import PdfReportService
from .reports.service import ReportService
from .sales.pg_sale_repository import PgSaleRepository
from .sales.service import SaleService
from .shifts.pg_shift_repository import PgShiftRepository
from .shifts.service import ShiftService


@dataclass(frozen=True)
class Repositories:
    branches: Any
    employees: Any
    farmers: Any
    customers: Any
    shifts: Any
    collections: Any
    sales: Any
    farmer_payments: Any
    customer_payments: Any
    audit: Any
    # Zero-arg factory of the context manager that makes a write and its audit row atomic.
    transaction: Any


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    auth_service: AuthService
    token_service: TokenService
    audit_service: AuditService

    branch_service: BranchService
    employee_service: EmployeeService
    farmer_service: FarmerService
    customer_service: CustomerService
    shift_service: ShiftService

    collection_service: CollectionService
    sale_service: SaleService
    payment_service: PaymentService

    report_service: ReportService
    excel_reports: ExcelReportService
    pdf_reports: PdfReportService


def pg_repositories(conn: DatabaseConnection) -> Repositories:
    return Repositories(
        branches=PgBranchRepository(conn),
        employees=PgEmployeeRepository(conn),
        farmers=PgFarmerRepository(conn),
        customers=PgCustomerRepository(conn),
        shifts=PgShiftRepository(conn),
        collections=PgCollectionRepository(conn),
        sales=PgSaleRepository(conn),
        farmer_payments=PgPaymentFarmerRepository(conn),
        customer_payments=PgPaymentCustomerRepository(conn),
        audit=PgAuditLogRepository(conn),
        transaction=partial(transaction, conn),
    )


def assemble(repos: Repositories, *, token_service: TokenService, conn: Optional[DatabaseConnection] = None) -> Container:
    audit_service = AuditService(repos.audit, transaction=repos.transaction)

    return Container(
        conn=conn,
        auth_service=AuthService(),
        token_service=token_service,
        audit_service=audit_service,
        branch_service=BranchService(repos.branches, audit_service),
        employee_service=EmployeeService(repos.employees, audit_service),
        farmer_service=FarmerService(repos.farmers, audit_service),
        customer_service=CustomerService(repos.customers, audit_service),
        shift_service=ShiftService(repos.shifts, audit_service),
        collection_service=CollectionService(repos.collections, audit_service),
        sale_service=SaleService(repos.sales, audit_service),
        payment_service=PaymentService(
            repos.farmer_payments,
            repos.customer_payments,
            collections=repos.collections,
            sales=repos.sales,
            farmers=repos.farmers,
            customers=repos.customers,
            audit=audit_service,
        ),
        report_service=ReportService(repos.collections, repos.sales),
        excel_reports=ExcelReportService(),
        pdf_reports=PdfReportService(),
    )


def build_container(settings: Any) -> Container:
    conn = DatabaseConnection.from_url(getattr(settings, "DATABASE_URL", ""))
    token_service = TokenService(
        key=getattr(settings, "JWT_KEY"),
        issuer=getattr(settings, "JWT_ISSUER"),
        audience=getattr(settings, "JWT_AUDIENCE"),
        expires_minutes=int(getattr(settings, "JWT_EXPIRES_MINUTES", 60)),
    )
    return assemble(pg_repositories(conn), token_service=token_service, conn=conn)

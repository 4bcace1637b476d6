from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from ..common.money import round_money
from ..core.exceptions import ValidationError
from ..milk_collections.repository import CollectionRepository
from ..sales.repository import SaleRepository


@dataclass(frozen=True)
class ReportData:
    title: str
    start: date
    end: date
    columns: list[str]
    rows: list[dict]
    summary_columns: list[str]
    summary: list[dict]
    totals: dict = field(default_factory=dict)


def _check_range(start: date, end: date) -> None:
    if start > end:
        raise ValidationError("start must not be after end")
    if (end - start).days > 366:
        raise ValidationError("Report range is limited to one year")


class ReportService:
    """Turns repository rows into table-shaped data shared by the Excel and PDF writers."""

    def __init__(self, collections: CollectionRepository, sales: SaleRepository):
        self._collections = collections
        self._sales = sales

    def collections_report(self, *, start: date, end: date) -> ReportData:
        _check_range(start, end)
        rows_in = self._collections.get_report_rows(start_date=start, end_date=end)

        rows: list[dict] = []
        per_farmer: dict[str, dict] = {}
        for r in rows_in:
            rows.append(
                {
                    "Date": r.date.strftime("%Y-%m-%d"),
                    "Farmer Code": r.farmer_code,
                    "Farmer": r.farmer_name,
                    "Shift": r.shift_name or "-",
                    "Qty (L)": float(r.qty_ltr),
                    "Fat %": float(r.fat_pct),
                    "Rate": float(r.price_per_ltr),
                    "Amount": float(r.due_amt),
                }
            )
            s = per_farmer.setdefault(
                r.farmer_code,
                {"name": r.farmer_name, "qty": Decimal(0), "fat_qty": Decimal(0), "due": Decimal(0)},
            )
            s["qty"] += r.qty_ltr
            s["fat_qty"] += r.qty_ltr * r.fat_pct
            s["due"] += r.due_amt

        summary = []
        for code, s in sorted(per_farmer.items()):
            avg_fat = round_money(s["fat_qty"] / s["qty"]) if s["qty"] else Decimal(0)
            summary.append(
                {
                    "Farmer Code": code,
                    "Farmer": s["name"],
                    "Total Qty (L)": float(round_money(s["qty"])),
                    "Avg Fat %": float(avg_fat),
                    "Total Amount": float(round_money(s["due"])),
                }
            )

        totals = {
            "Qty (L)": float(round_money(sum((r.qty_ltr for r in rows_in), Decimal(0)))),
            "Amount": float(round_money(sum((r.due_amt for r in rows_in), Decimal(0)))),
        }
        return ReportData(
            title="Milk Collection Report",
            start=start,
            end=end,
            columns=["Date", "Farmer Code", "Farmer", "Shift", "Qty (L)", "Fat %", "Rate", "Amount"],
            rows=rows,
            summary_columns=["Farmer Code", "Farmer", "Total Qty (L)", "Avg Fat %", "Total Amount"],
            summary=summary,
            totals=totals,
        )

    def sales_report(self, *, start: date, end: date) -> ReportData:
        _check_range(start, end)
        rows_in = self._sales.get_report_rows(start_date=start, end_date=end)

        rows: list[dict] = []
        per_customer: dict[int, dict] = {}
        for r in rows_in:
            net = round_money(r.qty_ltr * r.unit_price) - r.discount
            rows.append(
                {
                    "Date": r.date.strftime("%Y-%m-%d"),
                    "Customer": r.customer_name,
                    "Shift": r.shift_name or "-",
                    "Qty (L)": float(r.qty_ltr),
                    "Unit Price": float(r.unit_price),
                    "Discount": float(r.discount),
                    "Net": float(net),
                    "Paid": float(r.paid_amt),
                    "Due": float(r.due_amt),
                }
            )
            s = per_customer.setdefault(
                r.customer_id,
                {"name": r.customer_name, "qty": Decimal(0), "net": Decimal(0), "paid": Decimal(0), "due": Decimal(0)},
            )
            s["qty"] += r.qty_ltr
            s["net"] += net
            s["paid"] += r.paid_amt
            s["due"] += r.due_amt

        summary = [
            {
                "Customer": s["name"],
                "Total Qty (L)": float(round_money(s["qty"])),
                "Net Amount": float(round_money(s["net"])),
                "Paid": float(round_money(s["paid"])),
                "Due": float(round_money(s["due"])),
            }
            for _, s in sorted(per_customer.items(), key=lambda kv: (kv[1]["name"], kv[0]))
        ]

        totals = {
            "Qty (L)": float(round_money(sum((r.qty_ltr for r in rows_in), Decimal(0)))),
            "Paid": float(round_money(sum((r.paid_amt for r in rows_in), Decimal(0)))),
            "Due": float(round_money(sum((r.due_amt for r in rows_in), Decimal(0)))),
        }
        return ReportData(
            title="Milk Sales Report",
            start=start,
            end=end,
            columns=["Date", "Customer", "Shift", "Qty (L)", "Unit Price", "Discount", "Net", "Paid", "Due"],
            rows=rows,
            summary_columns=["Customer", "Total Qty (L)", "Net Amount", "Paid", "Due"],
            summary=summary,
            totals=totals,
        )

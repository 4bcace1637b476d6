from __future__ import annotations

from datetime import date

from flask import Flask, request, send_file

from ..common.datetime_utils import parse_optional_date
from ..container import Container
from .excel_report import XLSX_MIMETYPE


def register(app: Flask, container: Container) -> None:
    def _range() -> tuple[date, date]:
        today = date.today()
        start = parse_optional_date(request.args.get("start"), "start") or today.replace(day=1)
        end = parse_optional_date(request.args.get("end"), "end") or today
        return start, end

    def _send(buffer, *, name: str, start: date, end: date, ext: str, mimetype: str):
        return send_file(
            buffer,
            mimetype=mimetype,
            as_attachment=True,
            download_name=f"{name}_{start:%Y%m%d}_{end:%Y%m%d}.{ext}",
        )

    @app.route("/api/reports/collections.xlsx", methods=["GET"], endpoint="collections_excel")
    def collections_excel():
        start, end = _range()
        report = container.report_service.collections_report(start=start, end=end)
        return _send(container.excel_reports.render(report), name="collections", start=start, end=end, ext="xlsx", mimetype=XLSX_MIMETYPE)

    @app.route("/api/reports/collections.pdf", methods=["GET"], endpoint="collections_pdf")
    def collections_pdf():
        start, end = _range()
        report = container.report_service.collections_report(start=start, end=end)
        return _send(container.pdf_reports.render(report), name="collections", start=start, end=end, ext="pdf", mimetype="application/pdf")

    @app.route("/api/reports/sales.xlsx", methods=["GET"], endpoint="sales_excel")
    def sales_excel():
        start, end = _range()
        report = container.report_service.sales_report(start=start, end=end)
        return _send(container.excel_reports.render(report), name="sales", start=start, end=end, ext="xlsx", mimetype=XLSX_MIMETYPE)

    @app.route("/api/reports/sales.pdf", methods=["GET"], endpoint="sales_pdf")
    def sales_pdf():
        start, end = _range()
        report = container.report_service.sales_report(start=start, end=end)
        return _send(container.pdf_reports.render(report), name="sales", start=start, end=end, ext="pdf", mimetype="application/pdf")

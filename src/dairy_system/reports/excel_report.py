from __future__ import annotations

import io

import pandas as pd

from ..common.logger import get_logger
from .service import ReportData

logger = get_logger(__name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class ExcelReportService:
    """Writes a ReportData as an .xlsx workbook with a data sheet and a summary sheet."""

    def render(self, report: ReportData) -> io.BytesIO:
        df = pd.DataFrame(report.rows, columns=report.columns)
        summary = pd.DataFrame(report.summary, columns=report.summary_columns)

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="Data", index=False, startrow=2)
            summary.to_excel(writer, sheet_name="Summary", index=False)

            sheet = writer.sheets["Data"]
            sheet.cell(row=1, column=1, value=f"{report.title} ({report.start:%Y-%m-%d} to {report.end:%Y-%m-%d})")

            if report.totals:
                total_row = len(df) + 4
                sheet.cell(row=total_row, column=1, value="Total")
                for name, value in report.totals.items():
                    if name in report.columns:
                        sheet.cell(row=total_row, column=report.columns.index(name) + 1, value=value)

            for ws in writer.sheets.values():
                for column_cells in ws.columns:
                    width = max(len(str(c.value)) if c.value is not None else 0 for c in column_cells)
                    ws.column_dimensions[column_cells[0].column_letter].width = min(max(width + 2, 10), 40)

        buffer.seek(0)
        logger.info("Exported %d rows of %r as Excel", len(report.rows), report.title)
        return buffer

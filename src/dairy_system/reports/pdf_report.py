from __future__ import annotations

import io
import os
from typing import Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..common.logger import get_logger
from .service import ReportData

logger = get_logger(__name__)

UNICODE_FONT_NAME = "DairyUnicode"
FALLBACK_FONT_NAME = "Helvetica"

# Devanagari-capable faces first; DejaVu only covers Latin names.
FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/noto/NotoSansDevanagari-Regular.ttf",
    "/usr/share/fonts/noto/NotoSansDevanagari-Regular.ttf",
    "/usr/share/fonts/truetype/freefont/FreeSans.ttf",
    "/usr/share/fonts/truetype/lohit-devanagari/Lohit-Devanagari.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
]


def _font_paths() -> list[str]:
    configured = os.getenv("PDF_FONT_PATH")
    return ([configured] if configured else []) + FONT_CANDIDATES


def resolve_font(paths: Optional[list[str]] = None) -> str:
    """Register the first available TTF and return its font name, or Helvetica when none exists."""
    for path in paths if paths is not None else _font_paths():
        if os.path.isfile(path):
            if UNICODE_FONT_NAME not in pdfmetrics.getRegisteredFontNames():
                pdfmetrics.registerFont(TTFont(UNICODE_FONT_NAME, path))
                logger.info("Registered PDF font %s", path)
            return UNICODE_FONT_NAME
    logger.warning("No Unicode TTF found, Devanagari text will not render in PDFs")
    return FALLBACK_FONT_NAME


def _table_style(font: str) -> TableStyle:
    header_font = "Helvetica-Bold" if font == FALLBACK_FONT_NAME else font
    return TableStyle(
        [
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#1f4e79")),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("FONTNAME", (0, 0), (-1, -1), font),
            ("FONTNAME", (0, 0), (-1, 0), header_font),
            ("FONTSIZE", (0, 0), (-1, -1), 8),
            ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
            ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#f2f2f2")]),
            ("ALIGN", (0, 0), (-1, -1), "LEFT"),
        ]
    )


def _fmt(value) -> str:
    if isinstance(value, float):
        return f"{value:,.2f}"
    return str(value)


def _table(columns: list[str], rows: list[dict], font: str) -> Table:
    data = [columns] + [[_fmt(r.get(c, "")) for c in columns] for r in rows]
    table = Table(data, repeatRows=1)
    table.setStyle(_table_style(font))
    return table


class PdfReportService:
    """Writes a ReportData as a simple landscape A4 PDF."""

    def __init__(self, font_paths: Optional[list[str]] = None):
        self._font_paths = font_paths

    def render(self, report: ReportData) -> io.BytesIO:
        font = resolve_font(self._font_paths)
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=landscape(A4),
            leftMargin=12 * mm,
            rightMargin=12 * mm,
            topMargin=12 * mm,
            bottomMargin=12 * mm,
            title=report.title,
        )
        styles = getSampleStyleSheet()
        for name in ("Title", "Normal", "Italic", "Heading2"):
            styles[name].fontName = font

        story = [
            Paragraph(report.title, styles["Title"]),
            Paragraph(f"Period: {report.start:%Y-%m-%d} to {report.end:%Y-%m-%d}", styles["Normal"]),
            Spacer(1, 6 * mm),
        ]
        if report.rows:
            story.append(_table(report.columns, report.rows, font))
        else:
            story.append(Paragraph("No records for this period.", styles["Italic"]))

        if report.totals:
            totals = ", ".join(f"{k}: {_fmt(v)}" for k, v in report.totals.items())
            story += [Spacer(1, 4 * mm), Paragraph(f"Totals - {totals}", styles["Normal"])]

        if report.summary:
            story += [
                Spacer(1, 8 * mm),
                Paragraph("Summary", styles["Heading2"]),
                _table(report.summary_columns, report.summary, font),
            ]

        doc.build(story)
        buffer.seek(0)
        logger.info("Exported %d rows of %r as PDF", len(report.rows), report.title)
        return buffer

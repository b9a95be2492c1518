"""
Paper stock report PDF renderer using fpdf2.

Renders one paper's ledger as a landscape table under a header with the
tenant's company details and the paper's attributes, followed by the
current remaining balance. Devanagari names and remarks print only when
a Unicode TTF font is configured; otherwise they degrade to '?'.
"""

import os
import re
from datetime import datetime

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from printpress.config import get_logger
from printpress.config.settings import PdfSettings, get_settings
from printpress.core.bs_date import format_bs_date
from printpress.core.entities.paper import Paper
from printpress.core.entities.stock import StockEntry
from printpress.core.entities.tenant import TenantSettings
from printpress.core.services.stock_report_service import (
    REPORT_COLUMNS,
    REPORT_TITLE,
    IStockReportRenderer,
    current_remaining,
    format_quantity,
)

logger = get_logger(__name__)

_DEVANAGARI_RE = re.compile(r"[ऀ-ॿ꣠-ꣿ]")

# Landscape A4 leaves 277 mm between 10 mm margins
_COL_WIDTHS = [24, 24, 55, 28, 26, 28, 30, 62]


def _contains_devanagari(text: str) -> bool:
    return bool(_DEVANAGARI_RE.search(text))


def _latin1_only(text: str) -> str:
    """Replace characters the core PDF fonts cannot encode with '?'."""
    return text.encode("latin-1", "replace").decode("latin-1")


class _StockPdf(FPDF):
    """FPDF subclass with a page-numbered footer."""

    def __init__(self, footer_text: str) -> None:
        super().__init__(orientation="L", unit="mm", format="A4")
        self._footer_text = footer_text
        self._generated = datetime.now().strftime("%Y-%m-%d %H:%M")

    def footer(self) -> None:
        self.set_y(-12)
        self.set_font("Helvetica", "I", 8)
        self.cell(0, 5, self._footer_text, align="L")
        self.set_x(-80)
        self.cell(
            0,
            5,
            f"Page {self.page_no()} of {{nb}} | {self._generated}",
            align="R",
        )


class Fpdf2StockReportRenderer(IStockReportRenderer):
    """Renders a paper's stock ledger to PDF bytes."""

    media_type = "application/pdf"
    extension = "pdf"

    def __init__(self, pdf_settings: PdfSettings | None = None) -> None:
        if pdf_settings is None:
            pdf_settings = get_settings().pdf
        self._settings = pdf_settings
        self._unicode_font_loaded = False

    def render(
        self,
        paper: Paper,
        entries: list[StockEntry],
        tenant: TenantSettings | None = None,
    ) -> bytes:
        pdf = _StockPdf(self._settings.footer_text)
        pdf.alias_nb_pages()
        pdf.set_auto_page_break(auto=True, margin=18)

        self._unicode_font_loaded = False
        self._maybe_load_unicode_font(pdf)

        pdf.add_page()
        self._render_header(pdf, paper, tenant)
        self._render_table_header(pdf)
        for index, entry in enumerate(entries, 1):
            if pdf.will_page_break(6):
                pdf.add_page()
                self._render_table_header(pdf)
            self._render_row(pdf, entry, shaded=index % 2 == 0)
        self._render_footer_total(pdf, paper, entries)

        return bytes(pdf.output())

    # ------------------------------------------------------------------
    # Fonts
    # ------------------------------------------------------------------

    def _maybe_load_unicode_font(self, pdf: FPDF) -> None:
        font_path = self._settings.unicode_font_path
        if not font_path or not os.path.isfile(font_path):
            return
        try:
            pdf.add_font("UnicodeFont", "", font_path)
            self._unicode_font_loaded = True
        except (OSError, RuntimeError) as e:
            logger.warning("pdf_font_load_failed", path=font_path, error=str(e))
            self._unicode_font_loaded = False

    def _safe_text(self, text: str | None) -> str:
        if not text:
            return ""
        if self._unicode_font_loaded:
            return text
        return _latin1_only(text)

    def _set_font_for(self, pdf: FPDF, text: str, style: str = "", size: int = 9) -> None:
        """Switch to the Unicode font for Devanagari text when available."""
        if self._unicode_font_loaded and _contains_devanagari(text):
            pdf.set_font("UnicodeFont", "", size)
        else:
            pdf.set_font("Helvetica", style, size)

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _render_header(
        self, pdf: FPDF, paper: Paper, tenant: TenantSettings | None
    ) -> None:
        company = (tenant.company_name if tenant else None) or self._settings.company_name
        company = self._safe_text(company)
        self._set_font_for(pdf, company, "B", 14)
        pdf.cell(0, 7, company, align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        if tenant:
            contact = " | ".join(
                part
                for part in (
                    tenant.company_address,
                    f"Tel: {tenant.company_phone}" if tenant.company_phone else None,
                    tenant.company_email,
                )
                if part
            )
            if contact:
                contact = self._safe_text(contact)
                self._set_font_for(pdf, contact, "", 9)
                pdf.cell(0, 5, contact, align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        pdf.ln(2)
        pdf.set_font("Helvetica", "B", 16)
        pdf.cell(0, 10, REPORT_TITLE, align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.ln(1)

        details = [
            ("Client", paper.paper_name),
            ("Type", paper.display_type),
            ("Size", paper.paper_size),
            ("Weight", paper.paper_weight),
            ("Original Stock", f"{format_quantity(paper.original_stock)} {paper.units}"),
        ]
        for label, value in details:
            value = self._safe_text(value)
            pdf.set_font("Helvetica", "B", 10)
            pdf.cell(35, 6, f"{label}:")
            self._set_font_for(pdf, value, "", 10)
            pdf.cell(0, 6, value, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.ln(3)

    @staticmethod
    def _render_table_header(pdf: FPDF) -> None:
        pdf.set_font("Helvetica", "B", 9)
        pdf.set_fill_color(70, 70, 70)
        pdf.set_text_color(255, 255, 255)
        for width, title in zip(_COL_WIDTHS, REPORT_COLUMNS):
            pdf.cell(width, 7, title, border=1, fill=True, align="C")
        pdf.ln()
        pdf.set_text_color(0, 0, 0)

    def _render_row(self, pdf: FPDF, entry: StockEntry, shaded: bool) -> None:
        if shaded:
            pdf.set_fill_color(240, 240, 240)
        job_name = self._safe_text(entry.job_name)[:40] or "-"
        remarks = self._safe_text(entry.remarks)[:45] or "-"
        cells = [
            (format_bs_date(entry.entry_date), "C"),
            (entry.job_no or "-", "C"),
            (job_name, "L"),
            (format_quantity(entry.issued_paper), "R"),
            (format_quantity(entry.wastage), "R"),
            (format_quantity(entry.added_stock) if entry.added_stock > 0 else "-", "R"),
            (format_quantity(entry.remaining) + (" *" if entry.clamped else ""), "R"),
            (remarks, "L"),
        ]
        for width, (text, align) in zip(_COL_WIDTHS, cells):
            self._set_font_for(pdf, text, "", 8)
            pdf.cell(width, 6, text, border=1, align=align, fill=shaded)
        pdf.ln()

    @staticmethod
    def _render_footer_total(pdf: FPDF, paper: Paper, entries: list[StockEntry]) -> None:
        pdf.ln(4)
        pdf.set_font("Helvetica", "B", 11)
        remaining = format_quantity(current_remaining(paper, entries))
        pdf.cell(45, 7, "Current Remaining:")
        pdf.cell(0, 7, f"{remaining} {paper.units}", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        if any(entry.clamped for entry in entries):
            pdf.set_font("Helvetica", "I", 8)
            pdf.cell(
                0,
                5,
                "* balance floored at zero; issued quantity exceeded stock on hand",
                new_x=XPos.LMARGIN,
                new_y=YPos.NEXT,
            )

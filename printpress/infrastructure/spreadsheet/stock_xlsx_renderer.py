"""Paper stock report spreadsheet renderer using openpyxl."""

import io

import openpyxl
from openpyxl.styles import Font

from printpress.core.bs_date import format_bs_date
from printpress.core.entities.paper import Paper
from printpress.core.entities.stock import StockEntry
from printpress.core.entities.tenant import TenantSettings
from printpress.core.services.stock_report_service import (
    REPORT_COLUMNS,
    REPORT_TITLE,
    IStockReportRenderer,
    current_remaining,
)

SHEET_TITLE = "Paper Stock"

# Character widths per report column
_COLUMN_WIDTHS = {"A": 15, "B": 12, "C": 25, "D": 15, "E": 12, "F": 15, "G": 15, "H": 30}


class OpenpyxlStockReportRenderer(IStockReportRenderer):
    """Renders a paper's stock ledger to an xlsx workbook.

    Quantities stay numeric so the sheet can be summed or filtered;
    only empty text cells and zero additions print as '-'.
    """

    media_type = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    extension = "xlsx"

    def render(
        self,
        paper: Paper,
        entries: list[StockEntry],
        tenant: TenantSettings | None = None,
    ) -> bytes:
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = SHEET_TITLE

        if tenant and tenant.company_name:
            ws.append([tenant.company_name])
            ws["A1"].font = Font(bold=True, size=12)
        ws.append([REPORT_TITLE])
        ws.cell(row=ws.max_row, column=1).font = Font(bold=True, size=14)
        ws.append([])
        ws.append(["Client:", paper.paper_name])
        ws.append(["Type:", paper.display_type])
        ws.append(["Size:", paper.paper_size])
        ws.append(["Weight:", paper.paper_weight])
        ws.append(["Original Stock:", f"{paper.original_stock:g} {paper.units}"])
        ws.append([])

        ws.append(REPORT_COLUMNS)
        header_row = ws.max_row
        for cell in ws[header_row]:
            cell.font = Font(bold=True)

        for entry in entries:
            ws.append([
                format_bs_date(entry.entry_date),
                entry.job_no or "-",
                entry.job_name or "-",
                entry.issued_paper,
                entry.wastage,
                entry.added_stock if entry.added_stock > 0 else "-",
                entry.remaining,
                entry.remarks or "-",
            ])

        ws.append([])
        remaining = current_remaining(paper, entries)
        ws.append(["Current Remaining:", f"{remaining:g} {paper.units}"])
        ws.cell(row=ws.max_row, column=1).font = Font(bold=True)

        for column, width in _COLUMN_WIDTHS.items():
            ws.column_dimensions[column].width = width
        ws.freeze_panes = ws.cell(row=header_row + 1, column=1)

        bio = io.BytesIO()
        wb.save(bio)
        return bio.getvalue()

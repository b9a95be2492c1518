"""Spreadsheet export infrastructure."""

from printpress.infrastructure.spreadsheet.stock_xlsx_renderer import OpenpyxlStockReportRenderer

__all__ = ["OpenpyxlStockReportRenderer"]

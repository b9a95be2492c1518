"""PDF generation infrastructure."""

from printpress.infrastructure.pdf.stock_pdf_renderer import Fpdf2StockReportRenderer

__all__ = ["Fpdf2StockReportRenderer"]

"""
Service factory functions for dependency injection.

Wires infrastructure implementations to core services. Use cases import
from here rather than building infrastructure themselves.
"""

from typing import TYPE_CHECKING

from printpress.core.services import IStockReportRenderer, StockReportService

if TYPE_CHECKING:
    from printpress.core.interfaces import IPaperStore, IStockStore, ITenantStore


_stock_report_service: StockReportService | None = None


def default_report_renderers() -> dict[str, IStockReportRenderer]:
    """Renderers keyed by the export format they serve."""
    from printpress.infrastructure.pdf import Fpdf2StockReportRenderer
    from printpress.infrastructure.spreadsheet import OpenpyxlStockReportRenderer

    return {
        "pdf": Fpdf2StockReportRenderer(),
        "xlsx": OpenpyxlStockReportRenderer(),
    }


async def get_stock_report_service(
    paper_store: "IPaperStore | None" = None,
    stock_store: "IStockStore | None" = None,
    tenant_store: "ITenantStore | None" = None,
) -> StockReportService:
    """
    Get or create the StockReportService instance.

    Creates the SQLite stores and default renderers if not provided.
    """
    global _stock_report_service

    if _stock_report_service is None:
        from printpress.infrastructure.storage.sqlite import (
            get_paper_store,
            get_stock_store,
            get_tenant_store,
        )

        _stock_report_service = StockReportService(
            renderers=default_report_renderers(),
            paper_store=paper_store or await get_paper_store(),
            stock_store=stock_store or await get_stock_store(),
            tenant_store=tenant_store or await get_tenant_store(),
        )

    return _stock_report_service


def reset_services() -> None:
    """Reset singleton service instances (for testing)."""
    global _stock_report_service
    _stock_report_service = None


__all__ = [
    "default_report_renderers",
    "get_stock_report_service",
    "reset_services",
]

"""
Export Paper Stock Use Case.

Renders one paper's ledger as a downloadable PDF or xlsx report.
"""

from printpress.config import get_logger
from printpress.core.entities import Principal
from printpress.core.services.stock_report_service import StockReport, StockReportService

logger = get_logger(__name__)


class ExportPaperStockUseCase:
    """
    Use case for stock report downloads.

    Flow:
    1. Load paper, its ledger in ledger order and the tenant's settings
    2. Render via the format's renderer
    3. Return bytes, file name and media type
    """

    def __init__(self, report_service: StockReportService | None = None):
        self._report_service = report_service

    async def _get_report_service(self) -> StockReportService:
        if self._report_service is None:
            from printpress.application.services import get_stock_report_service

            self._report_service = await get_stock_report_service()
        return self._report_service

    async def execute(self, principal: Principal, paper_id: int, fmt: str) -> StockReport:
        logger.info("export_paper_stock_started", paper_id=paper_id, format=fmt)
        service = await self._get_report_service()
        report = await service.export(principal.tenant_id, paper_id, fmt)
        logger.info(
            "export_paper_stock_complete",
            paper_id=paper_id,
            filename=report.filename,
            entries=report.entry_count,
        )
        return report

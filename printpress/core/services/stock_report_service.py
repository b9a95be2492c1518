"""
Paper stock report service.

Loads a paper, its ledger and the tenant's settings, then delegates the
document layout to an injected renderer per export format. Renderers only
read the ledger; they never change balances.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass

from printpress.config import get_logger
from printpress.core.entities.paper import Paper
from printpress.core.entities.stock import StockEntry
from printpress.core.entities.tenant import TenantSettings
from printpress.core.exceptions import ExportFormatError, PaperNotFoundError
from printpress.core.interfaces.paper_store import IPaperStore
from printpress.core.interfaces.stock_store import IStockStore
from printpress.core.interfaces.tenant_store import ITenantStore
from printpress.core.services.stock_ledger import sort_ledger

logger = get_logger(__name__)


class IStockReportRenderer(ABC):
    """Interface for stock report renderers (PDF, spreadsheet, ...)."""

    media_type: str
    extension: str

    @abstractmethod
    def render(
        self,
        paper: Paper,
        entries: list[StockEntry],
        tenant: TenantSettings | None = None,
    ) -> bytes:
        """Render a paper's ledger, given in ledger order, into file bytes."""
        pass


REPORT_TITLE = "PAPER STOCK REPORT"

REPORT_COLUMNS = [
    "Date",
    "Job No",
    "Job Name",
    "Issued Paper",
    "Wastage",
    "Added Stock",
    "Remaining",
    "Remarks",
]


def format_quantity(value: float) -> str:
    """Whole quantities without decimals, fractional ones with two."""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}"


def current_remaining(paper: Paper, entries: list[StockEntry]) -> float:
    """Balance after the last entry, or the original stock if none."""
    if entries:
        return entries[-1].remaining
    return paper.original_stock


@dataclass
class StockReport:
    """A rendered stock report ready for download."""

    content: bytes
    filename: str
    media_type: str
    entry_count: int


def report_filename(paper: Paper, extension: str) -> str:
    """File name such as ``Paper-Stock-Art-Paper-A4.pdf``."""
    raw = f"Paper-Stock-{paper.paper_name}-{paper.paper_size}"
    safe = re.sub(r"[^A-Za-z0-9._-]+", "-", raw).strip("-")
    return f"{safe}.{extension}"


class StockReportService:
    """Builds downloadable reports of one paper's stock ledger."""

    def __init__(
        self,
        renderers: dict[str, IStockReportRenderer],
        paper_store: IPaperStore,
        stock_store: IStockStore,
        tenant_store: ITenantStore,
    ):
        self._renderers = renderers
        self._paper_store = paper_store
        self._stock_store = stock_store
        self._tenant_store = tenant_store

    @property
    def formats(self) -> list[str]:
        return sorted(self._renderers)

    async def export(self, admin_id: str, paper_id: int, fmt: str) -> StockReport:
        """
        Render the ledger of *paper_id* in format *fmt*.

        Raises:
            ExportFormatError: if no renderer handles *fmt*.
            PaperNotFoundError: if the paper is not the caller's.
        """
        renderer = self._renderers.get(fmt.lower())
        if renderer is None:
            raise ExportFormatError(fmt, self.formats)

        paper = await self._paper_store.get_paper(admin_id, paper_id)
        if paper is None:
            raise PaperNotFoundError(paper_id)

        entries = sort_ledger(await self._stock_store.list_entries(admin_id, paper_id))
        tenant = await self._tenant_store.get_settings(admin_id)

        content = renderer.render(paper, entries, tenant)
        logger.info(
            "stock_report_rendered",
            paper_id=paper_id,
            format=fmt,
            entries=len(entries),
            size=len(content),
        )
        return StockReport(
            content=content,
            filename=report_filename(paper, renderer.extension),
            media_type=renderer.media_type,
            entry_count=len(entries),
        )

"""Paper Stock Summary Use Case."""

from dataclasses import dataclass

from printpress.application.dto.responses import LedgerSummaryResponse
from printpress.core.entities import LedgerSummary, Paper, Principal
from printpress.core.exceptions import PaperNotFoundError
from printpress.core.interfaces import IPaperStore, IStockStore
from printpress.core.services.stock_ledger import summarize_ledger


@dataclass
class PaperStockSummary:
    paper: Paper
    summary: LedgerSummary


class GetPaperStockSummaryUseCase:
    """Totals issued, wasted and added, plus the current balance of a paper."""

    def __init__(
        self,
        paper_store: IPaperStore | None = None,
        stock_store: IStockStore | None = None,
    ):
        self._paper_store = paper_store
        self._stock_store = stock_store

    async def _get_paper_store(self) -> IPaperStore:
        if self._paper_store is None:
            from printpress.infrastructure.storage.sqlite import get_paper_store

            self._paper_store = await get_paper_store()
        return self._paper_store

    async def _get_stock_store(self) -> IStockStore:
        if self._stock_store is None:
            from printpress.infrastructure.storage.sqlite import get_stock_store

            self._stock_store = await get_stock_store()
        return self._stock_store

    async def execute(self, principal: Principal, paper_id: int) -> PaperStockSummary:
        admin_id = principal.tenant_id
        paper = await (await self._get_paper_store()).get_paper(admin_id, paper_id)
        if paper is None:
            raise PaperNotFoundError(paper_id)
        entries = await (await self._get_stock_store()).list_entries(admin_id, paper_id)
        return PaperStockSummary(paper=paper, summary=summarize_ledger(paper, entries))

    def to_response(self, result: PaperStockSummary) -> LedgerSummaryResponse:
        summary = result.summary
        return LedgerSummaryResponse(
            paper_id=summary.paper_id,
            paper_name=result.paper.paper_name,
            units=result.paper.units,
            original_stock=summary.original_stock,
            total_issued=summary.total_issued,
            total_wastage=summary.total_wastage,
            total_added=summary.total_added,
            current_remaining=summary.current_remaining,
            entry_count=summary.entry_count,
            clamped_count=summary.clamped_count,
            first_entry_date=summary.first_entry_date,
            last_entry_date=summary.last_entry_date,
        )

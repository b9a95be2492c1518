"""Read use cases for a paper's stock entries."""

from printpress.application.dto.mappers import job_to_response, stock_entry_to_response
from printpress.application.dto.responses import (
    StockEntryDetailResponse,
    StockEntryListResponse,
)
from printpress.core.entities import Job, Principal, StockEntry
from printpress.core.exceptions import PaperNotFoundError, StockEntryNotFoundError
from printpress.core.interfaces import IJobStore, IPaperStore, IStockStore


class GetStockEntriesUseCase:
    """List a paper's entries for display, or fetch one entry."""

    def __init__(
        self,
        paper_store: IPaperStore | None = None,
        stock_store: IStockStore | None = None,
        job_store: IJobStore | None = None,
    ):
        self._paper_store = paper_store
        self._stock_store = stock_store
        self._job_store = job_store

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

    async def _get_job_store(self) -> IJobStore:
        if self._job_store is None:
            from printpress.infrastructure.storage.sqlite import get_job_store

            self._job_store = await get_job_store()
        return self._job_store

    async def list_for_paper(self, principal: Principal, paper_id: int) -> list[StockEntry]:
        """Entries of *paper_id*, newest date first."""
        admin_id = principal.tenant_id
        paper = await (await self._get_paper_store()).get_paper(admin_id, paper_id)
        if paper is None:
            raise PaperNotFoundError(paper_id)
        stock_store = await self._get_stock_store()
        return await stock_store.list_entries(admin_id, paper_id, newest_first=True)

    async def get(self, principal: Principal, entry_id: int) -> StockEntry:
        stock_store = await self._get_stock_store()
        entry = await stock_store.get_entry(principal.tenant_id, entry_id)
        if entry is None:
            raise StockEntryNotFoundError(entry_id)
        return entry

    async def linked_job(self, principal: Principal, entry: StockEntry) -> Job | None:
        """The job *entry* points at, read now rather than from the write-time snapshot.

        None when the entry has no job or the job no longer exists.
        """
        if entry.job_id is None:
            return None
        job_store = await self._get_job_store()
        return await job_store.get_job(principal.tenant_id, entry.job_id)

    @staticmethod
    def to_list_response(entries: list[StockEntry]) -> StockEntryListResponse:
        return StockEntryListResponse(
            stock_entries=[stock_entry_to_response(e) for e in entries],
            total=len(entries),
        )

    @staticmethod
    def to_detail_response(entry: StockEntry, job: Job | None = None) -> StockEntryDetailResponse:
        return StockEntryDetailResponse(
            stock_entry=stock_entry_to_response(entry),
            job=job_to_response(job) if job is not None else None,
        )

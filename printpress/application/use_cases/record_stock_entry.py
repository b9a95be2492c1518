"""Record Stock Entry Use Case: insert a ledger row and rebalance later rows."""

from dataclasses import dataclass

from printpress.application.dto.mappers import stock_entry_to_response
from printpress.application.dto.requests import CreateStockEntryRequest
from printpress.application.dto.responses import StockEntryMutationResponse
from printpress.application.use_cases.ledger_support import index_by_identity, resolve_job_snapshot
from printpress.config import get_logger, get_settings
from printpress.core.clock import utcnow
from printpress.core.entities import Principal, StockEntry
from printpress.core.exceptions import InvalidEntryKindError, PaperNotFoundError
from printpress.core.interfaces import IJobStore, IPaperStore, IStockStore
from printpress.core.services.stock_ledger import (
    LedgerLockRegistry,
    classify_entry,
    get_ledger_locks,
    recompute_forward,
    sort_ledger,
)

logger = get_logger(__name__)


@dataclass
class StockEntryResult:
    """A written entry and how many later entries were rebalanced."""

    entry: StockEntry
    cascaded: int


class RecordStockEntryUseCase:
    """Record an issuance or an addition against a paper.

    The new row is placed at its date position, so a back-dated entry
    rebalances every entry recorded after it.
    """

    def __init__(
        self,
        paper_store: IPaperStore | None = None,
        stock_store: IStockStore | None = None,
        job_store: IJobStore | None = None,
        locks: LedgerLockRegistry | None = None,
        verify_after_write: bool | None = None,
    ):
        self._paper_store = paper_store
        self._stock_store = stock_store
        self._job_store = job_store
        self._locks = locks or get_ledger_locks()
        if verify_after_write is None:
            verify_after_write = get_settings().ledger.verify_after_write
        self._verify = verify_after_write

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

    async def execute(
        self, principal: Principal, request: CreateStockEntryRequest
    ) -> StockEntryResult:
        """Execute record stock entry use case."""
        admin_id = principal.tenant_id
        logger.info(
            "record_stock_entry_started",
            paper_id=request.paper_id,
            entry_date=request.entry_date,
        )

        kind = classify_entry(request.issued_paper, request.wastage, request.added_stock)
        if kind is None:
            raise InvalidEntryKindError(
                request.issued_paper, request.wastage, request.added_stock
            )

        job_no, job_name = request.job_no, request.job_name
        if request.job_id is not None:
            job_no, job_name = await resolve_job_snapshot(
                await self._get_job_store(), admin_id, request.job_id, job_no, job_name
            )

        paper_store = await self._get_paper_store()
        stock_store = await self._get_stock_store()
        async with self._locks.hold(admin_id, request.paper_id):
            paper = await paper_store.get_paper(admin_id, request.paper_id)
            if paper is None:
                raise PaperNotFoundError(request.paper_id)

            now = utcnow()
            entry = StockEntry(
                admin_id=admin_id,
                paper_id=paper.id,
                entry_date=request.entry_date,
                kind=kind,
                issued_paper=request.issued_paper,
                wastage=request.wastage,
                added_stock=request.added_stock,
                job_id=request.job_id,
                job_no=job_no,
                job_name=job_name,
                remarks=request.remarks,
                created_by=principal.actor,
                created_at=now,
                updated_at=now,
            )

            ledger = sort_ledger(
                [*await stock_store.list_entries(admin_id, paper.id), entry]
            )
            position = index_by_identity(ledger, entry)
            changed = recompute_forward(ledger, position, paper.original_stock)
            cascade = [e for e in changed if e is not entry]

            entry = await stock_store.insert_with_cascade(
                entry, cascade, verify=paper if self._verify else None
            )
            logger.info(
                "ledger_recomputed",
                paper_id=paper.id,
                start=position,
                ledger_size=len(ledger),
                cascaded=len(cascade),
            )

        return StockEntryResult(entry=entry, cascaded=len(cascade))

    def to_response(self, result: StockEntryResult) -> StockEntryMutationResponse:
        """Convert result to API response."""
        return StockEntryMutationResponse(
            message="Stock entry created successfully",
            stock_entry=stock_entry_to_response(result.entry),
            cascaded=result.cascaded,
        )

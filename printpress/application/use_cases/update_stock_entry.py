"""Update Stock Entry Use Case: partial edit with forward rebalancing."""

from printpress.application.dto.mappers import stock_entry_to_response
from printpress.application.dto.requests import UpdateStockEntryRequest
from printpress.application.dto.responses import StockEntryMutationResponse
from printpress.application.use_cases.ledger_support import resolve_job_snapshot
from printpress.application.use_cases.record_stock_entry import StockEntryResult
from printpress.config import get_logger, get_settings
from printpress.core.clock import utcnow
from printpress.core.entities import Principal
from printpress.core.exceptions import (
    InvalidEntryKindError,
    PaperNotFoundError,
    StockEntryNotFoundError,
)
from printpress.core.interfaces import IJobStore, IPaperStore, IStockStore
from printpress.core.services.stock_ledger import (
    LedgerLockRegistry,
    classify_entry,
    get_ledger_locks,
    position_of,
    recompute_forward,
    sort_ledger,
)

logger = get_logger(__name__)

_QUANTITY_FIELDS = ("issued_paper", "wastage", "added_stock")
_TEXT_FIELDS = ("job_no", "job_name", "remarks")


class UpdateStockEntryUseCase:
    """Apply a partial edit to a stock entry.

    When the date moves, the entry is re-sorted and the ledger is
    recomputed from whichever of its old and new positions comes first.
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
        self,
        principal: Principal,
        entry_id: int,
        request: UpdateStockEntryRequest,
    ) -> StockEntryResult:
        """Execute update stock entry use case."""
        admin_id = principal.tenant_id
        changes = request.model_dump(exclude_unset=True)
        logger.info("update_stock_entry_started", entry_id=entry_id, fields=sorted(changes))

        stock_store = await self._get_stock_store()
        existing = await stock_store.get_entry(admin_id, entry_id)
        if existing is None:
            raise StockEntryNotFoundError(entry_id)

        texts = {name: changes[name] for name in _TEXT_FIELDS if name in changes}
        if "job_id" in changes:
            job_id = changes["job_id"]
            if job_id is None:
                texts.setdefault("job_no", None)
                texts.setdefault("job_name", None)
            elif "job_no" not in changes:
                texts["job_no"], texts["job_name"] = await resolve_job_snapshot(
                    await self._get_job_store(),
                    admin_id,
                    job_id,
                    None,
                    changes.get("job_name"),
                )

        paper_store = await self._get_paper_store()
        async with self._locks.hold(admin_id, existing.paper_id):
            paper = await paper_store.get_paper(admin_id, existing.paper_id)
            if paper is None:
                raise PaperNotFoundError(existing.paper_id)

            ledger = sort_ledger(await stock_store.list_entries(admin_id, paper.id))
            old_position = position_of(ledger, entry_id)
            if old_position < 0:
                raise StockEntryNotFoundError(entry_id)

            entry = ledger[old_position]
            # Omitted fields fall back to the row as it is now, not as first read
            quantities = {
                name: changes.get(name, getattr(entry, name)) for name in _QUANTITY_FIELDS
            }
            kind = classify_entry(**quantities)
            if kind is None:
                raise InvalidEntryKindError(**quantities)

            if changes.get("entry_date"):
                entry.entry_date = changes["entry_date"]
            for name, value in quantities.items():
                setattr(entry, name, value)
            for name, value in texts.items():
                setattr(entry, name, value)
            entry.kind = kind
            if "job_id" in changes:
                entry.job_id = changes["job_id"]
            entry.updated_at = utcnow()

            ledger = sort_ledger(ledger)
            new_position = position_of(ledger, entry_id)
            start = min(old_position, new_position)
            changed = recompute_forward(ledger, start, paper.original_stock)
            cascade = [e for e in changed if e.id != entry_id]

            entry = await stock_store.update_with_cascade(
                entry, cascade, verify=paper if self._verify else None
            )
            logger.info(
                "ledger_recomputed",
                paper_id=paper.id,
                start=start,
                moved=old_position != new_position,
                cascaded=len(cascade),
            )

        return StockEntryResult(entry=entry, cascaded=len(cascade))

    def to_response(self, result: StockEntryResult) -> StockEntryMutationResponse:
        """Convert result to API response."""
        return StockEntryMutationResponse(
            message="Stock entry updated successfully",
            stock_entry=stock_entry_to_response(result.entry),
            cascaded=result.cascaded,
        )

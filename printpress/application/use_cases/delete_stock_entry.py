"""Delete Stock Entry Use Case: remove a row and rebalance its successors."""

from dataclasses import dataclass

from printpress.application.dto.responses import StockEntryDeleteResponse
from printpress.config import get_logger, get_settings
from printpress.core.entities import Principal
from printpress.core.exceptions import PaperNotFoundError, StockEntryNotFoundError
from printpress.core.interfaces import IPaperStore, IStockStore
from printpress.core.services.stock_ledger import (
    LedgerLockRegistry,
    get_ledger_locks,
    position_of,
    recompute_forward,
    sort_ledger,
)

logger = get_logger(__name__)


@dataclass
class DeleteStockEntryResult:
    entry_id: int
    paper_id: int
    cascaded: int


class DeleteStockEntryUseCase:
    """Delete a stock entry; later entries are rebalanced from its predecessor."""

    def __init__(
        self,
        paper_store: IPaperStore | None = None,
        stock_store: IStockStore | None = None,
        locks: LedgerLockRegistry | None = None,
        verify_after_write: bool | None = None,
    ):
        self._paper_store = paper_store
        self._stock_store = stock_store
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

    async def execute(self, principal: Principal, entry_id: int) -> DeleteStockEntryResult:
        """Execute delete stock entry use case."""
        admin_id = principal.tenant_id
        stock_store = await self._get_stock_store()
        paper_store = await self._get_paper_store()

        existing = await stock_store.get_entry(admin_id, entry_id)
        if existing is None:
            raise StockEntryNotFoundError(entry_id)

        async with self._locks.hold(admin_id, existing.paper_id):
            paper = await paper_store.get_paper(admin_id, existing.paper_id)
            if paper is None:
                raise PaperNotFoundError(existing.paper_id)

            ledger = sort_ledger(await stock_store.list_entries(admin_id, paper.id))
            position = position_of(ledger, entry_id)
            if position < 0:
                raise StockEntryNotFoundError(entry_id)

            ledger.pop(position)
            # The successor now sits at the removed position
            changed = recompute_forward(ledger, position, paper.original_stock)

            await stock_store.delete_with_cascade(
                admin_id, entry_id, changed, verify=paper if self._verify else None
            )
            logger.info(
                "ledger_recomputed",
                paper_id=paper.id,
                start=position,
                removed_entry=entry_id,
                cascaded=len(changed),
            )

        return DeleteStockEntryResult(
            entry_id=entry_id, paper_id=existing.paper_id, cascaded=len(changed)
        )

    def to_response(self, result: DeleteStockEntryResult) -> StockEntryDeleteResponse:
        return StockEntryDeleteResponse(
            message="Stock entry deleted successfully",
            cascaded=result.cascaded,
        )

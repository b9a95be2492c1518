"""Delete Paper Use Case."""

from printpress.config import get_logger
from printpress.core.entities import Principal
from printpress.core.exceptions import PaperInUseError, PaperNotFoundError
from printpress.core.interfaces import IPaperStore, IStockStore
from printpress.core.services.stock_ledger import LedgerLockRegistry, get_ledger_locks

logger = get_logger(__name__)


class DeletePaperUseCase:
    """Delete a paper that has no stock entries."""

    def __init__(
        self,
        paper_store: IPaperStore | None = None,
        stock_store: IStockStore | None = None,
        locks: LedgerLockRegistry | None = None,
    ):
        self._paper_store = paper_store
        self._stock_store = stock_store
        self._locks = locks or get_ledger_locks()

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

    async def execute(self, principal: Principal, paper_id: int) -> None:
        """
        Raises:
            PaperNotFoundError: if the paper is not the caller's.
            PaperInUseError: if entries are still recorded against it.
        """
        admin_id = principal.tenant_id
        paper_store = await self._get_paper_store()
        stock_store = await self._get_stock_store()

        async with self._locks.hold(admin_id, paper_id):
            if await paper_store.get_paper(admin_id, paper_id) is None:
                raise PaperNotFoundError(paper_id)

            entry_count = await stock_store.count_entries(admin_id, paper_id)
            if entry_count:
                logger.warning(
                    "paper_delete_refused", paper_id=paper_id, entry_count=entry_count
                )
                raise PaperInUseError(paper_id, entry_count)

            if not await paper_store.delete_paper(admin_id, paper_id):
                raise PaperNotFoundError(paper_id)

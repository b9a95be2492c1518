"""Update Paper Use Case."""

from dataclasses import dataclass

from printpress.application.dto.mappers import paper_to_response
from printpress.application.dto.requests import UpdatePaperRequest
from printpress.application.dto.responses import PaperMutationResponse
from printpress.config import get_logger
from printpress.core.entities import Paper, PaperType, Principal
from printpress.core.exceptions import PaperNotFoundError, ValidationError
from printpress.core.interfaces import IPaperStore, IStockStore
from printpress.core.services.stock_ledger import (
    LedgerLockRegistry,
    get_ledger_locks,
    recompute_forward,
    sort_ledger,
)

logger = get_logger(__name__)


@dataclass
class UpdatePaperResult:
    paper: Paper
    recomputed: int


class UpdatePaperUseCase:
    """Edit a paper's attributes.

    A new original stock shifts every balance, so the whole ledger is
    recomputed from its first entry under the paper's lock.
    """

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

    async def execute(
        self, principal: Principal, paper_id: int, request: UpdatePaperRequest
    ) -> UpdatePaperResult:
        admin_id = principal.tenant_id
        changes = request.model_dump(exclude_unset=True, exclude_none=True)
        paper_store = await self._get_paper_store()

        async with self._locks.hold(admin_id, paper_id):
            paper = await paper_store.get_paper(admin_id, paper_id)
            if paper is None:
                raise PaperNotFoundError(paper_id)

            previous_stock = paper.original_stock
            for name, value in changes.items():
                setattr(paper, name, value.strip() if isinstance(value, str) else value)

            if paper.paper_type == PaperType.OTHERS and not paper.paper_type_other:
                raise ValidationError(
                    "paper_type_other",
                    "required when paper_type is Others",
                )
            if paper.paper_type != PaperType.OTHERS:
                paper.paper_type_other = None

            changed = []
            if paper.original_stock != previous_stock:
                stock_store = await self._get_stock_store()
                ledger = sort_ledger(await stock_store.list_entries(admin_id, paper_id))
                changed = recompute_forward(ledger, 0, paper.original_stock)

            paper = await paper_store.update_paper(paper, changed)

            recomputed = len(changed)
            if paper.original_stock != previous_stock:
                logger.info(
                    "ledger_recomputed",
                    paper_id=paper_id,
                    start=0,
                    reason="original_stock_changed",
                    previous_stock=previous_stock,
                    original_stock=paper.original_stock,
                    cascaded=recomputed,
                )

        return UpdatePaperResult(paper=paper, recomputed=recomputed)

    @staticmethod
    def to_response(result: UpdatePaperResult) -> PaperMutationResponse:
        return PaperMutationResponse(
            message="Paper updated successfully",
            paper=paper_to_response(result.paper),
            recomputed=result.recomputed,
        )

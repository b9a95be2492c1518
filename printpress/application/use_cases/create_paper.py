"""Create Paper Use Case."""

from printpress.application.dto.mappers import paper_to_response
from printpress.application.dto.requests import CreatePaperRequest
from printpress.application.dto.responses import PaperMutationResponse
from printpress.config import get_logger
from printpress.core.entities import Paper, PaperType, Principal
from printpress.core.interfaces import IPaperStore

logger = get_logger(__name__)


class CreatePaperUseCase:
    """Register a paper with the stock its ledger starts from."""

    def __init__(self, paper_store: IPaperStore | None = None):
        self._paper_store = paper_store

    async def _get_paper_store(self) -> IPaperStore:
        if self._paper_store is None:
            from printpress.infrastructure.storage.sqlite import get_paper_store

            self._paper_store = await get_paper_store()
        return self._paper_store

    async def execute(self, principal: Principal, request: CreatePaperRequest) -> Paper:
        paper = Paper(
            admin_id=principal.tenant_id,
            paper_name=request.paper_name.strip(),
            paper_type=request.paper_type,
            paper_type_other=(
                request.paper_type_other if request.paper_type == PaperType.OTHERS else None
            ),
            paper_size=request.paper_size.strip(),
            paper_weight=request.paper_weight.strip(),
            units=request.units.strip(),
            original_stock=request.original_stock,
            created_by=principal.actor,
        )
        store = await self._get_paper_store()
        return await store.create_paper(paper)

    @staticmethod
    def to_response(paper: Paper) -> PaperMutationResponse:
        return PaperMutationResponse(
            message="Paper created successfully",
            paper=paper_to_response(paper),
        )

"""Read use cases for papers."""

from printpress.application.dto.mappers import paper_to_response
from printpress.application.dto.responses import PaperListResponse
from printpress.core.entities import Paper, Principal
from printpress.core.exceptions import PaperNotFoundError
from printpress.core.interfaces import IPaperStore


class GetPapersUseCase:
    """List the tenant's papers or fetch one."""

    def __init__(self, paper_store: IPaperStore | None = None):
        self._paper_store = paper_store

    async def _get_paper_store(self) -> IPaperStore:
        if self._paper_store is None:
            from printpress.infrastructure.storage.sqlite import get_paper_store

            self._paper_store = await get_paper_store()
        return self._paper_store

    async def list_papers(self, principal: Principal, limit: int = 100, offset: int = 0) -> list[Paper]:
        store = await self._get_paper_store()
        return await store.list_papers(principal.tenant_id, limit=limit, offset=offset)

    async def get(self, principal: Principal, paper_id: int) -> Paper:
        store = await self._get_paper_store()
        paper = await store.get_paper(principal.tenant_id, paper_id)
        if paper is None:
            raise PaperNotFoundError(paper_id)
        return paper

    @staticmethod
    def to_list_response(papers: list[Paper]) -> PaperListResponse:
        return PaperListResponse(
            papers=[paper_to_response(p) for p in papers],
            total=len(papers),
        )

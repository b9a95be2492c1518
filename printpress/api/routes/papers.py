"""
Paper catalogue endpoints.

Papers carry the original stock their ledger starts from; the summary and
export endpoints read the ledger without changing it.
"""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response

from printpress.api.dependencies import (
    get_create_paper_use_case,
    get_current_principal,
    get_delete_paper_use_case,
    get_export_paper_stock_use_case,
    get_paper_stock_summary_use_case,
    get_papers_use_case,
    get_update_paper_use_case,
)
from printpress.application.dto.mappers import paper_to_response
from printpress.application.dto.requests import CreatePaperRequest, UpdatePaperRequest
from printpress.application.dto.responses import (
    ErrorResponse,
    LedgerSummaryResponse,
    MessageResponse,
    PaperListResponse,
    PaperMutationResponse,
    PaperResponse,
)
from printpress.application.use_cases import (
    CreatePaperUseCase,
    DeletePaperUseCase,
    ExportPaperStockUseCase,
    GetPapersUseCase,
    GetPaperStockSummaryUseCase,
    UpdatePaperUseCase,
)
from printpress.core.entities import Principal

router = APIRouter(prefix="/api/papers", tags=["papers"])


@router.get("", response_model=PaperListResponse)
async def list_papers(
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    principal: Principal = Depends(get_current_principal),
    use_case: GetPapersUseCase = Depends(get_papers_use_case),
) -> PaperListResponse:
    papers = await use_case.list_papers(principal, limit=limit, offset=offset)
    return use_case.to_list_response(papers)


@router.get(
    "/{paper_id}",
    response_model=PaperResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_paper(
    paper_id: int,
    principal: Principal = Depends(get_current_principal),
    use_case: GetPapersUseCase = Depends(get_papers_use_case),
) -> PaperResponse:
    return paper_to_response(await use_case.get(principal, paper_id))


@router.post(
    "",
    response_model=PaperMutationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def create_paper(
    request: CreatePaperRequest,
    principal: Principal = Depends(get_current_principal),
    use_case: CreatePaperUseCase = Depends(get_create_paper_use_case),
) -> PaperMutationResponse:
    paper = await use_case.execute(principal, request)
    return use_case.to_response(paper)


@router.put(
    "/{paper_id}",
    response_model=PaperMutationResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)
async def update_paper(
    paper_id: int,
    request: UpdatePaperRequest,
    principal: Principal = Depends(get_current_principal),
    use_case: UpdatePaperUseCase = Depends(get_update_paper_use_case),
) -> PaperMutationResponse:
    """
    Update a paper.

    Changing the original stock rebalances the paper's whole ledger.
    """
    result = await use_case.execute(principal, paper_id, request)
    return use_case.to_response(result)


@router.delete(
    "/{paper_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def delete_paper(
    paper_id: int,
    principal: Principal = Depends(get_current_principal),
    use_case: DeletePaperUseCase = Depends(get_delete_paper_use_case),
) -> MessageResponse:
    await use_case.execute(principal, paper_id)
    return MessageResponse(message="Paper deleted successfully")


@router.get(
    "/{paper_id}/stock-summary",
    response_model=LedgerSummaryResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_stock_summary(
    paper_id: int,
    principal: Principal = Depends(get_current_principal),
    use_case: GetPaperStockSummaryUseCase = Depends(get_paper_stock_summary_use_case),
) -> LedgerSummaryResponse:
    """Totals and current remaining balance of a paper's ledger."""
    result = await use_case.execute(principal, paper_id)
    return use_case.to_response(result)


@router.get(
    "/{paper_id}/stock-export",
    response_class=Response,
    responses={
        200: {
            "content": {
                "application/pdf": {},
                "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": {},
            }
        },
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
async def export_stock_report(
    paper_id: int,
    format: str = Query("pdf", description="Report format: pdf or xlsx"),
    principal: Principal = Depends(get_current_principal),
    use_case: ExportPaperStockUseCase = Depends(get_export_paper_stock_use_case),
) -> Response:
    """Download the paper's stock report."""
    report = await use_case.execute(principal, paper_id, format)
    return Response(
        content=report.content,
        media_type=report.media_type,
        headers={"Content-Disposition": f'attachment; filename="{report.filename}"'},
    )

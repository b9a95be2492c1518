"""Paper stock ledger endpoints."""

from fastapi import APIRouter, Depends, Query, status

from printpress.api.dependencies import (
    get_current_principal,
    get_delete_stock_entry_use_case,
    get_record_stock_entry_use_case,
    get_stock_entries_use_case,
    get_update_stock_entry_use_case,
)
from printpress.application.dto.requests import (
    CreateStockEntryRequest,
    UpdateStockEntryRequest,
)
from printpress.application.dto.responses import (
    ErrorResponse,
    StockEntryDeleteResponse,
    StockEntryDetailResponse,
    StockEntryListResponse,
    StockEntryMutationResponse,
)
from printpress.application.use_cases import (
    DeleteStockEntryUseCase,
    GetStockEntriesUseCase,
    RecordStockEntryUseCase,
    UpdateStockEntryUseCase,
)
from printpress.core.entities import Principal

router = APIRouter(prefix="/api/paper-stock", tags=["paper-stock"])


@router.get(
    "",
    response_model=StockEntryListResponse,
    responses={404: {"model": ErrorResponse}},
)
async def list_stock_entries(
    paper_id: int = Query(..., alias="paperId", description="Paper whose ledger to list"),
    principal: Principal = Depends(get_current_principal),
    use_case: GetStockEntriesUseCase = Depends(get_stock_entries_use_case),
) -> StockEntryListResponse:
    """List a paper's stock entries, newest date first."""
    entries = await use_case.list_for_paper(principal, paper_id)
    return use_case.to_list_response(entries)


@router.get(
    "/{entry_id}",
    response_model=StockEntryDetailResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_stock_entry(
    entry_id: int,
    principal: Principal = Depends(get_current_principal),
    use_case: GetStockEntriesUseCase = Depends(get_stock_entries_use_case),
) -> StockEntryDetailResponse:
    """One entry, with its linked job read live."""
    entry = await use_case.get(principal, entry_id)
    job = await use_case.linked_job(principal, entry)
    return use_case.to_detail_response(entry, job)


@router.post(
    "",
    response_model=StockEntryMutationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)
async def create_stock_entry(
    request: CreateStockEntryRequest,
    principal: Principal = Depends(get_current_principal),
    use_case: RecordStockEntryUseCase = Depends(get_record_stock_entry_use_case),
) -> StockEntryMutationResponse:
    """Record an issuance or addition; later entries are rebalanced."""
    result = await use_case.execute(principal, request)
    return use_case.to_response(result)


@router.put(
    "/{entry_id}",
    response_model=StockEntryMutationResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
)
async def update_stock_entry(
    entry_id: int,
    request: UpdateStockEntryRequest,
    principal: Principal = Depends(get_current_principal),
    use_case: UpdateStockEntryUseCase = Depends(get_update_stock_entry_use_case),
) -> StockEntryMutationResponse:
    """Partially update an entry; later entries are rebalanced."""
    result = await use_case.execute(principal, entry_id, request)
    return use_case.to_response(result)


@router.delete(
    "/{entry_id}",
    response_model=StockEntryDeleteResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_stock_entry(
    entry_id: int,
    principal: Principal = Depends(get_current_principal),
    use_case: DeleteStockEntryUseCase = Depends(get_delete_stock_entry_use_case),
) -> StockEntryDeleteResponse:
    """Delete an entry; later entries are rebalanced."""
    result = await use_case.execute(principal, entry_id)
    return use_case.to_response(result)

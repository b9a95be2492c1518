"""Tenant settings endpoints."""

from fastapi import APIRouter, Depends

from printpress.api.dependencies import (
    get_current_principal,
    get_reset_counter_use_case,
    get_save_tenant_settings_use_case,
    get_tenant_settings_use_case,
    require_admin,
)
from printpress.application.dto.mappers import tenant_settings_to_response
from printpress.application.dto.requests import ResetCounterRequest, TenantSettingsRequest
from printpress.application.dto.responses import (
    ErrorResponse,
    MessageResponse,
    TenantSettingsResponse,
)
from printpress.application.use_cases import (
    GetTenantSettingsUseCase,
    ResetCounterUseCase,
    SaveTenantSettingsUseCase,
)
from printpress.core.entities import Principal

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("", response_model=TenantSettingsResponse)
async def get_tenant_settings(
    principal: Principal = Depends(get_current_principal),
    use_case: GetTenantSettingsUseCase = Depends(get_tenant_settings_use_case),
) -> TenantSettingsResponse:
    return tenant_settings_to_response(await use_case.execute(principal))


@router.put(
    "",
    response_model=TenantSettingsResponse,
    responses={403: {"model": ErrorResponse}},
)
async def save_tenant_settings(
    request: TenantSettingsRequest,
    principal: Principal = Depends(require_admin),
    use_case: SaveTenantSettingsUseCase = Depends(get_save_tenant_settings_use_case),
) -> TenantSettingsResponse:
    """Replace company details and document number prefixes. Admins only."""
    return tenant_settings_to_response(await use_case.execute(principal, request))


@router.post(
    "/reset-counter",
    response_model=MessageResponse,
    responses={403: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def reset_counter(
    request: ResetCounterRequest,
    principal: Principal = Depends(require_admin),
    use_case: ResetCounterUseCase = Depends(get_reset_counter_use_case),
) -> MessageResponse:
    return MessageResponse(message=await use_case.execute(principal, request))

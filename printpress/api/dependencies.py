"""
Dependency injection container for FastAPI.

Provides the authenticated principal and use case instances to route
handlers. Tests replace any of these through ``app.dependency_overrides``.
"""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from printpress.application.use_cases import (
    CreateJobUseCase,
    CreatePaperUseCase,
    DeletePaperUseCase,
    DeleteStockEntryUseCase,
    ExportPaperStockUseCase,
    GetJobsUseCase,
    GetPapersUseCase,
    GetPaperStockSummaryUseCase,
    GetStockEntriesUseCase,
    GetTenantSettingsUseCase,
    RecordStockEntryUseCase,
    ResetCounterUseCase,
    SaveTenantSettingsUseCase,
    UpdatePaperUseCase,
    UpdateStockEntryUseCase,
)
from printpress.config import bind_request_context, get_settings
from printpress.core.entities import Principal, UserRole
from printpress.core.exceptions import AuthenticationError, PermissionDeniedError
from printpress.infrastructure.auth import decode_access_token

_bearer = HTTPBearer(auto_error=False)


# Authentication dependencies
async def get_current_principal(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> Principal:
    """Resolve the caller from a bearer token or the token cookie."""
    token = credentials.credentials if credentials else None
    if not token:
        token = request.cookies.get(get_settings().auth.cookie_name)
    if not token:
        raise AuthenticationError()

    principal = decode_access_token(token)
    bind_request_context(admin_id=principal.tenant_id)
    return principal


async def require_admin(
    principal: Principal = Depends(get_current_principal),
) -> Principal:
    """Allow only admins through."""
    if principal.role != UserRole.ADMIN:
        raise PermissionDeniedError("admin")
    return principal


# Stock ledger use case dependencies
def get_record_stock_entry_use_case() -> RecordStockEntryUseCase:
    return RecordStockEntryUseCase()


def get_update_stock_entry_use_case() -> UpdateStockEntryUseCase:
    return UpdateStockEntryUseCase()


def get_delete_stock_entry_use_case() -> DeleteStockEntryUseCase:
    return DeleteStockEntryUseCase()


def get_stock_entries_use_case() -> GetStockEntriesUseCase:
    return GetStockEntriesUseCase()


def get_paper_stock_summary_use_case() -> GetPaperStockSummaryUseCase:
    return GetPaperStockSummaryUseCase()


def get_export_paper_stock_use_case() -> ExportPaperStockUseCase:
    return ExportPaperStockUseCase()


# Paper use case dependencies
def get_papers_use_case() -> GetPapersUseCase:
    return GetPapersUseCase()


def get_create_paper_use_case() -> CreatePaperUseCase:
    return CreatePaperUseCase()


def get_update_paper_use_case() -> UpdatePaperUseCase:
    return UpdatePaperUseCase()


def get_delete_paper_use_case() -> DeletePaperUseCase:
    return DeletePaperUseCase()


# Job use case dependencies
def get_jobs_use_case() -> GetJobsUseCase:
    return GetJobsUseCase()


def get_create_job_use_case() -> CreateJobUseCase:
    return CreateJobUseCase()


# Settings use case dependencies
def get_tenant_settings_use_case() -> GetTenantSettingsUseCase:
    return GetTenantSettingsUseCase()


def get_save_tenant_settings_use_case() -> SaveTenantSettingsUseCase:
    return SaveTenantSettingsUseCase()


def get_reset_counter_use_case() -> ResetCounterUseCase:
    return ResetCounterUseCase()

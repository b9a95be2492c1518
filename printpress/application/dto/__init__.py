"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from printpress.application.dto.requests import (
    CreateJobRequest,
    CreatePaperRequest,
    CreateStockEntryRequest,
    ResetCounterRequest,
    TenantSettingsRequest,
    UpdatePaperRequest,
    UpdateStockEntryRequest,
)
from printpress.application.dto.responses import (
    ErrorResponse,
    HealthResponse,
    JobListResponse,
    JobResponse,
    LedgerSummaryResponse,
    MessageResponse,
    PaperListResponse,
    PaperMutationResponse,
    PaperResponse,
    ProviderHealthResponse,
    StockEntryDeleteResponse,
    StockEntryDetailResponse,
    StockEntryListResponse,
    StockEntryMutationResponse,
    StockEntryResponse,
    TenantSettingsResponse,
)

__all__ = [
    # Requests
    "CreateStockEntryRequest",
    "UpdateStockEntryRequest",
    "CreatePaperRequest",
    "UpdatePaperRequest",
    "CreateJobRequest",
    "TenantSettingsRequest",
    "ResetCounterRequest",
    # Responses
    "ErrorResponse",
    "HealthResponse",
    "ProviderHealthResponse",
    "MessageResponse",
    "StockEntryResponse",
    "StockEntryListResponse",
    "StockEntryDetailResponse",
    "StockEntryMutationResponse",
    "StockEntryDeleteResponse",
    "LedgerSummaryResponse",
    "PaperResponse",
    "PaperListResponse",
    "PaperMutationResponse",
    "JobResponse",
    "JobListResponse",
    "TenantSettingsResponse",
]

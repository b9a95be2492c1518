"""Response DTOs for API endpoints.

Pydantic v2 models for API responses.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class ProviderHealthResponse(BaseModel):
    """Dependency health status."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ProviderHealthResponse | None = None
    schema_version: str | None = Field(default=None, description="Latest applied migration")


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. PAPER_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


# --- Paper stock ---


class StockEntryResponse(BaseModel):
    """Stock entry response DTO."""

    id: int
    paper_id: int
    entry_date: str
    kind: str
    issued_paper: float
    wastage: float
    added_stock: float
    remaining: float
    clamped: bool = False
    job_id: int | None = None
    job_no: str | None = None
    job_name: str | None = None
    remarks: str | None = None
    created_by: str | None = None
    created_at: datetime
    updated_at: datetime


class StockEntryListResponse(BaseModel):
    """A paper's stock entries, newest first."""

    stock_entries: list[StockEntryResponse]
    total: int


class StockEntryMutationResponse(BaseModel):
    """Result of creating or editing a stock entry."""

    message: str
    stock_entry: StockEntryResponse
    cascaded: int = Field(0, description="Later entries whose balance was recomputed")


class StockEntryDeleteResponse(BaseModel):
    """Result of deleting a stock entry."""

    message: str
    cascaded: int = 0


class LedgerSummaryResponse(BaseModel):
    """Aggregate view of one paper's ledger."""

    paper_id: int
    paper_name: str
    units: str
    original_stock: float
    total_issued: float
    total_wastage: float
    total_added: float
    current_remaining: float
    entry_count: int
    clamped_count: int
    first_entry_date: str | None = None
    last_entry_date: str | None = None


# --- Papers ---


class PaperResponse(BaseModel):
    """Paper response DTO."""

    id: int
    paper_name: str
    paper_type: str
    paper_type_other: str | None = None
    display_type: str
    paper_size: str
    paper_weight: str
    units: str
    original_stock: float
    created_by: str | None = None
    created_at: datetime
    updated_at: datetime


class PaperListResponse(BaseModel):
    """Papers, newest first."""

    papers: list[PaperResponse]
    total: int


class PaperMutationResponse(BaseModel):
    """Result of creating or editing a paper."""

    message: str
    paper: PaperResponse
    recomputed: int = Field(0, description="Entries rebalanced after an original stock change")


# --- Jobs ---


class JobResponse(BaseModel):
    """Job response DTO."""

    id: int
    job_no: str
    job_name: str
    client_name: str | None = None
    job_date: str | None = None
    delivery_date: str | None = None
    quantity: int = 0
    paper_id: int | None = None
    remarks: str | None = None
    created_by: str | None = None
    created_at: datetime


class StockEntryDetailResponse(BaseModel):
    """Single stock entry.

    ``job`` is the linked job as it is now; the entry's own ``job_no`` and
    ``job_name`` keep the values copied when it was written.
    """

    stock_entry: StockEntryResponse
    job: JobResponse | None = None


class JobListResponse(BaseModel):
    """Jobs, newest first."""

    jobs: list[JobResponse]
    total: int


# --- Settings ---


class TenantSettingsResponse(BaseModel):
    """Tenant settings with effective sequence prefixes."""

    company_name: str | None = None
    company_address: str | None = None
    company_phone: str | None = None
    company_email: str | None = None
    quotation_prefix: str
    job_prefix: str
    estimate_prefix: str
    challan_prefix: str
    updated_at: datetime | None = None

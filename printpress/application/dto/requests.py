"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.

Bodies accept the camelCase keys sent by the dashboard frontend
(``paperId``, ``issuedPaper``, ...) as well as snake_case names.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from printpress.core.bs_date import normalize_bs_date
from printpress.core.entities.paper import PaperType
from printpress.core.entities.tenant import CounterName


def _bs_date(value: str | None) -> str | None:
    if value is None or value == "":
        return None
    return normalize_bs_date(value)


# --- Paper stock ---


class CreateStockEntryRequest(BaseModel):
    """Request to record a stock entry against a paper.

    Any ``remaining`` sent by the client is ignored; balances are always
    computed from the ledger.
    """

    model_config = ConfigDict(populate_by_name=True)

    paper_id: int = Field(..., alias="paperId", description="Paper the entry belongs to")
    entry_date: str = Field(
        ...,
        validation_alias=AliasChoices("date", "entry_date", "entryDate"),
        description="BS date, YYYY-MM-DD",
        examples=["2081-01-05"],
    )
    issued_paper: float = Field(default=0.0, ge=0, alias="issuedPaper")
    wastage: float = Field(default=0.0, ge=0)
    added_stock: float = Field(default=0.0, ge=0, alias="addedStock")
    job_id: int | None = Field(default=None, alias="jobId")
    job_no: str | None = Field(default=None, alias="jobNo", max_length=50)
    job_name: str | None = Field(default=None, alias="jobName", max_length=200)
    remarks: str | None = Field(default=None, max_length=1000)

    @field_validator("entry_date")
    @classmethod
    def validate_entry_date(cls, v: str) -> str:
        return normalize_bs_date(v)


class UpdateStockEntryRequest(BaseModel):
    """Partial update of a stock entry.

    Only keys present in the body are applied; an explicit null clears an
    optional field such as ``job_id``.
    """

    model_config = ConfigDict(populate_by_name=True)

    entry_date: str | None = Field(
        default=None,
        validation_alias=AliasChoices("date", "entry_date", "entryDate"),
    )
    issued_paper: float | None = Field(default=None, ge=0, alias="issuedPaper")
    wastage: float | None = Field(default=None, ge=0)
    added_stock: float | None = Field(default=None, ge=0, alias="addedStock")
    job_id: int | None = Field(default=None, alias="jobId")
    job_no: str | None = Field(default=None, alias="jobNo", max_length=50)
    job_name: str | None = Field(default=None, alias="jobName", max_length=200)
    remarks: str | None = Field(default=None, max_length=1000)

    @field_validator("entry_date")
    @classmethod
    def validate_entry_date(cls, v: str | None) -> str | None:
        return _bs_date(v)

    @field_validator("issued_paper", "wastage", "added_stock")
    @classmethod
    def reject_null_quantity(cls, v: float | None) -> float | None:
        # Quantities may be omitted but not nulled
        if v is None:
            raise ValueError("quantity cannot be null")
        return v


# --- Papers ---


class CreatePaperRequest(BaseModel):
    """Request to register a paper and its starting stock."""

    model_config = ConfigDict(populate_by_name=True)

    paper_name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        validation_alias=AliasChoices("paper_name", "paperName", "clientName"),
    )
    paper_type: PaperType = Field(..., alias="paperType")
    paper_type_other: str | None = Field(default=None, alias="paperTypeOther", max_length=100)
    paper_size: str = Field(..., min_length=1, max_length=50, alias="paperSize")
    paper_weight: str = Field(..., min_length=1, max_length=50, alias="paperWeight")
    units: str = Field(..., min_length=1, max_length=30)
    original_stock: float = Field(default=0.0, ge=0, alias="originalStock")

    @model_validator(mode="after")
    def require_other_type(self) -> "CreatePaperRequest":
        if self.paper_type == PaperType.OTHERS and not self.paper_type_other:
            raise ValueError("paper_type_other is required when paper_type is Others")
        return self


class UpdatePaperRequest(BaseModel):
    """Partial update of a paper."""

    model_config = ConfigDict(populate_by_name=True)

    paper_name: str | None = Field(
        default=None,
        min_length=1,
        max_length=200,
        validation_alias=AliasChoices("paper_name", "paperName", "clientName"),
    )
    paper_type: PaperType | None = Field(default=None, alias="paperType")
    paper_type_other: str | None = Field(default=None, alias="paperTypeOther", max_length=100)
    paper_size: str | None = Field(default=None, min_length=1, max_length=50, alias="paperSize")
    paper_weight: str | None = Field(default=None, min_length=1, max_length=50, alias="paperWeight")
    units: str | None = Field(default=None, min_length=1, max_length=30)
    original_stock: float | None = Field(default=None, ge=0, alias="originalStock")


# --- Jobs ---


class CreateJobRequest(BaseModel):
    """Request to open a print job. The job number is assigned server-side."""

    model_config = ConfigDict(populate_by_name=True)

    job_name: str = Field(..., min_length=1, max_length=200, alias="jobName")
    client_name: str | None = Field(default=None, alias="clientName", max_length=200)
    job_date: str | None = Field(default=None, alias="jobDate")
    delivery_date: str | None = Field(default=None, alias="deliveryDate")
    quantity: int = Field(default=0, ge=0)
    paper_id: int | None = Field(default=None, alias="paperId")
    remarks: str | None = Field(default=None, max_length=1000)

    @field_validator("job_date", "delivery_date")
    @classmethod
    def validate_dates(cls, v: str | None) -> str | None:
        return _bs_date(v)


# --- Settings ---


class TenantSettingsRequest(BaseModel):
    """Replace the caller's tenant settings."""

    model_config = ConfigDict(populate_by_name=True)

    company_name: str | None = Field(default=None, alias="companyName", max_length=200)
    company_address: str | None = Field(default=None, alias="companyAddress", max_length=500)
    company_phone: str | None = Field(default=None, alias="companyPhone", max_length=50)
    company_email: str | None = Field(default=None, alias="companyEmail", max_length=200)
    quotation_prefix: str | None = Field(default=None, alias="quotationPrefix", max_length=10)
    job_prefix: str | None = Field(default=None, alias="jobPrefix", max_length=10)
    estimate_prefix: str | None = Field(default=None, alias="estimatePrefix", max_length=10)
    challan_prefix: str | None = Field(default=None, alias="challanPrefix", max_length=10)


class ResetCounterRequest(BaseModel):
    """Reset one of the tenant's sequence counters to zero."""

    model_config = ConfigDict(populate_by_name=True)

    counter_type: CounterName = Field(..., alias="counterType")

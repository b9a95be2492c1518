"""Entity to response DTO conversions shared by several use cases."""

from printpress.application.dto.responses import (
    JobResponse,
    PaperResponse,
    StockEntryResponse,
    TenantSettingsResponse,
)
from printpress.core.entities import CounterName, Job, Paper, StockEntry, TenantSettings


def stock_entry_to_response(entry: StockEntry) -> StockEntryResponse:
    return StockEntryResponse(
        id=entry.id,  # type: ignore[arg-type]
        paper_id=entry.paper_id,
        entry_date=entry.entry_date,
        kind=entry.kind.value,
        issued_paper=entry.issued_paper,
        wastage=entry.wastage,
        added_stock=entry.added_stock,
        remaining=entry.remaining,
        clamped=entry.clamped,
        job_id=entry.job_id,
        job_no=entry.job_no,
        job_name=entry.job_name,
        remarks=entry.remarks,
        created_by=entry.created_by,
        created_at=entry.created_at,
        updated_at=entry.updated_at,
    )


def paper_to_response(paper: Paper) -> PaperResponse:
    return PaperResponse(
        id=paper.id,  # type: ignore[arg-type]
        paper_name=paper.paper_name,
        paper_type=paper.paper_type.value,
        paper_type_other=paper.paper_type_other,
        display_type=paper.display_type,
        paper_size=paper.paper_size,
        paper_weight=paper.paper_weight,
        units=paper.units,
        original_stock=paper.original_stock,
        created_by=paper.created_by,
        created_at=paper.created_at,
        updated_at=paper.updated_at,
    )


def job_to_response(job: Job) -> JobResponse:
    return JobResponse(
        id=job.id,  # type: ignore[arg-type]
        job_no=job.job_no,
        job_name=job.job_name,
        client_name=job.client_name,
        job_date=job.job_date,
        delivery_date=job.delivery_date,
        quantity=job.quantity,
        paper_id=job.paper_id,
        remarks=job.remarks,
        created_by=job.created_by,
        created_at=job.created_at,
    )


def tenant_settings_to_response(settings: TenantSettings) -> TenantSettingsResponse:
    """Show effective prefixes, falling back to defaults for unset ones."""
    return TenantSettingsResponse(
        company_name=settings.company_name,
        company_address=settings.company_address,
        company_phone=settings.company_phone,
        company_email=settings.company_email,
        quotation_prefix=settings.prefix_for(CounterName.QUOTATION),
        job_prefix=settings.prefix_for(CounterName.JOB),
        estimate_prefix=settings.prefix_for(CounterName.ESTIMATE),
        challan_prefix=settings.prefix_for(CounterName.CHALLAN),
        updated_at=settings.updated_at,
    )

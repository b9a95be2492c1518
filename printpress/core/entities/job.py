"""Print job entity."""

from datetime import datetime

from pydantic import BaseModel, Field

from printpress.core.clock import utcnow


class Job(BaseModel):
    """A print job that consumes paper.

    Only the fields the stock ledger and its reports read are modelled.
    """

    id: int | None = None
    admin_id: str
    job_no: str  # e.g. J-001, from the tenant's job counter
    job_name: str
    client_name: str | None = None
    job_date: str | None = None  # BS date
    delivery_date: str | None = None  # BS date
    quantity: int = 0
    paper_id: int | None = None
    remarks: str | None = None
    created_by: str | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

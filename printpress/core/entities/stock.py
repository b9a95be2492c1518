"""Paper stock ledger entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from printpress.core.clock import utcnow


class EntryKind(str, Enum):
    """What a ledger row records."""

    ISSUE = "issue"  # paper consumed by a job, plus wastage
    ADDITION = "addition"  # stock replenished


class StockEntry(BaseModel):
    """One dated row of a paper's stock ledger.

    ``remaining`` is the running balance after this row's effect. It is
    owned by the ledger recomputation and never taken from user input.
    """

    id: int | None = None
    admin_id: str
    paper_id: int
    entry_date: str  # BS date, YYYY-MM-DD
    kind: EntryKind = EntryKind.ISSUE
    issued_paper: float = Field(default=0.0, ge=0)
    wastage: float = Field(default=0.0, ge=0)
    added_stock: float = Field(default=0.0, ge=0)
    remaining: float = Field(default=0.0, ge=0)
    clamped: bool = False  # balance was floored at zero
    job_id: int | None = None
    job_no: str | None = None  # snapshot of the job at write time
    job_name: str | None = None
    remarks: str | None = None
    created_by: str | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def delta(self) -> float:
        """Net change this row applies to the balance."""
        return self.added_stock - self.issued_paper - self.wastage


class LedgerSummary(BaseModel):
    """Aggregate view of one paper's ledger."""

    paper_id: int
    original_stock: float
    total_issued: float = 0.0
    total_wastage: float = 0.0
    total_added: float = 0.0
    current_remaining: float = 0.0
    entry_count: int = 0
    clamped_count: int = 0
    first_entry_date: str | None = None
    last_entry_date: str | None = None

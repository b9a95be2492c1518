"""Core domain entities."""

from printpress.core.entities.job import Job
from printpress.core.entities.paper import Paper, PaperType
from printpress.core.entities.stock import EntryKind, LedgerSummary, StockEntry
from printpress.core.entities.tenant import (
    DEFAULT_PREFIXES,
    CounterName,
    Principal,
    TenantSettings,
    UserRole,
    format_sequence_number,
)

__all__ = [
    # Paper entities
    "Paper",
    "PaperType",
    # Ledger entities
    "StockEntry",
    "EntryKind",
    "LedgerSummary",
    # Job entities
    "Job",
    # Tenant entities
    "Principal",
    "UserRole",
    "TenantSettings",
    "CounterName",
    "DEFAULT_PREFIXES",
    "format_sequence_number",
]

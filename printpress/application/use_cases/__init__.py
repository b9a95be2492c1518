"""Application use cases."""

from printpress.application.use_cases.create_job import CreateJobUseCase
from printpress.application.use_cases.create_paper import CreatePaperUseCase
from printpress.application.use_cases.delete_paper import DeletePaperUseCase
from printpress.application.use_cases.delete_stock_entry import (
    DeleteStockEntryResult,
    DeleteStockEntryUseCase,
)
from printpress.application.use_cases.export_paper_stock import ExportPaperStockUseCase
from printpress.application.use_cases.get_jobs import GetJobsUseCase
from printpress.application.use_cases.get_paper_stock_summary import (
    GetPaperStockSummaryUseCase,
    PaperStockSummary,
)
from printpress.application.use_cases.get_papers import GetPapersUseCase
from printpress.application.use_cases.get_stock_entries import GetStockEntriesUseCase
from printpress.application.use_cases.record_stock_entry import (
    RecordStockEntryUseCase,
    StockEntryResult,
)
from printpress.application.use_cases.tenant_settings import (
    GetTenantSettingsUseCase,
    ResetCounterUseCase,
    SaveTenantSettingsUseCase,
)
from printpress.application.use_cases.update_paper import UpdatePaperResult, UpdatePaperUseCase
from printpress.application.use_cases.update_stock_entry import UpdateStockEntryUseCase

__all__ = [
    # Stock ledger
    "RecordStockEntryUseCase",
    "UpdateStockEntryUseCase",
    "DeleteStockEntryUseCase",
    "GetStockEntriesUseCase",
    "GetPaperStockSummaryUseCase",
    "ExportPaperStockUseCase",
    "StockEntryResult",
    "DeleteStockEntryResult",
    "PaperStockSummary",
    # Papers
    "CreatePaperUseCase",
    "UpdatePaperUseCase",
    "UpdatePaperResult",
    "DeletePaperUseCase",
    "GetPapersUseCase",
    # Jobs
    "CreateJobUseCase",
    "GetJobsUseCase",
    # Settings
    "GetTenantSettingsUseCase",
    "SaveTenantSettingsUseCase",
    "ResetCounterUseCase",
]

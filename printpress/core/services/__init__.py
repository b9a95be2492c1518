"""
Core business logic services.

Layer-pure services that depend only on:
- printpress/core/entities/*
- printpress/core/interfaces/*
- printpress/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from printpress.core.services.stock_ledger import (
    LedgerLockRegistry,
    classify_entry,
    clamp_balance,
    entry_delta,
    find_violations,
    get_ledger_locks,
    ledger_sort_key,
    opening_balance,
    position_of,
    recompute_forward,
    sort_ledger,
    summarize_ledger,
)
from printpress.core.services.stock_report_service import (
    REPORT_COLUMNS,
    REPORT_TITLE,
    IStockReportRenderer,
    StockReport,
    StockReportService,
    current_remaining,
    format_quantity,
    report_filename,
)

__all__ = [
    # Ledger rules
    "LedgerLockRegistry",
    "get_ledger_locks",
    "classify_entry",
    "clamp_balance",
    "entry_delta",
    "find_violations",
    "ledger_sort_key",
    "opening_balance",
    "position_of",
    "recompute_forward",
    "sort_ledger",
    "summarize_ledger",
    # Stock reports
    "IStockReportRenderer",
    "StockReport",
    "StockReportService",
    "report_filename",
    "format_quantity",
    "current_remaining",
    "REPORT_TITLE",
    "REPORT_COLUMNS",
]

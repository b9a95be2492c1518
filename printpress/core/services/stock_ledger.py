"""
Paper stock ledger rules.

A paper's ledger is its stock entries ordered by ``(entry_date, created_at,
id)``. Each entry stores the running balance after its own effect::

    remaining[0] = max(0, original_stock + delta[0])
    remaining[i] = max(0, remaining[i - 1] + delta[i])

Any insert, edit or delete changes the balance from some position onward;
``recompute_forward`` restores the rule from that position to the end of
the ledger and leaves earlier entries untouched. Callers serialize
recomputation per paper through ``LedgerLockRegistry``.
"""

import asyncio
from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from datetime import datetime

from printpress.config import get_logger
from printpress.core.entities.paper import Paper
from printpress.core.entities.stock import EntryKind, LedgerSummary, StockEntry

logger = get_logger(__name__)

# Sorts unsaved entries after saved ones that share date and timestamp
_UNSAVED_ID = float("inf")


def entry_delta(entry: StockEntry) -> float:
    """Net balance change of *entry*."""
    return entry.delta


def clamp_balance(value: float) -> tuple[float, bool]:
    """Floor a balance at zero; the flag tells whether flooring happened."""
    if value < 0:
        return 0.0, True
    return value, False


def classify_entry(issued_paper: float, wastage: float, added_stock: float) -> EntryKind | None:
    """Kind implied by a set of quantities, or None if they mix both kinds."""
    if added_stock > 0:
        if issued_paper > 0 or wastage > 0:
            return None
        return EntryKind.ADDITION
    return EntryKind.ISSUE


def ledger_sort_key(entry: StockEntry) -> tuple[str, datetime, float]:
    return (
        entry.entry_date,
        entry.created_at,
        entry.id if entry.id is not None else _UNSAVED_ID,
    )


def sort_ledger(entries: Sequence[StockEntry]) -> list[StockEntry]:
    """Return *entries* in ledger order."""
    return sorted(entries, key=ledger_sort_key)


def position_of(entries: Sequence[StockEntry], entry_id: int) -> int:
    """Index of the entry with *entry_id*, or -1."""
    for index, entry in enumerate(entries):
        if entry.id == entry_id:
            return index
    return -1


def opening_balance(
    entries: Sequence[StockEntry], start: int, original_stock: float
) -> float:
    """Balance just before position *start*."""
    if start <= 0:
        return original_stock
    return entries[start - 1].remaining


def recompute_forward(
    entries: Sequence[StockEntry], start: int, original_stock: float
) -> list[StockEntry]:
    """Recompute ``remaining`` for ``entries[start:]`` in place.

    Args:
        entries: One paper's entries, already in ledger order.
        start: First position whose balance may be stale.
        original_stock: The paper's starting stock.

    Returns:
        The entries whose ``remaining`` or ``clamped`` value changed, in
        ledger order. Empty when the ledger was already consistent.
    """
    start = max(start, 0)
    balance = opening_balance(entries, start, original_stock)
    changed: list[StockEntry] = []

    for entry in entries[start:]:
        remaining, clamped = clamp_balance(balance + entry_delta(entry))
        if clamped:
            logger.warning(
                "stock_balance_clamped",
                paper_id=entry.paper_id,
                entry_id=entry.id,
                entry_date=entry.entry_date,
                shortfall=round(-(balance + entry_delta(entry)), 4),
            )
        if remaining != entry.remaining or clamped != entry.clamped:
            entry.remaining = remaining
            entry.clamped = clamped
            changed.append(entry)
        balance = remaining

    return changed


def find_violations(entries: Sequence[StockEntry], original_stock: float) -> list[int]:
    """Positions where the stored balance breaks the running-total rule."""
    violations = []
    balance = original_stock
    for index, entry in enumerate(entries):
        expected, _ = clamp_balance(balance + entry_delta(entry))
        if entry.remaining != expected:
            violations.append(index)
        # Continue from the stored value so one bad row is reported once
        balance = entry.remaining
    return violations


def summarize_ledger(paper: Paper, entries: Sequence[StockEntry]) -> LedgerSummary:
    """Totals and current balance for one paper's ledger."""
    ordered = sort_ledger(entries)
    summary = LedgerSummary(
        paper_id=paper.id or 0,
        original_stock=paper.original_stock,
        current_remaining=ordered[-1].remaining if ordered else paper.original_stock,
        entry_count=len(ordered),
    )
    for entry in ordered:
        summary.total_issued += entry.issued_paper
        summary.total_wastage += entry.wastage
        summary.total_added += entry.added_stock
        if entry.clamped:
            summary.clamped_count += 1
    if ordered:
        summary.first_entry_date = ordered[0].entry_date
        summary.last_entry_date = ordered[-1].entry_date
    return summary


class LedgerLockRegistry:
    """One asyncio lock per (tenant, paper) ledger.

    Holding the lock across fetch, recompute and persist keeps two requests
    against the same paper from overwriting each other's balances.
    """

    def __init__(self) -> None:
        self._locks: dict[tuple[str, int], asyncio.Lock] = {}

    def _lock_for(self, admin_id: str, paper_id: int) -> asyncio.Lock:
        key = (admin_id, paper_id)
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    @asynccontextmanager
    async def hold(self, admin_id: str, paper_id: int) -> AsyncIterator[None]:
        """Serialize ledger work for one paper."""
        lock = self._lock_for(admin_id, paper_id)
        async with lock:
            yield

    def is_held(self, admin_id: str, paper_id: int) -> bool:
        lock = self._locks.get((admin_id, paper_id))
        return lock is not None and lock.locked()


_ledger_locks: LedgerLockRegistry | None = None


def get_ledger_locks() -> LedgerLockRegistry:
    """Get the process-wide ledger lock registry."""
    global _ledger_locks
    if _ledger_locks is None:
        _ledger_locks = LedgerLockRegistry()
    return _ledger_locks

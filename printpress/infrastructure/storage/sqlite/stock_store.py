"""SQLite implementation of paper stock ledger storage."""

import aiosqlite

from printpress.config import get_logger
from printpress.core.entities.paper import Paper
from printpress.core.entities.stock import EntryKind, StockEntry
from printpress.core.exceptions import LedgerInvariantError, StockEntryNotFoundError
from printpress.core.interfaces.stock_store import IStockStore
from printpress.core.services.stock_ledger import find_violations
from printpress.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from printpress.infrastructure.storage.sqlite.rows import format_timestamp, parse_timestamp

logger = get_logger(__name__)

_LEDGER_ORDER = "entry_date ASC, created_at ASC, id ASC"
_DISPLAY_ORDER = "entry_date DESC, created_at DESC, id DESC"


class SQLiteStockStore(IStockStore):
    """SQLite implementation of stock entry storage.

    Every cascade write runs in one immediate transaction, so either the
    edited row and all rebalanced rows land, or none do. Passing ``verify``
    re-checks the paper's whole ledger inside that transaction, so a bad
    balance is never committed.
    """

    async def get_entry(self, admin_id: str, entry_id: int) -> StockEntry | None:
        """Get a stock entry owned by *admin_id*."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM stock_entries WHERE id = ? AND admin_id = ?",
                (entry_id, admin_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self.row_to_entry(row)

    async def list_entries(
        self, admin_id: str, paper_id: int, newest_first: bool = False
    ) -> list[StockEntry]:
        """List a paper's entries in ledger order, or reversed for display."""
        order = _DISPLAY_ORDER if newest_first else _LEDGER_ORDER
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM stock_entries
                WHERE admin_id = ? AND paper_id = ?
                ORDER BY {order}
                """,
                (admin_id, paper_id),
            )
            rows = await cursor.fetchall()
            return [self.row_to_entry(row) for row in rows]

    async def count_entries(self, admin_id: str, paper_id: int) -> int:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT COUNT(*) FROM stock_entries WHERE admin_id = ? AND paper_id = ?",
                (admin_id, paper_id),
            )
            row = await cursor.fetchone()
            return int(row[0]) if row else 0

    async def insert_with_cascade(
        self, entry: StockEntry, cascade: list[StockEntry], verify: Paper | None = None
    ) -> StockEntry:
        """Insert *entry* and store the recomputed balances of *cascade*."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO stock_entries (
                    admin_id, paper_id, entry_date, kind,
                    issued_paper, wastage, added_stock, remaining, clamped,
                    job_id, job_no, job_name, remarks,
                    created_by, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    entry.admin_id,
                    entry.paper_id,
                    entry.entry_date,
                    entry.kind.value,
                    entry.issued_paper,
                    entry.wastage,
                    entry.added_stock,
                    entry.remaining,
                    int(entry.clamped),
                    entry.job_id,
                    entry.job_no,
                    entry.job_name,
                    entry.remarks,
                    entry.created_by,
                    format_timestamp(entry.created_at),
                    format_timestamp(entry.updated_at),
                ),
            )
            entry.id = cursor.lastrowid
            cascaded = await self._write_balances(conn, cascade, skip_id=entry.id)
            if verify is not None:
                await self._verify_ledger(conn, verify)
            logger.info(
                "stock_entry_created",
                entry_id=entry.id,
                paper_id=entry.paper_id,
                kind=entry.kind.value,
                remaining=entry.remaining,
                cascaded=cascaded,
            )
            return entry

    async def update_with_cascade(
        self, entry: StockEntry, cascade: list[StockEntry], verify: Paper | None = None
    ) -> StockEntry:
        """Update *entry* and store the recomputed balances of *cascade*."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE stock_entries SET
                    entry_date = ?,
                    kind = ?,
                    issued_paper = ?,
                    wastage = ?,
                    added_stock = ?,
                    remaining = ?,
                    clamped = ?,
                    job_id = ?,
                    job_no = ?,
                    job_name = ?,
                    remarks = ?,
                    updated_at = ?
                WHERE id = ? AND admin_id = ?
                """,
                (
                    entry.entry_date,
                    entry.kind.value,
                    entry.issued_paper,
                    entry.wastage,
                    entry.added_stock,
                    entry.remaining,
                    int(entry.clamped),
                    entry.job_id,
                    entry.job_no,
                    entry.job_name,
                    entry.remarks,
                    format_timestamp(entry.updated_at),
                    entry.id,
                    entry.admin_id,
                ),
            )
            if cursor.rowcount == 0:
                raise StockEntryNotFoundError(entry.id or 0)
            cascaded = await self._write_balances(conn, cascade, skip_id=entry.id)
            if verify is not None:
                await self._verify_ledger(conn, verify)
            logger.info(
                "stock_entry_updated",
                entry_id=entry.id,
                paper_id=entry.paper_id,
                remaining=entry.remaining,
                cascaded=cascaded,
            )
            return entry

    async def delete_with_cascade(
        self,
        admin_id: str,
        entry_id: int,
        cascade: list[StockEntry],
        verify: Paper | None = None,
    ) -> None:
        """Delete an entry and store the recomputed balances of *cascade*."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM stock_entries WHERE id = ? AND admin_id = ?",
                (entry_id, admin_id),
            )
            if cursor.rowcount == 0:
                raise StockEntryNotFoundError(entry_id)
            cascaded = await self._write_balances(conn, cascade, skip_id=entry_id)
            if verify is not None:
                await self._verify_ledger(conn, verify)
            logger.info("stock_entry_deleted", entry_id=entry_id, cascaded=cascaded)

    @staticmethod
    async def _write_balances(
        conn: aiosqlite.Connection,
        entries: list[StockEntry],
        skip_id: int | None = None,
    ) -> int:
        """Write remaining/clamped for *entries*; returns rows written."""
        params = [
            (entry.remaining, int(entry.clamped), entry.id, entry.admin_id)
            for entry in entries
            if entry.id is not None and entry.id != skip_id
        ]
        if params:
            await conn.executemany(
                "UPDATE stock_entries SET remaining = ?, clamped = ? WHERE id = ? AND admin_id = ?",
                params,
            )
        return len(params)

    async def _verify_ledger(self, conn: aiosqlite.Connection, paper: Paper) -> None:
        """Re-read *paper*'s ledger on *conn* and reject stale balances.

        Raises:
            LedgerInvariantError: if any stored balance is off; the caller's
                transaction then rolls back.
        """
        cursor = await conn.execute(
            f"""
            SELECT * FROM stock_entries
            WHERE admin_id = ? AND paper_id = ?
            ORDER BY {_LEDGER_ORDER}
            """,
            (paper.admin_id, paper.id),
        )
        entries = [self.row_to_entry(row) for row in await cursor.fetchall()]
        violations = find_violations(entries, paper.original_stock)
        if violations:
            logger.error("ledger_invariant_violated", paper_id=paper.id, positions=violations)
            raise LedgerInvariantError(paper.id or 0, violations)

    @staticmethod
    def row_to_entry(row: aiosqlite.Row) -> StockEntry:
        """Convert a database row to a StockEntry entity."""
        return StockEntry(
            id=row["id"],
            admin_id=row["admin_id"],
            paper_id=row["paper_id"],
            entry_date=row["entry_date"],
            kind=EntryKind(row["kind"]),
            issued_paper=float(row["issued_paper"]),
            wastage=float(row["wastage"]),
            added_stock=float(row["added_stock"]),
            remaining=float(row["remaining"]),
            clamped=bool(row["clamped"]),
            job_id=row["job_id"],
            job_no=row["job_no"],
            job_name=row["job_name"],
            remarks=row["remarks"],
            created_by=row["created_by"],
            created_at=parse_timestamp(row["created_at"]),
            updated_at=parse_timestamp(row["updated_at"]),
        )

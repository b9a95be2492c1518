"""SQLite implementation of paper storage."""

import aiosqlite

from printpress.config import get_logger
from printpress.core.clock import utcnow
from printpress.core.entities.paper import Paper, PaperType
from printpress.core.entities.stock import StockEntry
from printpress.core.interfaces.paper_store import IPaperStore
from printpress.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from printpress.infrastructure.storage.sqlite.rows import format_timestamp, parse_timestamp

logger = get_logger(__name__)


class SQLitePaperStore(IPaperStore):
    """SQLite implementation of tenant-scoped paper storage."""

    async def create_paper(self, paper: Paper) -> Paper:
        """Create a new paper."""
        now = utcnow()
        paper.created_at = now
        paper.updated_at = now
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO papers (
                    admin_id, paper_name, paper_type, paper_type_other,
                    paper_size, paper_weight, units, original_stock,
                    created_by, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    paper.admin_id,
                    paper.paper_name,
                    paper.paper_type.value,
                    paper.paper_type_other,
                    paper.paper_size,
                    paper.paper_weight,
                    paper.units,
                    paper.original_stock,
                    paper.created_by,
                    format_timestamp(paper.created_at),
                    format_timestamp(paper.updated_at),
                ),
            )
            paper.id = cursor.lastrowid
            logger.info(
                "paper_created",
                paper_id=paper.id,
                admin_id=paper.admin_id,
                original_stock=paper.original_stock,
            )
            return paper

    async def get_paper(self, admin_id: str, paper_id: int) -> Paper | None:
        """Get a paper owned by *admin_id*."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM papers WHERE id = ? AND admin_id = ?",
                (paper_id, admin_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_paper(row)

    async def list_papers(
        self, admin_id: str, limit: int = 100, offset: int = 0
    ) -> list[Paper]:
        """List papers, newest first."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM papers
                WHERE admin_id = ?
                ORDER BY created_at DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                (admin_id, limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_paper(row) for row in rows]

    async def update_paper(
        self, paper: Paper, rebalanced: list[StockEntry] | None = None
    ) -> Paper:
        """Update paper attributes and any rebalanced entries atomically."""
        paper.updated_at = utcnow()
        async with get_transaction() as conn:
            await conn.execute(
                """
                UPDATE papers SET
                    paper_name = ?,
                    paper_type = ?,
                    paper_type_other = ?,
                    paper_size = ?,
                    paper_weight = ?,
                    units = ?,
                    original_stock = ?,
                    updated_at = ?
                WHERE id = ? AND admin_id = ?
                """,
                (
                    paper.paper_name,
                    paper.paper_type.value,
                    paper.paper_type_other,
                    paper.paper_size,
                    paper.paper_weight,
                    paper.units,
                    paper.original_stock,
                    format_timestamp(paper.updated_at),
                    paper.id,
                    paper.admin_id,
                ),
            )
            if rebalanced:
                await conn.executemany(
                    """
                    UPDATE stock_entries SET remaining = ?, clamped = ?
                    WHERE id = ? AND admin_id = ? AND paper_id = ?
                    """,
                    [
                        (e.remaining, int(e.clamped), e.id, paper.admin_id, paper.id)
                        for e in rebalanced
                    ],
                )
            logger.info(
                "paper_updated",
                paper_id=paper.id,
                rebalanced=len(rebalanced or []),
            )
            return paper

    async def delete_paper(self, admin_id: str, paper_id: int) -> bool:
        """Delete a paper. Returns False if nothing was deleted."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM papers WHERE id = ? AND admin_id = ?",
                (paper_id, admin_id),
            )
            deleted = cursor.rowcount > 0
            if deleted:
                logger.info("paper_deleted", paper_id=paper_id)
            return deleted

    @staticmethod
    def _row_to_paper(row: aiosqlite.Row) -> Paper:
        return Paper(
            id=row["id"],
            admin_id=row["admin_id"],
            paper_name=row["paper_name"],
            paper_type=PaperType(row["paper_type"]),
            paper_type_other=row["paper_type_other"],
            paper_size=row["paper_size"],
            paper_weight=row["paper_weight"],
            units=row["units"],
            original_stock=float(row["original_stock"]),
            created_by=row["created_by"],
            created_at=parse_timestamp(row["created_at"]),
            updated_at=parse_timestamp(row["updated_at"]),
        )

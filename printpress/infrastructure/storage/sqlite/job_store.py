"""SQLite implementation of job storage."""

import aiosqlite

from printpress.config import get_logger
from printpress.core.clock import utcnow
from printpress.core.entities.job import Job
from printpress.core.interfaces.job_store import IJobStore
from printpress.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from printpress.infrastructure.storage.sqlite.rows import format_timestamp, parse_timestamp

logger = get_logger(__name__)


class SQLiteJobStore(IJobStore):
    """SQLite implementation of job storage."""

    async def create_job(self, job: Job) -> Job:
        now = utcnow()
        job.created_at = now
        job.updated_at = now
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO jobs (
                    admin_id, job_no, job_name, client_name, job_date,
                    delivery_date, quantity, paper_id, remarks,
                    created_by, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    job.admin_id,
                    job.job_no,
                    job.job_name,
                    job.client_name,
                    job.job_date,
                    job.delivery_date,
                    job.quantity,
                    job.paper_id,
                    job.remarks,
                    job.created_by,
                    format_timestamp(job.created_at),
                    format_timestamp(job.updated_at),
                ),
            )
            job.id = cursor.lastrowid
            logger.info("job_created", job_id=job.id, job_no=job.job_no)
            return job

    async def get_job(self, admin_id: str, job_id: int) -> Job | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM jobs WHERE id = ? AND admin_id = ?",
                (job_id, admin_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_job(row)

    async def list_jobs(
        self, admin_id: str, limit: int = 100, offset: int = 0
    ) -> list[Job]:
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM jobs
                WHERE admin_id = ?
                ORDER BY created_at DESC, id DESC
                LIMIT ? OFFSET ?
                """,
                (admin_id, limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_job(row) for row in rows]

    @staticmethod
    def _row_to_job(row: aiosqlite.Row) -> Job:
        return Job(
            id=row["id"],
            admin_id=row["admin_id"],
            job_no=row["job_no"],
            job_name=row["job_name"],
            client_name=row["client_name"],
            job_date=row["job_date"],
            delivery_date=row["delivery_date"],
            quantity=int(row["quantity"] or 0),
            paper_id=row["paper_id"],
            remarks=row["remarks"],
            created_by=row["created_by"],
            created_at=parse_timestamp(row["created_at"]),
            updated_at=parse_timestamp(row["updated_at"]),
        )

"""SQLite implementation of tenant settings and counters."""

import aiosqlite

from printpress.config import get_logger
from printpress.core.clock import utcnow
from printpress.core.entities.tenant import CounterName, TenantSettings
from printpress.core.interfaces.tenant_store import ITenantStore
from printpress.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from printpress.infrastructure.storage.sqlite.rows import format_timestamp, parse_timestamp

logger = get_logger(__name__)


class SQLiteTenantStore(ITenantStore):
    """SQLite implementation of per-tenant settings and sequence counters."""

    async def get_settings(self, admin_id: str) -> TenantSettings | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM tenant_settings WHERE admin_id = ?", (admin_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_settings(row)

    async def save_settings(self, settings: TenantSettings) -> TenantSettings:
        settings.updated_at = utcnow()
        async with get_transaction() as conn:
            await conn.execute(
                """
                INSERT INTO tenant_settings (
                    admin_id, company_name, company_address, company_phone,
                    company_email, quotation_prefix, job_prefix,
                    estimate_prefix, challan_prefix, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT (admin_id) DO UPDATE SET
                    company_name = excluded.company_name,
                    company_address = excluded.company_address,
                    company_phone = excluded.company_phone,
                    company_email = excluded.company_email,
                    quotation_prefix = excluded.quotation_prefix,
                    job_prefix = excluded.job_prefix,
                    estimate_prefix = excluded.estimate_prefix,
                    challan_prefix = excluded.challan_prefix,
                    updated_at = excluded.updated_at
                """,
                (
                    settings.admin_id,
                    settings.company_name,
                    settings.company_address,
                    settings.company_phone,
                    settings.company_email,
                    settings.quotation_prefix,
                    settings.job_prefix,
                    settings.estimate_prefix,
                    settings.challan_prefix,
                    format_timestamp(settings.updated_at),
                ),
            )
            logger.info("tenant_settings_saved", admin_id=settings.admin_id)
            return settings

    async def next_counter_value(self, admin_id: str, counter: CounterName) -> int:
        """Atomically increment a counter and return its new value."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO counters (admin_id, name, sequence_value)
                VALUES (?, ?, 1)
                ON CONFLICT (admin_id, name)
                DO UPDATE SET sequence_value = sequence_value + 1
                RETURNING sequence_value
                """,
                (admin_id, counter.value),
            )
            row = await cursor.fetchone()
            value = int(row[0])
            logger.debug("counter_incremented", counter=counter.value, value=value)
            return value

    async def reset_counter(self, admin_id: str, counter: CounterName) -> None:
        async with get_transaction() as conn:
            await conn.execute(
                """
                INSERT INTO counters (admin_id, name, sequence_value)
                VALUES (?, ?, 0)
                ON CONFLICT (admin_id, name) DO UPDATE SET sequence_value = 0
                """,
                (admin_id, counter.value),
            )
            logger.info("counter_reset", admin_id=admin_id, counter=counter.value)

    @staticmethod
    def _row_to_settings(row: aiosqlite.Row) -> TenantSettings:
        return TenantSettings(
            admin_id=row["admin_id"],
            company_name=row["company_name"],
            company_address=row["company_address"],
            company_phone=row["company_phone"],
            company_email=row["company_email"],
            quotation_prefix=row["quotation_prefix"],
            job_prefix=row["job_prefix"],
            estimate_prefix=row["estimate_prefix"],
            challan_prefix=row["challan_prefix"],
            updated_at=parse_timestamp(row["updated_at"]),
        )

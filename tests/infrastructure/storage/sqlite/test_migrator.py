"""Tests for the database migrator and ledger audit."""

from pathlib import Path

import aiosqlite

from printpress.infrastructure.storage.sqlite.migrations import (
    audit_ledgers,
    get_migration_status,
    initialize_database,
    verify_schema_integrity,
)
from printpress.infrastructure.storage.sqlite.migrations.migrator import discover_migrations


async def _seed_ledger(db_path: Path, remainings: list[float]) -> None:
    """One paper with 1000 original stock and issues of 100 each."""
    async with aiosqlite.connect(db_path) as conn:
        await conn.execute(
            """
            INSERT INTO papers (
                id, admin_id, paper_name, paper_type, paper_size, paper_weight,
                units, original_stock, created_at, updated_at
            ) VALUES (1, 'admin-1', 'Art', 'Ream', 'A4', '80', 'Ream', 1000, '2024-01-01', '2024-01-01')
            """
        )
        for day, remaining in enumerate(remainings, 1):
            await conn.execute(
                """
                INSERT INTO stock_entries (
                    admin_id, paper_id, entry_date, issued_paper, remaining,
                    created_at, updated_at
                ) VALUES ('admin-1', 1, ?, 100, ?, '2024-01-01', '2024-01-01')
                """,
                (f"2081-01-{day:02d}", remaining),
            )
        await conn.commit()


class TestInitializeDatabase:
    async def test_fresh_database(self, temp_db_path):
        results = await initialize_database(temp_db_path, create_backup_before=False)

        assert results
        assert all(r.success for r in results)
        checks = await verify_schema_integrity(temp_db_path)
        assert all(c["status"] == "PASS" for c in checks)

    async def test_rerun_is_noop(self, temp_db_path):
        await initialize_database(temp_db_path, create_backup_before=False)
        assert await initialize_database(temp_db_path, create_backup_before=True) == []
        assert not list(temp_db_path.parent.glob("*.backup*"))

    async def test_status(self, temp_db_path):
        missing = await get_migration_status(temp_db_path)
        assert missing["exists"] is False

        await initialize_database(temp_db_path, create_backup_before=False)
        status = await get_migration_status(temp_db_path)
        assert status["pending_migrations"] == []
        assert status["current_version"] == discover_migrations()[-1].version


class TestAuditLedgers:
    async def test_consistent_ledger(self, temp_db_path):
        await initialize_database(temp_db_path, create_backup_before=False)
        await _seed_ledger(temp_db_path, [900, 800, 700])

        [result] = await audit_ledgers(temp_db_path)

        assert result.entries == 3
        assert result.violations == []

    async def test_detects_without_repair(self, temp_db_path):
        await initialize_database(temp_db_path, create_backup_before=False)
        await _seed_ledger(temp_db_path, [900, 850, 750])

        [result] = await audit_ledgers(temp_db_path)

        assert result.violations == [1]
        assert result.repaired == 0

    async def test_repair_rewrites_balances(self, temp_db_path):
        await initialize_database(temp_db_path, create_backup_before=False)
        await _seed_ledger(temp_db_path, [900, 850, 750])

        [result] = await audit_ledgers(temp_db_path, repair=True)
        assert result.repaired == 2

        [after] = await audit_ledgers(temp_db_path)
        assert after.violations == []
        async with aiosqlite.connect(temp_db_path) as conn:
            cursor = await conn.execute(
                "SELECT remaining FROM stock_entries ORDER BY entry_date"
            )
            assert [row[0] for row in await cursor.fetchall()] == [900, 800, 700]

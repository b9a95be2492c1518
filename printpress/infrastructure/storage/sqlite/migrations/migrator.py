"""
Schema migrator for the ledger database.

Migrations are ``vNNN_name.sql`` files beside this module, applied in
version order and recorded with a checksum in ``schema_migrations``. An
applied file whose checksum later changes stops the run. Before touching
an existing database a timestamped copy is taken and restored if any
migration fails.

The same CLI audits stored stock balances (``--audit-ledgers``) and can
rewrite inconsistent ledgers (``--repair``).

Usage:
    printpress-migrate                  apply pending migrations
    printpress-migrate --status
    printpress-migrate --verify
    printpress-migrate --audit-ledgers [--repair]
"""

import argparse
import asyncio
import hashlib
import re
import shutil
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import aiosqlite

from printpress.config import get_logger, get_settings
from printpress.core.services.stock_ledger import find_violations, recompute_forward

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent

_FILENAME_RE = re.compile(r"^v(\d+)_(\w+)\.sql$")

REQUIRED_TABLES = (
    "schema_migrations",
    "papers",
    "stock_entries",
    "jobs",
    "tenant_settings",
    "counters",
)


class MigrationChecksumError(RuntimeError):
    """An applied migration file was edited after it ran."""


@dataclass(frozen=True)
class MigrationInfo:
    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = _FILENAME_RE.match(path.name)
        if match is None:
            raise ValueError(f"Invalid migration filename: {path.name}")
        digest = hashlib.sha256(path.read_bytes()).hexdigest()[:16]
        return cls(version=match.group(1), name=match.group(2), path=path, checksum=digest)


@dataclass
class MigrationResult:
    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


@dataclass
class LedgerAuditResult:
    """Outcome of checking one paper's ledger."""

    paper_id: int
    admin_id: str
    entries: int
    violations: list[int]
    repaired: int = 0


def discover_migrations() -> list[MigrationInfo]:
    """Migration files in version order; badly named files are skipped."""
    found = []
    for path in sorted(MIGRATIONS_DIR.glob("v*.sql")):
        try:
            found.append(MigrationInfo.from_file(path))
        except ValueError as e:
            logger.warning("skipping_invalid_migration", path=str(path), error=str(e))
    return found


async def get_applied_migrations(conn: aiosqlite.Connection) -> dict[str, str]:
    """Applied versions mapped to their recorded checksums."""
    try:
        rows = await conn.execute_fetchall(
            "SELECT version, checksum FROM schema_migrations ORDER BY version"
        )
    except aiosqlite.OperationalError:
        # Fresh database: the tracking table comes with v001
        return {}
    return {row[0]: row[1] for row in rows}


async def get_current_version(conn: aiosqlite.Connection) -> str | None:
    applied = await get_applied_migrations(conn)
    return max(applied) if applied else None


def pending_migrations(
    discovered: list[MigrationInfo], applied: dict[str, str]
) -> list[MigrationInfo]:
    """Migrations not yet applied.

    Raises:
        MigrationChecksumError: if an applied file no longer matches.
    """
    pending = []
    for migration in discovered:
        recorded = applied.get(migration.version)
        if recorded is None:
            pending.append(migration)
        elif recorded != migration.checksum:
            raise MigrationChecksumError(
                f"Migration v{migration.version} ({migration.name}) changed after it was applied"
            )
    return pending


async def apply_migration(conn: aiosqlite.Connection, migration: MigrationInfo) -> MigrationResult:
    """Run one migration script and record it; failures are returned, not raised."""
    logger.info("applying_migration", version=migration.version, name=migration.name)
    started = time.perf_counter()

    def elapsed() -> int:
        return int((time.perf_counter() - started) * 1000)

    try:
        await conn.executescript(migration.path.read_text(encoding="utf-8"))
        await conn.execute(
            "INSERT INTO schema_migrations (version, name, checksum, execution_time_ms) "
            "VALUES (?, ?, ?, ?)",
            (migration.version, migration.name, migration.checksum, elapsed()),
        )
        await conn.commit()
    except Exception as e:
        await conn.rollback()
        logger.error("migration_failed", version=migration.version, error=str(e))
        return MigrationResult(migration.version, migration.name, False, elapsed(), str(e))

    logger.info("migration_applied", version=migration.version, execution_time_ms=elapsed())
    return MigrationResult(migration.version, migration.name, True, elapsed())


def create_backup(db_path: Path) -> Path:
    """Copy the database file to ``<name>.backup_<timestamp>.db``."""
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = db_path.with_suffix(f".backup_{stamp}.db")
    shutil.copy2(db_path, backup_path)
    logger.info("database_backup_created", backup_path=str(backup_path))
    return backup_path


def restore_backup(db_path: Path, backup_path: Path) -> None:
    shutil.copy2(backup_path, db_path)
    logger.warning("database_restored_from_backup", backup_path=str(backup_path))


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
) -> list[MigrationResult]:
    """
    Apply every pending migration to *db_path*.

    Returns one result per migration attempted; an up-to-date database
    gives an empty list and no backup. The run stops at the first failed
    migration, and the pre-run copy is restored.
    """
    db_path = Path(db_path or get_settings().storage.db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    async with aiosqlite.connect(db_path) as conn:
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA foreign_keys=ON")
        todo = pending_migrations(discover_migrations(), await get_applied_migrations(conn))

    if not todo:
        logger.info("database_up_to_date", db_path=str(db_path))
        return []

    backup_path = None
    if create_backup_before and db_path.stat().st_size > 0:
        backup_path = create_backup(db_path)

    results: list[MigrationResult] = []
    try:
        async with aiosqlite.connect(db_path) as conn:
            await conn.execute("PRAGMA foreign_keys=ON")
            for migration in todo:
                result = await apply_migration(conn, migration)
                results.append(result)
                if not result.success:
                    break
            if results[-1].success:
                fk_violations = await conn.execute_fetchall("PRAGMA foreign_key_check")
                if fk_violations:
                    logger.error("foreign_key_violations_after_migration", count=len(fk_violations))
    except Exception as e:
        logger.error("database_initialization_failed", error=str(e))
        if backup_path:
            restore_backup(db_path, backup_path)
        raise

    if backup_path:
        if results[-1].success:
            backup_path.unlink()
        else:
            restore_backup(db_path, backup_path)

    logger.info(
        "database_initialized",
        db_path=str(db_path),
        applied=[r.version for r in results if r.success],
    )
    return results


# Alias used by the application lifespan
run_migrations = initialize_database


async def get_migration_status(db_path: Path | None = None) -> dict:
    db_path = Path(db_path or get_settings().storage.db_path)
    if not db_path.exists():
        return {
            "exists": False,
            "current_version": None,
            "applied_migrations": [],
            "pending_migrations": [],
        }

    discovered = discover_migrations()
    async with aiosqlite.connect(db_path) as conn:
        applied = await get_applied_migrations(conn)

    return {
        "exists": True,
        "current_version": max(applied) if applied else None,
        "applied_migrations": sorted(applied),
        "pending_migrations": [m.version for m in discovered if m.version not in applied],
        "total_migrations": len(discovered),
    }


async def verify_schema_integrity(db_path: Path | None = None) -> list[dict]:
    """Foreign key, page integrity and required table checks, each PASS or FAIL."""
    db_path = Path(db_path or get_settings().storage.db_path)

    async with aiosqlite.connect(db_path) as conn:
        fk_violations = await conn.execute_fetchall("PRAGMA foreign_key_check")
        (integrity,) = (await conn.execute_fetchall("PRAGMA integrity_check"))[0]
        tables = {
            row[0]
            for row in await conn.execute_fetchall(
                "SELECT name FROM sqlite_master WHERE type = 'table'"
            )
        }

    missing = [name for name in REQUIRED_TABLES if name not in tables]
    return [
        {
            "check": "foreign_keys",
            "status": "FAIL" if fk_violations else "PASS",
            "violations": len(fk_violations),
        },
        {
            "check": "integrity",
            "status": "PASS" if integrity == "ok" else "FAIL",
            "result": integrity,
        },
        {
            "check": "required_tables",
            "status": "FAIL" if missing else "PASS",
            "missing": missing,
        },
    ]


async def audit_ledgers(
    db_path: Path | None = None,
    repair: bool = False,
) -> list[LedgerAuditResult]:
    """
    Check every paper's stored balances against a full recomputation.

    With ``repair`` set, inconsistent ledgers are recomputed from their
    first entry and written back, one transaction per paper. Run while
    the API is stopped; the per-paper request locks do not reach this
    process.
    """
    from printpress.infrastructure.storage.sqlite.stock_store import SQLiteStockStore

    db_path = Path(db_path or get_settings().storage.db_path)
    results: list[LedgerAuditResult] = []

    async with aiosqlite.connect(db_path) as conn:
        conn.row_factory = aiosqlite.Row
        papers = await conn.execute_fetchall(
            "SELECT id, admin_id, original_stock FROM papers ORDER BY id"
        )

        for paper in papers:
            opening = float(paper["original_stock"])
            rows = await conn.execute_fetchall(
                """
                SELECT * FROM stock_entries
                WHERE admin_id = ? AND paper_id = ?
                ORDER BY entry_date ASC, created_at ASC, id ASC
                """,
                (paper["admin_id"], paper["id"]),
            )
            entries = [SQLiteStockStore.row_to_entry(row) for row in rows]
            audit = LedgerAuditResult(
                paper_id=paper["id"],
                admin_id=paper["admin_id"],
                entries=len(entries),
                violations=find_violations(entries, opening),
            )

            if audit.violations and repair:
                changed = recompute_forward(entries, 0, opening)
                await conn.executemany(
                    "UPDATE stock_entries SET remaining = ?, clamped = ? WHERE id = ?",
                    [(e.remaining, int(e.clamped), e.id) for e in changed],
                )
                await conn.commit()
                audit.repaired = len(changed)
                logger.warning(
                    "ledger_repaired",
                    paper_id=audit.paper_id,
                    admin_id=audit.admin_id,
                    repaired=audit.repaired,
                )

            results.append(audit)

    return results


def _print_status(status: dict) -> None:
    print(f"Database exists:    {status['exists']}")
    print(f"Current version:    {status['current_version'] or 'N/A'}")
    print(f"Applied migrations: {', '.join(status['applied_migrations']) or '-'}")
    print(f"Pending migrations: {', '.join(status['pending_migrations']) or '-'}")


def _print_checks(checks: list[dict]) -> None:
    for check in checks:
        print(f"[{check['status']}] {check['check']}")
        if check["status"] != "PASS":
            for key, value in check.items():
                if key not in ("check", "status"):
                    print(f"       {key}: {value}")


def _print_audits(audits: list[LedgerAuditResult]) -> None:
    for audit in audits:
        line = f"[{'STALE' if audit.violations else 'OK'}] paper {audit.paper_id} ({audit.entries} entries)"
        if audit.violations:
            line += f" positions {audit.violations}"
        if audit.repaired:
            line += f", repaired {audit.repaired}"
        print(line)
    print(f"{sum(1 for a in audits if a.violations)} of {len(audits)} ledgers inconsistent")


def _print_results(results: list[MigrationResult]) -> None:
    if not results:
        print("Nothing to apply")
    for result in results:
        state = "SUCCESS" if result.success else "FAILED"
        print(f"[{state}] v{result.version}: {result.name} ({result.execution_time_ms}ms)")
        if result.error:
            print(f"         Error: {result.error}")


def main() -> None:
    """Entry point of ``printpress-migrate``."""
    parser = argparse.ArgumentParser(description="Printpress database migrator")
    parser.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--status", action="store_true", help="Show migration status")
    mode.add_argument("--verify", action="store_true", help="Verify schema integrity")
    mode.add_argument(
        "--audit-ledgers",
        action="store_true",
        help="Check stored stock balances against a recomputation",
    )
    parser.add_argument(
        "--repair",
        action="store_true",
        help="With --audit-ledgers, rewrite inconsistent balances",
    )
    parser.add_argument("--no-backup", action="store_true", help="Skip backup before migrating")
    args = parser.parse_args()

    if args.status:
        _print_status(asyncio.run(get_migration_status(args.db_path)))
    elif args.verify:
        _print_checks(asyncio.run(verify_schema_integrity(args.db_path)))
    elif args.audit_ledgers:
        _print_audits(asyncio.run(audit_ledgers(args.db_path, repair=args.repair)))
    else:
        _print_results(
            asyncio.run(initialize_database(args.db_path, create_backup_before=not args.no_backup))
        )


if __name__ == "__main__":
    main()

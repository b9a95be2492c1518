"""Versioned SQL migrations and the migrator that applies them."""

from printpress.infrastructure.storage.sqlite.migrations.migrator import (
    audit_ledgers,
    get_migration_status,
    initialize_database,
    run_migrations,
    verify_schema_integrity,
)

__all__ = [
    "initialize_database",
    "run_migrations",
    "get_migration_status",
    "verify_schema_integrity",
    "audit_ledgers",
]

"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from printpress.core.entities import (
    EntryKind,
    Paper,
    PaperType,
    Principal,
    StockEntry,
    UserRole,
)
from printpress.infrastructure.auth import create_access_token

ADMIN_ID = "admin-1"

BASE_TIME = datetime(2024, 4, 14, 9, 0, 0)


@pytest.fixture
def admin_principal() -> Principal:
    return Principal(id=ADMIN_ID, email="owner@press.test", role=UserRole.ADMIN)


@pytest.fixture
def user_principal() -> Principal:
    return Principal(
        id="user-7", email="clerk@press.test", role=UserRole.USER, admin_id=ADMIN_ID
    )


@pytest.fixture
def other_tenant_principal() -> Principal:
    return Principal(id="admin-2", email="rival@press.test", role=UserRole.ADMIN)


@pytest.fixture
def admin_headers(admin_principal: Principal) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(admin_principal)}"}


@pytest.fixture
def user_headers(user_principal: Principal) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user_principal)}"}


@pytest.fixture
def sample_paper() -> Paper:
    return Paper(
        id=1,
        admin_id=ADMIN_ID,
        paper_name="Art Paper",
        paper_type=PaperType.REAM,
        paper_size="A4",
        paper_weight="80 GSM",
        units="Ream",
        original_stock=1000,
    )


def make_entry(
    entry_id: int | None,
    entry_date: str,
    *,
    issued: float = 0,
    wastage: float = 0,
    added: float = 0,
    remaining: float = 0,
    paper_id: int = 1,
    minutes: int = 0,
) -> StockEntry:
    """Ledger row helper; ``minutes`` offsets created_at from a fixed base."""
    return StockEntry(
        id=entry_id,
        admin_id=ADMIN_ID,
        paper_id=paper_id,
        entry_date=entry_date,
        kind=EntryKind.ADDITION if added else EntryKind.ISSUE,
        issued_paper=issued,
        wastage=wastage,
        added_stock=added,
        remaining=remaining,
        created_at=BASE_TIME + timedelta(minutes=minutes),
        updated_at=BASE_TIME + timedelta(minutes=minutes),
    )


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
def mock_settings(temp_db_path: Path):
    """Mock settings with temp database path."""
    mock = MagicMock()
    mock.storage.db_path = temp_db_path
    mock.storage.pool_size = 2
    mock.storage.busy_timeout = 5000
    return mock


@pytest.fixture
async def sqlite_db(temp_db_path: Path, mock_settings) -> AsyncGenerator[Path, None]:
    """Migrated temp database wired into the global connection pool."""
    import printpress.infrastructure.storage.sqlite.connection as conn_module
    from printpress.application.services import reset_services
    from printpress.infrastructure.storage.sqlite.connection import close_pool
    from printpress.infrastructure.storage.sqlite.migrations import initialize_database

    await initialize_database(temp_db_path, create_backup_before=False)

    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        reset_services()
        try:
            yield temp_db_path
        finally:
            await close_pool()
            reset_services()


@pytest.fixture
def entry_factory():
    """Build ledger rows; see ``make_entry``."""
    return make_entry

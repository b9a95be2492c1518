"""Tests for GetStockEntriesUseCase."""

from unittest.mock import AsyncMock

import pytest

from printpress.application.use_cases import GetStockEntriesUseCase
from printpress.core.entities import Job
from printpress.core.exceptions import PaperNotFoundError, StockEntryNotFoundError


@pytest.fixture
def mock_job_store():
    store = AsyncMock()
    store.get_job.return_value = Job(
        id=4, admin_id="admin-1", job_no="J-004", job_name="Brochure (reprint)"
    )
    return store


class TestGetStockEntriesUseCase:
    async def test_list_requires_known_paper(self, admin_principal):
        paper_store = AsyncMock()
        paper_store.get_paper.return_value = None
        use_case = GetStockEntriesUseCase(paper_store=paper_store, stock_store=AsyncMock())
        with pytest.raises(PaperNotFoundError):
            await use_case.list_for_paper(admin_principal, 3)

    async def test_get_missing(self, admin_principal):
        stock_store = AsyncMock()
        stock_store.get_entry.return_value = None
        with pytest.raises(StockEntryNotFoundError):
            await GetStockEntriesUseCase(stock_store=stock_store).get(admin_principal, 8)

    async def test_detail_shows_current_job_next_to_snapshot(
        self, user_principal, mock_job_store, entry_factory
    ):
        entry = entry_factory(10, "2081-01-01", issued=5, remaining=995)
        entry.job_id, entry.job_no, entry.job_name = 4, "J-004", "Brochure"
        use_case = GetStockEntriesUseCase(job_store=mock_job_store)

        job = await use_case.linked_job(user_principal, entry)
        response = use_case.to_detail_response(entry, job)

        mock_job_store.get_job.assert_called_once_with("admin-1", 4)
        assert response.stock_entry.job_name == "Brochure"
        assert response.job.job_name == "Brochure (reprint)"

    async def test_no_job_skips_lookup(self, admin_principal, mock_job_store, entry_factory):
        entry = entry_factory(10, "2081-01-01", issued=5, remaining=995)
        use_case = GetStockEntriesUseCase(job_store=mock_job_store)

        assert await use_case.linked_job(admin_principal, entry) is None
        assert use_case.to_detail_response(entry).job is None
        mock_job_store.get_job.assert_not_called()

"""Tests for UpdateStockEntryUseCase."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from printpress.application.dto.requests import UpdateStockEntryRequest
from printpress.application.use_cases.update_stock_entry import UpdateStockEntryUseCase
from printpress.core.entities import EntryKind, Job
from printpress.core.exceptions import (
    InvalidEntryKindError,
    JobNotFoundError,
    StockEntryNotFoundError,
)
from printpress.core.services.stock_ledger import LedgerLockRegistry


async def _echo(entry, cascade, verify=None):
    return entry


@pytest.fixture
def ledger(entry_factory):
    """A (issue 100 + 10 wastage) then B (add 200) on 1000 original stock."""
    return [
        entry_factory(1, "2081-01-01", issued=100, wastage=10, remaining=890, minutes=1),
        entry_factory(2, "2081-01-05", added=200, remaining=1090, minutes=2),
    ]


@pytest.fixture
def mock_stock_store(ledger):
    store = AsyncMock()
    store.get_entry.side_effect = lambda admin_id, entry_id: next(
        (e.model_copy() for e in ledger if e.id == entry_id), None
    )
    store.list_entries.return_value = ledger
    store.update_with_cascade.side_effect = _echo
    return store


@pytest.fixture
def mock_paper_store(sample_paper):
    store = AsyncMock()
    store.get_paper.return_value = sample_paper
    return store


@pytest.fixture
def mock_job_store():
    return AsyncMock()


@pytest.fixture
def use_case(mock_paper_store, mock_stock_store, mock_job_store):
    return UpdateStockEntryUseCase(
        paper_store=mock_paper_store,
        stock_store=mock_stock_store,
        job_store=mock_job_store,
        locks=LedgerLockRegistry(),
        verify_after_write=False,
    )


class TestUpdateStockEntryUseCase:
    async def test_edit_quantity_cascades(self, use_case, admin_principal, mock_stock_store):
        request = UpdateStockEntryRequest(issued_paper=50)
        result = await use_case.execute(admin_principal, 1, request)

        assert result.entry.remaining == 940
        assert result.entry.wastage == 10
        assert result.cascaded == 1
        _, cascade = mock_stock_store.update_with_cascade.call_args[0]
        assert cascade[0].id == 2
        assert cascade[0].remaining == 1140

    async def test_edit_last_entry_has_no_cascade(self, use_case, admin_principal):
        result = await use_case.execute(admin_principal, 2, UpdateStockEntryRequest(added_stock=100))
        assert result.entry.remaining == 990
        assert result.cascaded == 0

    async def test_moving_date_earlier_recomputes_from_new_position(
        self, use_case, admin_principal, mock_stock_store
    ):
        request = UpdateStockEntryRequest(entry_date="2080-12-30")
        result = await use_case.execute(admin_principal, 2, request)

        assert result.entry.entry_date == "2080-12-30"
        assert result.entry.remaining == 1200
        _, cascade = mock_stock_store.update_with_cascade.call_args[0]
        assert [(e.id, e.remaining) for e in cascade] == [(1, 1090)]

    async def test_moving_date_later_recomputes_from_old_position(
        self, use_case, admin_principal, mock_stock_store
    ):
        request = UpdateStockEntryRequest(entry_date="2081-01-10")
        result = await use_case.execute(admin_principal, 1, request)

        assert result.entry.remaining == 1090
        _, cascade = mock_stock_store.update_with_cascade.call_args[0]
        assert [(e.id, e.remaining) for e in cascade] == [(2, 1200)]

    async def test_mixing_kinds_rejected(self, use_case, admin_principal):
        with pytest.raises(InvalidEntryKindError):
            await use_case.execute(admin_principal, 1, UpdateStockEntryRequest(added_stock=50))

    async def test_switch_issue_to_addition(self, use_case, admin_principal):
        request = UpdateStockEntryRequest(issued_paper=0, wastage=0, added_stock=300)
        result = await use_case.execute(admin_principal, 1, request)
        assert result.entry.kind == EntryKind.ADDITION
        assert result.entry.remaining == 1300

    async def test_entry_not_found(self, use_case, admin_principal):
        with pytest.raises(StockEntryNotFoundError):
            await use_case.execute(admin_principal, 99, UpdateStockEntryRequest(remarks="x"))

    async def test_remarks_only_keeps_balance(self, use_case, admin_principal):
        result = await use_case.execute(admin_principal, 1, UpdateStockEntryRequest(remarks="torn"))
        assert result.entry.remarks == "torn"
        assert result.entry.remaining == 890
        assert result.cascaded == 0

    async def test_linking_job_copies_snapshot(self, use_case, admin_principal, mock_job_store):
        mock_job_store.get_job.return_value = Job(
            id=4, admin_id="admin-1", job_no="J-004", job_name="Brochure"
        )
        result = await use_case.execute(admin_principal, 1, UpdateStockEntryRequest(job_id=4))
        assert result.entry.job_id == 4
        assert (result.entry.job_no, result.entry.job_name) == ("J-004", "Brochure")

    async def test_unlinking_job_clears_snapshot(self, use_case, admin_principal, ledger):
        ledger[0].job_id, ledger[0].job_no, ledger[0].job_name = 4, "J-004", "Brochure"
        request = UpdateStockEntryRequest.model_validate({"jobId": None})
        result = await use_case.execute(admin_principal, 1, request)
        assert result.entry.job_id is None
        assert result.entry.job_no is None
        assert result.entry.job_name is None

    async def test_unknown_job(self, use_case, admin_principal, mock_job_store):
        mock_job_store.get_job.return_value = None
        with pytest.raises(JobNotFoundError):
            await use_case.execute(admin_principal, 1, UpdateStockEntryRequest(job_id=40))

    async def test_concurrent_partial_edits_both_land(
        self, use_case, admin_principal, mock_stock_store, ledger
    ):
        async def slow_get_entry(admin_id, entry_id):
            # Both requests read the row before either takes the paper lock
            await asyncio.sleep(0)
            return next((e.model_copy() for e in ledger if e.id == entry_id), None)

        mock_stock_store.get_entry.side_effect = slow_get_entry

        await asyncio.gather(
            use_case.execute(admin_principal, 1, UpdateStockEntryRequest(issued_paper=50)),
            use_case.execute(admin_principal, 1, UpdateStockEntryRequest(wastage=5)),
        )

        final, _ = mock_stock_store.update_with_cascade.call_args[0]
        assert (final.issued_paper, final.wastage) == (50, 5)
        assert final.remaining == 945
        assert ledger[1].remaining == 1145

    async def test_verification_runs_inside_the_write(
        self, mock_paper_store, mock_stock_store, admin_principal, sample_paper
    ):
        use_case = UpdateStockEntryUseCase(
            paper_store=mock_paper_store,
            stock_store=mock_stock_store,
            job_store=AsyncMock(),
            locks=LedgerLockRegistry(),
            verify_after_write=True,
        )
        await use_case.execute(admin_principal, 1, UpdateStockEntryRequest(remarks="x"))

        assert mock_stock_store.update_with_cascade.call_args.kwargs["verify"] is sample_paper


class TestUpdateStockEntryRequest:
    def test_null_quantity_rejected(self):
        with pytest.raises(ValueError):
            UpdateStockEntryRequest.model_validate({"issuedPaper": None})

    def test_unset_fields_not_dumped(self):
        request = UpdateStockEntryRequest.model_validate({"wastage": 3})
        assert request.model_dump(exclude_unset=True) == {"wastage": 3}

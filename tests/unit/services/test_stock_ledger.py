"""Tests for the paper stock ledger rules."""

import asyncio

import pytest

from printpress.core.entities import EntryKind, Paper, PaperType
from printpress.core.services.stock_ledger import (
    LedgerLockRegistry,
    classify_entry,
    clamp_balance,
    find_violations,
    ledger_sort_key,
    opening_balance,
    position_of,
    recompute_forward,
    sort_ledger,
    summarize_ledger,
)


def balances(entries):
    return [e.remaining for e in entries]


class TestClassifyEntry:
    def test_issue(self):
        assert classify_entry(100, 10, 0) == EntryKind.ISSUE

    def test_wastage_only_is_issue(self):
        assert classify_entry(0, 5, 0) == EntryKind.ISSUE

    def test_addition(self):
        assert classify_entry(0, 0, 200) == EntryKind.ADDITION

    def test_mixed_is_rejected(self):
        assert classify_entry(10, 0, 200) is None
        assert classify_entry(0, 3, 200) is None


class TestClampBalance:
    def test_positive_untouched(self):
        assert clamp_balance(12.5) == (12.5, False)

    def test_zero_is_not_clamped(self):
        assert clamp_balance(0) == (0, False)

    def test_negative_floors_at_zero(self):
        assert clamp_balance(-1900) == (0.0, True)


class TestLedgerOrder:
    def test_sorts_by_date_then_created_at_then_id(self, entry_factory):
        late = entry_factory(1, "2081-01-05")
        early_second = entry_factory(3, "2081-01-01", minutes=5)
        early_first = entry_factory(2, "2081-01-01", minutes=1)
        tie_low_id = entry_factory(4, "2081-01-03")
        tie_high_id = entry_factory(9, "2081-01-03")

        ordered = sort_ledger([late, tie_high_id, early_second, tie_low_id, early_first])

        assert [e.id for e in ordered] == [2, 3, 4, 9, 1]

    def test_unsaved_entry_sorts_after_saved_ties(self, entry_factory):
        saved = entry_factory(7, "2081-01-03")
        unsaved = entry_factory(None, "2081-01-03")
        assert sort_ledger([unsaved, saved]) == [saved, unsaved]
        assert ledger_sort_key(unsaved)[2] == float("inf")

    def test_position_of(self, entry_factory):
        entries = [entry_factory(4, "2081-01-01"), entry_factory(8, "2081-01-02")]
        assert position_of(entries, 8) == 1
        assert position_of(entries, 99) == -1


class TestRecomputeForward:
    def test_first_entry_uses_original_stock(self, entry_factory):
        ledger = [entry_factory(1, "2081-01-01", issued=100, wastage=10)]
        changed = recompute_forward(ledger, 0, 1000)
        assert ledger[0].remaining == 890
        assert changed == ledger

    def test_running_balance(self, entry_factory):
        ledger = [
            entry_factory(1, "2081-01-01", issued=100, wastage=10),
            entry_factory(2, "2081-01-03", issued=40),
            entry_factory(3, "2081-01-05", added=200),
        ]
        recompute_forward(ledger, 0, 1000)
        assert balances(ledger) == [890, 850, 1050]

    def test_leaves_entries_before_start_alone(self, entry_factory):
        ledger = [
            entry_factory(1, "2081-01-01", issued=100, remaining=123),
            entry_factory(2, "2081-01-05", added=200),
        ]
        changed = recompute_forward(ledger, 1, 1000)
        assert ledger[0].remaining == 123
        assert ledger[1].remaining == 323
        assert changed == [ledger[1]]

    def test_opening_balance(self, entry_factory):
        ledger = [entry_factory(1, "2081-01-01", remaining=400)]
        assert opening_balance(ledger, 0, 1000) == 1000
        assert opening_balance(ledger, 1, 1000) == 400

    def test_clamps_overdraw_to_zero(self, entry_factory):
        ledger = [
            entry_factory(1, "2081-01-01", issued=900),
            entry_factory(2, "2081-01-02", issued=2000),
        ]
        recompute_forward(ledger, 0, 1000)
        assert ledger[0].remaining == 100
        assert ledger[1].remaining == 0
        assert ledger[1].clamped is True
        assert ledger[0].clamped is False

    def test_clamped_zero_is_the_next_base(self, entry_factory):
        ledger = [
            entry_factory(1, "2081-01-01", issued=5000),
            entry_factory(2, "2081-01-02", added=50),
        ]
        recompute_forward(ledger, 0, 100)
        assert balances(ledger) == [0, 50]

    def test_clearing_a_clamp_is_reported_as_change(self, entry_factory):
        entry = entry_factory(1, "2081-01-01", issued=10)
        entry.clamped = True
        changed = recompute_forward([entry], 0, 100)
        assert changed == [entry]
        assert entry.clamped is False
        assert entry.remaining == 90

    def test_idempotent(self, entry_factory):
        ledger = [
            entry_factory(1, "2081-01-01", issued=100),
            entry_factory(2, "2081-01-02", added=30),
            entry_factory(3, "2081-01-03", issued=10, wastage=2),
        ]
        recompute_forward(ledger, 0, 500)
        snapshot = balances(ledger)

        assert recompute_forward(ledger, 0, 500) == []
        assert balances(ledger) == snapshot

    def test_empty_ledger(self):
        assert recompute_forward([], 0, 1000) == []


class TestWorkedExample:
    """Insert, edit, back-dated insert and delete against one paper."""

    def test_full_sequence(self, entry_factory):
        original = 1000

        # 1. Insert A
        a = entry_factory(1, "2081-01-01", issued=100, wastage=10, minutes=1)
        ledger = [a]
        recompute_forward(ledger, 0, original)
        assert a.remaining == 890

        # 2. Insert B
        b = entry_factory(2, "2081-01-05", added=200, minutes=2)
        ledger = sort_ledger([*ledger, b])
        recompute_forward(ledger, position_of(ledger, 2), original)
        assert b.remaining == 1090

        # 3. Edit A
        a.issued_paper = 50
        recompute_forward(ledger, position_of(ledger, 1), original)
        assert (a.remaining, b.remaining) == (940, 1140)

        # 4. Back-dated C lands between A and B
        c = entry_factory(3, "2081-01-03", issued=40, minutes=3)
        ledger = sort_ledger([*ledger, c])
        assert [e.id for e in ledger] == [1, 3, 2]
        changed = recompute_forward(ledger, position_of(ledger, 3), original)
        assert (c.remaining, b.remaining) == (900, 1100)
        assert a not in changed

        # 5. Delete C
        position = position_of(ledger, 3)
        ledger.pop(position)
        recompute_forward(ledger, position, original)
        assert b.remaining == 1140

        assert find_violations(ledger, original) == []


class TestFindViolations:
    def test_consistent_ledger(self, entry_factory):
        ledger = [
            entry_factory(1, "2081-01-01", issued=10, remaining=90),
            entry_factory(2, "2081-01-02", added=10, remaining=100),
        ]
        assert find_violations(ledger, 100) == []

    def test_reports_each_bad_row_once(self, entry_factory):
        ledger = [
            entry_factory(1, "2081-01-01", issued=10, remaining=80),
            entry_factory(2, "2081-01-02", added=10, remaining=90),
            entry_factory(3, "2081-01-03", added=10, remaining=999),
        ]
        assert find_violations(ledger, 100) == [0, 2]


class TestSummarizeLedger:
    @pytest.fixture
    def paper(self):
        return Paper(
            id=1,
            admin_id="admin-1",
            paper_name="Art",
            paper_type=PaperType.REAM,
            paper_size="A4",
            paper_weight="80 GSM",
            units="Ream",
            original_stock=1000,
        )

    def test_empty_ledger_uses_original_stock(self, paper):
        summary = summarize_ledger(paper, [])
        assert summary.current_remaining == 1000
        assert summary.entry_count == 0
        assert summary.first_entry_date is None

    def test_totals(self, paper, entry_factory):
        ledger = [
            entry_factory(2, "2081-01-05", added=200),
            entry_factory(1, "2081-01-01", issued=100, wastage=10),
        ]
        recompute_forward(sort_ledger(ledger), 0, paper.original_stock)

        summary = summarize_ledger(paper, ledger)

        assert summary.total_issued == 100
        assert summary.total_wastage == 10
        assert summary.total_added == 200
        assert summary.current_remaining == 1090
        assert summary.first_entry_date == "2081-01-01"
        assert summary.last_entry_date == "2081-01-05"


class TestLedgerLockRegistry:
    async def test_serializes_same_paper(self):
        locks = LedgerLockRegistry()
        events: list[str] = []

        async def worker(name: str):
            async with locks.hold("admin-1", 1):
                events.append(f"{name}-in")
                await asyncio.sleep(0.01)
                events.append(f"{name}-out")

        await asyncio.gather(worker("a"), worker("b"))

        assert events in (
            ["a-in", "a-out", "b-in", "b-out"],
            ["b-in", "b-out", "a-in", "a-out"],
        )

    async def test_different_papers_do_not_block(self):
        locks = LedgerLockRegistry()
        async with locks.hold("admin-1", 1):
            assert locks.is_held("admin-1", 1)
            assert not locks.is_held("admin-1", 2)
            async with locks.hold("admin-1", 2):
                assert locks.is_held("admin-1", 2)

    async def test_tenants_are_separate(self):
        locks = LedgerLockRegistry()
        async with locks.hold("admin-1", 1):
            assert not locks.is_held("admin-2", 1)

"""Tests for paper, ledger and tenant entities."""

import pytest
from pydantic import ValidationError

from printpress.core.entities import (
    CounterName,
    EntryKind,
    Paper,
    PaperType,
    Principal,
    StockEntry,
    TenantSettings,
    UserRole,
    format_sequence_number,
)


class TestStockEntry:
    def test_defaults(self):
        entry = StockEntry(admin_id="a", paper_id=1, entry_date="2081-01-01")
        assert entry.id is None
        assert entry.kind == EntryKind.ISSUE
        assert entry.remaining == 0.0
        assert entry.clamped is False

    def test_issue_delta(self):
        entry = StockEntry(
            admin_id="a", paper_id=1, entry_date="2081-01-01", issued_paper=100, wastage=10
        )
        assert entry.delta == -110

    def test_addition_delta(self):
        entry = StockEntry(
            admin_id="a",
            paper_id=1,
            entry_date="2081-01-01",
            kind=EntryKind.ADDITION,
            added_stock=200,
        )
        assert entry.delta == 200

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValidationError):
            StockEntry(admin_id="a", paper_id=1, entry_date="2081-01-01", wastage=-1)


class TestPaper:
    def test_display_type(self):
        paper = Paper(
            admin_id="a",
            paper_name="Art",
            paper_type=PaperType.PACKET,
            paper_size="A4",
            paper_weight="80 GSM",
            units="Packet",
        )
        assert paper.display_type == "Packet"

    def test_display_type_others(self):
        paper = Paper(
            admin_id="a",
            paper_name="Art",
            paper_type=PaperType.OTHERS,
            paper_type_other="Roll",
            paper_size="A4",
            paper_weight="80 GSM",
            units="Roll",
        )
        assert paper.display_type == "Roll"


class TestPrincipal:
    def test_admin_owns_tenant(self):
        principal = Principal(id="admin-1", role=UserRole.ADMIN)
        assert principal.tenant_id == "admin-1"

    def test_user_acts_for_admin(self):
        principal = Principal(id="user-1", role=UserRole.USER, admin_id="admin-1")
        assert principal.tenant_id == "admin-1"

    def test_actor_prefers_email(self):
        assert Principal(id="u", email="x@y.z").actor == "x@y.z"
        assert Principal(id="u").actor == "u"


class TestTenantSettings:
    def test_default_prefixes(self):
        settings = TenantSettings(admin_id="a")
        assert settings.prefix_for(CounterName.JOB) == "J"
        assert settings.prefix_for(CounterName.CHALLAN) == "C"

    def test_configured_prefix(self):
        settings = TenantSettings(admin_id="a", job_prefix="JOB")
        assert settings.prefix_for(CounterName.JOB) == "JOB"

    def test_sequence_number_format(self):
        assert format_sequence_number("J", 7) == "J-007"
        assert format_sequence_number("J", 1234) == "J-1234"

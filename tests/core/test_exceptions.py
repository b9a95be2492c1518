"""Unit tests for domain exceptions."""

import pytest

from printpress.core.exceptions import (
    AuthenticationError,
    ConflictError,
    DatabaseError,
    ExportFormatError,
    InvalidEntryKindError,
    JobNotFoundError,
    LedgerError,
    LedgerInvariantError,
    PaperInUseError,
    PaperNotFoundError,
    PermissionDeniedError,
    PressError,
    ResourceNotFoundError,
    StockEntryNotFoundError,
    StorageError,
    ValidationError,
)


class TestPressError:
    """Tests for base PressError exception."""

    def test_basic_initialization(self):
        error = PressError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.code == "PressError"
        assert error.details == {}

    def test_with_custom_code(self):
        error = PressError("Error message", code="CUSTOM_ERROR")
        assert error.code == "CUSTOM_ERROR"

    def test_to_dict(self):
        error = PressError("Test error", code="TEST_CODE", details={"extra": "info"})
        assert error.to_dict() == {
            "error": "TEST_CODE",
            "message": "Test error",
            "details": {"extra": "info"},
        }


class TestNotFoundErrors:
    @pytest.mark.parametrize(
        ("exc", "code", "key"),
        [
            (PaperNotFoundError(5), "PAPER_NOT_FOUND", "paper_id"),
            (StockEntryNotFoundError(5), "STOCK_ENTRY_NOT_FOUND", "entry_id"),
            (JobNotFoundError(5), "JOB_NOT_FOUND", "job_id"),
        ],
    )
    def test_codes_and_details(self, exc, code, key):
        assert isinstance(exc, ResourceNotFoundError)
        assert exc.code == code
        assert exc.details[key] == 5
        assert "5" in str(exc)


class TestLedgerErrors:
    def test_paper_in_use_is_conflict(self):
        error = PaperInUseError(3, 12)
        assert isinstance(error, ConflictError)
        assert error.code == "PAPER_IN_USE"
        assert error.details == {"paper_id": 3, "entry_count": 12}

    def test_invariant_error(self):
        error = LedgerInvariantError(3, [1, 4])
        assert isinstance(error, LedgerError)
        assert error.code == "LEDGER_INVARIANT_VIOLATED"
        assert error.details["positions"] == [1, 4]

    def test_invalid_entry_kind_carries_quantities(self):
        error = InvalidEntryKindError(10, 2, 50)
        assert isinstance(error, ValidationError)
        assert error.code == "VALIDATION_ERROR"
        assert error.details["issued_paper"] == 10
        assert error.details["added_stock"] == 50

    def test_export_format_lists_allowed(self):
        error = ExportFormatError("docx", ["pdf", "xlsx"])
        assert "docx" in str(error)
        assert error.details["allowed"] == ["pdf", "xlsx"]


class TestAuthErrors:
    def test_authentication_default_reason(self):
        error = AuthenticationError()
        assert error.code == "UNAUTHORIZED"
        assert str(error) == "Unauthorized"

    def test_permission_denied(self):
        error = PermissionDeniedError()
        assert error.code == "FORBIDDEN"
        assert str(error) == "Admin access required"


class TestStorageErrors:
    def test_database_error(self):
        error = DatabaseError("insert", "disk I/O error")
        assert isinstance(error, StorageError)
        assert error.code == "DATABASE_ERROR"

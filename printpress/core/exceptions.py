"""
Domain exceptions for the printpress application.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class PressError(Exception):
    """Base exception for all printpress errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Lookup Exceptions
class ResourceNotFoundError(PressError):
    """Record absent, or owned by another tenant."""

    pass


class PaperNotFoundError(ResourceNotFoundError):
    """Paper not found for the caller's tenant."""

    def __init__(self, paper_id: int):
        super().__init__(
            f"Paper not found: {paper_id}",
            code="PAPER_NOT_FOUND",
            details={"paper_id": paper_id},
        )


class StockEntryNotFoundError(ResourceNotFoundError):
    """Stock entry not found for the caller's tenant."""

    def __init__(self, entry_id: int):
        super().__init__(
            f"Stock entry not found: {entry_id}",
            code="STOCK_ENTRY_NOT_FOUND",
            details={"entry_id": entry_id},
        )


class JobNotFoundError(ResourceNotFoundError):
    """Job not found for the caller's tenant."""

    def __init__(self, job_id: int):
        super().__init__(
            f"Job not found: {job_id}",
            code="JOB_NOT_FOUND",
            details={"job_id": job_id},
        )


# Conflict Exceptions
class ConflictError(PressError):
    """Operation conflicts with existing state."""

    pass


class PaperInUseError(ConflictError):
    """Paper still has stock entries recorded against it."""

    def __init__(self, paper_id: int, entry_count: int):
        super().__init__(
            f"Paper {paper_id} has {entry_count} stock entries and cannot be deleted",
            code="PAPER_IN_USE",
            details={"paper_id": paper_id, "entry_count": entry_count},
        )


# Storage Exceptions
class StorageError(PressError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


# Ledger Exceptions
class LedgerError(PressError):
    """Base exception for ledger bookkeeping."""

    pass


class LedgerInvariantError(LedgerError):
    """Stored balances disagree with the recomputed running total."""

    def __init__(self, paper_id: int, positions: list[int]):
        super().__init__(
            f"Ledger for paper {paper_id} is inconsistent at positions {positions}",
            code="LEDGER_INVARIANT_VIOLATED",
            details={"paper_id": paper_id, "positions": positions},
        )


# Auth Exceptions
class AuthenticationError(PressError):
    """No valid principal on the request."""

    def __init__(self, reason: str = "Unauthorized"):
        super().__init__(
            reason,
            code="UNAUTHORIZED",
            details={"reason": reason},
        )


class PermissionDeniedError(PressError):
    """Authenticated caller lacks the role an operation needs."""

    def __init__(self, required_role: str = "admin"):
        super().__init__(
            f"{required_role.capitalize()} access required",
            code="FORBIDDEN",
            details={"required_role": required_role},
        )


# Validation Exceptions
class ValidationError(PressError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class InvalidEntryKindError(ValidationError):
    """Entry mixes issuance and addition quantities."""

    def __init__(self, issued_paper: float, wastage: float, added_stock: float):
        super().__init__(
            field="added_stock",
            message=(
                "An entry either issues paper (issued_paper, wastage) "
                "or adds stock (added_stock), not both"
            ),
            value=added_stock,
        )
        self.details.update(
            {
                "issued_paper": issued_paper,
                "wastage": wastage,
                "added_stock": added_stock,
            }
        )


class ExportFormatError(ValidationError):
    """Requested export format is not supported."""

    def __init__(self, fmt: str, allowed: list[str]):
        super().__init__(
            field="format",
            message=f"Unsupported export format '{fmt}'. Allowed: {', '.join(allowed)}",
            value=fmt,
        )
        self.details["allowed"] = allowed


class ConfigurationError(PressError):
    """Configuration error."""

    pass

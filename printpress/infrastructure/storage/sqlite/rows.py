"""Helpers for converting SQLite column values."""

from datetime import datetime

from printpress.core.clock import utcnow


def parse_timestamp(value: str | None) -> datetime:
    """Parse an ISO timestamp column, falling back to now for bad data."""
    if value:
        try:
            return datetime.fromisoformat(value)
        except (ValueError, TypeError):
            pass
    return utcnow()


def format_timestamp(value: datetime) -> str:
    return value.isoformat()

"""Naive UTC timestamps, the form stored in SQLite."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)

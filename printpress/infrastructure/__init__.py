"""Infrastructure layer implementations."""

from printpress.infrastructure import auth, pdf, spreadsheet, storage

__all__ = ["storage", "pdf", "spreadsheet", "auth"]

"""API middleware."""

from printpress.api.middleware.error_handler import ErrorHandlerMiddleware
from printpress.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]

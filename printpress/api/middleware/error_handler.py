"""
Error handling for the API.

Every failure leaves the service as one ``ErrorResponse`` body:
- error_code: machine-readable identifier (``PAPER_NOT_FOUND``, ...)
- message: human-readable description
- hint: suggested recovery action
- detail / path: what was wrong and where
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from printpress.application.dto.responses import ErrorResponse
from printpress.config import get_logger
from printpress.core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    ConflictError,
    LedgerError,
    PermissionDeniedError,
    PressError,
    ResourceNotFoundError,
    StorageError,
    ValidationError,
)

logger = get_logger(__name__)


# Checked in order; the first matching type wins
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    ResourceNotFoundError: status.HTTP_404_NOT_FOUND,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
    ConflictError: status.HTTP_409_CONFLICT,
    LedgerError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ValueError: status.HTTP_400_BAD_REQUEST,
}

HINT_MAP: dict[str, str] = {
    "PAPER_NOT_FOUND": "Check the paper ID and try GET /api/papers to list your papers.",
    "STOCK_ENTRY_NOT_FOUND": "Check the entry ID and try GET /api/paper-stock?paperId=... to list entries.",
    "JOB_NOT_FOUND": "Check the job ID and try GET /api/jobs to list your jobs.",
    "PAPER_IN_USE": "Delete the paper's stock entries first.",
    "VALIDATION_ERROR": "Check the request body against the API schema.",
    "UNAUTHORIZED": "Send a valid bearer token or token cookie.",
    "FORBIDDEN": "Ask an admin of your organisation to perform this action.",
    "LEDGER_INVARIANT_VIOLATED": "Run the migrator with --audit-ledgers --repair.",
    "DATABASE_ERROR": "A database operation failed. Check server logs.",
}

STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    401: "Authentication is required.",
    403: "You do not have access to this action.",
    404: "The requested resource was not found. Verify the ID.",
    405: "Check the HTTP method for this path.",
    409: "The request conflicts with the current state of the resource.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
}

_STATUS_CODES: dict[int, str] = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    422: "UNPROCESSABLE_ENTITY",
}


def status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    detail: str | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, ""),
        detail=detail,
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def exception_response(request: Request, exc: Exception) -> JSONResponse:
    """Render a domain or unexpected exception, logging it by severity."""
    status_code = status_for(exc)
    error_code = exc.code if isinstance(exc, PressError) else exc.__class__.__name__

    if status_code >= 500:
        logger.error(
            "request_error",
            path=request.url.path,
            error_type=error_code,
            error=str(exc),
            traceback=traceback.format_exc(),
        )
    else:
        logger.warning("request_rejected", path=request.url.path, error_type=error_code, error=str(exc))

    detail = None
    if isinstance(exc, PressError) and exc.details:
        detail = "; ".join(f"{key}={value}" for key, value in exc.details.items())
    return error_response(request, status_code, error_code, str(exc), detail)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Catch anything that escaped the exception handlers below."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return exception_response(request, e)


async def _press_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return exception_response(request, exc)


async def _request_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, RequestValidationError)
    problems = [
        f"{' -> '.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    return error_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        "Request validation failed",
        "; ".join(problems),
    )


async def _http_error_handler(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, HTTPException)
    return error_response(
        request,
        exc.status_code,
        _STATUS_CODES.get(exc.status_code, "HTTP_ERROR"),
        str(exc.detail or "An error occurred"),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the handlers that render errors as ``ErrorResponse``."""
    app.add_exception_handler(PressError, _press_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(HTTPException, _http_error_handler)

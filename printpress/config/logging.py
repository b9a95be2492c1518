"""
Structured logging for printpress.

Every module logs through ``get_logger(__name__)`` with snake_case event
names and key-value context. Development gets colored console lines; any
other environment gets one JSON object per event. Request-scoped values
(request id, tenant) are carried in structlog contextvars.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from printpress.config.settings import get_settings

# Third-party loggers that are chatty at INFO
_QUIET_LOGGERS = ("aiosqlite", "fontTools", "uvicorn.access", "multipart")

_configured = False


def stamp_service(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Tag events with the service name, version and environment."""
    settings = get_settings()
    event_dict.setdefault("service", settings.app_name)
    event_dict.setdefault("version", settings.app_version)
    event_dict.setdefault("env", settings.environment)
    return event_dict


def drop_none_values(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Remove keys whose value is None so ledger events stay compact."""
    return {key: value for key, value in event_dict.items() if value is not None}


def _final_processors(json_logs: bool) -> list[Processor]:
    if json_logs:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]


def configure_logging(level: str | None = None, json_logs: bool | None = None) -> None:
    """Configure structlog and the stdlib root logger once per process.

    Args:
        level: Log level name; defaults to ``LOG_LEVEL`` from settings.
        json_logs: Force JSON output on or off; defaults to JSON outside
            development.
    """
    global _configured
    if _configured:
        return

    settings = get_settings()
    level = (level or settings.log_level).upper()
    if json_logs is None:
        json_logs = settings.environment != "development"

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        stamp_service,
        drop_none_values,
        *_final_processors(json_logs),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=getattr(logging, level))
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True


def bind_request_context(**values: Any) -> None:
    """Bind request-scoped values (request_id, admin_id) for all later events."""
    structlog.contextvars.bind_contextvars(**values)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)

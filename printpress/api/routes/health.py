"""
Health check endpoints.
"""

import time

from fastapi import APIRouter

from printpress.application.dto.responses import HealthResponse, ProviderHealthResponse
from printpress.config import get_logger, get_settings

logger = get_logger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])

_started_at = time.monotonic()


def _health(status: str, **extra) -> HealthResponse:
    return HealthResponse(
        status=status,
        version=get_settings().app_version,
        uptime_seconds=round(time.monotonic() - _started_at, 3),
        **extra,
    )


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness: the process is up and serving requests."""
    return _health("healthy")


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """
    Readiness: the ledger database answers and is migrated.

    Reports round-trip latency and the latest applied schema version.
    """
    from printpress.infrastructure.storage.sqlite import get_pool
    from printpress.infrastructure.storage.sqlite.migrations.migrator import get_current_version

    schema_version = None
    try:
        pool = await get_pool()
        started = time.perf_counter()
        available = await pool.ping()
        latency_ms = round((time.perf_counter() - started) * 1000, 2)
        if available:
            async with pool.acquire() as conn:
                schema_version = await get_current_version(conn)
        database = ProviderHealthResponse(name="sqlite", available=available, latency_ms=latency_ms)
    except Exception as e:
        logger.error("database_health_failed", error=str(e))
        database = ProviderHealthResponse(name="sqlite", available=False, error=str(e))

    return _health(
        "healthy" if database.available else "unhealthy",
        database=database,
        schema_version=schema_version,
    )

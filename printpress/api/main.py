"""
FastAPI application for the paper stock ledger.

``create_app()`` wires middleware, error handlers and routers; the module
level ``app`` is what uvicorn serves.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from printpress.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from printpress.api.middleware.error_handler import setup_exception_handlers
from printpress.api.routes import (
    health_router,
    jobs_router,
    paper_stock_router,
    papers_router,
    settings_router,
)
from printpress.config import configure_logging, get_logger, get_settings
from printpress.config.settings import Settings

logger = get_logger(__name__)

ROUTERS = (health_router, paper_stock_router, papers_router, jobs_router, settings_router)


async def _prepare_database() -> None:
    from printpress.infrastructure.storage.sqlite import get_pool
    from printpress.infrastructure.storage.sqlite.migrations import run_migrations

    for result in await run_migrations():
        if not result.success:
            raise RuntimeError(f"Migration v{result.version} failed: {result.error}")
    await get_pool()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Migrate and open the database before serving; close it afterwards."""
    settings = get_settings()
    logger.info(
        "application_starting",
        environment=settings.environment,
        db_path=str(settings.storage.db_path),
    )

    try:
        await _prepare_database()
    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    logger.info("application_started", host=settings.api.host, port=settings.api.port)
    yield

    from printpress.infrastructure.storage.sqlite import close_pool

    try:
        await close_pool()
    except Exception as e:
        logger.warning("connection_pool_close_failed", error=str(e))
    logger.info("application_stopped")


def _add_middleware(app: FastAPI, settings: Settings) -> None:
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title=settings.app_name,
        description="Paper stock running-balance ledger for print presses",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )
    _add_middleware(app, settings)
    setup_exception_handlers(app)
    for router in ROUTERS:
        app.include_router(router)

    # Container probes hit this one
    @app.get("/health")
    async def root_health() -> dict[str, str]:
        return {"status": "healthy", "version": settings.app_version}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "printpress.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )

"""API route modules."""

from printpress.api.routes.health import router as health_router
from printpress.api.routes.jobs import router as jobs_router
from printpress.api.routes.paper_stock import router as paper_stock_router
from printpress.api.routes.papers import router as papers_router
from printpress.api.routes.settings import router as settings_router

__all__ = [
    "health_router",
    "paper_stock_router",
    "papers_router",
    "jobs_router",
    "settings_router",
]

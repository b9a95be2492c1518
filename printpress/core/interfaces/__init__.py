"""Core interfaces (abstract base classes)."""

from printpress.core.interfaces.job_store import IJobStore
from printpress.core.interfaces.paper_store import IPaperStore
from printpress.core.interfaces.stock_store import IStockStore
from printpress.core.interfaces.tenant_store import ITenantStore

__all__ = [
    "IPaperStore",
    "IStockStore",
    "IJobStore",
    "ITenantStore",
]

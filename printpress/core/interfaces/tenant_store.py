"""Abstract interface for tenant settings and counters."""

from abc import ABC, abstractmethod

from printpress.core.entities.tenant import CounterName, TenantSettings


class ITenantStore(ABC):
    """Interface for per-tenant settings and sequence counters."""

    @abstractmethod
    async def get_settings(self, admin_id: str) -> TenantSettings | None:
        """Get the tenant's settings record, if saved."""
        pass

    @abstractmethod
    async def save_settings(self, settings: TenantSettings) -> TenantSettings:
        """Insert or replace the tenant's settings record."""
        pass

    @abstractmethod
    async def next_counter_value(self, admin_id: str, counter: CounterName) -> int:
        """Atomically increment a counter and return its new value."""
        pass

    @abstractmethod
    async def reset_counter(self, admin_id: str, counter: CounterName) -> None:
        """Set a counter back to zero."""
        pass

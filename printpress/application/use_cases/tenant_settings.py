"""Tenant settings use cases: read, replace, and counter reset."""

from printpress.application.dto.requests import ResetCounterRequest, TenantSettingsRequest
from printpress.config import get_logger
from printpress.core.entities import Principal, TenantSettings
from printpress.core.interfaces import ITenantStore

logger = get_logger(__name__)


class _TenantStoreMixin:
    _tenant_store: ITenantStore | None

    async def _get_tenant_store(self) -> ITenantStore:
        if self._tenant_store is None:
            from printpress.infrastructure.storage.sqlite import get_tenant_store

            self._tenant_store = await get_tenant_store()
        return self._tenant_store


class GetTenantSettingsUseCase(_TenantStoreMixin):
    """Load the caller's settings; unsaved tenants get defaults."""

    def __init__(self, tenant_store: ITenantStore | None = None):
        self._tenant_store = tenant_store

    async def execute(self, principal: Principal) -> TenantSettings:
        admin_id = principal.tenant_id
        store = await self._get_tenant_store()
        return await store.get_settings(admin_id) or TenantSettings(admin_id=admin_id)


class SaveTenantSettingsUseCase(_TenantStoreMixin):
    """Replace the caller's settings record."""

    def __init__(self, tenant_store: ITenantStore | None = None):
        self._tenant_store = tenant_store

    async def execute(
        self, principal: Principal, request: TenantSettingsRequest
    ) -> TenantSettings:
        settings = TenantSettings(
            admin_id=principal.tenant_id,
            **{
                name: (value.strip() or None) if isinstance(value, str) else value
                for name, value in request.model_dump().items()
            },
        )
        store = await self._get_tenant_store()
        return await store.save_settings(settings)


class ResetCounterUseCase(_TenantStoreMixin):
    """Set one of the tenant's sequence counters back to zero."""

    def __init__(self, tenant_store: ITenantStore | None = None):
        self._tenant_store = tenant_store

    async def execute(self, principal: Principal, request: ResetCounterRequest) -> str:
        store = await self._get_tenant_store()
        await store.reset_counter(principal.tenant_id, request.counter_type)
        logger.info(
            "counter_reset_requested",
            counter=request.counter_type.value,
            actor=principal.actor,
        )
        return f"{request.counter_type.value} counter reset successfully"

"""API tests for tenant settings and their admin-only writes."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from printpress.api.dependencies import (
    get_current_principal,
    get_reset_counter_use_case,
    get_save_tenant_settings_use_case,
    get_tenant_settings_use_case,
)
from printpress.api.main import app
from printpress.core.entities import TenantSettings


@pytest.fixture
def mock_tenant_store():
    store = AsyncMock()
    store.get_settings.return_value = TenantSettings(
        admin_id="admin-1", company_name="Everest Press", job_prefix="EP"
    )
    store.save_settings.side_effect = lambda settings: settings
    return store


@pytest.fixture
def settings_client_factory(mock_tenant_store):
    """Client acting as the given principal, backed by a mock tenant store."""
    from printpress.application.use_cases import (
        GetTenantSettingsUseCase,
        ResetCounterUseCase,
        SaveTenantSettingsUseCase,
    )

    overrides = {
        get_tenant_settings_use_case: lambda: GetTenantSettingsUseCase(tenant_store=mock_tenant_store),
        get_save_tenant_settings_use_case: lambda: SaveTenantSettingsUseCase(
            tenant_store=mock_tenant_store
        ),
        get_reset_counter_use_case: lambda: ResetCounterUseCase(tenant_store=mock_tenant_store),
    }

    def _client(principal) -> AsyncClient:
        app.dependency_overrides.update(overrides)
        app.dependency_overrides[get_current_principal] = lambda: principal
        return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")

    yield _client
    for dependency in [*overrides, get_current_principal]:
        app.dependency_overrides.pop(dependency, None)


class TestSettingsAPI:
    async def test_get_shows_effective_prefixes(self, settings_client_factory, user_principal):
        async with settings_client_factory(user_principal) as ac:
            response = await ac.get("/api/settings")

        assert response.status_code == 200
        body = response.json()
        assert body["company_name"] == "Everest Press"
        assert body["job_prefix"] == "EP"
        assert body["quotation_prefix"] == "Q"

    async def test_admin_can_save(self, settings_client_factory, admin_principal, mock_tenant_store):
        async with settings_client_factory(admin_principal) as ac:
            response = await ac.put(
                "/api/settings", json={"companyName": "Himal Offset", "jobPrefix": "HO"}
            )

        assert response.status_code == 200
        assert response.json()["job_prefix"] == "HO"
        saved = mock_tenant_store.save_settings.call_args[0][0]
        assert saved.admin_id == "admin-1"

    async def test_user_cannot_save(self, settings_client_factory, user_principal, mock_tenant_store):
        async with settings_client_factory(user_principal) as ac:
            response = await ac.put("/api/settings", json={"companyName": "Nope"})

        assert response.status_code == 403
        assert response.json()["error_code"] == "FORBIDDEN"
        mock_tenant_store.save_settings.assert_not_called()

    async def test_admin_resets_counter(self, settings_client_factory, admin_principal):
        async with settings_client_factory(admin_principal) as ac:
            response = await ac.post("/api/settings/reset-counter", json={"counterType": "job"})

        assert response.status_code == 200
        assert response.json()["message"] == "job counter reset successfully"

    async def test_user_cannot_reset_counter(self, settings_client_factory, user_principal):
        async with settings_client_factory(user_principal) as ac:
            response = await ac.post("/api/settings/reset-counter", json={"counterType": "job"})
        assert response.status_code == 403

    async def test_unknown_counter_is_422(self, settings_client_factory, admin_principal):
        async with settings_client_factory(admin_principal) as ac:
            response = await ac.post("/api/settings/reset-counter", json={"counterType": "invoice"})
        assert response.status_code == 422

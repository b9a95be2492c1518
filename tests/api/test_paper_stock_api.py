"""API tests for the paper stock endpoints."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from printpress.api.dependencies import (
    get_current_principal,
    get_delete_stock_entry_use_case,
    get_record_stock_entry_use_case,
    get_stock_entries_use_case,
    get_update_stock_entry_use_case,
)
from printpress.api.main import app
from printpress.application.use_cases import (
    DeleteStockEntryResult,
    DeleteStockEntryUseCase,
    GetStockEntriesUseCase,
    RecordStockEntryUseCase,
    StockEntryResult,
    UpdateStockEntryUseCase,
)
from printpress.core.exceptions import (
    InvalidEntryKindError,
    PaperNotFoundError,
    StockEntryNotFoundError,
)


@pytest.fixture
def saved_entry(entry_factory):
    return entry_factory(10, "2081-01-01", issued=100, wastage=10, remaining=890)


@pytest.fixture
def mock_record_use_case(saved_entry):
    uc = AsyncMock(spec=RecordStockEntryUseCase)
    result = StockEntryResult(entry=saved_entry, cascaded=0)
    uc.execute.return_value = result
    uc.to_response.return_value = RecordStockEntryUseCase(
        verify_after_write=False
    ).to_response(result)
    return uc


@pytest.fixture
def mock_update_use_case(saved_entry):
    uc = AsyncMock(spec=UpdateStockEntryUseCase)
    result = StockEntryResult(entry=saved_entry, cascaded=2)
    uc.execute.return_value = result
    uc.to_response.return_value = UpdateStockEntryUseCase(
        verify_after_write=False
    ).to_response(result)
    return uc


@pytest.fixture
def mock_delete_use_case():
    uc = AsyncMock(spec=DeleteStockEntryUseCase)
    result = DeleteStockEntryResult(entry_id=10, paper_id=1, cascaded=1)
    uc.execute.return_value = result
    uc.to_response.return_value = DeleteStockEntryUseCase(
        verify_after_write=False
    ).to_response(result)
    return uc


@pytest.fixture
def mock_list_use_case(saved_entry):
    uc = AsyncMock(spec=GetStockEntriesUseCase)
    uc.list_for_paper.return_value = [saved_entry]
    uc.get.return_value = saved_entry
    uc.linked_job.return_value = None
    uc.to_list_response.return_value = GetStockEntriesUseCase.to_list_response([saved_entry])
    uc.to_detail_response.return_value = GetStockEntriesUseCase.to_detail_response(saved_entry)
    return uc


@pytest.fixture
async def stock_client(
    admin_principal,
    mock_record_use_case,
    mock_update_use_case,
    mock_delete_use_case,
    mock_list_use_case,
):
    overrides = {
        get_current_principal: lambda: admin_principal,
        get_record_stock_entry_use_case: lambda: mock_record_use_case,
        get_update_stock_entry_use_case: lambda: mock_update_use_case,
        get_delete_stock_entry_use_case: lambda: mock_delete_use_case,
        get_stock_entries_use_case: lambda: mock_list_use_case,
    }
    app.dependency_overrides.update(overrides)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    for dependency in overrides:
        app.dependency_overrides.pop(dependency, None)


class TestPaperStockAPI:
    async def test_create_returns_201(self, stock_client: AsyncClient):
        response = await stock_client.post(
            "/api/paper-stock",
            json={"paperId": 1, "date": "2081-01-01", "issuedPaper": 100, "wastage": 10},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Stock entry created successfully"
        assert body["stock_entry"]["remaining"] == 890

    async def test_create_ignores_client_remaining(
        self, stock_client: AsyncClient, mock_record_use_case
    ):
        await stock_client.post(
            "/api/paper-stock",
            json={"paperId": 1, "date": "2081-01-01", "issuedPaper": 1, "remaining": 5},
        )
        _, request = mock_record_use_case.execute.call_args[0]
        assert not hasattr(request, "remaining")

    async def test_create_rejects_bad_date(self, stock_client: AsyncClient):
        response = await stock_client.post(
            "/api/paper-stock",
            json={"paperId": 1, "date": "2081-14-01", "issuedPaper": 1},
        )
        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_create_rejects_negative_quantity(self, stock_client: AsyncClient):
        response = await stock_client.post(
            "/api/paper-stock",
            json={"paperId": 1, "date": "2081-01-01", "wastage": -1},
        )
        assert response.status_code == 422

    async def test_create_mixed_kind_is_400(self, stock_client: AsyncClient, mock_record_use_case):
        mock_record_use_case.execute.side_effect = InvalidEntryKindError(10, 0, 50)
        response = await stock_client.post(
            "/api/paper-stock",
            json={"paperId": 1, "date": "2081-01-01", "issuedPaper": 10, "addedStock": 50},
        )
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_create_unknown_paper_is_404(self, stock_client: AsyncClient, mock_record_use_case):
        mock_record_use_case.execute.side_effect = PaperNotFoundError(9)
        response = await stock_client.post(
            "/api/paper-stock",
            json={"paperId": 9, "date": "2081-01-01", "issuedPaper": 1},
        )
        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "PAPER_NOT_FOUND"
        assert body["hint"]

    async def test_list_requires_paper_id(self, stock_client: AsyncClient):
        response = await stock_client.get("/api/paper-stock")
        assert response.status_code == 422

    async def test_list(self, stock_client: AsyncClient, mock_list_use_case, admin_principal):
        response = await stock_client.get("/api/paper-stock", params={"paperId": 1})
        assert response.status_code == 200
        assert response.json()["total"] == 1
        mock_list_use_case.list_for_paper.assert_called_once_with(admin_principal, 1)

    async def test_get_one(self, stock_client: AsyncClient):
        response = await stock_client.get("/api/paper-stock/10")
        assert response.status_code == 200
        assert response.json()["stock_entry"]["id"] == 10

    async def test_get_missing(self, stock_client: AsyncClient, mock_list_use_case):
        mock_list_use_case.get.side_effect = StockEntryNotFoundError(11)
        response = await stock_client.get("/api/paper-stock/11")
        assert response.status_code == 404
        assert response.json()["error_code"] == "STOCK_ENTRY_NOT_FOUND"

    async def test_update(self, stock_client: AsyncClient):
        response = await stock_client.put("/api/paper-stock/10", json={"issuedPaper": 50})
        assert response.status_code == 200
        assert response.json()["cascaded"] == 2

    async def test_update_null_quantity_is_422(self, stock_client: AsyncClient):
        response = await stock_client.put("/api/paper-stock/10", json={"wastage": None})
        assert response.status_code == 422

    async def test_delete(self, stock_client: AsyncClient):
        response = await stock_client.delete("/api/paper-stock/10")
        assert response.status_code == 200
        assert response.json() == {"message": "Stock entry deleted successfully", "cascaded": 1}


class TestPaperStockAuth:
    async def test_missing_token_is_401(self):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            response = await ac.get("/api/paper-stock", params={"paperId": 1})
        assert response.status_code == 401
        assert response.json()["error_code"] == "UNAUTHORIZED"

    async def test_bad_token_is_401(self):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            response = await ac.get(
                "/api/paper-stock/1", headers={"Authorization": "Bearer nonsense"}
            )
        assert response.status_code == 401

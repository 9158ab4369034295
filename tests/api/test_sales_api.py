"""API tests for sales order endpoints."""

from datetime import date
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from foodworks.api.dependencies import get_sales_order_store, get_save_sales_order_use_case
from foodworks.api.main import app
from foodworks.application.use_cases.save_sales_order import (
    SaveSalesOrderResult,
    SaveSalesOrderUseCase,
)
from foodworks.core.entities.sales import DeliveryMethod, SalesItem, SalesOrder, SalesOrderStatus
from foodworks.core.exceptions import DuplicateSalesOrderError

ORDER = SalesOrder(
    id=1,
    order_date=date(2024, 3, 15),
    order_number="SO-20240315-0001",
    customer_name="Corner Deli",
    delivery_cost=4.5,
    items=[SalesItem(id=1, product_id=10, quantity=5, price_per_unit=3.0)],
)


@pytest.fixture
def mock_sales_store():
    store = AsyncMock()
    store.list_orders.return_value = [ORDER]
    store.get_order.return_value = ORDER
    store.list_delivery_methods.return_value = [DeliveryMethod(id=1, name="Courier")]
    store.create_delivery_method.return_value = DeliveryMethod(id=2, name="Pallet Freight")
    return store


@pytest.fixture
def mock_save_use_case():
    uc = AsyncMock(spec=SaveSalesOrderUseCase)
    result = SaveSalesOrderResult(order=ORDER)
    uc.execute.return_value = result
    uc.to_response.return_value = SaveSalesOrderUseCase().to_response(result)
    return uc


@pytest.fixture
async def sales_client(mock_sales_store, mock_save_use_case):
    app.dependency_overrides[get_sales_order_store] = lambda: mock_sales_store
    app.dependency_overrides[get_save_sales_order_use_case] = lambda: mock_save_use_case
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_sales_order_store, None)
    app.dependency_overrides.pop(get_save_sales_order_use_case, None)


ORDER_BODY = {
    "customer_name": "Corner Deli",
    "delivery_cost": 4.5,
    "items": [{"product_id": 10, "quantity": 5, "price_per_unit": 3.0}],
}


class TestSalesAPI:
    async def test_create_returns_201(self, sales_client: AsyncClient):
        response = await sales_client.post("/api/sales/orders", json=ORDER_BODY)
        assert response.status_code == 201
        order = response.json()["order"]
        assert order["order_number"] == "SO-20240315-0001"
        assert order["total_amount"] == 19.5

    async def test_duplicate_number_is_409(self, sales_client: AsyncClient, mock_save_use_case):
        mock_save_use_case.execute.side_effect = DuplicateSalesOrderError("WEB-1")
        response = await sales_client.post(
            "/api/sales/orders", json={**ORDER_BODY, "order_number": "WEB-1"}
        )
        assert response.status_code == 409
        assert response.json()["error_code"] == "DUPLICATE_SALES_ORDER"

    async def test_item_quantity_must_be_positive(self, sales_client: AsyncClient):
        body = {**ORDER_BODY, "items": [{"product_id": 10, "quantity": 0, "price_per_unit": 3.0}]}
        response = await sales_client.post("/api/sales/orders", json=body)
        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_list_by_status(self, sales_client: AsyncClient, mock_sales_store):
        response = await sales_client.get("/api/sales/orders?status=pending&customer=Deli")
        assert response.status_code == 200
        kwargs = mock_sales_store.list_orders.call_args.kwargs
        assert kwargs["status"] == SalesOrderStatus.PENDING
        assert kwargs["customer"] == "Deli"

    async def test_get_missing(self, sales_client: AsyncClient, mock_sales_store):
        mock_sales_store.get_order.return_value = None
        response = await sales_client.get("/api/sales/orders/9")
        assert response.status_code == 404
        assert response.json()["error_code"] == "SALES_ORDER_NOT_FOUND"

    async def test_update_passes_id(self, sales_client: AsyncClient, mock_save_use_case):
        response = await sales_client.put("/api/sales/orders/1", json=ORDER_BODY)
        assert response.status_code == 200
        assert mock_save_use_case.execute.call_args.kwargs["order_id"] == 1

    async def test_delivery_methods(self, sales_client: AsyncClient):
        response = await sales_client.get("/api/sales/delivery-methods")
        assert response.json() == [{"id": 1, "name": "Courier"}]

        response = await sales_client.post(
            "/api/sales/delivery-methods", json={"name": "Pallet Freight"}
        )
        assert response.status_code == 201
        assert response.json()["id"] == 2

"""Tests for ReceiveStockUseCase and RecordWastageUseCase."""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from foodworks.application.dto.requests import ReceiveStockRequest, RecordWastageRequest
from foodworks.application.use_cases.receive_stock import ReceiveStockUseCase
from foodworks.application.use_cases.record_wastage import RecordWastageUseCase
from foodworks.core.entities.inventory import InventoryItem, InventoryMovement, MovementType
from foodworks.core.entities.recipe import RawMaterial
from foodworks.core.entities.stock import StockReceipt, Wastage
from foodworks.core.exceptions import (
    RawMaterialNotFoundError,
    StockReceiptNotFoundError,
    ValidationError,
)


def _stored(receipt: StockReceipt):
    receipt.id = receipt.id or 3
    item = InventoryItem(id=1, product_name=receipt.product_name, stock_level=receipt.stocked_quantity)
    movement = InventoryMovement(
        id=11,
        inventory_id=1,
        product_name=receipt.product_name,
        movement_type=MovementType.RECEIVE,
        quantity=receipt.stocked_quantity,
    )
    return receipt, item, movement


@pytest.fixture
def mock_stock_store():
    store = AsyncMock()
    store.create_receipt.side_effect = _stored
    store.update_receipt.side_effect = _stored
    return store


@pytest.fixture
def mock_raw_material_store():
    store = AsyncMock()
    store.get.return_value = RawMaterial(id=1, name="Assam Leaf", unit_cost=0.002)
    return store


@pytest.fixture
def use_case(mock_stock_store, mock_raw_material_store):
    return ReceiveStockUseCase(
        stock_store=mock_stock_store,
        raw_material_store=mock_raw_material_store,
    )


def _request(**overrides) -> ReceiveStockRequest:
    values = {
        "stock_type": "tea",
        "product_name": "Assam Leaf",
        "raw_material_id": 1,
        "quantity": 1000,
        "price_per_unit": 0.003,
    }
    values.update(overrides)
    return ReceiveStockRequest(**values)


class TestReceiveStockUseCase:
    async def test_new_receipt(self, use_case, mock_stock_store):
        result = await use_case.execute(_request())

        receipt = mock_stock_store.create_receipt.call_args[0][0]
        assert receipt.received_date == date.today()
        assert result.receipt.id == 3
        assert result.inventory_item.stock_level == 1000
        mock_stock_store.update_receipt.assert_not_called()

        response = use_case.to_response(result)
        assert response.movement.quantity == 1000

    async def test_unknown_raw_material(self, use_case, mock_raw_material_store, mock_stock_store):
        mock_raw_material_store.get.return_value = None
        with pytest.raises(RawMaterialNotFoundError):
            await use_case.execute(_request(raw_material_id=99))
        mock_stock_store.create_receipt.assert_not_called()

    async def test_receipt_without_material_skips_lookup(self, use_case, mock_raw_material_store):
        await use_case.execute(_request(raw_material_id=None, product_name="Gift Box"))
        mock_raw_material_store.get.assert_not_called()

    async def test_edit_existing(self, use_case, mock_stock_store):
        mock_stock_store.get_receipt.return_value = StockReceipt(
            id=5, stock_type="tea", product_name="Assam Leaf", quantity=800
        )
        result = await use_case.execute(_request(), receipt_id=5)

        edited = mock_stock_store.update_receipt.call_args[0][0]
        assert edited.id == 5
        assert result.receipt.id == 5

    async def test_edit_missing(self, use_case, mock_stock_store):
        mock_stock_store.get_receipt.return_value = None
        with pytest.raises(StockReceiptNotFoundError):
            await use_case.execute(_request(), receipt_id=5)


class TestRecordWastageUseCase:
    @pytest.fixture
    def wastage_store(self):
        store = AsyncMock()
        store.record_wastage.return_value = (
            Wastage(id=2, inventory_id=1, product_name="Assam Leaf", quantity=15, reason="Spillage", recorded_by="JS"),
            InventoryItem(id=1, product_name="Assam Leaf", stock_level=0),
            InventoryMovement(
                id=12,
                inventory_id=1,
                product_name="Assam Leaf",
                movement_type=MovementType.WASTAGE,
                quantity=-15,
            ),
        )
        return store

    async def test_records_trimmed_values(self, wastage_store):
        use_case = RecordWastageUseCase(stock_store=wastage_store)
        result = await use_case.execute(
            RecordWastageRequest(inventory_id=1, quantity=15, reason=" Spillage ", recorded_by=" JS ")
        )

        wastage = wastage_store.record_wastage.call_args[0][0]
        assert wastage.reason == "Spillage"
        assert wastage.recorded_by == "JS"
        assert result.inventory_item.stock_level == 0
        assert use_case.to_response(result).movement.quantity == -15

    @pytest.mark.parametrize(
        "overrides",
        [
            {"quantity": 0},
            {"quantity": -1},
            {"reason": "  "},
            {"recorded_by": ""},
        ],
    )
    async def test_invalid_requests(self, wastage_store, overrides):
        values = {"inventory_id": 1, "quantity": 1, "reason": "Spillage", "recorded_by": "JS"}
        values.update(overrides)
        use_case = RecordWastageUseCase(stock_store=wastage_store)

        with pytest.raises(ValidationError):
            await use_case.execute(RecordWastageRequest(**values))
        wastage_store.record_wastage.assert_not_called()

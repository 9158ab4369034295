"""Tests for SQLite sales store."""

from datetime import date

import pytest

from foodworks.core.entities.inventory import MovementType, ReferenceType
from foodworks.core.entities.sales import DeliveryMethod, SalesItem, SalesOrder
from foodworks.core.entities.stock import StockReceipt
from foodworks.core.exceptions import (
    DuplicateSalesOrderError,
    ProductNotFoundError,
    SalesOrderNotFoundError,
)
from foodworks.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore
from foodworks.infrastructure.storage.sqlite.sales_store import SQLiteSalesStore
from foodworks.infrastructure.storage.sqlite.stock_store import SQLiteStockStore

ORDER_DATE = date(2024, 3, 15)


@pytest.fixture
def store(initialized_db) -> SQLiteSalesStore:
    return SQLiteSalesStore()


@pytest.fixture
async def stocked_pouches(initialized_db, pouch_material):
    await SQLiteStockStore().create_receipt(
        StockReceipt(
            stock_type="packaging",
            product_name=pouch_material.name,
            raw_material_id=pouch_material.id,
            quantity=100,
            price_per_unit=0.10,
        )
    )
    return pouch_material


def _order(product_id: int, packaging_id: int | None = None, pouches: float = 0, **kw) -> SalesOrder:
    values = {
        "order_date": ORDER_DATE,
        "customer_name": "Corner Deli",
        "delivery_method": "Courier",
        "delivery_cost": 4.5,
        "items": [
            SalesItem(
                product_id=product_id,
                quantity=5,
                price_per_unit=3.0,
                packaging_material_id=packaging_id,
                packaging_quantity=pouches,
            )
        ],
    }
    values.update(kw)
    return SalesOrder(**values)


async def _pouch_stock() -> float:
    item = await SQLiteInventoryStore().find_item("Kraft Pouch")
    return item.stock_level


class TestSalesStore:
    async def test_order_numbers_are_sequential_per_day(self, store, tea_product):
        first, _ = await store.create_order(_order(tea_product.id))
        second, _ = await store.create_order(_order(tea_product.id))
        other_day, _ = await store.create_order(_order(tea_product.id, order_date=date(2024, 3, 16)))

        assert first.order_number == "SO-20240315-0001"
        assert second.order_number == "SO-20240315-0002"
        assert other_day.order_number == "SO-20240316-0001"

    async def test_generated_number_skips_taken(self, store, tea_product):
        await store.create_order(_order(tea_product.id, order_number="SO-20240315-0002"))
        order, _ = await store.create_order(_order(tea_product.id))
        assert order.order_number == "SO-20240315-0003"

    async def test_duplicate_order_number(self, store, tea_product):
        await store.create_order(_order(tea_product.id, order_number="WEB-1"))
        with pytest.raises(DuplicateSalesOrderError):
            await store.create_order(_order(tea_product.id, order_number="WEB-1"))

    async def test_unknown_product(self, store, initialized_db):
        with pytest.raises(ProductNotFoundError):
            await store.create_order(_order(999))

    async def test_totals_persisted(self, store, tea_product):
        order, _ = await store.create_order(_order(tea_product.id))
        fetched = await store.get_order(order.id)
        assert fetched.items_total == 15.0
        assert fetched.total_amount == 19.5
        assert fetched.items[0].total_price == 15.0

    async def test_packaging_consumed_as_sale(self, store, tea_product, stocked_pouches):
        order, movements = await store.create_order(
            _order(tea_product.id, stocked_pouches.id, pouches=5)
        )
        assert len(movements) == 1
        assert movements[0].movement_type == MovementType.SALE
        assert movements[0].reference_type == ReferenceType.SALES_ORDER
        assert movements[0].quantity == -5
        assert movements[0].notes == f"Order {order.order_number}"
        assert await _pouch_stock() == 95

    async def test_edit_applies_packaging_difference(self, store, tea_product, stocked_pouches):
        order, _ = await store.create_order(_order(tea_product.id, stocked_pouches.id, pouches=5))

        edited = _order(tea_product.id, stocked_pouches.id, pouches=2, id=order.id)
        saved, movements = await store.update_order(edited)

        assert saved.order_number == order.order_number
        assert [m.quantity for m in movements] == [3]
        assert await _pouch_stock() == 98

        _, movements = await store.update_order(edited.model_copy(deep=True))
        assert movements == []

    async def test_update_missing_order(self, store, tea_product):
        with pytest.raises(SalesOrderNotFoundError):
            await store.update_order(_order(tea_product.id, id=77))

    async def test_list_by_customer(self, store, tea_product):
        await store.create_order(_order(tea_product.id))
        await store.create_order(_order(tea_product.id, customer_name="Farm Shop"))

        orders = await store.list_orders(customer="Farm")
        assert [o.customer_name for o in orders] == ["Farm Shop"]

    async def test_delivery_methods(self, store):
        await store.create_delivery_method(DeliveryMethod(name="Pallet Freight"))

        names = [m.name for m in await store.list_delivery_methods()]
        assert names == ["Collection", "Courier", "Pallet Freight", "Royal Mail"]

"""Tests for supplier and equipment stores."""

from datetime import date, timedelta

import pytest

from foodworks.core.entities import Equipment, EquipmentStatus, Supplier
from foodworks.infrastructure.storage.sqlite.equipment_store import SQLiteEquipmentStore
from foodworks.infrastructure.storage.sqlite.supplier_store import SQLiteSupplierStore


class TestSupplierStore:
    @pytest.fixture
    def store(self, initialized_db) -> SQLiteSupplierStore:
        return SQLiteSupplierStore()

    async def test_products_round_trip(self, store):
        supplier = await store.create(
            Supplier(name="Leaf Traders", products=["tea", "herbs"], is_approved=True)
        )
        fetched = await store.get(supplier.id)
        assert fetched.products == ["tea", "herbs"]
        assert fetched.is_approved is True

    async def test_approved_only(self, store):
        await store.create(Supplier(name="Leaf Traders", is_approved=True))
        await store.create(Supplier(name="New Pack Co"))

        assert [s.name for s in await store.list_suppliers(approved_only=True)] == ["Leaf Traders"]
        assert len(await store.list_suppliers()) == 2

    async def test_update_and_delete(self, store):
        supplier = await store.create(Supplier(name="New Pack Co"))
        supplier.is_approved = True
        await store.update(supplier)
        assert (await store.get(supplier.id)).is_approved is True

        assert await store.delete(supplier.id) is True
        assert await store.delete(supplier.id) is False


class TestEquipmentStore:
    @pytest.fixture
    def store(self, initialized_db) -> SQLiteEquipmentStore:
        return SQLiteEquipmentStore()

    async def test_service_due(self, store):
        yesterday = date.today() - timedelta(days=1)
        due = await store.create(
            Equipment(serial_number="SC-1", description="Bench scale", next_service_date=yesterday)
        )
        await store.create(
            Equipment(
                serial_number="SC-0",
                description="Old scale",
                next_service_date=yesterday,
                status=EquipmentStatus.RETIRED,
            )
        )
        await store.create(
            Equipment(
                serial_number="HS-1",
                description="Heat sealer",
                next_service_date=date.today() + timedelta(days=60),
            )
        )

        assert [e.id for e in await store.list_equipment(service_due=True)] == [due.id]
        assert len(await store.list_equipment()) == 3

    async def test_update_status(self, store):
        item = await store.create(Equipment(serial_number="MX-1", description="Mixer"))
        item.status = EquipmentStatus.MAINTENANCE
        await store.update(item)
        assert (await store.get(item.id)).status == EquipmentStatus.MAINTENANCE

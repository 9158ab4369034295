"""SQLite storage implementations."""

from foodworks.infrastructure.storage.sqlite.batch_store import SQLiteBatchStore
from foodworks.infrastructure.storage.sqlite.compliance_store import SQLiteComplianceStore
from foodworks.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from foodworks.infrastructure.storage.sqlite.equipment_store import SQLiteEquipmentStore
from foodworks.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore
from foodworks.infrastructure.storage.sqlite.product_store import SQLiteProductStore
from foodworks.infrastructure.storage.sqlite.raw_material_store import SQLiteRawMaterialStore
from foodworks.infrastructure.storage.sqlite.recipe_store import SQLiteRecipeStore
from foodworks.infrastructure.storage.sqlite.sales_store import SQLiteSalesStore
from foodworks.infrastructure.storage.sqlite.stock_store import SQLiteStockStore
from foodworks.infrastructure.storage.sqlite.supplier_store import SQLiteSupplierStore

# Aliases for backward compatibility
get_connection_pool = get_pool
close_connection_pool = close_pool

# Singleton instances
_inventory_store: SQLiteInventoryStore | None = None
_raw_material_store: SQLiteRawMaterialStore | None = None
_recipe_store: SQLiteRecipeStore | None = None
_product_store: SQLiteProductStore | None = None
_batch_store: SQLiteBatchStore | None = None
_stock_store: SQLiteStockStore | None = None
_sales_store: SQLiteSalesStore | None = None
_supplier_store: SQLiteSupplierStore | None = None
_equipment_store: SQLiteEquipmentStore | None = None
_compliance_store: SQLiteComplianceStore | None = None


async def get_inventory_store() -> SQLiteInventoryStore:
    """Get singleton inventory store instance."""
    global _inventory_store
    if _inventory_store is None:
        _inventory_store = SQLiteInventoryStore()
    return _inventory_store


async def get_raw_material_store() -> SQLiteRawMaterialStore:
    """Get singleton raw material store instance."""
    global _raw_material_store
    if _raw_material_store is None:
        _raw_material_store = SQLiteRawMaterialStore()
    return _raw_material_store


async def get_recipe_store() -> SQLiteRecipeStore:
    """Get singleton recipe store instance."""
    global _recipe_store
    if _recipe_store is None:
        _recipe_store = SQLiteRecipeStore()
    return _recipe_store


async def get_product_store() -> SQLiteProductStore:
    """Get singleton product store instance."""
    global _product_store
    if _product_store is None:
        _product_store = SQLiteProductStore()
    return _product_store


async def get_batch_store() -> SQLiteBatchStore:
    """Get singleton batch store instance."""
    global _batch_store
    if _batch_store is None:
        _batch_store = SQLiteBatchStore()
    return _batch_store


async def get_stock_store() -> SQLiteStockStore:
    """Get singleton stock store instance."""
    global _stock_store
    if _stock_store is None:
        _stock_store = SQLiteStockStore()
    return _stock_store


async def get_sales_store() -> SQLiteSalesStore:
    """Get singleton sales store instance."""
    global _sales_store
    if _sales_store is None:
        _sales_store = SQLiteSalesStore()
    return _sales_store


async def get_supplier_store() -> SQLiteSupplierStore:
    """Get singleton supplier store instance."""
    global _supplier_store
    if _supplier_store is None:
        _supplier_store = SQLiteSupplierStore()
    return _supplier_store


async def get_equipment_store() -> SQLiteEquipmentStore:
    """Get singleton equipment store instance."""
    global _equipment_store
    if _equipment_store is None:
        _equipment_store = SQLiteEquipmentStore()
    return _equipment_store


async def get_compliance_store() -> SQLiteComplianceStore:
    """Get singleton compliance store instance."""
    global _compliance_store
    if _compliance_store is None:
        _compliance_store = SQLiteComplianceStore()
    return _compliance_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Aliases for connection
    "get_connection_pool",
    "close_connection_pool",
    # Store classes
    "SQLiteInventoryStore",
    "SQLiteRawMaterialStore",
    "SQLiteRecipeStore",
    "SQLiteProductStore",
    "SQLiteBatchStore",
    "SQLiteStockStore",
    "SQLiteSalesStore",
    "SQLiteSupplierStore",
    "SQLiteEquipmentStore",
    "SQLiteComplianceStore",
    # Factory functions
    "get_inventory_store",
    "get_raw_material_store",
    "get_recipe_store",
    "get_product_store",
    "get_batch_store",
    "get_stock_store",
    "get_sales_store",
    "get_supplier_store",
    "get_equipment_store",
    "get_compliance_store",
]

"""
Dependency injection container for FastAPI.

Provides use case and store instances to route handlers. Tests swap these
out through ``app.dependency_overrides``.
"""

from functools import lru_cache

from foodworks.application.use_cases import (
    AdjustStockUseCase,
    CreateBatchRecordUseCase,
    CreateInventoryItemUseCase,
    GetBatchTraceabilityUseCase,
    RecalculateCostsUseCase,
    ReceiveStockUseCase,
    RecordWastageUseCase,
    SaveComplianceDocumentUseCase,
    SaveSalesOrderUseCase,
    UpdateBatchRecordUseCase,
)
from foodworks.config import Settings, get_settings
from foodworks.infrastructure.storage.sqlite import (
    SQLiteBatchStore,
    SQLiteComplianceStore,
    SQLiteEquipmentStore,
    SQLiteInventoryStore,
    SQLiteProductStore,
    SQLiteRawMaterialStore,
    SQLiteRecipeStore,
    SQLiteSalesStore,
    SQLiteStockStore,
    SQLiteSupplierStore,
    get_batch_store,
    get_compliance_store,
    get_equipment_store,
    get_inventory_store,
    get_product_store,
    get_raw_material_store,
    get_recipe_store,
    get_sales_store,
    get_stock_store,
    get_supplier_store,
)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Inventory use case dependencies
def get_create_inventory_item_use_case() -> CreateInventoryItemUseCase:
    return CreateInventoryItemUseCase()


def get_adjust_stock_use_case() -> AdjustStockUseCase:
    return AdjustStockUseCase()


def get_receive_stock_use_case() -> ReceiveStockUseCase:
    """Get receive stock use case."""
    return ReceiveStockUseCase()


def get_record_wastage_use_case() -> RecordWastageUseCase:
    """Get record wastage use case."""
    return RecordWastageUseCase()


# Batch use case dependencies
def get_create_batch_use_case() -> CreateBatchRecordUseCase:
    """Get create batch record use case."""
    return CreateBatchRecordUseCase()


def get_update_batch_use_case() -> UpdateBatchRecordUseCase:
    """Get update batch record use case."""
    return UpdateBatchRecordUseCase()


def get_batch_traceability_use_case() -> GetBatchTraceabilityUseCase:
    return GetBatchTraceabilityUseCase()


# Costing use case dependency
def get_recalculate_costs_use_case() -> RecalculateCostsUseCase:
    """Get recalculate costs use case."""
    return RecalculateCostsUseCase()


# Sales use case dependency
def get_save_sales_order_use_case() -> SaveSalesOrderUseCase:
    """Get save sales order use case."""
    return SaveSalesOrderUseCase()


# Compliance use case dependency
def get_save_compliance_document_use_case() -> SaveComplianceDocumentUseCase:
    return SaveComplianceDocumentUseCase()


# Store dependencies
async def get_inv_item_store() -> SQLiteInventoryStore:
    """Get inventory store."""
    return await get_inventory_store()


async def get_raw_mat_store() -> SQLiteRawMaterialStore:
    """Get raw material store."""
    return await get_raw_material_store()


async def get_rcp_store() -> SQLiteRecipeStore:
    """Get recipe store."""
    return await get_recipe_store()


async def get_prod_store() -> SQLiteProductStore:
    """Get final product store."""
    return await get_product_store()


async def get_bmr_store() -> SQLiteBatchStore:
    """Get batch manufacturing record store."""
    return await get_batch_store()


async def get_stk_store() -> SQLiteStockStore:
    """Get stock receipt and wastage store."""
    return await get_stock_store()


async def get_sales_order_store() -> SQLiteSalesStore:
    """Get sales store."""
    return await get_sales_store()


async def get_sup_store() -> SQLiteSupplierStore:
    """Get supplier store."""
    return await get_supplier_store()


async def get_equip_store() -> SQLiteEquipmentStore:
    """Get equipment store."""
    return await get_equipment_store()


async def get_compliance_doc_store() -> SQLiteComplianceStore:
    """Get compliance document store."""
    return await get_compliance_store()

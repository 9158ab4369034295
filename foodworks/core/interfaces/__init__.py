"""Core interfaces (ports) for dependency injection."""

from foodworks.core.interfaces.batch_store import IBatchStore
from foodworks.core.interfaces.costing_store import (
    IProductStore,
    IRawMaterialStore,
    IRecipeStore,
)
from foodworks.core.interfaces.inventory_store import IInventoryStore
from foodworks.core.interfaces.sales_store import ISalesStore
from foodworks.core.interfaces.stock_store import IStockStore
from foodworks.core.interfaces.storage import (
    IComplianceStore,
    IEquipmentStore,
    ISupplierStore,
)

__all__ = [
    "IInventoryStore",
    "IBatchStore",
    "IRawMaterialStore",
    "IRecipeStore",
    "IProductStore",
    "IStockStore",
    "ISalesStore",
    "ISupplierStore",
    "IEquipmentStore",
    "IComplianceStore",
]

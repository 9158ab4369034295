"""Core domain entities."""

from foodworks.core.entities.batch import (
    BatchChecklist,
    BatchIngredient,
    BatchManufacturingRecord,
    BatchStatus,
)
from foodworks.core.entities.compliance import (
    ComplianceDocument,
    DocumentStatus,
    DocumentVersion,
)
from foodworks.core.entities.equipment import Equipment, EquipmentStatus
from foodworks.core.entities.inventory import (
    InventoryItem,
    InventoryMovement,
    MovementType,
    ReferenceType,
)
from foodworks.core.entities.product import FinalProduct
from foodworks.core.entities.recipe import RawMaterial, Recipe, RecipeItem
from foodworks.core.entities.sales import (
    DeliveryMethod,
    SalesItem,
    SalesOrder,
    SalesOrderStatus,
)
from foodworks.core.entities.stock import StockReceipt, Wastage
from foodworks.core.entities.supplier import Supplier

__all__ = [
    # Inventory
    "InventoryItem",
    "InventoryMovement",
    "MovementType",
    "ReferenceType",
    # Costing
    "RawMaterial",
    "Recipe",
    "RecipeItem",
    "FinalProduct",
    # Batch
    "BatchManufacturingRecord",
    "BatchIngredient",
    "BatchChecklist",
    "BatchStatus",
    # Stock
    "StockReceipt",
    "Wastage",
    # Sales
    "SalesOrder",
    "SalesItem",
    "SalesOrderStatus",
    "DeliveryMethod",
    # Reference data
    "Supplier",
    "Equipment",
    "EquipmentStatus",
    "ComplianceDocument",
    "DocumentStatus",
    "DocumentVersion",
]

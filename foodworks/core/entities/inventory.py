"""Inventory ledger domain entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class MovementType(str, Enum):
    """Cause of a stock level change."""

    RECEIVE = "receive"
    WASTAGE = "wastage"
    MANUFACTURING_CONSUME = "manufacturing_consume"
    MANUFACTURING_PRODUCE = "manufacturing_produce"
    ADJUSTMENT = "adjustment"
    SALE = "sale"

    @property
    def is_consumption(self) -> bool:
        """Consumption movements never take stock below zero."""
        return self in (
            MovementType.WASTAGE,
            MovementType.MANUFACTURING_CONSUME,
            MovementType.SALE,
        )


class ReferenceType(str, Enum):
    """Kind of entity that caused a movement."""

    BATCH = "batch"
    WASTAGE = "wastage"
    STOCK_RECEIPT = "stock_receipt"
    SALES_ORDER = "sales_order"
    MANUAL = "manual"


class InventoryItem(BaseModel):
    """Stock level record for a raw material, recipe good or finished product."""

    id: int | None = None
    product_name: str
    sku: str | None = None
    category: str | None = None
    unit: str | None = None
    stock_level: float = 0.0  # may go negative through receipts/production/adjustments
    unit_price: float = 0.0
    reorder_point: float = 0.0
    supplier_id: int | None = None  # FK → suppliers.id
    is_recipe_based: bool = False
    is_final_product: bool = False
    version: int = 1
    last_updated: datetime = Field(default_factory=datetime.utcnow)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def stock_value(self) -> float:
        """Value of stock on hand at the current unit price."""
        return self.stock_level * self.unit_price

    @property
    def needs_reorder(self) -> bool:
        return self.stock_level <= self.reorder_point


class InventoryMovement(BaseModel):
    """Append-only record of a single signed stock delta."""

    id: int | None = None
    inventory_id: int | None = None  # null once the item is deleted
    product_name: str
    movement_type: MovementType
    quantity: float  # signed delta as requested
    reference_type: ReferenceType | None = None
    reference_id: int | None = None
    notes: str | None = None
    created_by: str | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)

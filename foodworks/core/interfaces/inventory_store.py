"""Abstract interface for the inventory ledger."""

from abc import ABC, abstractmethod

from foodworks.core.entities.inventory import (
    InventoryItem,
    InventoryMovement,
    MovementType,
    ReferenceType,
)
from foodworks.core.services.ledger import StockAdjustment


class IInventoryStore(ABC):
    """Interface for inventory items and the append-only movement log."""

    @abstractmethod
    async def create_item(self, item: InventoryItem) -> InventoryItem:
        """Create a new inventory item (SKU generated when missing)."""
        pass

    @abstractmethod
    async def get_item(self, item_id: int) -> InventoryItem | None:
        """Get inventory item by ID."""
        pass

    @abstractmethod
    async def find_item(
        self, product_name: str, is_final_product: bool = False
    ) -> InventoryItem | None:
        """Find an inventory item by product name and finished-good flag."""
        pass

    @abstractmethod
    async def update_item(self, item: InventoryItem, expected_version: int) -> InventoryItem:
        """Update item details (not stock level); fails on a stale version."""
        pass

    @abstractmethod
    async def delete_item(self, item_id: int) -> bool:
        """Delete an item; its movements are kept."""
        pass

    @abstractmethod
    async def list_items(
        self,
        limit: int = 100,
        offset: int = 0,
        category: str | None = None,
        needs_reorder: bool = False,
        is_final_product: bool | None = None,
    ) -> list[InventoryItem]:
        """List inventory items."""
        pass

    @abstractmethod
    async def apply_adjustment(
        self, adjustment: StockAdjustment
    ) -> tuple[InventoryItem, InventoryMovement]:
        """Apply a signed stock delta and log its movement atomically."""
        pass

    @abstractmethod
    async def list_movements(
        self,
        inventory_id: int | None = None,
        movement_type: MovementType | None = None,
        reference_type: ReferenceType | None = None,
        reference_id: int | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[InventoryMovement]:
        """List movements, newest first."""
        pass

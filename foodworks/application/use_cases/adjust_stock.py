"""Adjust Stock Use Case.

Manual signed correction through the ledger.
"""

from dataclasses import dataclass

from foodworks.application.dto.converters import inventory_item_to_response, movement_to_response
from foodworks.application.dto.requests import AdjustStockRequest
from foodworks.application.dto.responses import StockAdjustmentResponse
from foodworks.config import get_logger
from foodworks.core.entities.inventory import (
    InventoryItem,
    InventoryMovement,
    MovementType,
    ReferenceType,
)
from foodworks.core.exceptions import ValidationError
from foodworks.core.interfaces.inventory_store import IInventoryStore
from foodworks.core.services.ledger import StockAdjustment

logger = get_logger(__name__)


@dataclass
class AdjustStockResult:
    """Result of a manual adjustment."""

    inventory_item: InventoryItem
    movement: InventoryMovement


class AdjustStockUseCase:
    """Apply a manual ``adjustment`` movement to one inventory item."""

    def __init__(self, inventory_store: IInventoryStore | None = None):
        self._inventory_store = inventory_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from foodworks.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def execute(self, item_id: int, request: AdjustStockRequest) -> AdjustStockResult:
        """Execute adjust stock use case."""
        logger.info("adjust_stock_started", item_id=item_id, quantity=request.quantity)

        if request.quantity == 0:
            raise ValidationError("quantity", "adjustment must be non-zero", request.quantity)

        store = await self._get_inventory_store()
        item, movement = await store.apply_adjustment(
            StockAdjustment(
                movement_type=MovementType.ADJUSTMENT,
                quantity=request.quantity,
                inventory_id=item_id,
                reference_type=ReferenceType.MANUAL,
                notes=request.notes,
                created_by=request.created_by,
            )
        )

        logger.info(
            "adjust_stock_complete",
            item_id=item.id,
            movement_id=movement.id,
            stock_level=item.stock_level,
        )
        return AdjustStockResult(inventory_item=item, movement=movement)

    def to_response(self, result: AdjustStockResult) -> StockAdjustmentResponse:
        """Convert result to API response."""
        return StockAdjustmentResponse(
            inventory_item=inventory_item_to_response(result.inventory_item),
            movement=movement_to_response(result.movement),
        )

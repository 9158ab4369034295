"""Create Inventory Item Use Case.

New item with optional opening stock.
"""

from dataclasses import dataclass

from foodworks.application.dto.converters import inventory_item_to_response, movement_to_response
from foodworks.application.dto.requests import CreateInventoryItemRequest
from foodworks.application.dto.responses import StockAdjustmentResponse
from foodworks.config import get_logger, get_settings
from foodworks.core.entities.inventory import (
    InventoryItem,
    InventoryMovement,
    MovementType,
    ReferenceType,
)
from foodworks.core.interfaces.inventory_store import IInventoryStore
from foodworks.core.services.ledger import StockAdjustment

logger = get_logger(__name__)

OPENING_STOCK_NOTE = "Opening stock"


@dataclass
class CreateInventoryItemResult:
    inventory_item: InventoryItem
    movement: InventoryMovement | None = None


class CreateInventoryItemUseCase:
    """
    Create an inventory item.

    The item is created empty; opening stock is booked as an ``adjustment``
    movement so that every unit on hand is explained by the ledger.
    """

    def __init__(self, inventory_store: IInventoryStore | None = None):
        self._inventory_store = inventory_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from foodworks.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def execute(self, request: CreateInventoryItemRequest) -> CreateInventoryItemResult:
        store = await self._get_inventory_store()
        reorder_point = request.reorder_point
        if reorder_point is None:
            reorder_point = get_settings().inventory.default_reorder_point

        item = await store.create_item(
            InventoryItem(
                product_name=request.product_name,
                sku=request.sku,
                category=request.category,
                unit=request.unit,
                stock_level=0.0,
                unit_price=request.unit_price,
                reorder_point=reorder_point,
                supplier_id=request.supplier_id,
                is_recipe_based=request.is_recipe_based,
                is_final_product=request.is_final_product,
            )
        )

        movement = None
        if request.stock_level > 0:
            item, movement = await store.apply_adjustment(
                StockAdjustment(
                    movement_type=MovementType.ADJUSTMENT,
                    quantity=request.stock_level,
                    inventory_id=item.id,
                    reference_type=ReferenceType.MANUAL,
                    notes=OPENING_STOCK_NOTE,
                    created_by=request.created_by,
                )
            )

        logger.info(
            "create_inventory_item_complete",
            item_id=item.id,
            sku=item.sku,
            opening_stock=request.stock_level,
        )
        return CreateInventoryItemResult(inventory_item=item, movement=movement)

    def to_response(self, result: CreateInventoryItemResult) -> StockAdjustmentResponse:
        return StockAdjustmentResponse(
            inventory_item=inventory_item_to_response(result.inventory_item),
            movement=movement_to_response(result.movement) if result.movement else None,
        )

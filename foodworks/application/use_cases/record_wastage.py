"""Record Wastage Use Case.

Write stock off through the ledger.
"""

from dataclasses import dataclass
from datetime import date

from foodworks.application.dto.converters import (
    inventory_item_to_response,
    movement_to_response,
    wastage_to_response,
)
from foodworks.application.dto.requests import RecordWastageRequest
from foodworks.application.dto.responses import RecordWastageResponse
from foodworks.config import get_logger
from foodworks.core.entities.inventory import InventoryItem, InventoryMovement
from foodworks.core.entities.stock import Wastage
from foodworks.core.exceptions import ValidationError
from foodworks.core.interfaces.stock_store import IStockStore

logger = get_logger(__name__)


@dataclass
class RecordWastageResult:
    wastage: Wastage
    inventory_item: InventoryItem
    movement: InventoryMovement


class RecordWastageUseCase:
    """Record wastage; stock floors at zero rather than going negative."""

    def __init__(self, stock_store: IStockStore | None = None):
        self._stock_store = stock_store

    async def _get_stock_store(self) -> IStockStore:
        if self._stock_store is None:
            from foodworks.infrastructure.storage.sqlite import get_stock_store

            self._stock_store = await get_stock_store()
        return self._stock_store

    async def execute(self, request: RecordWastageRequest) -> RecordWastageResult:
        logger.info(
            "record_wastage_started",
            inventory_id=request.inventory_id,
            quantity=request.quantity,
        )

        # 1. Validate
        if request.quantity <= 0:
            raise ValidationError("quantity", "must be greater than zero", request.quantity)
        if not request.reason.strip():
            raise ValidationError("reason", "is required")
        if not request.recorded_by.strip():
            raise ValidationError("recorded_by", "is required")

        # 2. Save wastage and apply the movement together
        store = await self._get_stock_store()
        wastage, item, movement = await store.record_wastage(
            Wastage(
                wastage_date=request.wastage_date or date.today(),
                inventory_id=request.inventory_id,
                quantity=request.quantity,
                reason=request.reason.strip(),
                recorded_by=request.recorded_by.strip(),
                notes=request.notes,
            )
        )

        logger.info(
            "record_wastage_complete",
            wastage_id=wastage.id,
            item_id=item.id,
            stock_level=item.stock_level,
        )
        return RecordWastageResult(wastage=wastage, inventory_item=item, movement=movement)

    def to_response(self, result: RecordWastageResult) -> RecordWastageResponse:
        return RecordWastageResponse(
            wastage=wastage_to_response(result.wastage),
            inventory_item=inventory_item_to_response(result.inventory_item),
            movement=movement_to_response(result.movement),
        )

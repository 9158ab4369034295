"""Receive Stock Use Case.

Goods-in receipt posted to the ledger.
"""

from dataclasses import dataclass
from datetime import date

from foodworks.application.dto.converters import (
    inventory_item_to_response,
    movement_to_response,
    receipt_to_response,
)
from foodworks.application.dto.requests import ReceiveStockRequest
from foodworks.application.dto.responses import ReceiveStockResponse
from foodworks.config import get_logger
from foodworks.core.entities.inventory import InventoryItem, InventoryMovement
from foodworks.core.entities.stock import StockReceipt
from foodworks.core.exceptions import RawMaterialNotFoundError, StockReceiptNotFoundError
from foodworks.core.interfaces.costing_store import IRawMaterialStore
from foodworks.core.interfaces.stock_store import IStockStore

logger = get_logger(__name__)


@dataclass
class ReceiveStockResult:
    """Result of receiving stock."""

    receipt: StockReceipt
    inventory_item: InventoryItem | None = None
    movement: InventoryMovement | None = None


class ReceiveStockUseCase:
    """Record a stock receipt (new or edited) and post accepted goods to stock."""

    def __init__(
        self,
        stock_store: IStockStore | None = None,
        raw_material_store: IRawMaterialStore | None = None,
    ):
        self._stock_store = stock_store
        self._raw_material_store = raw_material_store

    async def _get_stock_store(self) -> IStockStore:
        if self._stock_store is None:
            from foodworks.infrastructure.storage.sqlite import get_stock_store

            self._stock_store = await get_stock_store()
        return self._stock_store

    async def _get_raw_material_store(self) -> IRawMaterialStore:
        if self._raw_material_store is None:
            from foodworks.infrastructure.storage.sqlite import get_raw_material_store

            self._raw_material_store = await get_raw_material_store()
        return self._raw_material_store

    async def execute(
        self, request: ReceiveStockRequest, receipt_id: int | None = None
    ) -> ReceiveStockResult:
        """Execute receive stock use case; ``receipt_id`` edits an existing receipt."""
        logger.info(
            "receive_stock_started",
            receipt_id=receipt_id,
            product_name=request.product_name,
            quantity=request.quantity,
        )

        # 1. Validate linked raw material
        if request.raw_material_id is not None:
            materials = await self._get_raw_material_store()
            if await materials.get(request.raw_material_id) is None:
                raise RawMaterialNotFoundError(request.raw_material_id)

        # 2. Build receipt
        receipt = StockReceipt(
            id=receipt_id,
            received_date=request.received_date or date.today(),
            stock_type=request.stock_type,
            product_name=request.product_name,
            raw_material_id=request.raw_material_id,
            supplier_id=request.supplier_id,
            invoice_number=request.invoice_number,
            quantity=request.quantity,
            price_per_unit=request.price_per_unit,
            package_size=request.package_size,
            batch_number=request.batch_number,
            best_before_date=request.best_before_date,
            is_damaged=request.is_damaged,
            is_accepted=request.is_accepted,
            labelling_matches_specifications=request.labelling_matches_specifications,
            checked_by=request.checked_by,
        )

        # 3. Save and post to the ledger in one transaction
        store = await self._get_stock_store()
        if receipt_id is None:
            receipt, item, movement = await store.create_receipt(receipt)
        else:
            if await store.get_receipt(receipt_id) is None:
                raise StockReceiptNotFoundError(receipt_id)
            receipt, item, movement = await store.update_receipt(receipt)

        logger.info(
            "receive_stock_complete",
            receipt_id=receipt.id,
            item_id=item.id if item else None,
            stock_level=item.stock_level if item else None,
        )
        return ReceiveStockResult(receipt=receipt, inventory_item=item, movement=movement)

    def to_response(self, result: ReceiveStockResult) -> ReceiveStockResponse:
        """Convert result to API response."""
        return ReceiveStockResponse(
            receipt=receipt_to_response(result.receipt),
            inventory_item=(
                inventory_item_to_response(result.inventory_item)
                if result.inventory_item
                else None
            ),
            movement=movement_to_response(result.movement) if result.movement else None,
        )

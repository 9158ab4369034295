"""Save Sales Order Use Case.

Create or edit an order and consume its packaging.
"""

from dataclasses import dataclass, field
from datetime import date

from foodworks.application.dto.converters import movement_to_response, sales_order_to_response
from foodworks.application.dto.requests import SalesOrderRequest
from foodworks.application.dto.responses import SaveSalesOrderResponse
from foodworks.config import get_logger
from foodworks.core.entities.inventory import InventoryMovement
from foodworks.core.entities.sales import SalesItem, SalesOrder, SalesOrderStatus
from foodworks.core.exceptions import SalesOrderNotFoundError
from foodworks.core.interfaces.sales_store import ISalesStore

logger = get_logger(__name__)


@dataclass
class SaveSalesOrderResult:
    order: SalesOrder
    movements: list[InventoryMovement] = field(default_factory=list)


class SaveSalesOrderUseCase:
    """Create or update a sales order.

    Totals are recomputed from the items; packaging usage is diffed per
    material so an edit only consumes (or returns) the change.
    """

    def __init__(self, sales_store: ISalesStore | None = None):
        self._sales_store = sales_store

    async def _get_sales_store(self) -> ISalesStore:
        if self._sales_store is None:
            from foodworks.infrastructure.storage.sqlite import get_sales_store

            self._sales_store = await get_sales_store()
        return self._sales_store

    async def execute(
        self, request: SalesOrderRequest, order_id: int | None = None
    ) -> SaveSalesOrderResult:
        logger.info(
            "save_sales_order_started",
            order_id=order_id,
            customer=request.customer_name,
            items=len(request.items),
        )

        order = SalesOrder(
            id=order_id,
            order_date=request.order_date or date.today(),
            order_number=request.order_number,
            customer_name=request.customer_name,
            delivery_method=request.delivery_method,
            delivery_cost=request.delivery_cost,
            is_free_shipping=request.is_free_shipping,
            status=SalesOrderStatus(request.status),
            items=[
                SalesItem(
                    product_id=i.product_id,
                    quantity=i.quantity,
                    price_per_unit=i.price_per_unit,
                    batch_number=i.batch_number,
                    best_before_date=i.best_before_date,
                    production_date=i.production_date,
                    checked_by=i.checked_by,
                    labelling_matches_specs=i.labelling_matches_specs,
                    packaging_material_id=i.packaging_material_id,
                    packaging_quantity=i.packaging_quantity,
                )
                for i in request.items
            ],
        )

        store = await self._get_sales_store()
        if order_id is None:
            order, movements = await store.create_order(order, created_by=request.created_by)
        else:
            if await store.get_order(order_id) is None:
                raise SalesOrderNotFoundError(order_id)
            order, movements = await store.update_order(order, created_by=request.created_by)

        logger.info(
            "save_sales_order_complete",
            order_id=order.id,
            order_number=order.order_number,
            total_amount=order.total_amount,
            movements=len(movements),
        )
        return SaveSalesOrderResult(order=order, movements=movements)

    def to_response(self, result: SaveSalesOrderResult) -> SaveSalesOrderResponse:
        return SaveSalesOrderResponse(
            order=sales_order_to_response(result.order),
            movements=[movement_to_response(m) for m in result.movements],
        )

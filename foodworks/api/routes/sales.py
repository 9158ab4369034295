"""Sales order endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from foodworks.api.dependencies import get_sales_order_store, get_save_sales_order_use_case
from foodworks.application.dto.converters import sales_order_to_response
from foodworks.application.dto.requests import DeliveryMethodRequest, SalesOrderRequest
from foodworks.application.dto.responses import (
    DeliveryMethodResponse,
    ErrorResponse,
    SalesOrderResponse,
    SaveSalesOrderResponse,
)
from foodworks.application.use_cases import SaveSalesOrderUseCase
from foodworks.core.entities.sales import DeliveryMethod, SalesOrderStatus
from foodworks.infrastructure.storage.sqlite import SQLiteSalesStore

router = APIRouter(prefix="/api/sales", tags=["sales"])


@router.post(
    "/orders",
    response_model=SaveSalesOrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_order(
    request: SalesOrderRequest,
    use_case: SaveSalesOrderUseCase = Depends(get_save_sales_order_use_case),
) -> SaveSalesOrderResponse:
    """Create a sales order; packaging on its items is consumed from stock."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("/orders", response_model=list[SalesOrderResponse])
async def list_orders(
    order_status: SalesOrderStatus | None = Query(default=None, alias="status"),
    customer: str | None = None,
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: SQLiteSalesStore = Depends(get_sales_order_store),
) -> list[SalesOrderResponse]:
    orders = await store.list_orders(
        status=order_status, customer=customer, limit=limit, offset=offset
    )
    return [sales_order_to_response(o) for o in orders]


@router.get(
    "/orders/{order_id}",
    response_model=SalesOrderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_order(
    order_id: int,
    store: SQLiteSalesStore = Depends(get_sales_order_store),
) -> SalesOrderResponse:
    order = await store.get_order(order_id)
    if not order:
        raise HTTPException(status_code=404, detail=f"Sales order not found: {order_id}")
    return sales_order_to_response(order)


@router.put(
    "/orders/{order_id}",
    response_model=SaveSalesOrderResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_order(
    order_id: int,
    request: SalesOrderRequest,
    use_case: SaveSalesOrderUseCase = Depends(get_save_sales_order_use_case),
) -> SaveSalesOrderResponse:
    """Replace an order's items; only the change in packaging usage moves stock."""
    result = await use_case.execute(request, order_id=order_id)
    return use_case.to_response(result)


@router.get("/delivery-methods", response_model=list[DeliveryMethodResponse])
async def list_delivery_methods(
    store: SQLiteSalesStore = Depends(get_sales_order_store),
) -> list[DeliveryMethodResponse]:
    methods = await store.list_delivery_methods()
    return [DeliveryMethodResponse(id=m.id, name=m.name) for m in methods]  # type: ignore[arg-type]


@router.post(
    "/delivery-methods",
    response_model=DeliveryMethodResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_delivery_method(
    request: DeliveryMethodRequest,
    store: SQLiteSalesStore = Depends(get_sales_order_store),
) -> DeliveryMethodResponse:
    method = await store.create_delivery_method(DeliveryMethod(name=request.name))
    return DeliveryMethodResponse(id=method.id, name=method.name)  # type: ignore[arg-type]

"""Inventory ledger endpoints: items, adjustments, receipts and wastage."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status

from foodworks.api.dependencies import (
    get_adjust_stock_use_case,
    get_create_inventory_item_use_case,
    get_inv_item_store,
    get_receive_stock_use_case,
    get_record_wastage_use_case,
    get_stk_store,
)
from foodworks.application.dto.converters import (
    inventory_item_to_response,
    movement_to_response,
    receipt_to_response,
    wastage_to_response,
)
from foodworks.application.dto.requests import (
    AdjustStockRequest,
    CreateInventoryItemRequest,
    ReceiveStockRequest,
    RecordWastageRequest,
    UpdateInventoryItemRequest,
)
from foodworks.application.dto.responses import (
    ErrorResponse,
    InventoryItemResponse,
    InventoryListResponse,
    InventoryMovementResponse,
    ReceiveStockResponse,
    RecordWastageResponse,
    StockAdjustmentResponse,
    StockReceiptResponse,
    WastageResponse,
)
from foodworks.application.use_cases import (
    AdjustStockUseCase,
    CreateInventoryItemUseCase,
    ReceiveStockUseCase,
    RecordWastageUseCase,
)
from foodworks.core.entities.inventory import MovementType, ReferenceType
from foodworks.infrastructure.storage.sqlite import SQLiteInventoryStore, SQLiteStockStore

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


# --- Items ---


@router.post(
    "",
    response_model=StockAdjustmentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_item(
    request: CreateInventoryItemRequest,
    use_case: CreateInventoryItemUseCase = Depends(get_create_inventory_item_use_case),
) -> StockAdjustmentResponse:
    """Create an inventory item; opening stock is booked as an adjustment."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("", response_model=InventoryListResponse)
async def list_items(
    category: str | None = None,
    needs_reorder: bool = False,
    is_final_product: bool | None = None,
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: SQLiteInventoryStore = Depends(get_inv_item_store),
) -> InventoryListResponse:
    """List inventory items, optionally only those at or below reorder point."""
    items = await store.list_items(
        limit=limit,
        offset=offset,
        category=category,
        needs_reorder=needs_reorder,
        is_final_product=is_final_product,
    )
    return InventoryListResponse(
        items=[inventory_item_to_response(item) for item in items],
        total=len(items),
        limit=limit,
        offset=offset,
        has_more=len(items) == limit,
    )


# --- Movements ---


@router.get("/movements", response_model=list[InventoryMovementResponse])
async def list_movements(
    movement_type: MovementType | None = None,
    reference_type: ReferenceType | None = None,
    reference_id: int | None = None,
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: SQLiteInventoryStore = Depends(get_inv_item_store),
) -> list[InventoryMovementResponse]:
    """Movement log across all items, newest first."""
    movements = await store.list_movements(
        movement_type=movement_type,
        reference_type=reference_type,
        reference_id=reference_id,
        limit=limit,
        offset=offset,
    )
    return [movement_to_response(m) for m in movements]


# --- Stock receipts ---


@router.post(
    "/receipts",
    response_model=ReceiveStockResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}},
)
async def receive_stock(
    request: ReceiveStockRequest,
    use_case: ReceiveStockUseCase = Depends(get_receive_stock_use_case),
) -> ReceiveStockResponse:
    """Record a goods-in receipt; accepted, undamaged stock is added to inventory."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("/receipts", response_model=list[StockReceiptResponse])
async def list_receipts(
    stock_type: str | None = None,
    raw_material_id: int | None = None,
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: SQLiteStockStore = Depends(get_stk_store),
) -> list[StockReceiptResponse]:
    receipts = await store.list_receipts(
        stock_type=stock_type,
        raw_material_id=raw_material_id,
        limit=limit,
        offset=offset,
    )
    return [receipt_to_response(r) for r in receipts]


@router.get(
    "/receipts/{receipt_id}",
    response_model=StockReceiptResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_receipt(
    receipt_id: int,
    store: SQLiteStockStore = Depends(get_stk_store),
) -> StockReceiptResponse:
    receipt = await store.get_receipt(receipt_id)
    if not receipt:
        raise HTTPException(status_code=404, detail=f"Stock receipt not found: {receipt_id}")
    return receipt_to_response(receipt)


@router.put(
    "/receipts/{receipt_id}",
    response_model=ReceiveStockResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_receipt(
    receipt_id: int,
    request: ReceiveStockRequest,
    use_case: ReceiveStockUseCase = Depends(get_receive_stock_use_case),
) -> ReceiveStockResponse:
    """Edit a receipt; only the change in stocked quantity moves inventory."""
    result = await use_case.execute(request, receipt_id=receipt_id)
    return use_case.to_response(result)


# --- Wastage ---


@router.post(
    "/wastage",
    response_model=RecordWastageResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def record_wastage(
    request: RecordWastageRequest,
    use_case: RecordWastageUseCase = Depends(get_record_wastage_use_case),
) -> RecordWastageResponse:
    """Write stock off as waste (never below zero)."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("/wastage", response_model=list[WastageResponse])
async def list_wastage(
    start_date: date | None = None,
    end_date: date | None = None,
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: SQLiteStockStore = Depends(get_stk_store),
) -> list[WastageResponse]:
    records = await store.list_wastage(
        start_date=start_date, end_date=end_date, limit=limit, offset=offset
    )
    return [wastage_to_response(w) for w in records]


# --- Single item (registered after static paths) ---


@router.get(
    "/{item_id}",
    response_model=InventoryItemResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_item(
    item_id: int,
    store: SQLiteInventoryStore = Depends(get_inv_item_store),
) -> InventoryItemResponse:
    item = await store.get_item(item_id)
    if not item:
        raise HTTPException(status_code=404, detail=f"Inventory item not found: {item_id}")
    return inventory_item_to_response(item)


@router.put(
    "/{item_id}",
    response_model=InventoryItemResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_item(
    item_id: int,
    request: UpdateInventoryItemRequest,
    store: SQLiteInventoryStore = Depends(get_inv_item_store),
) -> InventoryItemResponse:
    """Update item details. Fails with 409 if ``version`` is stale."""
    existing = await store.get_item(item_id)
    if not existing:
        raise HTTPException(status_code=404, detail=f"Inventory item not found: {item_id}")

    changes = request.model_dump(exclude={"version"})
    if request.sku is None:
        changes.pop("sku")
    updated = await store.update_item(
        existing.model_copy(update=changes), expected_version=request.version
    )
    return inventory_item_to_response(updated)


@router.delete(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_item(
    item_id: int,
    store: SQLiteInventoryStore = Depends(get_inv_item_store),
) -> None:
    """Delete an item; its movements are kept with the link cleared."""
    if not await store.delete_item(item_id):
        raise HTTPException(status_code=404, detail=f"Inventory item not found: {item_id}")


@router.post(
    "/{item_id}/adjust",
    response_model=StockAdjustmentResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def adjust_stock(
    item_id: int,
    request: AdjustStockRequest,
    use_case: AdjustStockUseCase = Depends(get_adjust_stock_use_case),
) -> StockAdjustmentResponse:
    """Manual signed stock correction."""
    result = await use_case.execute(item_id, request)
    return use_case.to_response(result)


@router.get(
    "/{item_id}/movements",
    response_model=list[InventoryMovementResponse],
    responses={404: {"model": ErrorResponse}},
)
async def get_item_movements(
    item_id: int,
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: SQLiteInventoryStore = Depends(get_inv_item_store),
) -> list[InventoryMovementResponse]:
    """Movement history for one item."""
    if not await store.get_item(item_id):
        raise HTTPException(status_code=404, detail=f"Inventory item not found: {item_id}")
    movements = await store.list_movements(inventory_id=item_id, limit=limit, offset=offset)
    return [movement_to_response(m) for m in movements]

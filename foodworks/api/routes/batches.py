"""Batch manufacturing record endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from foodworks.api.dependencies import (
    get_batch_traceability_use_case,
    get_bmr_store,
    get_create_batch_use_case,
    get_update_batch_use_case,
)
from foodworks.application.dto.converters import batch_to_response
from foodworks.application.dto.requests import BatchRecordRequest
from foodworks.application.dto.responses import (
    BatchListResponse,
    BatchRecordResponse,
    BatchTraceabilityResponse,
    ErrorResponse,
    SaveBatchResponse,
    TraceabilityReportResponse,
)
from foodworks.application.use_cases import (
    CreateBatchRecordUseCase,
    GetBatchTraceabilityUseCase,
    UpdateBatchRecordUseCase,
)
from foodworks.core.entities.batch import BatchStatus
from foodworks.infrastructure.storage.sqlite import SQLiteBatchStore

router = APIRouter(prefix="/api/batches", tags=["batches"])


@router.post(
    "",
    response_model=SaveBatchResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def create_batch(
    request: BatchRecordRequest,
    use_case: CreateBatchRecordUseCase = Depends(get_create_batch_use_case),
) -> SaveBatchResponse:
    """
    Create a batch record.

    Ingredients are consumed from stock immediately. When ``batch_finished``
    is set the bags are also credited to the finished-goods item.
    """
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("", response_model=BatchListResponse)
async def list_batches(
    search: str | None = Query(
        default=None, description="Product, batch number or ingredient lot"
    ),
    product: list[str] | None = Query(default=None, description="Product name filter"),
    batch_status: BatchStatus | None = Query(default=None, alias="status"),
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    store: SQLiteBatchStore = Depends(get_bmr_store),
) -> BatchListResponse:
    records = await store.list_batches(
        search=search,
        product_names=product,
        status=batch_status,
        limit=limit,
        offset=offset,
    )
    return BatchListResponse(
        batches=[batch_to_response(r) for r in records],
        total=len(records),
        limit=limit,
        offset=offset,
        has_more=len(records) == limit,
    )


@router.get("/traceability", response_model=TraceabilityReportResponse)
async def traceability_report(
    search: str | None = None,
    product: list[str] | None = Query(default=None),
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    use_case: GetBatchTraceabilityUseCase = Depends(get_batch_traceability_use_case),
) -> TraceabilityReportResponse:
    """Ingredient lots consumed and goods produced for every matching batch."""
    traces = await use_case.report(
        search=search, product_names=product, limit=limit, offset=offset
    )
    return use_case.to_report_response(traces)


@router.get(
    "/{batch_id}",
    response_model=BatchRecordResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_batch(
    batch_id: int,
    store: SQLiteBatchStore = Depends(get_bmr_store),
) -> BatchRecordResponse:
    record = await store.get(batch_id)
    if not record:
        raise HTTPException(status_code=404, detail=f"Batch record not found: {batch_id}")
    return batch_to_response(record)


@router.put(
    "/{batch_id}",
    response_model=SaveBatchResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def update_batch(
    batch_id: int,
    request: BatchRecordRequest,
    use_case: UpdateBatchRecordUseCase = Depends(get_update_batch_use_case),
) -> SaveBatchResponse:
    """
    Edit a batch record.

    Only the difference against the previously saved state moves stock.
    A finished batch cannot be reopened.
    """
    result = await use_case.execute(batch_id, request)
    return use_case.to_response(result)


@router.get(
    "/{batch_id}/traceability",
    response_model=BatchTraceabilityResponse,
    responses={404: {"model": ErrorResponse}},
)
async def batch_traceability(
    batch_id: int,
    use_case: GetBatchTraceabilityUseCase = Depends(get_batch_traceability_use_case),
) -> BatchTraceabilityResponse:
    trace = await use_case.execute(batch_id)
    return use_case.to_response(trace)

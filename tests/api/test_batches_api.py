"""API tests for batch manufacturing record endpoints."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from foodworks.api.dependencies import (
    get_batch_traceability_use_case,
    get_bmr_store,
    get_create_batch_use_case,
    get_update_batch_use_case,
)
from foodworks.api.main import app
from foodworks.application.use_cases.create_batch_record import (
    CreateBatchRecordUseCase,
    SaveBatchResult,
)
from foodworks.application.use_cases.get_batch_traceability import (
    BatchTrace,
    GetBatchTraceabilityUseCase,
)
from foodworks.application.use_cases.update_batch_record import UpdateBatchRecordUseCase
from foodworks.core.entities.batch import BatchStatus
from foodworks.core.entities.inventory import InventoryMovement, MovementType, ReferenceType
from foodworks.core.exceptions import (
    BatchValidationError,
    ConcurrencyConflictError,
    InvalidBatchTransitionError,
)


def _movement(movement_type: MovementType, quantity: float) -> InventoryMovement:
    return InventoryMovement(
        id=1,
        product_name="Assam Leaf",
        movement_type=movement_type,
        quantity=quantity,
        reference_type=ReferenceType.BATCH,
        reference_id=1,
    )


@pytest.fixture
def mock_batch_store(sample_batch):
    store = AsyncMock()
    store.get.return_value = sample_batch
    store.list_batches.return_value = [sample_batch]
    return store


@pytest.fixture
def mock_create_use_case(sample_batch):
    uc = AsyncMock(spec=CreateBatchRecordUseCase)
    result = SaveBatchResult(
        record=sample_batch, movements=[_movement(MovementType.MANUFACTURING_CONSUME, -500)]
    )
    uc.execute.return_value = result
    uc.to_response.return_value = CreateBatchRecordUseCase().to_response(result)
    return uc


@pytest.fixture
def mock_update_use_case(sample_batch):
    uc = AsyncMock(spec=UpdateBatchRecordUseCase)
    result = SaveBatchResult(
        record=sample_batch, movements=[_movement(MovementType.MANUFACTURING_PRODUCE, 20)]
    )
    uc.execute.return_value = result
    uc.to_response.return_value = UpdateBatchRecordUseCase().to_response(result)
    return uc


@pytest.fixture
def mock_trace_use_case(sample_batch):
    uc = AsyncMock(spec=GetBatchTraceabilityUseCase)
    trace = BatchTrace(
        record=sample_batch,
        consumed=[_movement(MovementType.MANUFACTURING_CONSUME, -500)],
        produced=[],
    )
    real = GetBatchTraceabilityUseCase()
    uc.execute.return_value = trace
    uc.report.return_value = [trace]
    uc.to_response.return_value = real.to_response(trace)
    uc.to_report_response.return_value = real.to_report_response([trace])
    return uc


@pytest.fixture
async def batch_client(mock_batch_store, mock_create_use_case, mock_update_use_case, mock_trace_use_case):
    overrides = {
        get_bmr_store: lambda: mock_batch_store,
        get_create_batch_use_case: lambda: mock_create_use_case,
        get_update_batch_use_case: lambda: mock_update_use_case,
        get_batch_traceability_use_case: lambda: mock_trace_use_case,
    }
    app.dependency_overrides.update(overrides)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    for dependency in overrides:
        app.dependency_overrides.pop(dependency, None)


class TestBatchesAPI:
    async def test_create_returns_201(self, batch_client: AsyncClient, batch_payload):
        response = await batch_client.post("/api/batches", json=batch_payload)
        assert response.status_code == 201
        data = response.json()
        assert data["batch"]["product_batch_number"] == "BT-0315"
        assert data["batch"]["status"] == "in_progress"
        assert data["movements"][0]["quantity"] == -500

    async def test_create_missing_fields_is_400(
        self, batch_client: AsyncClient, batch_payload, mock_create_use_case
    ):
        mock_create_use_case.execute.side_effect = BatchValidationError(["ingredients"])
        response = await batch_client.post("/api/batches", json=batch_payload)
        assert response.status_code == 400
        assert response.json()["error_code"] == "BATCH_VALIDATION_ERROR"

    async def test_update_returns_difference(self, batch_client: AsyncClient, batch_payload):
        response = await batch_client.put("/api/batches/1", json={**batch_payload, "version": 1})
        assert response.status_code == 200
        assert response.json()["movements"][0]["movement_type"] == "manufacturing_produce"

    async def test_reopen_is_409(self, batch_client: AsyncClient, batch_payload, mock_update_use_case):
        mock_update_use_case.execute.side_effect = InvalidBatchTransitionError(
            1, BatchStatus.COMPLETED.value, BatchStatus.IN_PROGRESS.value
        )
        response = await batch_client.put("/api/batches/1", json=batch_payload)
        assert response.status_code == 409
        assert response.json()["error_code"] == "INVALID_BATCH_TRANSITION"

    async def test_stale_version_is_409(self, batch_client: AsyncClient, batch_payload, mock_update_use_case):
        mock_update_use_case.execute.side_effect = ConcurrencyConflictError("Batch", 1, 1)
        response = await batch_client.put("/api/batches/1", json={**batch_payload, "version": 1})
        assert response.status_code == 409
        assert response.json()["error_code"] == "CONCURRENCY_CONFLICT"

    async def test_list_filters(self, batch_client: AsyncClient, mock_batch_store):
        response = await batch_client.get(
            "/api/batches?search=LOT-A&product=Breakfast%20Tea&status=in_progress"
        )
        assert response.status_code == 200
        assert response.json()["total"] == 1
        kwargs = mock_batch_store.list_batches.call_args.kwargs
        assert kwargs["search"] == "LOT-A"
        assert kwargs["product_names"] == ["Breakfast Tea"]
        assert kwargs["status"] == BatchStatus.IN_PROGRESS

    async def test_get_missing(self, batch_client: AsyncClient, mock_batch_store):
        mock_batch_store.get.return_value = None
        response = await batch_client.get("/api/batches/99")
        assert response.status_code == 404
        assert response.json()["error_code"] == "BATCH_NOT_FOUND"

    async def test_traceability(self, batch_client: AsyncClient):
        response = await batch_client.get("/api/batches/1/traceability")
        assert response.status_code == 200
        assert response.json()["consumed"][0]["quantity"] == -500

    async def test_traceability_report_not_shadowed(self, batch_client: AsyncClient):
        response = await batch_client.get("/api/batches/traceability?search=LOT-A")
        assert response.status_code == 200
        assert response.json()["total"] == 1

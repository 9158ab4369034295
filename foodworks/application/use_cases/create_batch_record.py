"""Create Batch Record Use Case.

Record a manufacturing run and move stock.
"""

from dataclasses import dataclass, field
from datetime import date

from pydantic import ValidationError as PydanticValidationError

from foodworks.application.dto.converters import batch_to_response, movement_to_response
from foodworks.application.dto.requests import BatchRecordRequest
from foodworks.application.dto.responses import SaveBatchResponse
from foodworks.config import get_logger, get_settings
from foodworks.core.entities.batch import (
    BatchChecklist,
    BatchIngredient,
    BatchManufacturingRecord,
)
from foodworks.core.entities.inventory import InventoryMovement
from foodworks.core.exceptions import ValidationError
from foodworks.core.interfaces.batch_store import IBatchStore
from foodworks.core.services.batch_workflow import validate_new_batch

logger = get_logger(__name__)


@dataclass
class SaveBatchResult:
    """Saved batch with the ledger movements the save applied."""

    record: BatchManufacturingRecord
    movements: list[InventoryMovement] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def build_batch_record(
    request: BatchRecordRequest,
    batch_id: int | None = None,
    default_date: date | None = None,
) -> BatchManufacturingRecord:
    """Map a request onto a record; raises ValidationError for a malformed checklist."""
    try:
        checklist = BatchChecklist.model_validate(request.checklist)
    except PydanticValidationError as e:
        raise ValidationError("checklist", str(e.errors()[0]["msg"]), request.checklist) from e

    return BatchManufacturingRecord(
        id=batch_id,
        batch_date=request.batch_date or default_date or date.today(),
        product_id=request.product_id,
        product_batch_number=request.product_batch_number,
        product_best_before_date=request.product_best_before_date,
        bags_count=request.bags_count,
        bag_size=request.bag_size,
        batch_size=request.batch_size,
        batch_started=request.batch_started,
        batch_finished=request.batch_finished,
        scale_id=request.scale_id,
        scale_target_weight=request.scale_target_weight,
        scale_actual_reading=request.scale_actual_reading,
        checklist=checklist,
        manager_comments=request.manager_comments,
        remedial_actions=request.remedial_actions,
        work_undertaken=request.work_undertaken,
        ingredients=[
            BatchIngredient(
                raw_material_id=i.raw_material_id,
                batch_number=i.batch_number,
                best_before_date=i.best_before_date,
                quantity=i.quantity,
            )
            for i in request.ingredients
        ],
    )


def batch_warnings(record: BatchManufacturingRecord) -> list[str]:
    """Non-blocking quality warnings for a saved batch."""
    warnings = []
    deviation = record.scale_deviation_percent()
    tolerance = get_settings().batch.scale_tolerance_percent
    if deviation is not None and deviation > tolerance:
        warnings.append(
            f"Scale reading deviates {deviation:.2f}% from target (tolerance {tolerance:.2f}%)"
        )
    if record.is_completed and not record.checklist.is_complete:
        outstanding = ", ".join(record.checklist.outstanding_checks)
        warnings.append(f"Batch completed with outstanding checks: {outstanding}")
    return warnings


class CreateBatchRecordUseCase:
    """
    Create a batch manufacturing record.

    Ingredients are consumed on creation. A batch created already finished
    also credits its bags to the finished-goods item.
    """

    def __init__(self, batch_store: IBatchStore | None = None):
        self._batch_store = batch_store

    async def _get_batch_store(self) -> IBatchStore:
        if self._batch_store is None:
            from foodworks.infrastructure.storage.sqlite import get_batch_store

            self._batch_store = await get_batch_store()
        return self._batch_store

    async def execute(self, request: BatchRecordRequest) -> SaveBatchResult:
        """Execute create batch use case."""
        logger.info(
            "create_batch_started",
            product_id=request.product_id,
            batch_number=request.product_batch_number,
        )

        # 1. Build and validate
        record = build_batch_record(request)
        validate_new_batch(record)

        # 2. Save record, ingredients and movements together
        store = await self._get_batch_store()
        record, movements = await store.create(record, created_by=request.created_by)

        # 3. Quality warnings
        warnings = batch_warnings(record)
        for warning in warnings:
            logger.warning("batch_quality_warning", batch_id=record.id, warning=warning)

        logger.info(
            "batch_record_created",
            batch_id=record.id,
            status=record.status.value,
            movements=len(movements),
        )
        return SaveBatchResult(record=record, movements=movements, warnings=warnings)

    def to_response(self, result: SaveBatchResult) -> SaveBatchResponse:
        """Convert result to API response."""
        return SaveBatchResponse(
            batch=batch_to_response(result.record),
            movements=[movement_to_response(m) for m in result.movements],
            warnings=result.warnings,
        )

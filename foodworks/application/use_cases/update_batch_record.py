"""Update Batch Record Use Case.

Edit a batch, applying only the stock difference.
"""

from foodworks.application.dto.converters import batch_to_response, movement_to_response
from foodworks.application.dto.requests import BatchRecordRequest
from foodworks.application.dto.responses import SaveBatchResponse
from foodworks.application.use_cases.create_batch_record import (
    SaveBatchResult,
    batch_warnings,
    build_batch_record,
)
from foodworks.config import get_logger
from foodworks.core.exceptions import BatchNotFoundError
from foodworks.core.interfaces.batch_store import IBatchStore
from foodworks.core.services.batch_workflow import validate_batch_edit

logger = get_logger(__name__)


class UpdateBatchRecordUseCase:
    """
    Edit a batch manufacturing record.

    The store diffs the stored batch against the edit, so saving an
    unchanged batch moves no stock and finishing a batch credits its bags
    exactly once.
    """

    def __init__(self, batch_store: IBatchStore | None = None):
        self._batch_store = batch_store

    async def _get_batch_store(self) -> IBatchStore:
        if self._batch_store is None:
            from foodworks.infrastructure.storage.sqlite import get_batch_store

            self._batch_store = await get_batch_store()
        return self._batch_store

    async def execute(self, batch_id: int, request: BatchRecordRequest) -> SaveBatchResult:
        """Execute update batch use case."""
        logger.info("update_batch_started", batch_id=batch_id, version=request.version)

        # 1. Load current state
        store = await self._get_batch_store()
        existing = await store.get(batch_id)
        if existing is None:
            raise BatchNotFoundError(batch_id)

        # 2. Build and validate the edit
        record = build_batch_record(request, batch_id=batch_id, default_date=existing.batch_date)
        validate_batch_edit(record)

        # 3. Save; stale versions and reopening are rejected by the store
        expected_version = request.version if request.version is not None else existing.version
        record, movements = await store.update(
            record, expected_version, created_by=request.created_by
        )

        warnings = batch_warnings(record)
        for warning in warnings:
            logger.warning("batch_quality_warning", batch_id=record.id, warning=warning)

        logger.info(
            "batch_record_updated",
            batch_id=record.id,
            version=record.version,
            movements=len(movements),
        )
        return SaveBatchResult(record=record, movements=movements, warnings=warnings)

    def to_response(self, result: SaveBatchResult) -> SaveBatchResponse:
        return SaveBatchResponse(
            batch=batch_to_response(result.record),
            movements=[movement_to_response(m) for m in result.movements],
            warnings=result.warnings,
        )

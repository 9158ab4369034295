"""Batch Traceability Use Case.

Ingredients in and finished goods out.
"""

from dataclasses import dataclass, field

from foodworks.application.dto.converters import batch_to_response, movement_to_response
from foodworks.application.dto.responses import (
    BatchTraceabilityResponse,
    TraceabilityReportResponse,
)
from foodworks.config import get_logger
from foodworks.core.entities.batch import BatchManufacturingRecord
from foodworks.core.entities.inventory import InventoryMovement, MovementType
from foodworks.core.exceptions import BatchNotFoundError
from foodworks.core.interfaces.batch_store import IBatchStore

logger = get_logger(__name__)


@dataclass
class BatchTrace:
    record: BatchManufacturingRecord
    consumed: list[InventoryMovement] = field(default_factory=list)
    produced: list[InventoryMovement] = field(default_factory=list)


class GetBatchTraceabilityUseCase:
    """Trace batches to the ledger movements they caused."""

    def __init__(self, batch_store: IBatchStore | None = None):
        self._batch_store = batch_store

    async def _get_batch_store(self) -> IBatchStore:
        if self._batch_store is None:
            from foodworks.infrastructure.storage.sqlite import get_batch_store

            self._batch_store = await get_batch_store()
        return self._batch_store

    async def execute(self, batch_id: int) -> BatchTrace:
        """Trace a single batch."""
        store = await self._get_batch_store()
        record = await store.get(batch_id)
        if record is None:
            raise BatchNotFoundError(batch_id)
        return await self._trace(store, record)

    async def report(
        self,
        search: str | None = None,
        product_names: list[str] | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[BatchTrace]:
        """Trace every batch matching the filters."""
        store = await self._get_batch_store()
        records = await store.list_batches(
            search=search, product_names=product_names, limit=limit, offset=offset
        )
        traces = [await self._trace(store, record) for record in records]
        logger.info(
            "traceability_report_built",
            search=search,
            products=len(product_names or []),
            batches=len(traces),
        )
        return traces

    @staticmethod
    async def _trace(store: IBatchStore, record: BatchManufacturingRecord) -> BatchTrace:
        movements = await store.get_movements(record.id)  # type: ignore[arg-type]
        return BatchTrace(
            record=record,
            consumed=[
                m for m in movements if m.movement_type == MovementType.MANUFACTURING_CONSUME
            ],
            produced=[
                m for m in movements if m.movement_type == MovementType.MANUFACTURING_PRODUCE
            ],
        )

    def to_response(self, trace: BatchTrace) -> BatchTraceabilityResponse:
        return BatchTraceabilityResponse(
            batch=batch_to_response(trace.record),
            consumed=[movement_to_response(m) for m in trace.consumed],
            produced=[movement_to_response(m) for m in trace.produced],
        )

    def to_report_response(self, traces: list[BatchTrace]) -> TraceabilityReportResponse:
        return TraceabilityReportResponse(
            records=[self.to_response(t) for t in traces],
            total=len(traces),
        )

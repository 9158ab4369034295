"""Abstract interface for batch manufacturing record storage."""

from abc import ABC, abstractmethod

from foodworks.core.entities.batch import BatchManufacturingRecord, BatchStatus
from foodworks.core.entities.inventory import InventoryMovement


class IBatchStore(ABC):
    """
    Interface for batch records.

    ``create`` and ``update`` persist the record, its ingredients and the
    resulting ledger movements in one transaction.
    """

    @abstractmethod
    async def create(
        self, record: BatchManufacturingRecord, created_by: str | None = None
    ) -> tuple[BatchManufacturingRecord, list[InventoryMovement]]:
        pass

    @abstractmethod
    async def update(
        self,
        record: BatchManufacturingRecord,
        expected_version: int,
        created_by: str | None = None,
    ) -> tuple[BatchManufacturingRecord, list[InventoryMovement]]:
        """Save an edit; raises ConcurrencyConflictError on a stale version."""
        pass

    @abstractmethod
    async def get(self, batch_id: int) -> BatchManufacturingRecord | None:
        pass

    @abstractmethod
    async def list_batches(
        self,
        search: str | None = None,
        product_names: list[str] | None = None,
        status: BatchStatus | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[BatchManufacturingRecord]:
        """List batches, newest first, filtered by text search and product."""
        pass

    @abstractmethod
    async def get_movements(self, batch_id: int) -> list[InventoryMovement]:
        """Ledger movements referencing this batch."""
        pass

"""Abstract interface for goods-in receipts and wastage records."""

from abc import ABC, abstractmethod
from datetime import date

from foodworks.core.entities.inventory import InventoryItem, InventoryMovement
from foodworks.core.entities.stock import StockReceipt, Wastage


class IStockStore(ABC):
    """Receipts and wastage, each applied to the ledger in the same transaction."""

    @abstractmethod
    async def create_receipt(
        self, receipt: StockReceipt
    ) -> tuple[StockReceipt, InventoryItem | None, InventoryMovement | None]:
        pass

    @abstractmethod
    async def update_receipt(
        self, receipt: StockReceipt
    ) -> tuple[StockReceipt, InventoryItem | None, InventoryMovement | None]:
        """Save an edited receipt, applying only the change in stocked quantity."""
        pass

    @abstractmethod
    async def get_receipt(self, receipt_id: int) -> StockReceipt | None:
        pass

    @abstractmethod
    async def list_receipts(
        self,
        stock_type: str | None = None,
        raw_material_id: int | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[StockReceipt]:
        pass

    @abstractmethod
    async def record_wastage(
        self, wastage: Wastage
    ) -> tuple[Wastage, InventoryItem, InventoryMovement]:
        pass

    @abstractmethod
    async def get_wastage(self, wastage_id: int) -> Wastage | None:
        pass

    @abstractmethod
    async def list_wastage(
        self,
        start_date: date | None = None,
        end_date: date | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Wastage]:
        pass

"""Abstract interface for sales order storage."""

from abc import ABC, abstractmethod

from foodworks.core.entities.inventory import InventoryMovement
from foodworks.core.entities.sales import DeliveryMethod, SalesOrder, SalesOrderStatus


class ISalesStore(ABC):
    """Interface for sales orders, their items and delivery methods."""

    @abstractmethod
    async def create_order(
        self, order: SalesOrder, created_by: str | None = None
    ) -> tuple[SalesOrder, list[InventoryMovement]]:
        """Create an order with items and consume its packaging."""
        pass

    @abstractmethod
    async def update_order(
        self, order: SalesOrder, created_by: str | None = None
    ) -> tuple[SalesOrder, list[InventoryMovement]]:
        """Replace an order's items, consuming only the change in packaging."""
        pass

    @abstractmethod
    async def get_order(self, order_id: int) -> SalesOrder | None:
        pass

    @abstractmethod
    async def list_orders(
        self,
        status: SalesOrderStatus | None = None,
        customer: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[SalesOrder]:
        pass

    @abstractmethod
    async def list_delivery_methods(self) -> list[DeliveryMethod]:
        pass

    @abstractmethod
    async def create_delivery_method(self, method: DeliveryMethod) -> DeliveryMethod:
        pass

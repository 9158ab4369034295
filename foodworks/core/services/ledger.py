"""
Inventory ledger rules.

A ledger adjustment is a signed delta against one inventory item. The storage
layer applies adjustments inside a transaction; the arithmetic lives here.
"""

from dataclasses import dataclass, field

from foodworks.core.entities.inventory import InventoryItem, MovementType, ReferenceType


def next_stock_level(current: float, delta: float, movement_type: MovementType) -> float:
    """
    Stock level after applying ``delta``.

    Consumption movements (wastage, manufacturing consumption, sales) floor at
    zero. Receipts, production and manual adjustments are not floored.
    """
    new_level = current + delta
    if movement_type.is_consumption and delta < 0:
        return max(0.0, new_level)
    return new_level


@dataclass
class StockAdjustment:
    """
    A requested change to one inventory item.

    The item is addressed either by ``inventory_id`` or by ``product_name``
    together with ``is_final_product``. When addressed by name and missing,
    it is created from ``template`` (or a bare item with that name).
    """

    movement_type: MovementType
    quantity: float  # signed delta
    inventory_id: int | None = None
    product_name: str | None = None
    is_final_product: bool = False
    template: InventoryItem | None = None
    reference_type: ReferenceType | None = None
    reference_id: int | None = None
    notes: str | None = None
    created_by: str | None = None
    set_unit_price: float | None = None  # receipts refresh the latest price

    def __post_init__(self) -> None:
        if self.inventory_id is None and not self.product_name:
            raise ValueError("StockAdjustment needs an inventory_id or a product_name")


@dataclass
class AdjustmentPlan:
    """Ledger deltas derived from the change between two saved states."""

    # raw material id -> signed stock delta (negative consumes)
    material_deltas: dict[int, float] = field(default_factory=dict)
    # final product id -> signed stock delta of finished goods
    product_deltas: dict[int, float] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.material_deltas and not self.product_deltas


def quantity_changes(
    before: dict[int, float], after: dict[int, float]
) -> dict[int, float]:
    """Per-key ``after - before``, omitting keys whose quantity is unchanged."""
    changes: dict[int, float] = {}
    for key in sorted(before.keys() | after.keys()):
        diff = after.get(key, 0.0) - before.get(key, 0.0)
        if abs(diff) > 1e-9:
            changes[key] = diff
    return changes

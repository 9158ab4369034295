"""
Batch manufacturing workflow rules.

Validation, status transitions and the stock deltas a batch save must apply.
Both create and edit go through ``plan_batch_adjustments`` so each ingredient
is consumed exactly once and output is credited exactly once, however many
times a batch is saved.
"""

from foodworks.core.entities.batch import BatchManufacturingRecord, BatchStatus
from foodworks.core.exceptions import BatchValidationError, InvalidBatchTransitionError
from foodworks.core.services.ledger import AdjustmentPlan, quantity_changes


def validate_new_batch(record: BatchManufacturingRecord) -> None:
    """Raise BatchValidationError listing every missing field of a new batch."""
    missing = []
    if record.product_id is None:
        missing.append("product_id")
    if not record.product_batch_number:
        missing.append("product_batch_number")
    if record.product_best_before_date is None:
        missing.append("product_best_before_date")
    if record.batch_started is None:
        missing.append("batch_started")
    if record.scale_target_weight is None:
        missing.append("scale_target_weight")
    if record.scale_actual_reading is None:
        missing.append("scale_actual_reading")
    if not record.valid_ingredients():
        missing.append("ingredients")
    if missing:
        raise BatchValidationError(missing)


def validate_batch_edit(record: BatchManufacturingRecord) -> None:
    """Edits need a date, a product, a batch size and at least one ingredient."""
    missing = []
    if record.batch_date is None:
        missing.append("batch_date")
    if record.product_id is None:
        missing.append("product_id")
    if not record.batch_size:
        missing.append("batch_size")
    if not record.valid_ingredients():
        missing.append("ingredients")
    if missing:
        raise BatchValidationError(missing)


def check_transition(
    previous: BatchManufacturingRecord, current: BatchManufacturingRecord
) -> None:
    """A completed batch cannot be reopened."""
    if previous.is_completed and not current.is_completed:
        raise InvalidBatchTransitionError(
            previous.id or 0,
            BatchStatus.COMPLETED.value,
            BatchStatus.IN_PROGRESS.value,
        )


def ingredient_totals(record: BatchManufacturingRecord | None) -> dict[int, float]:
    """Total quantity per raw material over the record's valid ingredients."""
    totals: dict[int, float] = {}
    if record is None:
        return totals
    for ingredient in record.valid_ingredients():
        material_id = ingredient.raw_material_id
        totals[material_id] = totals.get(material_id, 0.0) + ingredient.quantity  # type: ignore[index]
    return totals


def production_totals(record: BatchManufacturingRecord | None) -> dict[int, float]:
    if record is None or record.product_id is None or not record.produced_quantity:
        return {}
    return {record.product_id: record.produced_quantity}


def plan_batch_adjustments(
    previous: BatchManufacturingRecord | None,
    current: BatchManufacturingRecord,
) -> AdjustmentPlan:
    """
    Stock deltas needed to move from ``previous`` (None on create) to ``current``.

    Ingredient increases consume stock and decreases return it. Finished goods
    are credited for completed batches only, by the change in bag count.
    """
    consumed = quantity_changes(ingredient_totals(previous), ingredient_totals(current))
    produced = quantity_changes(production_totals(previous), production_totals(current))
    return AdjustmentPlan(
        material_deltas={material_id: -qty for material_id, qty in consumed.items()},
        product_deltas=produced,
    )

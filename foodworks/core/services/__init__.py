"""
Core business rules.

Layer-pure functions that depend only on:
- foodworks/core/entities/*
- foodworks/core/exceptions.py

NO infrastructure imports.
"""

from foodworks.core.services.batch_workflow import (
    check_transition,
    plan_batch_adjustments,
    validate_batch_edit,
    validate_new_batch,
)
from foodworks.core.services.costing import (
    ProductMargins,
    compute_margins,
    recipe_cost,
    weighted_average_cost,
)
from foodworks.core.services.identifiers import generate_order_number, generate_sku
from foodworks.core.services.ledger import (
    AdjustmentPlan,
    StockAdjustment,
    next_stock_level,
    quantity_changes,
)

__all__ = [
    # Ledger
    "StockAdjustment",
    "AdjustmentPlan",
    "next_stock_level",
    "quantity_changes",
    # Batch workflow
    "plan_batch_adjustments",
    "validate_new_batch",
    "validate_batch_edit",
    "check_transition",
    # Costing
    "ProductMargins",
    "compute_margins",
    "recipe_cost",
    "weighted_average_cost",
    # Identifiers
    "generate_sku",
    "generate_order_number",
]

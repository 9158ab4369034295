"""
Recipe costing and product margin calculations.

Pure functions; callers pass in current raw material costs so results are
always derived from a single source of truth.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class ProductMargins:
    """Derived pricing figures for a finished product."""

    recipe_cost: float
    markup: float  # percent of cost
    profit_margin: float  # percent of selling price
    profit_per_item: float


def recipe_cost(lines: Iterable[tuple[float, float]]) -> float:
    """Sum of quantity × unit cost over (quantity, unit_cost) pairs."""
    return math.fsum(quantity * unit_cost for quantity, unit_cost in lines)


def markup_percent(cost: float, price: float) -> float:
    if cost <= 0:
        return 0.0
    return round((price - cost) / cost * 100, 2)


def margin_percent(cost: float, price: float) -> float:
    # Denominator is price, unlike markup
    if cost <= 0 or price <= 0:
        return 0.0
    return round((price - cost) / price * 100, 2)


def compute_margins(cost: float, price: float) -> ProductMargins:
    """Compute markup, margin and profit for a selling price over a recipe cost."""
    return ProductMargins(
        recipe_cost=cost,
        markup=markup_percent(cost, price),
        profit_margin=margin_percent(cost, price),
        profit_per_item=round(price - cost, 2),
    )


def weighted_average_cost(receipts: Iterable[tuple[float, float]]) -> float | None:
    """
    Weighted average unit price over (quantity, price_per_unit) receipts.

    Returns None when there is no positive quantity to average over.
    """
    total_qty = 0.0
    total_value = 0.0
    for quantity, price in receipts:
        if quantity <= 0:
            continue
        total_qty += quantity
        total_value += quantity * price
    if total_qty <= 0:
        return None
    return total_value / total_qty

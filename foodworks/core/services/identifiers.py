"""Generated SKUs and order numbers."""

import random
import time
from datetime import date


def generate_sku(category: str | None = None, default_category: str = "prod") -> str:
    """
    Build a SKU such as ``TEA-4821067``.

    Three-letter upper-case category prefix, four digits taken from the
    millisecond clock and a three-digit random suffix.
    """
    prefix = (category or default_category)[:3].upper()
    timestamp = str(int(time.time() * 1000))[9:13]
    suffix = f"{random.randint(0, 999):03d}"
    return f"{prefix}-{timestamp}{suffix}"


def generate_order_number(order_date: date, sequence: int) -> str:
    """Order number ``SO-YYYYMMDD-NNNN`` for the n-th order of the day."""
    return f"SO-{order_date:%Y%m%d}-{sequence:04d}"

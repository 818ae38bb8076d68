"""
Quantity engine.

Pure Python math. Given a work item's dimensional inputs and its unit type,
produce the billable quantity. Unknown unit types yield 0, never an error.
"""

from .registry import (
    CALCULATOR_REGISTRY,
    calculate_quantity,
    get_calculator,
    has_calculator,
    list_calculators,
    quantity_for_item,
)

__all__ = [
    "CALCULATOR_REGISTRY",
    "calculate_quantity",
    "get_calculator",
    "has_calculator",
    "list_calculators",
    "quantity_for_item",
]

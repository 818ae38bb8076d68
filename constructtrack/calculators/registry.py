"""
Calculator registry: maps unit types to calculator classes.
"""

import logging

from ..models import UnitType, lookup_enum
from .base import BaseCalculator
from .count import LumpsumCalculator, PiecesCalculator
from .dimensional import (
    AreaCalculator,
    NosCalculator,
    RunningMeterCalculator,
    VolumeCalculator,
)

logger = logging.getLogger(__name__)

CALCULATOR_REGISTRY: dict[str, type] = {
    UnitType.SQFT.value: AreaCalculator,
    UnitType.SQM.value: AreaCalculator,
    UnitType.CUBIC_METER.value: VolumeCalculator,
    UnitType.PIECES.value: PiecesCalculator,
    UnitType.RUNNING_METER.value: RunningMeterCalculator,
    UnitType.LUMPSUM.value: LumpsumCalculator,
    UnitType.NOS.value: NosCalculator,
}


def _key(unit_type) -> str:
    member = lookup_enum(UnitType, unit_type)
    if member is not None:
        return member.value
    return str(unit_type)


def get_calculator(unit_type) -> BaseCalculator:
    """Returns an instance of the calculator for a unit type, or raises ValueError."""
    key = _key(unit_type)
    if key not in CALCULATOR_REGISTRY:
        raise ValueError(
            f"No calculator registered for unit type: {key}. "
            f"Available: {list(CALCULATOR_REGISTRY.keys())}"
        )
    return CALCULATOR_REGISTRY[key]()


def has_calculator(unit_type) -> bool:
    """Check if a calculator exists for a unit type."""
    return _key(unit_type) in CALCULATOR_REGISTRY


def list_calculators() -> list[str]:
    """List all registered unit types."""
    return list(CALCULATOR_REGISTRY.keys())


def calculate_quantity(unit_type, length=0.0, width=0.0, depth=0.0, units=0.0,
                       unit_multiplier=None) -> float:
    """
    Quantity for one set of dimensions. Total: unknown unit types give 0.0.

    No validation is done on the inputs; zero and negative values simply
    propagate through the formula.
    """
    if not has_calculator(unit_type):
        logger.debug("No calculator for unit type %r, quantity is 0", unit_type)
        return 0.0
    fields = {
        "length": length,
        "width": width,
        "depth": depth,
        "units": units,
        "unit_multiplier": unit_multiplier,
    }
    return get_calculator(unit_type).calculate(fields)


def quantity_for_item(item) -> float:
    """Recompute quantity from a WorkItem's own fields."""
    return calculate_quantity(
        item.unit_type,
        length=item.length,
        width=item.width,
        depth=item.depth,
        units=item.units,
        unit_multiplier=item.unit_multiplier,
    )

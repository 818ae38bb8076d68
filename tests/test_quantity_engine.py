"""
Quantity engine tests.

Tests:
1-7.   One formula per unit type
8-10.  Totality: unknown types, zero and negative inputs
11-13. Registry
14-15. Item-level recompute
"""

import pytest

from constructtrack.calculators import (
    calculate_quantity,
    get_calculator,
    has_calculator,
    list_calculators,
    quantity_for_item,
)
from constructtrack.calculators.count import LumpsumCalculator, PiecesCalculator
from constructtrack.calculators.dimensional import AreaCalculator
from constructtrack.models import UnitType, UNIT_TYPE_OPTIONS
from constructtrack.schemas import WorkItem


# ============================================================
# Formulas
# ============================================================

def test_sqft_is_length_width_units():
    assert calculate_quantity(UnitType.SQFT, length=10, width=5, units=2) == 100


def test_sqm_uses_same_formula_as_sqft():
    assert calculate_quantity(UnitType.SQM, length=4, width=2.5, units=3) == 30


def test_cubic_meter_is_length_width_depth():
    assert calculate_quantity(UnitType.CUBIC_METER, length=2, width=3, depth=4) == 24


def test_pieces_is_units_times_multiplier():
    assert calculate_quantity(UnitType.PIECES, units=10, unit_multiplier=3) == 30


def test_pieces_multiplier_defaults_to_one():
    """Absent or zero multiplier counts as 1."""
    assert calculate_quantity(UnitType.PIECES, units=10) == 10
    assert calculate_quantity(UnitType.PIECES, units=10, unit_multiplier=0) == 10


def test_running_meter_is_length_only():
    assert calculate_quantity(UnitType.RUNNING_METER, length=7.5, width=99, depth=99,
                              units=99) == 7.5


def test_lumpsum_is_always_one():
    assert calculate_quantity(UnitType.LUMPSUM) == 1
    assert calculate_quantity(UnitType.LUMPSUM, length=-3, width=40, units=7) == 1


def test_nos_is_length_width_depth_units():
    assert calculate_quantity(UnitType.NOS, length=2, width=2, depth=2, units=5) == 40


# ============================================================
# Totality
# ============================================================

def test_unknown_unit_type_gives_zero():
    assert calculate_quantity("hectare", length=10, width=10, units=1) == 0


def test_zero_dimension_gives_zero():
    assert calculate_quantity(UnitType.SQFT, length=0, width=5, units=2) == 0


def test_negative_inputs_propagate():
    assert calculate_quantity(UnitType.CUBIC_METER, length=-2, width=3, depth=4) == -24


def test_wire_value_strings_are_accepted():
    """Unit types read from JSON arrive as plain strings."""
    assert calculate_quantity("sqft", length=10, width=5, units=2) == 100
    assert calculate_quantity("m³", length=2, width=3, depth=4) == 24


def test_unit_type_names_are_accepted():
    assert calculate_quantity("SqFt", length=10, width=5, units=2) == 100
    assert calculate_quantity("CubicMeter", length=2, width=3, depth=4) == 24
    assert calculate_quantity("RunningMeter", length=12) == 12
    assert calculate_quantity("Pieces", units=3, unit_multiplier=2) == 6
    assert has_calculator("lump sum")


# ============================================================
# Registry
# ============================================================

def test_registry_covers_every_unit_type():
    assert sorted(list_calculators()) == sorted(UNIT_TYPE_OPTIONS)
    for unit_type in UnitType:
        assert has_calculator(unit_type)


def test_registry_returns_calculator_instances():
    assert isinstance(get_calculator(UnitType.SQFT), AreaCalculator)
    assert isinstance(get_calculator("pcs"), PiecesCalculator)
    assert isinstance(get_calculator(UnitType.LUMPSUM), LumpsumCalculator)


def test_registry_unknown_type_raises():
    with pytest.raises(ValueError, match="No calculator registered"):
        get_calculator("hectare")


def test_calculator_parses_missing_fields_as_zero():
    calc = get_calculator(UnitType.NOS)
    assert calc.calculate({"length": 2}) == 0
    assert calc.parse_number("3.5") == 3.5
    assert calc.parse_number("abc", default=1.0) == 1.0


# ============================================================
# Work item recompute
# ============================================================

def test_quantity_for_item_reads_item_fields():
    item = WorkItem(id="item-x", name="Slab", length=2, width=3, depth=4,
                    unit_type=UnitType.CUBIC_METER)
    assert quantity_for_item(item) == 24


def test_quantity_for_item_with_null_multiplier():
    item = WorkItem(id="item-y", name="Doors", units=4, unit_multiplier=None,
                    unit_type=UnitType.PIECES)
    assert quantity_for_item(item) == 4

"""
Abstract base class for all unit-type calculators.

Input: dimension fields dict (length, width, depth, units, unit_multiplier)
Output: quantity as a float
"""

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)

DIMENSION_FIELDS = ("length", "width", "depth", "units", "unit_multiplier")


class BaseCalculator(ABC):
    """All unit-type calculators inherit from this."""

    @abstractmethod
    def calculate(self, fields: dict) -> float:
        """
        Takes the dimension fields of a work item.
        Returns the quantity for this calculator's unit type.
        """
        pass

    # --- Helper methods for all calculators ---

    def parse_number(self, value, default: float = 0.0) -> float:
        """Parse a numeric value. Missing or unparseable input falls back to default."""
        if value is None:
            return default
        try:
            return float(str(value).strip())
        except (ValueError, TypeError):
            return default

    def dimensions(self, fields: dict) -> tuple:
        """(length, width, depth, units) with missing values read as 0."""
        return (
            self.parse_number(fields.get("length")),
            self.parse_number(fields.get("width")),
            self.parse_number(fields.get("depth")),
            self.parse_number(fields.get("units")),
        )

    def multiplier(self, fields: dict) -> float:
        """Unit multiplier; absent or zero counts as 1."""
        value = self.parse_number(fields.get("unit_multiplier"))
        return value or 1.0

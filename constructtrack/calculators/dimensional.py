"""
Calculators whose quantity comes from measured dimensions.

SqFt / SqM   : length x width x units (units = number of identical surfaces)
CubicMeter   : length x width x depth
Nos          : length x width x depth x units
RunningMeter : length only
"""

from .base import BaseCalculator


class AreaCalculator(BaseCalculator):

    def calculate(self, fields: dict) -> float:
        length, width, _, units = self.dimensions(fields)
        return length * width * units


class VolumeCalculator(BaseCalculator):

    def calculate(self, fields: dict) -> float:
        length, width, depth, _ = self.dimensions(fields)
        return length * width * depth


class NosCalculator(BaseCalculator):
    """Volume repeated over a count of identical elements."""

    def calculate(self, fields: dict) -> float:
        length, width, depth, units = self.dimensions(fields)
        return length * width * depth * units


class RunningMeterCalculator(BaseCalculator):

    def calculate(self, fields: dict) -> float:
        return self.parse_number(fields.get("length"))

"""
Calculators that ignore geometry.

Pieces  : units x unit_multiplier
Lumpsum : always 1
"""

from .base import BaseCalculator


class PiecesCalculator(BaseCalculator):

    def calculate(self, fields: dict) -> float:
        return self.parse_number(fields.get("units")) * self.multiplier(fields)


class LumpsumCalculator(BaseCalculator):

    def calculate(self, fields: dict) -> float:
        return 1.0

"""Profile rails — bought in fixed stock lengths."""

from __future__ import annotations
import math

from estimator.models import Category, ElementGroup, EstimateContext
from estimator.rules.base import QuantityRule


def round_up_to_multiple(value: float, step: float) -> float:
    """Smallest multiple of `step` that is >= `value`."""
    # Rounding the quotient first keeps 1.1 / 0.1 from becoming 12 pieces.
    pieces = math.ceil(round(value / step, 9))
    return max(pieces, 0) * step


class ProfileStockLengthRule(QuantityRule):
    """Total drawn length rounded up to whole stock lengths."""

    category = Category.PROFILE

    def get_id(self) -> str:
        return "profile.stock_length"

    def get_name(self) -> str:
        return "Profile rounded up to stock lengths"

    def quantity(self, group: ElementGroup, context: EstimateContext) -> float:
        stock = group.option.stock_length_m or context.pricing.default_stock_length_m
        return round_up_to_multiple(group.total_length_m, stock)

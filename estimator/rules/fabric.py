"""Fabric rules — one sheet covers the whole wall.

Both rules price the wall, not the drawn polygons: a fabric option
referenced once or many times yields the same quantity.
"""

from __future__ import annotations

from estimator.exceptions import QuantityRuleError
from estimator.models import Category, ElementGroup, EstimateContext
from estimator.rules.base import QuantityRule


def wall_area_with_margin(context: EstimateContext) -> float:
    """Wall area plus a margin strip along the full wall length."""
    length = context.wall_length_m
    return length * context.wall_height_m + length * context.pricing.fabric_margin_m


class FabricWallAreaRule(QuantityRule):
    """Square meters: wall area plus the margin strip."""

    category = Category.FABRIC

    def get_id(self) -> str:
        return "fabric.wall_area_margin"

    def get_name(self) -> str:
        return "Fabric by wall area with margin"

    def quantity(self, group: ElementGroup, context: EstimateContext) -> float:
        return wall_area_with_margin(context)


class FabricRollWidthRule(QuantityRule):
    """Running meters of roll: wall area with margin divided by the roll width."""

    category = Category.FABRIC

    def get_id(self) -> str:
        return "fabric.roll_width"

    def get_name(self) -> str:
        return "Fabric by roll length"

    def quantity(self, group: ElementGroup, context: EstimateContext) -> float:
        width = group.option.roll_width_m
        if not width:
            raise QuantityRuleError(
                f"Fabric option '{group.option.id}' has no roll width",
                {"option_id": group.option.id, "rule_id": self.get_id()},
            )
        return wall_area_with_margin(context) / width

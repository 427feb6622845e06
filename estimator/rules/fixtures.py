"""Membranes, lights and mounting plates."""

from __future__ import annotations

from estimator.exceptions import QuantityRuleError
from estimator.models import Category, ElementGroup, EstimateContext, Unit
from estimator.rules.base import QuantityRule


class MembraneAreaRule(QuantityRule):
    category = Category.MEMBRANE

    def get_id(self) -> str:
        return "membrane.area"

    def get_name(self) -> str:
        return "Membrane by drawn area"

    def quantity(self, group: ElementGroup, context: EstimateContext) -> float:
        return group.total_area_m2


class LightCountRule(QuantityRule):
    category = Category.LIGHT

    def get_id(self) -> str:
        return "light.count"

    def get_name(self) -> str:
        return "Lights by count"

    def quantity(self, group: ElementGroup, context: EstimateContext) -> float:
        return float(group.count)


class MountingPlateByUnitRule(QuantityRule):
    """Follows the option's unit: pieces are counted, meters are summed."""

    category = Category.MOUNTING_PLATE

    def get_id(self) -> str:
        return "mounting_plate.by_unit"

    def get_name(self) -> str:
        return "Mounting plates by catalog unit"

    def quantity(self, group: ElementGroup, context: EstimateContext) -> float:
        unit = group.option.unit
        if unit == Unit.PIECE:
            return float(group.count)
        if unit == Unit.METER:
            return group.total_length_m
        if unit == Unit.SQUARE_METER:
            return group.total_area_m2
        raise QuantityRuleError(
            f"Unsupported unit '{unit}' for mounting plate '{group.option.id}'",
            {"option_id": group.option.id, "rule_id": self.get_id()},
        )


class MountingPlateCountRule(QuantityRule):
    category = Category.MOUNTING_PLATE

    def get_id(self) -> str:
        return "mounting_plate.count"

    def get_name(self) -> str:
        return "Mounting plates by count"

    def quantity(self, group: ElementGroup, context: EstimateContext) -> float:
        return float(group.count)


class MountingPlateLengthRule(QuantityRule):
    category = Category.MOUNTING_PLATE

    def get_id(self) -> str:
        return "mounting_plate.length"

    def get_name(self) -> str:
        return "Mounting plates by drawn length"

    def quantity(self, group: ElementGroup, context: EstimateContext) -> float:
        return group.total_length_m

"""The inputs of a single estimate pass."""

from __future__ import annotations
from pydantic import BaseModel, Field

from .catalog import CatalogOption
from .elements import DrawingElement
from .parameters import PricingConfig
from .wall import WallSurface


class ElementGroup(BaseModel):
    """All elements drawn with one catalog option."""
    option: CatalogOption
    elements: list[DrawingElement] = []

    @property
    def count(self) -> int:
        return len(self.elements)

    @property
    def total_length_m(self) -> float:
        return sum(el.length_m or 0.0 for el in self.elements)

    @property
    def total_area_m2(self) -> float:
        return sum(el.area_m2 or 0.0 for el in self.elements)


class EstimateContext(BaseModel):
    """
    Holds the state of one estimate pass.

    The estimator builds groups from the element snapshot and the
    resolved options, then each group is priced by its category rule.
    """
    wall: WallSurface
    pricing: PricingConfig = Field(default_factory=PricingConfig)
    groups: list[ElementGroup] = []

    @property
    def wall_length_m(self) -> float:
        return self.wall.length_m

    @property
    def wall_height_m(self) -> float:
        return self.wall.height_m

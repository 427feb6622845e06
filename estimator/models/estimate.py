"""Estimate output models."""

from __future__ import annotations
from datetime import datetime, timezone

from pydantic import BaseModel, Field

from .catalog import CatalogOption, Category, Unit


class EstimateLine(BaseModel):
    """Quantity and cost for one (wall, catalog option) pair."""
    option_id: str
    option_name: str
    category: Category
    unit: Unit
    quantity: float
    material_cost: float
    labor_cost: float
    total_cost: float
    rule_id: str = ""

    @classmethod
    def from_quantity(
        cls, option: CatalogOption, quantity: float, rule_id: str = "",
    ) -> EstimateLine:
        material = quantity * option.material_unit_price
        labor = quantity * option.labor_unit_price
        return cls(
            option_id=option.id,
            option_name=option.name,
            category=option.category,
            unit=option.unit,
            quantity=quantity,
            material_cost=material,
            labor_cost=labor,
            total_cost=material + labor,
            rule_id=rule_id,
        )


class EstimateTotals(BaseModel):
    """Grand totals across all lines of an estimate."""
    material_cost: float = 0.0
    labor_cost: float = 0.0
    total_cost: float = 0.0

    @classmethod
    def from_lines(cls, lines: list[EstimateLine]) -> EstimateTotals:
        return cls(
            material_cost=sum(line.material_cost for line in lines),
            labor_cost=sum(line.labor_cost for line in lines),
            total_cost=sum(line.total_cost for line in lines),
        )


class Estimate(BaseModel):
    """The complete estimate for one wall."""
    wall_id: str
    lines: list[EstimateLine] = []
    skipped_option_ids: list[str] = []
    catalog_available: bool = True  # False when option lookup failed and every id was skipped
    totals: EstimateTotals = None  # type: ignore[assignment]

    def model_post_init(self, __context: object) -> None:
        if self.totals is None:
            self.totals = EstimateTotals.from_lines(self.lines)

    def line_for(self, option_id: str) -> EstimateLine | None:
        for line in self.lines:
            if line.option_id == option_id:
                return line
        return None


class EstimateRecord(BaseModel):
    """A persisted estimate row."""
    id: str
    wall_id: str
    option_id: str
    quantity: float
    material_cost: float
    labor_cost: float
    total_cost: float
    notes: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

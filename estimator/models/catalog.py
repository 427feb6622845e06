"""Catalog option models: priced materials and labor."""

from __future__ import annotations
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .elements import ElementKind, StrokeMode


class Category(str, Enum):
    PROFILE = "profile"
    FABRIC = "fabric"
    MEMBRANE = "membrane"
    LIGHT = "light"
    MOUNTING_PLATE = "mounting_plate"


class Unit(str, Enum):
    METER = "meter"
    SQUARE_METER = "square_meter"
    PIECE = "piece"


# Unit labels as typed into the catalog admin.
UNIT_LABELS: dict[str, Unit] = {
    "м": Unit.METER,
    "m": Unit.METER,
    "м²": Unit.SQUARE_METER,
    "м2": Unit.SQUARE_METER,
    "m2": Unit.SQUARE_METER,
    "шт": Unit.PIECE,
    "pcs": Unit.PIECE,
}


class CatalogOption(BaseModel):
    """A priced catalog entry. Owned by the external catalog, never mutated here."""
    id: str
    name: str
    category: Category
    unit: Unit
    material_unit_price: float = Field(0.0, ge=0.0)
    labor_unit_price: float = Field(0.0, ge=0.0)

    # Category-specific attributes
    stock_length_m: float | None = Field(None, gt=0.0)       # profile
    roll_width_m: float | None = Field(None, gt=0.0)         # fabric
    max_panel_height_m: float | None = Field(None, gt=0.0)   # fabric

    # Tool presentation
    variant: str | None = None
    drawing_kind: ElementKind | None = None
    stroke: StrokeMode = StrokeMode.FREEHAND
    is_active: bool = True

    @field_validator("unit", mode="before")
    @classmethod
    def _map_unit_label(cls, value: Any) -> Any:
        if isinstance(value, str):
            label = value.strip().lower()
            if label in UNIT_LABELS:
                return UNIT_LABELS[label]
            return label
        return value

    @field_validator("variant", mode="before")
    @classmethod
    def _normalize_variant(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().lower()
            return value or None
        return value

    def fits_wall_height(self, wall_height: float) -> bool:
        """Fabric panels taller than the wall fit; options without a limit always fit."""
        return self.max_panel_height_m is None or self.max_panel_height_m >= wall_height

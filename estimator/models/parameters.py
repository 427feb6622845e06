"""Canvas, pricing and tool configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .catalog import Category
from .elements import ElementKind


class CanvasParams(BaseModel):
    """Pixel-space settings of the drawing surface."""
    scale_px_per_m: float = Field(50.0, gt=0.0)   # 50 px = 1 m
    default_size_px: int = Field(800, gt=0)       # Used while the wall is unmeasured

    def canvas_size(self, length_m: float, height_m: float) -> tuple[int, int]:
        """Canvas width/height in pixels for a wall of the given size."""
        width = round(length_m * self.scale_px_per_m) if length_m > 0 else self.default_size_px
        height = round(height_m * self.scale_px_per_m) if height_m > 0 else self.default_size_px
        return width, height


class PricingConfig(BaseModel):
    """Selects one quantity rule per category and holds the rule constants."""
    quantity_rules: dict[Category, str] = Field(default_factory=lambda: {
        Category.PROFILE: "profile.stock_length",
        Category.FABRIC: "fabric.wall_area_margin",
        Category.MEMBRANE: "membrane.area",
        Category.LIGHT: "light.count",
        Category.MOUNTING_PLATE: "mounting_plate.by_unit",
    })
    fabric_margin_m: float = Field(0.15, ge=0.0)        # Strip added along the wall length
    default_stock_length_m: float = Field(2.0, gt=0.0)  # Profiles without a stock length


class ToolKindTable(BaseModel):
    """Which drawing kind a catalog option's tool produces."""
    by_category: dict[Category, ElementKind] = Field(default_factory=lambda: {
        Category.PROFILE: ElementKind.SEGMENT,
        Category.FABRIC: ElementKind.POLYGON_AREA,
        Category.MEMBRANE: ElementKind.POLYGON_AREA,
        Category.LIGHT: ElementKind.SINGLE_MARKER,
        Category.MOUNTING_PLATE: ElementKind.SEGMENT,
    })
    # Keyed "<category>:<variant>"
    by_variant: dict[str, ElementKind] = Field(default_factory=lambda: {
        "mounting_plate:rondo": ElementKind.PAIRED_MARKER,
        "mounting_plate:mini": ElementKind.SMALL_MARKER,
        "mounting_plate:standard": ElementKind.LARGE_MARKER,
        "mounting_plate:ceiling": ElementKind.THICK_SEGMENT,
        "mounting_plate:baseboard": ElementKind.DASHED_SEGMENT,
    })

from .geometry import Point, polyline_length, shoelace_area, rectangle_corners, max_extent
from .elements import (
    ElementKind, StrokeMode, DrawingElement, LINE_KINDS, MARKER_KINDS, LEGACY_KIND_NAMES,
)
from .catalog import Category, Unit, CatalogOption
from .wall import WallSurface, WallDimensions
from .estimate import EstimateLine, EstimateTotals, Estimate, EstimateRecord
from .parameters import CanvasParams, PricingConfig, ToolKindTable
from .context import ElementGroup, EstimateContext

__all__ = [
    "Point", "polyline_length", "shoelace_area", "rectangle_corners", "max_extent",
    "ElementKind", "StrokeMode", "DrawingElement", "LINE_KINDS", "MARKER_KINDS",
    "LEGACY_KIND_NAMES",
    "Category", "Unit", "CatalogOption",
    "WallSurface", "WallDimensions",
    "EstimateLine", "EstimateTotals", "Estimate", "EstimateRecord",
    "CanvasParams", "PricingConfig", "ToolKindTable",
    "ElementGroup", "EstimateContext",
]

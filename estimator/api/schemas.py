"""API request/response schemas."""

from __future__ import annotations
from pydantic import BaseModel, Field

from estimator.models import (
    CatalogOption, DrawingElement, Estimate, EstimateRecord, Point, WallDimensions,
    WallSurface,
)


class DimensionsInput(BaseModel):
    """Manual wall size entry."""
    length_m: float
    height_m: float


class CanvasInput(BaseModel):
    """Elements as sent from the drawing surface (current or legacy shape)."""
    elements: list[DrawingElement]


class EstimateRequest(BaseModel):
    """Request body for the stateless /estimate endpoint."""
    wall_id: str = "draft"
    length_m: float = Field(0.0, ge=0.0)
    height_m: float = Field(0.0, ge=0.0)
    elements: list[DrawingElement] = []


class SaveEstimateRequest(BaseModel):
    notes: str = ""


class SaveEstimateResponse(BaseModel):
    estimate: Estimate
    records: list[EstimateRecord]


class GestureRequest(BaseModel):
    """A recorded pointer gesture: press, moves, release."""
    option_id: str
    down: Point
    moves: list[Point] = []
    up: Point | None = None


class GestureResponse(BaseModel):
    element: DrawingElement | None


class PerimeterResponse(BaseModel):
    dimensions: WallDimensions | None
    applied: bool
    wall: WallSurface


class CatalogResponse(BaseModel):
    options: list[CatalogOption]


class RuleInfo(BaseModel):
    id: str
    name: str
    category: str
    active: bool

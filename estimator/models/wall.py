"""Wall surface models."""

from __future__ import annotations

from pydantic import BaseModel, Field, computed_field

from .elements import DrawingElement


class WallSurface(BaseModel):
    """
    A named rectangular drawing surface.

    A zero length or height means the wall has not been measured yet;
    perimeter inference can fill both in from drawn boundary lines.
    """
    id: str
    name: str = ""
    room_id: str | None = None
    length_m: float = Field(0.0, ge=0.0)
    height_m: float = Field(0.0, ge=0.0)
    canvas_data: list[DrawingElement] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def area_m2(self) -> float:
        return self.length_m * self.height_m

    @property
    def has_dimensions(self) -> bool:
        return self.length_m > 0 and self.height_m > 0


class WallDimensions(BaseModel):
    """Length/height pair produced by perimeter inference."""
    length_m: float
    height_m: float

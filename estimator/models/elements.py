"""Drawing elements — the atomic units of a wall drawing."""

from __future__ import annotations
from enum import Enum
from typing import Any

from pydantic import (
    AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator,
)

from .geometry import Point


class ElementKind(str, Enum):
    SEGMENT = "segment"
    THICK_SEGMENT = "thick-segment"
    DASHED_SEGMENT = "dashed-segment"
    POLYGON_AREA = "polygon-area"
    SINGLE_MARKER = "single-marker"
    PAIRED_MARKER = "paired-marker"
    SMALL_MARKER = "small-marker"
    LARGE_MARKER = "large-marker"

    @property
    def is_line(self) -> bool:
        return self in LINE_KINDS

    @property
    def is_area(self) -> bool:
        return self is ElementKind.POLYGON_AREA

    @property
    def is_marker(self) -> bool:
        return self in MARKER_KINDS


LINE_KINDS = frozenset({
    ElementKind.SEGMENT,
    ElementKind.THICK_SEGMENT,
    ElementKind.DASHED_SEGMENT,
})

MARKER_KINDS = frozenset({
    ElementKind.SINGLE_MARKER,
    ElementKind.PAIRED_MARKER,
    ElementKind.SMALL_MARKER,
    ElementKind.LARGE_MARKER,
})

# Kind names used by canvas blobs saved before the current schema.
LEGACY_KIND_NAMES: dict[str, ElementKind] = {
    "line": ElementKind.SEGMENT,
    "thick-line": ElementKind.THICK_SEGMENT,
    "dashed-line": ElementKind.DASHED_SEGMENT,
    "area": ElementKind.POLYGON_AREA,
    "circle": ElementKind.SINGLE_MARKER,
    "double-circle": ElementKind.PAIRED_MARKER,
    "square": ElementKind.SMALL_MARKER,
    "large-square": ElementKind.LARGE_MARKER,
}


class StrokeMode(str, Enum):
    """How pointer moves feed the accumulating point sequence."""
    FREEHAND = "freehand"    # every move appends a point
    TWO_POINT = "two_point"  # sequence is always [start, current]


class DrawingElement(BaseModel):
    """
    One committed drawing element.

    `option_label` is the option's display name at draw time. It is kept
    as-is when the catalog entry is renamed or removed later.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    kind: ElementKind = Field(validation_alias=AliasChoices("kind", "type"))
    option_id: str = Field(validation_alias=AliasChoices("option_id", "toolOptionId"))
    option_label: str = Field(
        default="", validation_alias=AliasChoices("option_label", "toolName"),
    )
    points: tuple[Point, ...]
    length_m: float | None = Field(
        default=None, ge=0.0, validation_alias=AliasChoices("length_m", "length"),
    )
    area_m2: float | None = Field(
        default=None, ge=0.0, validation_alias=AliasChoices("area_m2", "area"),
    )

    @field_validator("kind", mode="before")
    @classmethod
    def _map_legacy_kind(cls, value: Any) -> Any:
        if isinstance(value, str) and value in LEGACY_KIND_NAMES:
            return LEGACY_KIND_NAMES[value]
        return value

    @model_validator(mode="after")
    def _check_shape(self) -> DrawingElement:
        kind = self.kind
        if kind.is_marker:
            if len(self.points) != 1:
                raise ValueError(f"{kind.value} element needs exactly 1 point")
            if self.length_m is not None or self.area_m2 is not None:
                raise ValueError(f"{kind.value} element carries no length or area")
        else:
            if len(self.points) < 2:
                raise ValueError(f"{kind.value} element needs at least 2 points")
            if kind.is_line and (self.length_m is None or self.area_m2 is not None):
                raise ValueError(f"{kind.value} element must carry length_m only")
            if kind.is_area and (self.area_m2 is None or self.length_m is not None):
                raise ValueError(f"{kind.value} element must carry area_m2 only")
        return self

"""Geometric primitives for the drawing canvas (pixel space)."""

from __future__ import annotations
import math
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict


class Point(BaseModel):
    """Canvas-local point in pixels. X grows right, Y grows down."""
    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    def distance_to(self, other: Point) -> float:
        return math.sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2)

    def cross(self, other: Point) -> float:
        """Z component of the cross product of the two position vectors."""
        return self.x * other.y - other.x * self.y


def polyline_length(points: Sequence[Point]) -> float:
    """Sum of distances between consecutive points."""
    return sum(a.distance_to(b) for a, b in zip(points, points[1:]))


def shoelace_area(points: Sequence[Point]) -> float:
    """
    Unsigned area of the closed ring through `points`.

    Exact for simple polygons. Self-intersecting rings get the same
    formula, so lobes with opposite winding partially cancel.
    """
    if len(points) < 3:
        return 0.0
    total = 0.0
    for i, p in enumerate(points):
        total += p.cross(points[(i + 1) % len(points)])
    return abs(total) / 2.0


def rectangle_corners(a: Point, b: Point) -> list[Point]:
    """Axis-aligned rectangle spanned by two opposite corners."""
    return [
        a,
        Point(x=b.x, y=a.y),
        b,
        Point(x=a.x, y=b.y),
    ]


def max_extent(points: Sequence[Point]) -> tuple[float, float]:
    """Largest x and y over `points`, never below the canvas origin."""
    max_x = 0.0
    max_y = 0.0
    for p in points:
        max_x = max(max_x, p.x)
        max_y = max(max_y, p.y)
    return max_x, max_y

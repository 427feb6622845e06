"""Perimeter inference: wall size from the extent of drawn boundary lines."""

from __future__ import annotations
import math
from collections.abc import Iterable

from estimator.models import CanvasParams, DrawingElement, WallDimensions, max_extent


def round_up_tenth(value: float) -> float:
    """Round up to the next 0.1 m; exact tenths stay put."""
    return math.ceil(round(value * 10, 6)) / 10


def infer_wall_dimensions(
    elements: Iterable[DrawingElement],
    params: CanvasParams | None = None,
) -> WallDimensions | None:
    """
    Derive (length, height) from the farthest corner reached by line-like elements.

    The canvas origin is the wall's top-left corner, so the largest x
    and y over all boundary points give the wall extent. Returns None
    when nothing line-like has been drawn.
    """
    if params is None:
        params = CanvasParams()

    points = [p for el in elements if el.kind.is_line for p in el.points]
    if not points:
        return None

    max_x, max_y = max_extent(points)
    scale = params.scale_px_per_m
    return WallDimensions(
        length_m=round_up_tenth(max_x / scale),
        height_m=round_up_tenth(max_y / scale),
    )

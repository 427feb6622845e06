"""Geometry capture — turns one pointer gesture into one drawing element.

State machine:
    idle --begin(line/area)--> drawing --end--> idle
    idle --begin(marker)--> idle (element committed immediately)

A gesture with fewer than two points is dropped without an error.
Pointer-leave should be fed to `end()` so capture never stays in
`drawing`.
"""

from __future__ import annotations
from collections.abc import Callable
from enum import Enum
from uuid import uuid4

from loguru import logger

from estimator.models import (
    CanvasParams, DrawingElement, ElementKind, Point, StrokeMode,
    polyline_length, rectangle_corners, shoelace_area,
)
from estimator.core.tools import ActiveTool

MIN_GESTURE_POINTS = 2


class CaptureState(str, Enum):
    IDLE = "idle"
    DRAWING = "drawing"


def _new_id() -> str:
    return uuid4().hex


def measure(kind: ElementKind, points: list[Point], params: CanvasParams) -> dict[str, float]:
    """Derived scalars for a committed element, in meters."""
    scale = params.scale_px_per_m
    if kind.is_line:
        return {"length_m": polyline_length(points) / scale}
    if kind.is_area:
        return {"area_m2": shoelace_area(points) / (scale * scale)}
    return {}


class GeometryCapture:
    """Pointer-gesture state machine for one canvas."""

    def __init__(
        self,
        params: CanvasParams | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self.params = params or CanvasParams()
        self._new_id = id_factory or _new_id
        self._state = CaptureState.IDLE
        self._tool: ActiveTool | None = None
        self._points: list[Point] = []
        self._extended = False

    @property
    def state(self) -> CaptureState:
        return self._state

    @property
    def preview(self) -> tuple[Point, ...]:
        """Points of the in-flight gesture, for live rendering."""
        return tuple(self._points)

    def begin(self, point: Point, tool: ActiveTool) -> DrawingElement | None:
        """Start a gesture. Marker tools commit straight away and return the element."""
        if self._state is CaptureState.DRAWING:
            logger.debug("New gesture started while drawing; dropping {} point(s)", len(self._points))
            self._reset()

        if tool.kind.is_marker:
            return self._commit(tool, [point])

        self._state = CaptureState.DRAWING
        self._tool = tool
        self._points = [point]
        self._extended = False
        return None

    def extend(self, point: Point) -> None:
        """Feed a pointer move. Ignored while idle."""
        if self._state is not CaptureState.DRAWING or self._tool is None:
            return
        if self._tool.stroke is StrokeMode.TWO_POINT:
            self._points = [self._points[0], point]
        else:
            self._points.append(point)
        self._extended = True

    def end(self, point: Point | None = None) -> DrawingElement | None:
        """
        Finish the gesture and return the committed element, or None if dropped.

        The release point only counts once the pointer has moved; a press
        and release with no move in between stays a single point.
        """
        if self._state is not CaptureState.DRAWING or self._tool is None:
            return None

        tool = self._tool
        points = list(self._points)
        if point is not None and self._extended and point != points[-1]:
            if tool.stroke is StrokeMode.TWO_POINT:
                points = [points[0], point]
            else:
                points.append(point)
        self._reset()

        if len(points) < MIN_GESTURE_POINTS:
            logger.debug("Dropped {} gesture with {} point(s)", tool.kind.value, len(points))
            return None

        if tool.kind.is_area and tool.stroke is StrokeMode.TWO_POINT:
            points = rectangle_corners(points[0], points[-1])
        return self._commit(tool, points)

    def _commit(self, tool: ActiveTool, points: list[Point]) -> DrawingElement:
        return DrawingElement(
            id=self._new_id(),
            kind=tool.kind,
            option_id=tool.option_id,
            option_label=tool.label,
            points=tuple(points),
            **measure(tool.kind, points, self.params),
        )

    def _reset(self) -> None:
        self._state = CaptureState.IDLE
        self._tool = None
        self._points = []
        self._extended = False

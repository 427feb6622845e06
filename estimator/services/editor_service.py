"""Wall editing session — pointer events in, elements and estimates out."""

from __future__ import annotations
import math
from collections.abc import Callable
from typing import Any, Literal

from loguru import logger
from pydantic import BaseModel

from estimator.exceptions import DimensionValidationError, PersistenceError
from estimator.models import (
    CanvasParams, CatalogOption, DrawingElement, Estimate, EstimateRecord,
    Point, ToolKindTable, WallDimensions, WallSurface,
)
from estimator.core.capture import GeometryCapture
from estimator.core.perimeter import infer_wall_dimensions
from estimator.core.store import ElementStore
from estimator.core.tools import ActiveTool, tool_for
from estimator.services.estimate_service import EstimateService
from estimator.storage import WallRepository


class Notice(BaseModel):
    """A message for the user; the session keeps running."""
    level: Literal["info", "warning", "error"]
    message: str


def validate_dimensions(length: Any, height: Any) -> tuple[float, float]:
    """Parse a manual length/height entry; both must be positive finite numbers."""
    values: list[float] = []
    for name, raw in (("length", length), ("height", height)):
        try:
            value = float(raw)
        except (TypeError, ValueError):
            raise DimensionValidationError(
                f"Wall {name} must be a number", {"field": name, "value": str(raw)},
            ) from None
        if not math.isfinite(value) or value <= 0:
            raise DimensionValidationError(
                f"Wall {name} must be greater than zero", {"field": name, "value": str(raw)},
            )
        values.append(value)
    return values[0], values[1]


class WallEditor:
    """
    One editing session on one wall.

    The element store is the in-memory source of truth. Persistence
    failures become notices and leave the drawing and the last estimate
    untouched, so the user can retry.
    """

    def __init__(
        self,
        wall: WallSurface,
        walls: WallRepository,
        estimates: EstimateService,
        canvas: CanvasParams | None = None,
        tools: ToolKindTable | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self.walls = walls
        self.estimates = estimates
        self.canvas = canvas or CanvasParams()
        self.tools = tools or ToolKindTable()
        self.store = ElementStore.from_canvas_data(wall.canvas_data)
        self.capture = GeometryCapture(self.canvas, id_factory)
        self.active_tool: ActiveTool | None = None
        self.notices: list[Notice] = []

        self._wall = wall
        self._estimate: Estimate | None = None
        self._canvas_dirty = False
        self._saving_estimate = False
        self.store.subscribe(self._on_elements_changed)

    @classmethod
    async def open(
        cls,
        wall_id: str,
        walls: WallRepository,
        estimates: EstimateService,
        **kwargs: Any,
    ) -> WallEditor:
        wall = await walls.load_wall(wall_id)
        return cls(wall, walls, estimates, **kwargs)

    @property
    def wall(self) -> WallSurface:
        return self._wall

    @property
    def elements(self) -> tuple[DrawingElement, ...]:
        return self.store.snapshot()

    @property
    def estimate(self) -> Estimate | None:
        """Last estimate computed against a reachable catalog."""
        return self._estimate

    @property
    def has_unsaved_changes(self) -> bool:
        return self._canvas_dirty

    @property
    def canvas_size(self) -> tuple[int, int]:
        return self.canvas.canvas_size(self._wall.length_m, self._wall.height_m)

    # -- tool selection and pointer input ---------------------------------

    def select_option(self, option: CatalogOption | None) -> ActiveTool | None:
        """Pick the drawing tool for `option`; None puts the pen down."""
        if option is None:
            self.active_tool = None
        else:
            self.active_tool = tool_for(option, self.tools)
        return self.active_tool

    def pointer_down(self, x: float, y: float) -> DrawingElement | None:
        if self.active_tool is None:
            return None
        element = self.capture.begin(Point(x=x, y=y), self.active_tool)
        if element is not None:
            self.store.append(element)
        return element

    def pointer_move(self, x: float, y: float) -> None:
        self.capture.extend(Point(x=x, y=y))

    def pointer_up(self, x: float, y: float) -> DrawingElement | None:
        element = self.capture.end(Point(x=x, y=y))
        if element is not None:
            self.store.append(element)
        return element

    def pointer_leave(self, x: float, y: float) -> DrawingElement | None:
        return self.pointer_up(x, y)

    def delete_element(self, element_id: str) -> bool:
        return self.store.remove(element_id)

    def clear(self) -> None:
        self.store.clear()

    # -- estimate -----------------------------------------------------------

    async def refresh_estimate(self) -> Estimate:
        """
        Recompute the estimate from the current drawing and the live catalog.

        Catalog prices and options can change between calls, so nothing is
        reused. An estimate from a failed catalog lookup is returned but
        never kept as the last good one.
        """
        estimate = await self.estimates.compute(self._wall, self.store.snapshot())
        if not estimate.catalog_available:
            self._notify("error", "Catalog is unavailable, estimate could not be priced")
            return estimate
        for option_id in estimate.skipped_option_ids:
            self._notify("warning", f"Option {option_id} could not be priced and was left out")
        self._estimate = estimate
        return estimate

    async def save_estimate(self, notes: str = "") -> list[EstimateRecord] | None:
        """Replace the wall's stored rows; refused while the catalog is unreachable."""
        if self._saving_estimate:
            self._notify("warning", "Estimate is already being saved")
            return None
        self._saving_estimate = True
        try:
            estimate = await self.refresh_estimate()
            if not estimate.catalog_available:
                logger.warning("Not saving estimate for wall {}: catalog unavailable", self._wall.id)
                self._notify("error", "Estimate was not saved, the stored one is kept")
                return None
            records = await self.estimates.save(self._wall.id, estimate, notes)
        except PersistenceError as exc:
            logger.error("Saving estimate for wall {} failed: {}", self._wall.id, exc.message)
            self._notify("error", "Estimate could not be saved")
            return None
        finally:
            self._saving_estimate = False
        self._notify("info", "Estimate saved")
        return records

    # -- wall dimensions ----------------------------------------------------

    def infer_dimensions(self) -> WallDimensions | None:
        return infer_wall_dimensions(self.store.snapshot(), self.canvas)

    async def apply_inferred_dimensions(self, force: bool = False) -> WallDimensions | None:
        """Persist inferred dimensions; by default only for a wall not yet measured."""
        if self._wall.has_dimensions and not force:
            return None
        dims = self.infer_dimensions()
        if dims is None:
            return None
        if not await self._persist_dimensions(dims.length_m, dims.height_m):
            return None
        return dims

    async def update_dimensions(self, length: Any, height: Any) -> bool:
        """Manual edit. Raises DimensionValidationError before anything is written."""
        length_m, height_m = validate_dimensions(length, height)
        return await self._persist_dimensions(length_m, height_m)

    async def _persist_dimensions(self, length_m: float, height_m: float) -> bool:
        try:
            await self.walls.save_wall_dimensions(self._wall.id, length_m, height_m)
        except PersistenceError as exc:
            logger.error("Resizing wall {} failed: {}", self._wall.id, exc.message)
            self._notify("error", "Wall dimensions could not be saved")
            return False
        self._wall = self._wall.model_copy(update={"length_m": length_m, "height_m": height_m})
        self._notify("info", f"Wall dimensions updated: {length_m} m x {height_m} m")
        return True

    # -- canvas -------------------------------------------------------------

    async def save_canvas(self) -> bool:
        snapshot = list(self.store.snapshot())
        try:
            await self.walls.save_canvas_data(self._wall.id, snapshot)
        except PersistenceError as exc:
            logger.error("Saving canvas for wall {} failed: {}", self._wall.id, exc.message)
            self._notify("error", "Drawing could not be saved")
            return False
        self._wall = self._wall.model_copy(update={"canvas_data": snapshot})
        self._canvas_dirty = False
        self._notify("info", "Drawing saved")
        return True

    def _on_elements_changed(self, snapshot: tuple[DrawingElement, ...]) -> None:
        self._canvas_dirty = True

    def _notify(self, level: Literal["info", "warning", "error"], message: str) -> None:
        self.notices.append(Notice(level=level, message=message))

from __future__ import annotations

from collections.abc import Iterable, Sequence
from uuid import uuid4

from estimator.exceptions import WallNotFoundError
from estimator.models import (
    CatalogOption, Category, DrawingElement, EstimateLine, EstimateRecord, WallSurface,
)
from estimator.core.tools import visible_options


def records_from_lines(
    wall_id: str, lines: Sequence[EstimateLine], notes: str,
) -> list[EstimateRecord]:
    return [
        EstimateRecord(
            id=uuid4().hex,
            wall_id=wall_id,
            option_id=line.option_id,
            quantity=line.quantity,
            material_cost=line.material_cost,
            labor_cost=line.labor_cost,
            total_cost=line.total_cost,
            notes=notes,
        )
        for line in lines
    ]


class InMemoryCatalog:
    def __init__(self, options: Iterable[CatalogOption] = ()) -> None:
        self._options: dict[str, CatalogOption] = {o.id: o for o in options}

    def add(self, option: CatalogOption) -> None:
        self._options[option.id] = option

    def remove(self, option_id: str) -> None:
        self._options.pop(option_id, None)

    async def resolve_options(self, ids: Iterable[str]) -> list[CatalogOption]:
        return [self._options[i] for i in dict.fromkeys(ids) if i in self._options]

    async def list_options(
        self,
        category: Category | None = None,
        wall_height: float | None = None,
        include_inactive: bool = False,
    ) -> list[CatalogOption]:
        return visible_options(
            self._options.values(), category, wall_height, include_inactive,
        )


class InMemoryWallRepository:
    def __init__(self, walls: Iterable[WallSurface] = ()) -> None:
        self._walls: dict[str, WallSurface] = {w.id: w for w in walls}

    def add_wall(self, wall: WallSurface) -> None:
        self._walls[wall.id] = wall

    def has_wall(self, wall_id: str) -> bool:
        return wall_id in self._walls

    def _get(self, wall_id: str) -> WallSurface:
        wall = self._walls.get(wall_id)
        if wall is None:
            raise WallNotFoundError(f"Wall '{wall_id}' not found", {"wall_id": wall_id})
        return wall

    async def load_wall(self, wall_id: str) -> WallSurface:
        return self._get(wall_id).model_copy(deep=True)

    async def save_wall_dimensions(self, wall_id: str, length_m: float, height_m: float) -> WallSurface:
        wall = self._get(wall_id).model_copy(update={"length_m": length_m, "height_m": height_m})
        self._walls[wall_id] = wall
        return wall.model_copy(deep=True)

    async def save_canvas_data(self, wall_id: str, elements: Sequence[DrawingElement]) -> None:
        wall = self._get(wall_id)
        self._walls[wall_id] = wall.model_copy(update={"canvas_data": list(elements)})


class InMemoryEstimateRepository:
    def __init__(self) -> None:
        self._rows: dict[str, list[EstimateRecord]] = {}

    async def replace_estimates(
        self, wall_id: str, lines: Sequence[EstimateLine], notes: str = "",
    ) -> list[EstimateRecord]:
        # Built in full before the swap so readers never see a partial set
        records = records_from_lines(wall_id, lines, notes)
        self._rows[wall_id] = records
        return list(records)

    async def list_estimates(self, wall_id: str) -> list[EstimateRecord]:
        return list(self._rows.get(wall_id, []))


__all__ = [
    "InMemoryCatalog",
    "InMemoryWallRepository",
    "InMemoryEstimateRepository",
    "records_from_lines",
]

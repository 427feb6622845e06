"""Boundary stores (catalog lookup, wall and estimate persistence)."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol

from estimator.models import (
    CatalogOption, Category, DrawingElement, EstimateLine, EstimateRecord, WallSurface,
)


class CatalogLookup(Protocol):
    async def resolve_options(self, ids: Iterable[str]) -> list[CatalogOption]:  # missing ids dropped
        ...

    async def list_options(
        self,
        category: Category | None = None,
        wall_height: float | None = None,
        include_inactive: bool = False,
    ) -> list[CatalogOption]:
        ...


class WallRepository(Protocol):
    def add_wall(self, wall: WallSurface) -> None:  # seeding, overwrites
        ...

    def has_wall(self, wall_id: str) -> bool:
        ...

    async def load_wall(self, wall_id: str) -> WallSurface:
        ...

    async def save_wall_dimensions(self, wall_id: str, length_m: float, height_m: float) -> WallSurface:
        ...

    async def save_canvas_data(self, wall_id: str, elements: Sequence[DrawingElement]) -> None:
        ...


class EstimateRepository(Protocol):
    async def replace_estimates(
        self, wall_id: str, lines: Sequence[EstimateLine], notes: str = "",
    ) -> list[EstimateRecord]:  # delete-then-insert, all or nothing
        ...

    async def list_estimates(self, wall_id: str) -> list[EstimateRecord]:
        ...


__all__ = ["CatalogLookup", "WallRepository", "EstimateRepository"]

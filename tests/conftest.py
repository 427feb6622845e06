from __future__ import annotations

import itertools

import pytest

from estimator.models import (
    CatalogOption, Category, DrawingElement, ElementKind, Point, Unit, WallSurface,
)
from estimator.services.estimate_service import EstimateService
from estimator.storage.memory import (
    InMemoryCatalog, InMemoryEstimateRepository, InMemoryWallRepository,
)


def make_option(option_id: str, category: Category, unit: Unit, **kwargs) -> CatalogOption:
    kwargs.setdefault("name", option_id)
    kwargs.setdefault("material_unit_price", 10.0)
    kwargs.setdefault("labor_unit_price", 5.0)
    return CatalogOption(id=option_id, category=category, unit=unit, **kwargs)


def segment(element_id: str, option_id: str, length_m: float, points=None) -> DrawingElement:
    return DrawingElement(
        id=element_id,
        kind=ElementKind.SEGMENT,
        option_id=option_id,
        option_label=option_id,
        points=points or (Point(x=0, y=0), Point(x=length_m * 50, y=0)),
        length_m=length_m,
    )


def area(element_id: str, option_id: str, area_m2: float) -> DrawingElement:
    return DrawingElement(
        id=element_id,
        kind=ElementKind.POLYGON_AREA,
        option_id=option_id,
        option_label=option_id,
        points=(Point(x=0, y=0), Point(x=50, y=0), Point(x=50, y=50)),
        area_m2=area_m2,
    )


def marker(element_id: str, option_id: str, kind: ElementKind = ElementKind.SINGLE_MARKER) -> DrawingElement:
    return DrawingElement(
        id=element_id,
        kind=kind,
        option_id=option_id,
        option_label=option_id,
        points=(Point(x=10, y=10),),
    )


@pytest.fixture()
def options() -> list[CatalogOption]:
    return [
        make_option("profile", Category.PROFILE, Unit.METER, stock_length_m=2.0),
        make_option("fabric", Category.FABRIC, Unit.SQUARE_METER, roll_width_m=3.0,
                    max_panel_height_m=3.2),
        make_option("membrane", Category.MEMBRANE, Unit.SQUARE_METER),
        make_option("light", Category.LIGHT, Unit.PIECE),
        make_option("plate-piece", Category.MOUNTING_PLATE, Unit.PIECE, variant="rondo"),
        make_option("plate-meter", Category.MOUNTING_PLATE, Unit.METER, variant="ceiling"),
    ]


@pytest.fixture()
def catalog(options: list[CatalogOption]) -> InMemoryCatalog:
    return InMemoryCatalog(options)


@pytest.fixture()
def wall() -> WallSurface:
    return WallSurface(id="wall-1", name="North wall", length_m=3.0, height_m=2.5)


@pytest.fixture()
def walls(wall: WallSurface) -> InMemoryWallRepository:
    return InMemoryWallRepository([wall])


@pytest.fixture()
def estimate_repo() -> InMemoryEstimateRepository:
    return InMemoryEstimateRepository()


@pytest.fixture()
def service(catalog: InMemoryCatalog, estimate_repo: InMemoryEstimateRepository) -> EstimateService:
    return EstimateService(catalog, estimate_repo)


@pytest.fixture()
def id_factory():
    counter = itertools.count(1)
    return lambda: f"el-{next(counter)}"

"""FastAPI route definitions."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from estimator.exceptions import CatalogError, OptionNotFoundError
from estimator.models import Category, Estimate, EstimateRecord, WallSurface
from estimator.core.capture import GeometryCapture
from estimator.core.perimeter import infer_wall_dimensions
from estimator.core.tools import tool_for
from estimator.services.editor_service import validate_dimensions
from estimator.services.estimate_service import EstimateService
from estimator.settings import Settings
from estimator.storage import CatalogLookup, WallRepository
from estimator.api.schemas import (
    CanvasInput, CatalogResponse, DimensionsInput, EstimateRequest, GestureRequest,
    GestureResponse, PerimeterResponse, RuleInfo, SaveEstimateRequest,
    SaveEstimateResponse,
)

router = APIRouter()


def get_settings_state(request: Request) -> Settings:
    return request.app.state.settings


def get_catalog(request: Request) -> CatalogLookup:
    return request.app.state.catalog


def get_walls(request: Request) -> WallRepository:
    return request.app.state.walls


def get_service(request: Request) -> EstimateService:
    return request.app.state.estimate_service


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/rules", response_model=list[RuleInfo])
async def list_rules(service: EstimateService = Depends(get_service)) -> list[RuleInfo]:
    """List all registered quantity rules and which ones are active."""
    return [RuleInfo(**r) for r in service.list_rules()]


@router.get("/catalog", response_model=CatalogResponse)
async def list_catalog(
    category: Category | None = None,
    wall_height: float | None = None,
    catalog: CatalogLookup = Depends(get_catalog),
) -> CatalogResponse:
    """Options for the tool panel; fabrics narrowed to the wall height when given."""
    options = await catalog.list_options(category=category, wall_height=wall_height)
    return CatalogResponse(options=options)


@router.post("/gestures", response_model=GestureResponse)
async def replay_gesture(
    request: GestureRequest,
    catalog: CatalogLookup = Depends(get_catalog),
    settings: Settings = Depends(get_settings_state),
) -> GestureResponse:
    """Run a recorded gesture through geometry capture."""
    found = await catalog.resolve_options([request.option_id])
    if not found:
        raise OptionNotFoundError(
            f"Option '{request.option_id}' not found", {"option_id": request.option_id},
        )
    tool = tool_for(found[0], settings.tools)
    capture = GeometryCapture(settings.canvas)

    element = capture.begin(request.down, tool)
    if element is None:
        for point in request.moves:
            capture.extend(point)
        element = capture.end(request.up)
    return GestureResponse(element=element)


@router.post("/estimate", response_model=Estimate)
async def estimate_draft(
    request: EstimateRequest,
    service: EstimateService = Depends(get_service),
) -> Estimate:
    """Estimate an unsaved drawing."""
    wall = WallSurface(
        id=request.wall_id,
        length_m=request.length_m,
        height_m=request.height_m,
        canvas_data=request.elements,
    )
    return await service.compute(wall)


@router.get("/walls/{wall_id}", response_model=WallSurface)
async def get_wall(wall_id: str, walls: WallRepository = Depends(get_walls)) -> WallSurface:
    return await walls.load_wall(wall_id)


@router.put("/walls/{wall_id}/dimensions", response_model=WallSurface)
async def update_dimensions(
    wall_id: str,
    request: DimensionsInput,
    walls: WallRepository = Depends(get_walls),
) -> WallSurface:
    length_m, height_m = validate_dimensions(request.length_m, request.height_m)
    return await walls.save_wall_dimensions(wall_id, length_m, height_m)


@router.put("/walls/{wall_id}/canvas", response_model=WallSurface)
async def save_canvas(
    wall_id: str,
    request: CanvasInput,
    walls: WallRepository = Depends(get_walls),
) -> WallSurface:
    await walls.save_canvas_data(wall_id, request.elements)
    return await walls.load_wall(wall_id)


@router.post("/walls/{wall_id}/perimeter", response_model=PerimeterResponse)
async def infer_perimeter(
    wall_id: str,
    apply: bool = True,
    force: bool = False,
    walls: WallRepository = Depends(get_walls),
    settings: Settings = Depends(get_settings_state),
) -> PerimeterResponse:
    """Derive the wall size from its drawn boundary lines."""
    wall = await walls.load_wall(wall_id)
    dims = infer_wall_dimensions(wall.canvas_data, settings.canvas)
    applied = False
    if dims is not None and apply and (force or not wall.has_dimensions):
        wall = await walls.save_wall_dimensions(wall_id, dims.length_m, dims.height_m)
        applied = True
    return PerimeterResponse(dimensions=dims, applied=applied, wall=wall)


@router.get("/walls/{wall_id}/estimate", response_model=Estimate)
async def get_estimate(
    wall_id: str,
    walls: WallRepository = Depends(get_walls),
    service: EstimateService = Depends(get_service),
) -> Estimate:
    """Live estimate of the wall's saved drawing."""
    wall = await walls.load_wall(wall_id)
    return await service.compute(wall)


@router.put("/walls/{wall_id}/estimates", response_model=SaveEstimateResponse)
async def save_estimate(
    wall_id: str,
    request: SaveEstimateRequest,
    walls: WallRepository = Depends(get_walls),
    service: EstimateService = Depends(get_service),
) -> SaveEstimateResponse:
    """Recompute and replace the stored estimate rows."""
    wall = await walls.load_wall(wall_id)
    estimate = await service.compute(wall)
    if not estimate.catalog_available:
        raise CatalogError(
            "Catalog is unavailable; stored estimate left unchanged", {"wall_id": wall_id},
        )
    records = await service.save(wall_id, estimate, request.notes)
    return SaveEstimateResponse(estimate=estimate, records=records)


@router.get("/walls/{wall_id}/estimates", response_model=list[EstimateRecord])
async def list_estimates(
    wall_id: str,
    service: EstimateService = Depends(get_service),
) -> list[EstimateRecord]:
    return await service.stored(wall_id)

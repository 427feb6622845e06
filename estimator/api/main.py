"""FastAPI application factory."""

from __future__ import annotations

import os
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from estimator.exceptions import EstimatorError
from estimator.logging_config import setup_logging
from estimator.models import WallSurface
from estimator.services.estimate_service import EstimateService
from estimator.settings import Settings, get_settings
from estimator.storage import CatalogLookup, EstimateRepository, WallRepository
from estimator.storage.local import FileEstimateRepository, FileWallRepository
from estimator.storage.memory import (
    InMemoryCatalog, InMemoryEstimateRepository, InMemoryWallRepository,
)
from estimator.api.exception_handlers import estimator_exception_handler
from estimator.api.routes import router


def _build_stores(settings: Settings) -> tuple[WallRepository, EstimateRepository]:
    if settings.storage.backend == "file":
        root = settings.storage.root
        logger.info("Using file storage under {}", root)
        return FileWallRepository(root), FileEstimateRepository(root)
    return InMemoryWallRepository(), InMemoryEstimateRepository()


def _seed_walls(walls: WallRepository, seeds: list[WallSurface]) -> None:
    """Add configured walls that the repository does not know yet."""
    added = 0
    for wall in seeds:
        if not walls.has_wall(wall.id):
            walls.add_wall(wall)
            added += 1
    if seeds:
        logger.info("Seeded {} of {} configured wall(s)", added, len(seeds))


def create_app(
    settings: Settings | None = None,
    catalog: CatalogLookup | None = None,
    walls: WallRepository | None = None,
    estimates: EstimateRepository | None = None,
) -> FastAPI:
    if settings is None:
        settings = get_settings()

    # Environment overrides the configured logging
    log_file = os.getenv("LOG_FILE")
    setup_logging(
        level=os.getenv("LOG_LEVEL", settings.logging.level),
        json_format=os.getenv("JSON_LOGGING", str(settings.logging.json_format)).lower()
        in {"true", "1", "yes"},
        log_file=Path(log_file) if log_file else settings.logging.file,
    )

    app = FastAPI(
        title="Stretch Wall Estimator",
        description="Canvas-to-quantity estimating for tensioned-fabric walls",
        version="0.1.0",
    )

    # CORS for the drawing front-end
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if walls is None or estimates is None:
        default_walls, default_estimates = _build_stores(settings)
        walls = walls or default_walls
        estimates = estimates or default_estimates
    _seed_walls(walls, settings.walls)
    if catalog is None:
        catalog = InMemoryCatalog(settings.catalog.options)

    app.state.settings = settings
    app.state.catalog = catalog
    app.state.walls = walls
    app.state.estimate_service = EstimateService(catalog, estimates, pricing=settings.pricing)

    app.add_exception_handler(EstimatorError, estimator_exception_handler)  # type: ignore[arg-type]
    app.include_router(router, prefix="/api")

    return app


app = create_app()

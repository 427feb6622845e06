"""High-level estimate service — facade for the session and API layers."""

from __future__ import annotations
from collections.abc import Iterable

from loguru import logger

from estimator.exceptions import CatalogError
from estimator.models import (
    DrawingElement, Estimate, EstimateRecord, PricingConfig, WallSurface,
)
from estimator.core.estimator import QuantityEstimator
from estimator.core.registry import RuleRegistry, create_default_registry
from estimator.storage import CatalogLookup, EstimateRepository


class EstimateService:
    """Resolves catalog options, delegates to the estimator, stores estimate rows."""

    def __init__(
        self,
        catalog: CatalogLookup,
        estimates: EstimateRepository,
        registry: RuleRegistry | None = None,
        pricing: PricingConfig | None = None,
    ) -> None:
        self.catalog = catalog
        self.estimates = estimates
        self.registry = registry or create_default_registry()
        self.estimator = QuantityEstimator(self.registry, pricing)

    async def compute(
        self, wall: WallSurface, elements: Iterable[DrawingElement] | None = None,
    ) -> Estimate:
        """Estimate `elements` (the wall's saved canvas by default) against the live catalog."""
        snapshot = list(wall.canvas_data if elements is None else elements)
        ids = list(dict.fromkeys(el.option_id for el in snapshot))
        if not ids:
            return Estimate(wall_id=wall.id)

        try:
            options = await self.catalog.resolve_options(ids)
        except CatalogError as exc:
            logger.warning("Catalog lookup failed for wall {}: {}", wall.id, exc.message)
            return Estimate(wall_id=wall.id, skipped_option_ids=ids, catalog_available=False)

        return self.estimator.estimate(wall, snapshot, {o.id: o for o in options})

    async def save(
        self, wall_id: str, estimate: Estimate, notes: str = "",
    ) -> list[EstimateRecord]:
        """Replace the stored rows of `wall_id` with `estimate`'s lines."""
        records = await self.estimates.replace_estimates(wall_id, estimate.lines, notes)
        logger.info("Saved estimate for wall {}: {} row(s)", wall_id, len(records))
        return records

    async def stored(self, wall_id: str) -> list[EstimateRecord]:
        return await self.estimates.list_estimates(wall_id)

    def list_rules(self) -> list[dict[str, str | bool]]:
        active = {rule.get_id() for rule in self.estimator.rules.values()}
        return [
            {
                "id": r.get_id(),
                "name": r.get_name(),
                "category": r.category.value,
                "active": r.get_id() in active,
            }
            for r in self.registry.list_rules()
        ]

"""Quantity estimator: groups drawn elements and prices each group."""

from __future__ import annotations
from collections.abc import Iterable, Mapping

from loguru import logger

from estimator.exceptions import QuantityRuleError
from estimator.models import (
    CatalogOption, DrawingElement, ElementGroup, Estimate, EstimateContext,
    EstimateLine, PricingConfig, WallSurface,
)
from estimator.core.registry import RuleRegistry


def group_by_option(elements: Iterable[DrawingElement]) -> dict[str, list[DrawingElement]]:
    """Partition elements by option id, keeping first-appearance order."""
    groups: dict[str, list[DrawingElement]] = {}
    for element in elements:
        groups.setdefault(element.option_id, []).append(element)
    return groups


class QuantityEstimator:
    """
    Stateless estimator.

    Takes a wall, its element snapshot and the resolved catalog options,
    prices every option group with its category rule and returns a
    complete Estimate. Results are recomputed from scratch on every call.
    """

    def __init__(self, registry: RuleRegistry, pricing: PricingConfig | None = None) -> None:
        self.registry = registry
        self.pricing = pricing or PricingConfig()
        # Fails fast on a bad rule table
        self.rules = registry.resolve(self.pricing)

    def estimate(
        self,
        wall: WallSurface,
        elements: Iterable[DrawingElement],
        options: Mapping[str, CatalogOption],
    ) -> Estimate:
        context = EstimateContext(wall=wall, pricing=self.pricing)
        skipped: list[str] = []

        # Grouping phase: unresolved options are dropped, not fatal
        for option_id, members in group_by_option(elements).items():
            option = options.get(option_id)
            if option is None:
                logger.warning(
                    "Skipping {} element(s) on wall {}: option {} not in catalog",
                    len(members), wall.id, option_id,
                )
                skipped.append(option_id)
                continue
            context.groups.append(ElementGroup(option=option, elements=members))

        # Pricing phase: one line per group
        lines: list[EstimateLine] = []
        for group in context.groups:
            rule = self.rules[group.option.category]
            try:
                quantity = rule.quantity(group, context)
            except QuantityRuleError as exc:
                logger.warning("Skipping option {}: {}", group.option.id, exc.message)
                skipped.append(group.option.id)
                continue
            lines.append(EstimateLine.from_quantity(group.option, quantity, rule.get_id()))

        logger.debug(
            "Estimated wall {}: {} line(s), {} skipped", wall.id, len(lines), len(skipped),
        )
        return Estimate(wall_id=wall.id, lines=lines, skipped_option_ids=skipped)

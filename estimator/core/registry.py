"""Rule registry — stores quantity rules and resolves the one configured per category."""

from __future__ import annotations

from estimator.exceptions import ConfigurationError
from estimator.models import Category, PricingConfig
from estimator.rules.base import QuantityRule


class RuleRegistry:
    """
    Central registry for all quantity rules.

    Rules are registered at startup. Several rules may price the same
    category; `PricingConfig.quantity_rules` decides which one is used.
    """

    def __init__(self) -> None:
        self._rules: dict[str, QuantityRule] = {}

    def register(self, rule: QuantityRule) -> None:
        """Register a quantity rule."""
        self._rules[rule.get_id()] = rule

    def unregister(self, rule_id: str) -> None:
        """Remove a rule from the registry."""
        self._rules.pop(rule_id, None)

    def get_rule(self, rule_id: str) -> QuantityRule | None:
        return self._rules.get(rule_id)

    def list_rules(self) -> list[QuantityRule]:
        """Return all registered rules."""
        return list(self._rules.values())

    def rules_for(self, category: Category) -> list[QuantityRule]:
        return [r for r in self._rules.values() if r.category == category]

    def resolve(self, pricing: PricingConfig) -> dict[Category, QuantityRule]:
        """
        Map every category to its configured rule.

        Raises ConfigurationError if a category has no rule configured,
        the rule id is unknown, or the rule prices another category.
        """
        resolved: dict[Category, QuantityRule] = {}
        for category in Category:
            rule_id = pricing.quantity_rules.get(category)
            if rule_id is None:
                raise ConfigurationError(
                    f"No quantity rule configured for category '{category.value}'",
                    {"category": category.value},
                )
            rule = self._rules.get(rule_id)
            if rule is None:
                raise ConfigurationError(
                    f"Unknown quantity rule '{rule_id}'",
                    {"category": category.value, "rule_id": rule_id},
                )
            if rule.category != category:
                raise ConfigurationError(
                    f"Rule '{rule_id}' prices '{rule.category.value}', not '{category.value}'",
                    {"category": category.value, "rule_id": rule_id},
                )
            resolved[category] = rule
        return resolved


def create_default_registry() -> RuleRegistry:
    """Create a registry with all standard quantity rules."""
    from estimator.rules.fabric import FabricRollWidthRule, FabricWallAreaRule
    from estimator.rules.fixtures import (
        LightCountRule, MembraneAreaRule, MountingPlateByUnitRule,
        MountingPlateCountRule, MountingPlateLengthRule,
    )
    from estimator.rules.profile import ProfileStockLengthRule

    registry = RuleRegistry()
    registry.register(ProfileStockLengthRule())
    registry.register(FabricWallAreaRule())
    registry.register(FabricRollWidthRule())
    registry.register(MembraneAreaRule())
    registry.register(LightCountRule())
    registry.register(MountingPlateByUnitRule())
    registry.register(MountingPlateCountRule())
    registry.register(MountingPlateLengthRule())
    return registry

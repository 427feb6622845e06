"""Abstract base class for all quantity rules.

Every category conversion in the system implements this interface. Rules are:
- Self-contained: each turns one group of elements into a billable quantity
- Swappable: configuration picks one rule per category
- Scoped: each rule declares the category it prices
"""

from __future__ import annotations
from abc import ABC, abstractmethod

from estimator.models.catalog import Category
from estimator.models.context import ElementGroup, EstimateContext


class QuantityRule(ABC):
    """
    Base class for all quantity rules.

    Subclasses set `category` and implement `quantity()`.
    The estimator looks up the configured rule for each group's
    category and multiplies the result by the option's unit prices.
    """

    category: Category

    @abstractmethod
    def get_id(self) -> str:
        """Unique identifier for this rule (e.g., 'profile.stock_length')."""
        ...

    @abstractmethod
    def get_name(self) -> str:
        """Human-readable name (e.g., 'Profile rounded up to stock lengths')."""
        ...

    @abstractmethod
    def quantity(self, group: ElementGroup, context: EstimateContext) -> float:
        """
        Billable quantity for one group, in the option's unit.

        Raise QuantityRuleError when the option lacks an attribute
        the rule needs; the estimator skips that group.
        """
        ...

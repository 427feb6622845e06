"""Custom exception hierarchy for the estimator."""

from __future__ import annotations

from typing import Any


class EstimatorError(Exception):
    """Base exception for all estimator-specific errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(EstimatorError):
    """Raised when configuration is invalid or missing."""
    pass


class ValidationError(EstimatorError):
    """Base class for input validation errors."""
    pass


class DimensionValidationError(ValidationError):
    """Raised when a manually entered wall length/height is rejected."""
    pass


class CatalogError(EstimatorError):
    """Raised when the catalog cannot be reached."""
    pass


class OptionNotFoundError(CatalogError):
    """Raised when a single catalog option is requested and does not exist."""
    pass


class QuantityRuleError(EstimatorError):
    """Raised when a quantity rule cannot price an option."""
    pass


class PersistenceError(EstimatorError):
    """Raised when a wall or estimate cannot be read or written."""
    pass


class WallNotFoundError(PersistenceError):
    """Raised when a wall id does not exist in the repository."""
    pass


__all__ = [
    "EstimatorError",
    "ConfigurationError",
    "ValidationError",
    "DimensionValidationError",
    "CatalogError",
    "OptionNotFoundError",
    "QuantityRuleError",
    "PersistenceError",
    "WallNotFoundError",
]

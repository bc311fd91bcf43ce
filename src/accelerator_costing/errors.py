from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .schema import ProductFilter


class CostingError(Exception):
    """Base class for errors raised by the costing package."""


class UnknownRegionError(CostingError, ValueError):
    """Raised when a region name or code is outside the supported set."""

    def __init__(self, region: str):
        super().__init__(f"Unknown region: {region!r}")
        self.region = region


class UnknownUsageKeyError(CostingError, KeyError):
    """Raised when a usage key has no entry in the data transfer field table."""

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Unknown usage key: {self.key!r}"


class PricingError(CostingError):
    """A cost component could not be resolved to exactly one catalog price."""

    def __init__(self, message: str, component: str, product_filter: "ProductFilter"):
        super().__init__(message)
        self.component = component
        self.product_filter = product_filter


class PriceNotFoundError(PricingError):
    def __init__(self, component: str, product_filter: "ProductFilter"):
        super().__init__(
            f"No price found for {component} ({product_filter.describe()})",
            component,
            product_filter,
        )


class MultiplePricesFoundError(PricingError):
    def __init__(self, component: str, product_filter: "ProductFilter", count: int):
        super().__init__(
            f"{count} prices found for {component} ({product_filter.describe()})",
            component,
            product_filter,
        )
        self.count = count

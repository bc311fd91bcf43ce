"""
Cost components and the product filters used to price them.

A component either carries a custom price (for rates the price list API
doesn't publish) or a ProductFilter that a price catalog resolves to a unit
price. Looking prices up is the catalog's job; this module only defines the
shape of the request.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional, Protocol, Tuple

from .usage import UsageItem


@dataclass(frozen=True)
class AttributeFilter:
    key: str
    value: str


@dataclass(frozen=True)
class ProductFilter:
    vendor_name: str
    service: str
    attribute_filters: Tuple[AttributeFilter, ...] = ()

    def attributes(self) -> Dict[str, str]:
        return {a.key: a.value for a in self.attribute_filters}

    def describe(self) -> str:
        parts = [f"service={self.service}"]
        parts += [f"{a.key}={a.value}" for a in self.attribute_filters]
        return ", ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vendorName": self.vendor_name,
            "service": self.service,
            "attributeFilters": [{"key": a.key, "value": a.value} for a in self.attribute_filters],
        }


class PriceCatalog(Protocol):
    def find_price(self, component: str, product_filter: ProductFilter) -> Decimal:
        """
        Return the single unit price matching product_filter.

        Raises PriceNotFoundError / MultiplePricesFoundError otherwise.
        """
        ...


@dataclass
class CostComponent:
    name: str
    unit: str
    unit_multiplier: Decimal = Decimal(1)
    hourly_quantity: Optional[Decimal] = None
    monthly_quantity: Optional[Decimal] = None
    product_filter: Optional[ProductFilter] = None
    custom_price: Optional[Decimal] = None

    def set_custom_price(self, price: Decimal) -> None:
        self.custom_price = price

    def unit_price(self, catalog: Optional[PriceCatalog] = None) -> Decimal:
        """
        Custom price if one is set, otherwise whatever the catalog resolves.

        Catalog errors propagate unchanged so each component reports its own
        missing price.
        """
        if self.custom_price is not None:
            return self.custom_price
        if catalog is None or self.product_filter is None:
            raise ValueError(f"{self.name} has no custom price and no catalog to price it")
        return catalog.find_price(self.name, self.product_filter)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "unit": self.unit,
            "unitMultiplier": str(self.unit_multiplier),
            "hourlyQuantity": None if self.hourly_quantity is None else str(self.hourly_quantity),
            "monthlyQuantity": None if self.monthly_quantity is None else str(self.monthly_quantity),
            "customPrice": None if self.custom_price is None else str(self.custom_price),
            "productFilter": None if self.product_filter is None else self.product_filter.to_dict(),
        }


@dataclass
class Resource:
    name: str
    usage_schema: Tuple[UsageItem, ...] = ()
    cost_components: List[CostComponent] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "costComponents": [c.to_dict() for c in self.cost_components],
        }

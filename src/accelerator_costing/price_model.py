from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, List

from .handlers.global_accelerator import price_global_accelerator
from .schema import CostComponent, Resource

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Handler registry
# ---------------------------------------------------------------------------

def _make_handlers() -> Dict[str, Callable[[Dict[str, Any]], Resource]]:
    """
    Map component 'type' -> function building its Resource.
    """
    return {
        "global_accelerator": price_global_accelerator,
    }


def build_resources(components: List[Dict[str, Any]]) -> List[Resource]:
    """Build a Resource per component, skipping types with no handler."""
    handlers = _make_handlers()
    resources: List[Resource] = []
    for comp in components:
        comp_type = comp.get("type", "")
        fn = handlers.get(comp_type)
        if fn is None:
            expected = ", ".join(sorted(handlers.keys()))
            log.warning(
                "No handler for component type %r. Expected one of: %s",
                comp_type,
                expected,
            )
            continue
        resources.append(fn(comp))
    return resources


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

def _quantity(c: CostComponent) -> str:
    if c.monthly_quantity is not None:
        return f"{c.monthly_quantity} {c.unit}/month"
    if c.hourly_quantity is not None:
        return f"{c.hourly_quantity}/hour ({c.unit})"
    return "-"


def _price_key(c: CostComponent) -> str:
    if c.custom_price is not None:
        return f"@{c.custom_price} (custom)"
    if c.product_filter is None:
        return "-"
    return c.product_filter.attributes().get("usagetype", c.product_filter.service)


def format_resource(resource: Resource) -> List[str]:
    lines = [f"-- {resource.name} ({len(resource.cost_components)} cost components) --"]
    for c in resource.cost_components:
        lines.append(f"  • {c.name:<80} {_quantity(c):>24}  {_price_key(c)}")
    return lines


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_model(*, components: List[Dict[str, Any]], as_json: bool = False) -> List[Resource]:
    """
    Build every component's Resource and print its cost components.

    Prices are not resolved here: data transfer components carry the product
    filter a price catalog needs, the fixed fee carries its custom price.
    """
    resources = build_resources(components)

    if as_json:
        print(json.dumps([r.to_dict() for r in resources], indent=2))
        return resources

    print("\n=== Cost Components ===")
    for r in resources:
        for line in format_resource(r):
            print(line)
    return resources

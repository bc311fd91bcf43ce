# =====================================================================================
# AWS Global Accelerator. Example component:
# {
#   "type": "global_accelerator",
#   "name": "edge",
#   "enabled": true,
#   "usage": {
#     "monthly_inbound_data_transfer_gb":  {"from_europe_to_india": 12.5},
#     "monthly_outbound_data_transfer_gb": {"from_india_to_europe": 3}
#   }
# }
#
# Notes:
# • Billing Components:
#     - Fixed fee → 0.025 per accelerator-hour (not published in the price list API,
#       so it is set as a custom price).
#     - DT-Premium → per GB, per (from, to) region pair, dominant direction only.
# • Dominant direction: whichever of inbound / outbound carries more GB in the
#   month. AWS doesn't document a tie; inbound wins it here.
# • Price list attributes: trafficDirection, fromLocation, toLocation,
#   operation = "Dominant", usagetype = "<FROM>-<TO>-<DIRECTION>-Bytes-Internet".
#   The list also has "-Bytes-AWS" rows at the same price; pinning one variant
#   keeps the lookup to a single match.
# • Disabled accelerators cost nothing.
# =====================================================================================
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from ..errors import UnknownUsageKeyError
from ..helpers.string import stripped
from ..schema import AttributeFilter, CostComponent, ProductFilter, Resource
from ..types import Direction
from ..usage import (
    INBOUND_USAGE_KEY,
    OUTBOUND_USAGE_KEY,
    USAGE_SCHEMA,
    DataTransferEntry,
    UsageRecord,
    iter_data_transfer,
    total_usage,
    unknown_usage_keys,
)

log = logging.getLogger(__name__)

VENDOR_NAME = "aws"
SERVICE = "AWSGlobalAccelerator"
FIXED_FEE_PER_HOUR = Decimal("0.025")
OPERATION = "Dominant"
USAGE_TYPE_SUFFIX = "Bytes-Internet"


def select_direction(inbound_total: Decimal, outbound_total: Decimal) -> Direction:
    """Outbound only when it is strictly larger; ties go to inbound."""
    if outbound_total > inbound_total:
        return Direction.OUTBOUND
    return Direction.INBOUND


def fixed_fee_component(name: str) -> CostComponent:
    c = CostComponent(
        name=f"AWS Global Accelerator {name} Fixed Fee",
        unit="hours",
        unit_multiplier=Decimal(1),
        hourly_quantity=Decimal(1),
        product_filter=ProductFilter(vendor_name=VENDOR_NAME, service=SERVICE),
    )
    c.set_custom_price(FIXED_FEE_PER_HOUR)
    return c


def data_transfer_component(name: str, entry: DataTransferEntry) -> CostComponent:
    direction = entry.direction.label
    usage_type = f"{entry.from_code.upper()}-{entry.to_code.upper()}-{direction}-{USAGE_TYPE_SUFFIX}"
    return CostComponent(
        name=f"AWS Global Accelerator {name} DT-Premium Usage {direction} from {entry.from_code} to {entry.to_code}",
        unit="GB",
        unit_multiplier=Decimal(1),
        monthly_quantity=entry.quantity,
        product_filter=ProductFilter(
            vendor_name=VENDOR_NAME,
            service=SERVICE,
            attribute_filters=(
                AttributeFilter("trafficDirection", entry.direction.value),
                AttributeFilter("fromLocation", entry.from_code),
                AttributeFilter("toLocation", entry.to_code),
                AttributeFilter("operation", OPERATION),
                AttributeFilter("usagetype", usage_type),
            ),
        ),
    )


@dataclass
class GlobalAccelerator:
    name: str
    enabled: bool = True
    monthly_inbound_data_transfer_gb: Optional[UsageRecord] = None
    monthly_outbound_data_transfer_gb: Optional[UsageRecord] = None

    def populate_usage(self, usage: Optional[Mapping[str, Any]]) -> None:
        """Fill both direction records from a nested usage mapping."""
        usage = usage or {}
        unknown = unknown_usage_keys(usage)
        if unknown:
            raise UnknownUsageKeyError(unknown[0])
        if usage.get(INBOUND_USAGE_KEY) is not None:
            self.monthly_inbound_data_transfer_gb = UsageRecord.from_mapping(usage[INBOUND_USAGE_KEY])
        if usage.get(OUTBOUND_USAGE_KEY) is not None:
            self.monthly_outbound_data_transfer_gb = UsageRecord.from_mapping(usage[OUTBOUND_USAGE_KEY])

    def build_resource(self) -> Resource:
        resource = Resource(name=self.name, usage_schema=USAGE_SCHEMA)
        if not self.enabled:
            log.debug("Global Accelerator %s is disabled; no cost components", self.name)
            return resource

        components = [fixed_fee_component(self.name)]
        direction = self.dominant_direction()
        if direction is not None:
            record = (
                self.monthly_outbound_data_transfer_gb
                if direction is Direction.OUTBOUND
                else self.monthly_inbound_data_transfer_gb
            )
            log.info("Global Accelerator %s dominant direction: %s", self.name, direction.label)
            components += self._data_transfer_components(direction, record)

        resource.cost_components = components
        return resource

    def dominant_direction(self) -> Optional[Direction]:
        """Direction that gets billed, or None when neither total is positive."""
        inbound_total = total_usage(self.monthly_inbound_data_transfer_gb)
        outbound_total = total_usage(self.monthly_outbound_data_transfer_gb)
        log.debug(
            "Global Accelerator %s data transfer: inbound=%s GB, outbound=%s GB",
            self.name,
            inbound_total,
            outbound_total,
        )
        if inbound_total > 0 or outbound_total > 0:
            return select_direction(inbound_total, outbound_total)
        return None

    def _data_transfer_components(self, direction: Direction, record: Optional[UsageRecord]) -> List[CostComponent]:
        out: List[CostComponent] = []
        for entry in iter_data_transfer(record, direction):
            # zero or negative pairs would only produce empty catalog lookups
            if entry.quantity <= 0:
                log.debug("Skipping %s->%s: %s GB", entry.from_code, entry.to_code, entry.quantity)
                continue
            out.append(data_transfer_component(self.name, entry))
        return out


def price_global_accelerator(component: Dict[str, Any]) -> Resource:
    """Build the Global Accelerator resource for a component dict (see header)."""
    name = stripped(component.get("name")) or "global_accelerator"
    enabled = component.get("enabled", True)
    if isinstance(enabled, str):
        enabled = enabled.strip().lower() not in ("false", "0", "no", "off", "")

    ga = GlobalAccelerator(
        name=name,
        enabled=bool(enabled),
    )
    ga.populate_usage(component.get("usage"))
    return ga.build_resource()


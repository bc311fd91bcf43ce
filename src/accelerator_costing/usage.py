"""
Monthly data transfer usage for a Global Accelerator.

Each direction (inbound / outbound) carries one optional GB value per ordered
region pair, keyed as ``from_<origin>_to_<destination>``. The 81 keys live in a
static table built once at import so that records are walked generically
instead of field by field.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterator, List, Mapping, NamedTuple, Optional, Tuple, Union

from .errors import UnknownUsageKeyError
from .helpers.math import decimal
from .regions import REGIONS, code_for
from .types import Direction, RegionPair

Quantity = Union[int, float, Decimal, str]

INBOUND_USAGE_KEY = "monthly_inbound_data_transfer_gb"
OUTBOUND_USAGE_KEY = "monthly_outbound_data_transfer_gb"


class UsageField(NamedTuple):
    key: str
    origin: str
    destination: str


class DataTransferEntry(NamedTuple):
    from_code: str
    to_code: str
    direction: Direction
    quantity: Decimal


@dataclass(frozen=True)
class UsageItem:
    """One entry of a resource's usage schema (mirrors the usage file layout)."""
    key: str
    value_type: str
    default: Any = 0
    items: Tuple["UsageItem", ...] = ()


# ---------------------------------------------------------------------------
# Key encoding
# ---------------------------------------------------------------------------

_REGION_ALT = "|".join(re.escape(r) for r in sorted(REGIONS, key=len, reverse=True))
_USAGE_KEY_RE = re.compile(rf"from_(?P<origin>{_REGION_ALT})_to_(?P<destination>{_REGION_ALT})")


def usage_key(origin: str, destination: str) -> str:
    code_for(origin)
    code_for(destination)
    return f"from_{origin}_to_{destination}"


def parse_usage_key(key: str) -> RegionPair:
    """
    Split a usage key into (origin, destination).

    Region names contain underscores themselves, so the match is anchored on
    the known names rather than splitting the string.
    """
    m = _USAGE_KEY_RE.fullmatch(key or "")
    if not m:
        raise UnknownUsageKeyError(key)
    return m.group("origin"), m.group("destination")


DATA_TRANSFER_FIELDS: Tuple[UsageField, ...] = tuple(
    UsageField(usage_key(origin, destination), origin, destination)
    for origin in REGIONS
    for destination in REGIONS
)

_FIELDS_BY_KEY: Dict[str, UsageField] = {f.key: f for f in DATA_TRANSFER_FIELDS}


# ---------------------------------------------------------------------------
# Usage record
# ---------------------------------------------------------------------------

@dataclass
class UsageRecord:
    """GB per region pair for one direction. Missing pairs are absent, not zero."""
    values: Dict[RegionPair, Quantity] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]]) -> "UsageRecord":
        values: Dict[RegionPair, Quantity] = {}
        for key, value in (mapping or {}).items():
            f = _FIELDS_BY_KEY.get(key)
            if f is None:
                raise UnknownUsageKeyError(key)
            if value is None:
                continue
            decimal(value)
            # stored as given so to_mapping() writes back what was read
            values[(f.origin, f.destination)] = value
        return cls(values)

    def get(self, origin: str, destination: str) -> Optional[Quantity]:
        return self.values.get((origin, destination))

    def to_mapping(self) -> Dict[str, Quantity]:
        """Present keys only, in table order."""
        return {
            f.key: self.values[(f.origin, f.destination)]
            for f in DATA_TRANSFER_FIELDS
            if (f.origin, f.destination) in self.values
        }


def iter_data_transfer(record: Optional[UsageRecord], direction: Direction) -> Iterator[DataTransferEntry]:
    """
    Yield an entry for every pair with a defined value, in table order.

    Quantities are passed through as-is: zero and negative values are yielded
    too and it is up to the caller to drop them.
    """
    if record is None:
        return
    for f in DATA_TRANSFER_FIELDS:
        value = record.get(f.origin, f.destination)
        if value is None:
            continue
        yield DataTransferEntry(
            from_code=code_for(f.origin),
            to_code=code_for(f.destination),
            direction=direction,
            quantity=decimal(value),
        )


def total_usage(record: Optional[UsageRecord]) -> Decimal:
    """Sum of every defined value in the record (0 for an absent record)."""
    if record is None:
        return Decimal(0)
    return sum((decimal(v) for v in record.values.values()), Decimal(0))


# ---------------------------------------------------------------------------
# Usage schema
# ---------------------------------------------------------------------------

_REGION_DATA_TRANSFER_SCHEMA: Tuple[UsageItem, ...] = tuple(
    UsageItem(key=f.key, value_type="float", default=0) for f in DATA_TRANSFER_FIELDS
)

USAGE_SCHEMA: Tuple[UsageItem, ...] = (
    UsageItem(key=INBOUND_USAGE_KEY, value_type="sub_resource", default=None, items=_REGION_DATA_TRANSFER_SCHEMA),
    UsageItem(key=OUTBOUND_USAGE_KEY, value_type="sub_resource", default=None, items=_REGION_DATA_TRANSFER_SCHEMA),
)


def usage_template(schema: Tuple[UsageItem, ...] = USAGE_SCHEMA) -> Dict[str, Any]:
    """Nested usage document with every key set to its default value."""
    out: Dict[str, Any] = {}
    for item in schema:
        out[item.key] = usage_template(item.items) if item.items else item.default
    return out


def unknown_usage_keys(usage: Mapping[str, Any]) -> List[str]:
    """Top-level keys of a usage document that the schema doesn't declare."""
    known = {item.key for item in USAGE_SCHEMA}
    return [k for k in usage if k not in known]

"""
Region names used in Global Accelerator usage keys and their billing codes.

The price list identifies each side of a transfer by a two-letter location
code (fromLocation / toLocation); usage files use the snake_case names.
"""
from typing import Dict, Tuple

from .errors import UnknownRegionError

# Order matters: the usage field table and the output line items follow it.
REGION_CODES: Dict[str, str] = {
    "asia_pacific":  "AP",
    "australia":     "AU",
    "europe":        "EU",
    "india":         "IN",
    "south_korea":   "KR",
    "middle_east":   "ME",
    "north_america": "NA",
    "south_america": "SA",
    "south_africa":  "ZA",
}

REGIONS: Tuple[str, ...] = tuple(REGION_CODES)

_CODE_REGIONS: Dict[str, str] = {code: region for region, code in REGION_CODES.items()}


def code_for(region: str) -> str:
    """'south_korea' -> 'KR'."""
    try:
        return REGION_CODES[region]
    except KeyError:
        raise UnknownRegionError(region) from None


def region_for(code: str) -> str:
    """'KR' -> 'south_korea'. Case-insensitive."""
    try:
        return _CODE_REGIONS[(code or "").upper()]
    except KeyError:
        raise UnknownRegionError(code) from None

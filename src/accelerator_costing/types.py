from enum import Enum
from typing import Tuple

RegionPair = Tuple[str, str]  # (origin region, destination region)


class Direction(Enum):
    """Traffic direction as it appears in the Global Accelerator price list."""
    INBOUND = "Inbound"
    OUTBOUND = "Outbound"

    @property
    def label(self) -> str:
        return self.value.upper()

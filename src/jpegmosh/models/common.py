from __future__ import annotations
from enum import Enum, IntEnum

class MarkerCategory(str, Enum):
    FIXED = "fixed"
    RESTART_INTERVAL = "restart_interval"
    LENGTH_PREFIXED = "length_prefixed"
    SCAN = "scan"

class DensityUnits(IntEnum):
    NONE = 0
    DPI = 1
    DPCM = 2

# Component ids as used by JFIF / Adobe files
CHANNEL_NAMES = {1: "Y", 2: "Cb", 3: "Cr", 4: "I", 5: "Q"}

def channel_name(cid: int) -> str:
    return CHANNEL_NAMES.get(cid, str(cid))

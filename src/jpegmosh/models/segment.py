from __future__ import annotations
from pydantic import BaseModel, Field
from .common import MarkerCategory

class Segment(BaseModel):
    marker: int = Field(..., ge=0, le=0xFF)
    category: MarkerCategory
    description: str
    offset: int = Field(..., ge=0)
    size: int = Field(..., ge=0)
    raw: bytes = Field(default=b"", exclude=True, repr=False)

    @property
    def declared_length(self) -> int | None:
        """Big-endian length field following the marker, if this segment has one."""
        if self.category in (MarkerCategory.FIXED, MarkerCategory.RESTART_INTERVAL):
            return None
        if len(self.raw) < 4:
            return None
        return int.from_bytes(self.raw[2:4], "big")

    @property
    def payload(self) -> bytes:
        if self.category == MarkerCategory.FIXED:
            return b""
        if self.category == MarkerCategory.SCAN:
            return self.raw[2:]
        return self.raw[4:]

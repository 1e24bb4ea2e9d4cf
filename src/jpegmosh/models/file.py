from __future__ import annotations
from pydantic import BaseModel, Field
from typing import List
from .segment import Segment
from .headers import FrameHeader, JfifHeader

class JpegFile(BaseModel):
    segments: List[Segment] = Field(default_factory=list)
    frame: FrameHeader | None = None
    jfif: JfifHeader | None = None

    @classmethod
    def from_binary(cls, data: bytes | str) -> "JpegFile":
        from ..binary.reader import parse_file
        return parse_file(data)

    def to_binary(self) -> bytes:
        from ..binary.writer import write_file
        return write_file(self)

    @property
    def size(self) -> int:
        """Bytes held by the segments (can be less than their declared sizes add up to)."""
        return sum(len(s.raw) for s in self.segments)

from __future__ import annotations
from typing import Iterable
from ..models.file import JpegFile
from ..models.segment import Segment

def join_segments(segments: Iterable[Segment | bytes | bytearray]) -> bytes:
    """Concatenate segment bytes in the given order."""
    return b"".join(s.raw if isinstance(s, Segment) else bytes(s) for s in segments)

def write_file(file: JpegFile) -> bytes:
    return join_segments(file.segments)

from __future__ import annotations
from .bytecursor import Cursor

LEAD_BYTE = 0xFF

class HeaderDecodeError(ValueError):
    pass

def decode_segment_header(cur: Cursor) -> int | None:
    """
    2-byte segment prefix: 0xFF lead, then the marker byte.
    Returns the marker, or None when the stream is misaligned or cut short
    (cursor is left where it was).
    """
    if cur.remaining() < 2 or cur.peek(1)[0] != LEAD_BYTE:
        return None
    cur.skip(1)
    return cur.u8()

def decode_length(cur: Cursor) -> int | None:
    """Big-endian 16-bit length field (counts itself, not the marker)."""
    if cur.remaining() < 2:
        return None
    return cur.u16()

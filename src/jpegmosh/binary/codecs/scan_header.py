from __future__ import annotations
from .bytecursor import Cursor
from .segment_header import HeaderDecodeError
from jpegmosh.models.common import channel_name
from jpegmosh.models.headers import ScanComponent, ScanHeader

def decode_scan_header(cur: Cursor) -> ScanHeader:
    """
    SOS header, cursor positioned just after the marker:
      Ls (2), Ns (1), Ns x [Cs (1), Td|Ta (1)], Ss, Se, Ah|Al.
    Descriptive only; the scan's extent is decided by the reader, not by Ls.
    """
    try:
        ls = cur.u16()
        ns = cur.u8()
        comps = []
        for _ in range(ns):
            cid = cur.u8()
            dc, ac = cur.nibbles()
            comps.append(ScanComponent(id=cid, channel=channel_name(cid), dc_table=dc, ac_table=ac))
    except ValueError as e:
        raise HeaderDecodeError(f"truncated SOS header: {e}") from e
    return ScanHeader(header_length=ls, components=comps)

def scan_data_offset(raw: bytes) -> int:
    """
    Offset of the first entropy-coded byte within an SOS segment
    (marker + declared header length), clamped to the segment.
    """
    if len(raw) < 4:
        return len(raw)
    ls = int.from_bytes(raw[2:4], "big")
    return min(2 + ls, len(raw))

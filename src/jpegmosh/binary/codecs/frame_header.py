from __future__ import annotations
from .bytecursor import Cursor
from .segment_header import HeaderDecodeError
from jpegmosh.models.common import DensityUnits, channel_name
from jpegmosh.models.headers import FrameComponent, FrameHeader, JfifHeader

JFIF_IDENT = b"JFIF\x00"

def decode_frame_header(marker: int, payload: bytes) -> FrameHeader:
    """
    SOFn payload (after the length field):
      P (1), Y (2), X (2), Nf (1), Nf x [C (1), H|V (1), Tq (1)].
    """
    cur = Cursor(payload)
    try:
        precision = cur.u8()
        height = cur.u16()
        width = cur.u16()
        nf = cur.u8()
        comps = []
        for _ in range(nf):
            cid = cur.u8()
            h, v = cur.nibbles()
            tq = cur.u8()
            comps.append(FrameComponent(id=cid, channel=channel_name(cid), h_sampling=h, v_sampling=v, quant_table=tq))
    except ValueError as e:
        raise HeaderDecodeError(f"truncated frame header: {e}") from e
    return FrameHeader(marker=marker, precision=precision, height=height, width=width, components=comps)

def decode_jfif_header(payload: bytes) -> JfifHeader:
    """APP0 payload starting with 'JFIF\\0'."""
    if payload[:5] != JFIF_IDENT:
        raise HeaderDecodeError(f"not a JFIF APP0 (identifier {payload[:5]!r})")
    cur = Cursor(payload)
    try:
        cur.skip(5)
        major = cur.u8()
        minor = cur.u8()
        units = cur.u8()
        xd = cur.u16()
        yd = cur.u16()
        xt = cur.u8()
        yt = cur.u8()
    except ValueError as e:
        raise HeaderDecodeError(f"truncated JFIF header: {e}") from e
    try:
        unit_val: DensityUnits | int = DensityUnits(units)
    except ValueError:
        unit_val = units
    return JfifHeader(
        version=f"{major}.{minor:02d}", units=unit_val,
        x_density=xd, y_density=yd, x_thumbnail=xt, y_thumbnail=yt,
    )

"""
JPEG marker byte classification.

A lot of JPEGs out there, in terms of segments, look like:
  - SOI  (D8)  start of image
  - APP0 (E0)  usually JFIF
  - a SOF variant (C0..CF), usually SOF0 (baseline) or SOF2 (progressive)
  - DQT  (DB)  quantization tables, one or more (can come before SOF)
  - DHT  (C4)  huffman tables, one or more
  - SOS  (DA)  start of scan, followed by the compressed image data
  - EOI  (D9)  end of image (sometimes omitted)

The table only drives descriptions and how the reader finds a segment's length.
"""
from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from jpegmosh.models.common import MarkerCategory

SOI   = 0xD8
EOI   = 0xD9
SOS   = 0xDA
DQT   = 0xDB
DRI   = 0xDD
COM   = 0xFE
HQT   = 0xC4
SOF0  = 0xC0
SOF1  = 0xC1
SOF2  = 0xC2
SOF9  = 0xC9
RST0  = 0xD0
RST7  = 0xD7
APP0  = 0xE0
APP1  = 0xE1
APP2  = 0xE2
APP3  = 0xE3
APP4  = 0xE4
APP5  = 0xE5
APP6  = 0xE6
APP7  = 0xE7
APP8  = 0xE8
APP9  = 0xE9
APP10 = 0xEA
APP11 = 0xEB
APP12 = 0xEC
APP13 = 0xED
APP14 = 0xEE
APP15 = 0xEF

FRAME_MARKERS = frozenset((SOF0, SOF1, SOF2, SOF9))

UNKNOWN = "unknown marker"
_J2K = "JPEG extensions, JPEG2000?"
_T84 = "JPEG extensions, ITU T.84/IEC 10918-3"


@dataclass(frozen=True)
class MarkerInfo:
    category: MarkerCategory
    description: str
    size: int | None = None  # fixed on-wire size; None when read from the stream


# Single-value entries. Range rules are applied in classify().
MARKER_DESCRIPTIONS: Mapping[int, str] = MappingProxyType({
    SOI: "Start Of Image",
    EOI: "End Of Image",
    SOS: "start of scan",
    DRI: "restart interval",
    COM: "comment",
    HQT: "huffman tables",
    DQT: "quantization tables",
    SOF0: "start of frame, baseline sequential, huffman",
    SOF2: "start of frame, progressive, huffman",
    SOF1: "start of frame, extended sequential, huffman",
    SOF9: "start of frame, extended sequential, arithmetic",
    0xC3: "(start of frame? -) lossless",
    0xC5: "(start of frame? -) differential sequential DCI",
    0xC6: "(start of frame? -) differential progressive DCI",
    0xC7: "(start of frame? -) differential lossless",
    0xC8: "JPEG extensions",
    0xCA: "(start of frame? -) extended progressive DCT",
    0xCB: "(start of frame? -) extended lossless",
    0xCC: "arithmetic conditioning table",
    0xF7: "JPEG LS - SOF48",
    0xF8: "JPEG LS - LSE",
    0xFD: "reserved for JPEG extensions",
    0x51: _J2K + ", image and tile size",
    0x52: _J2K + ", coding style default",
    0x53: _J2K + ", coding style component",
    0x55: _J2K + ", tile-part lengths",
    0x57: _J2K + ", packet length (main header)",
    0x58: _J2K + ", packet length (tile-part header)",
    0x5C: _J2K + ", quantization default",
    0x5D: _J2K + ", quantization component",
    0x5E: _J2K + ", region of interest",
    0x5F: _J2K + ", progression order change",
    0x60: _J2K + ", packed packet headers (main header)",
    0x61: _J2K + ", packed packet headers (tile-part header)",
    0x63: _J2K + ", component reg",
    0x64: _J2K + ", comment",
    0x91: _J2K + ", start of packet",
    0x92: _J2K + ", end of packet header",
})


def is_app(marker: int) -> bool:
    return APP0 <= marker <= APP15

def is_restart(marker: int) -> bool:
    return RST0 <= marker <= RST7


def classify(marker: int) -> MarkerInfo:
    """Category and generic description for one marker byte."""
    if marker in (SOI, EOI):
        return MarkerInfo(MarkerCategory.FIXED, MARKER_DESCRIPTIONS[marker], 2)
    if is_restart(marker):
        return MarkerInfo(MarkerCategory.FIXED, f"restart {marker - RST0}", 2)
    if 0x30 <= marker <= 0x3F:
        return MarkerInfo(MarkerCategory.FIXED, "reserved JP2", 2)
    if marker == DRI:
        return MarkerInfo(MarkerCategory.RESTART_INTERVAL, MARKER_DESCRIPTIONS[DRI], 6)
    if marker == SOS:
        return MarkerInfo(MarkerCategory.SCAN, MARKER_DESCRIPTIONS[SOS])

    # everything else codes its own length
    descr = MARKER_DESCRIPTIONS.get(marker)
    if descr is None:
        if is_app(marker):
            descr = f"APP{marker - APP0}"
        elif 0x4F <= marker <= 0x6F or 0x90 <= marker <= 0x93:
            descr = _J2K
        elif 0xF0 <= marker <= 0xF6 or 0xF9 <= marker <= 0xFD:
            descr = _T84
        else:
            descr = UNKNOWN
    return MarkerInfo(MarkerCategory.LENGTH_PREFIXED, descr)


def marker_hex(marker: int) -> str:
    return f"0x{marker:02x}"

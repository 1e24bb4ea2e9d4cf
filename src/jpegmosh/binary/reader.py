from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path
from typing import Dict, Iterator, Union

from .codecs.bytecursor import Cursor
from .codecs.segment_header import decode_segment_header, decode_length, HeaderDecodeError
from .codecs.scan_header import decode_scan_header
from .codecs.frame_header import decode_frame_header, decode_jfif_header, JFIF_IDENT
from .codecs.markers import classify, is_app, marker_hex, APP0, COM, EOI, FRAME_MARKERS

from jpegmosh.models.common import MarkerCategory
from jpegmosh.models.file import JpegFile
from jpegmosh.models.segment import Segment

logger = logging.getLogger(__name__)

BytesLike = Union[str, Path, bytes, bytearray, memoryview]

EOI_BYTES = bytes((0xFF, EOI))


# -----------------------------
# Helpers
# -----------------------------

def _load_bytes(inp: BytesLike) -> bytes:
    if isinstance(inp, (bytes, bytearray, memoryview)):
        return bytes(inp)
    p = Path(str(inp))
    return p.read_bytes()


def _app_description(cur: Cursor, marker: int, start: int, end: int) -> str:
    """'APPn <identifier>' using the NUL-terminated ASCII id at the start of the payload."""
    label = f"APP{marker - APP0}"
    nul = cur.find(b"\x00", start + 5, end)
    if nul < 0:
        return label
    ident = cur.buf[start + 4:nul].tobytes().decode("ascii", errors="ignore")
    return f"{label} {ident}"


def _scan_end(raw: bytes) -> int:
    # Assumes the scan runs up to a trailing EOI, or to the end when there is none.
    # Restart markers and anything between the scan data and EOI stay inside the scan.
    if raw[-2:] == EOI_BYTES:
        return len(raw) - 2
    return len(raw)


def _trace_scan(cur: Cursor, start: int) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    hcur = Cursor(cur.buf[start + 2:])
    try:
        sh = decode_scan_header(hcur)
    except HeaderDecodeError as e:
        logger.debug("    SOS header unreadable: %s", e)
        return
    logger.debug("    SOS header size: %d, components in scan: %d", sh.header_length, len(sh.components))
    for c in sh.components:
        logger.debug("    Channel %-2s  Huffman table DC:%x AC:%x", c.channel, c.dc_table, c.ac_table)


# -----------------------------
# Segment walk
# -----------------------------

def iter_segments(data: BytesLike) -> Iterator[Segment]:
    """
    Split JPEG file contents into its constituent segments, in stream order.
    You wouldn't call this a parser - it does little to no interpretation of
    what those segments mean.

    Each call starts a fresh walk. Stops quietly (no exception) when a segment
    doesn't start with 0xFF, or when a marker or length field is cut off by the
    end of the data; whatever was read up to then has already been yielded.
    """
    raw = _load_bytes(data)
    cur = Cursor(raw)
    dsize = len(raw)

    while cur.remaining() > 0:
        start = cur.tell()
        logger.debug("now at bytepos %d of %d", start, dsize)

        marker = decode_segment_header(cur)
        if marker is None:
            logger.debug(
                "segment didn't start with 0xff, we probably mis-parsed (next bytes are %s)",
                cur.peek(min(8, cur.remaining())).hex(),
            )
            return

        info = classify(marker)
        descr = info.description

        if info.category == MarkerCategory.SCAN:
            _trace_scan(cur, start)
            end = _scan_end(raw)
        elif info.size is not None:
            end = start + info.size
        else:
            length = decode_length(cur)
            if length is None:
                logger.debug("length field of marker %s cut off at bytepos %d", marker_hex(marker), start)
                return
            end = start + 2 + length
            if is_app(marker):
                descr = _app_description(cur, marker, start, min(end, dsize))

        size = end - start
        seg = Segment(
            marker=marker,
            category=info.category,
            description=descr,
            offset=start,
            size=size,
            raw=raw[start:end],
        )
        logger.debug("Chunk  size:2+%3d   type:%s  %s", size - 2, marker_hex(marker), descr)
        yield seg

        if end >= dsize:
            return
        cur.seek(end)


# -----------------------------
# Full parse
# -----------------------------

def parse_file(data: BytesLike) -> JpegFile:
    """
    Decompose a whole file and decode the descriptive headers
    (first SOFn frame header, first APP0 JFIF header).
    """
    segments = list(iter_segments(data))
    f = JpegFile(segments=segments)

    for seg in segments:
        try:
            if f.frame is None and seg.marker in FRAME_MARKERS:
                f.frame = decode_frame_header(seg.marker, seg.payload)
                logger.debug(
                    "Image is %d by %d px, %d-channel, %d bits per channel",
                    f.frame.width, f.frame.height, len(f.frame.components), f.frame.precision,
                )
                for c in f.frame.components:
                    logger.debug("    %-2s hsfac:%d vsfac:%d  qtnum:%d", c.channel, c.h_sampling, c.v_sampling, c.quant_table)
            elif f.jfif is None and seg.marker == APP0 and seg.payload.startswith(JFIF_IDENT):
                f.jfif = decode_jfif_header(seg.payload)
                j = f.jfif
                logger.debug("JFIF version %s, units %s", j.version, j.units)
                logger.debug("    density %dx%d, thumbnail %dx%d", j.x_density, j.y_density, j.x_thumbnail, j.y_thumbnail)
            elif seg.marker == COM:
                logger.debug("    comment: %r", seg.payload.decode("latin-1"))
        except HeaderDecodeError as e:
            logger.warning("could not decode %s at offset %d: %s", seg.description, seg.offset, e)

    return f


def summarize_file(data: BytesLike) -> Dict[str, int]:
    """
    Segment counts per description, plus totals:
    'segments', 'bytes' (bytes actually covered by segments) and 'scan_bytes'.
    A segment whose declared length runs past the end only counts what is there.
    """
    counts: Counter = Counter()
    total = 0
    scan_bytes = 0
    n = 0
    for seg in iter_segments(data):
        n += 1
        counts[seg.description] += 1
        total += len(seg.raw)
        if seg.category == MarkerCategory.SCAN:
            scan_bytes += len(seg.raw)
    out: Dict[str, int] = dict(counts)
    out.update(segments=n, bytes=total, scan_bytes=scan_bytes)
    return out

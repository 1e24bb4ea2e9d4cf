"""
Datamoshing: corrupt a JPEG's quantization tables and/or scan data while
keeping its segment structure, so that decoders still open it.
"""
from __future__ import annotations

import logging
import random
from typing import Callable, List, Optional, Tuple

from .binary.codecs.markers import DQT, SOS, APP1, APP15
from .binary.codecs.scan_header import scan_data_offset
from .binary.reader import BytesLike, iter_segments, _load_bytes
from .binary.writer import join_segments
from .corrupt.flipbits import RandomSource, flip_bits
from .models.settings import MoshSettings

logger = logging.getLogger(__name__)

Validator = Callable[[bytes], bool]

# ff, marker, 2-byte length
DQT_HEADER = 4
QUANT_TABLES = 4
QUANT_ENTRIES = 64


class ValidationExhausted(ValueError):
    def __init__(self, tries: int):
        super().__init__(
            f"Didn't get valid data after {tries} tries, you're probably asking for too much corruption."
        )
        self.tries = tries


def quant_table_mask(tables: int = QUANT_TABLES, entries: int = QUANT_ENTRIES) -> List[int]:
    """
    Offsets (within a DQT segment) of the table values themselves,
    skipping each table's id/precision byte.
    Assumes 8-bit tables; 16-bit precision tables are not masked correctly.
    """
    mask: List[int] = []
    i = DQT_HEADER
    for _ in range(tables):
        i += 1  # Pq/Tq byte
        mask.extend(range(i, i + entries))
        i += entries
    return mask


def _strip(marker: int) -> bool:
    # APP1..APP15 (Exif, XMP, ICC, Photoshop, Adobe...) are dropped; APP0 stays
    return APP1 <= marker <= APP15


def _mosh_once(
    raw: bytes,
    typ: int,
    qt: Tuple[int, int],
    im: Tuple[int, int],
    rng: Optional[RandomSource],
) -> bytes:
    out: List[bytes | bytearray] = []
    for seg in iter_segments(raw):
        if seg.marker == DQT:
            if typ & 0x01:
                out.append(flip_bits(bytearray(seg.raw), qt[0], qt[1], skip=DQT_HEADER, mask=quant_table_mask(), rng=rng))
            else:
                out.append(seg.raw)
        elif seg.marker == SOS:
            if typ & 0x02:
                out.append(flip_bits(bytearray(seg.raw), im[0], im[1], skip=scan_data_offset(seg.raw), rng=rng))
            else:
                out.append(seg.raw)
        elif _strip(seg.marker):
            logger.debug("stripping %s (%d bytes)", seg.description, seg.size)
        else:
            out.append(seg.raw)
    return join_segments(out)


def mosh_jpeg_data(
    data: BytesLike,
    typ: int = 3,
    qt: Tuple[int, int] = (2, 1),
    im: Tuple[int, int] = (15, 1),
    validate: bool = False,
    max_tries: int = 10,
    *,
    validator: Optional[Validator] = None,
    rng: Optional[RandomSource] = None,
) -> bytes:
    """
    Take a JPEG file's bytes, return corrupted JPEG bytes that hopefully still display.

    typ: what to corrupt; typ&1 the quantization tables according to qt,
         typ&2 the image data after the SOS according to im.
    qt, im: (howmany, bits) pairs, see flip_bits.
    validate: keep generating until the validator (Pillow by default) accepts the
         result, at most max_tries times; raises ValidationExhausted after that.
         If False, flips some bits and hands back the result.
    rng: random source for the bit flips (e.g. a seeded random.Random).
    """
    if max_tries < 1:
        raise ValueError(f"max_tries must be >= 1 (got {max_tries})")
    if validate and validator is None:
        from .validate import can_decode
        validator = can_decode

    raw = _load_bytes(data)
    tries = max_tries
    while tries > 0:
        tries -= 1
        candidate = _mosh_once(raw, typ, qt, im, rng)
        if not validate:
            return candidate

        try:
            ok = validator(candidate)
        except Exception as e:  # any decoder failure counts as a rejection
            logger.debug("validator raised %s: %s", type(e).__name__, e)
            ok = False
        if ok:
            logger.debug("accepted after %d tries", max_tries - tries)
            return candidate
        logger.debug("candidate did not decode, %d tries left", tries)

    raise ValidationExhausted(max_tries)


def mosh_with_settings(
    data: BytesLike,
    settings: MoshSettings,
    *,
    validator: Optional[Validator] = None,
    rng: Optional[RandomSource] = None,
) -> bytes:
    if rng is None and settings.seed is not None:
        rng = random.Random(settings.seed)
    return mosh_jpeg_data(
        data,
        typ=settings.typ,
        qt=settings.qt,
        im=settings.im,
        validate=settings.validate_output,
        max_tries=settings.max_tries,
        validator=validator,
        rng=rng,
    )

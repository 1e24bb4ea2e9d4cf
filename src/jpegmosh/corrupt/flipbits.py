from __future__ import annotations

import logging
import random
from typing import Iterable, Optional, Protocol, Sequence

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def choice(self, seq: Sequence[int]) -> int: ...
    def randrange(self, stop: int) -> int: ...


def candidate_positions(length: int, skip: int = 0, mask: Optional[Iterable[int]] = None) -> Sequence[int]:
    """
    Byte positions flip_bits may touch.
    With a mask, only mask entries strictly between skip and length; the mask
    overrules skip as a plain prefix cut. Without one, skip..length-1.
    """
    if mask is not None:
        return [i for i in mask if skip < i < length]
    return range(max(skip, 0), length)


def flip_bits(
    data: bytearray,
    howmany: int = 10,
    bits: int = 2,
    skip: int = 0,
    mask: Optional[Iterable[int]] = None,
    rng: Optional[RandomSource] = None,
) -> bytearray:
    """
    Corrupt data in place and return it.

    Picks a byte position (uniformly, from the candidates) and flips a random
    bit in it `bits` times, and repeats that `howmany` times.
    Both can pick the same positions and end up not changing the data at all.

    Length never changes. With no candidate positions the data is left alone.
    """
    if howmany < 0 or bits < 0:
        raise ValueError(f"howmany and bits must be >= 0 (got {howmany}, {bits})")
    if rng is None:
        rng = random
    positions = candidate_positions(len(data), skip, mask)
    if not positions:
        logger.debug("nothing to corrupt (length %d, skip %d)", len(data), skip)
        return data

    for _ in range(howmany):
        target = rng.choice(positions)
        for _ in range(bits):
            data[target] ^= 1 << rng.randrange(8)
    return data

from __future__ import annotations
from pydantic import BaseModel, Field, field_validator
from typing import Optional, Tuple

class MoshSettings(BaseModel):
    """
    What to corrupt and how much.

    typ is a bitmask: bit 0 corrupts the quantization tables according to qt,
    bit 1 corrupts the image data after the SOS according to im.
    qt and im are (how many positions, how many bits per position) pairs.

    Eyeballed values that give useful results:
      qt: 1,1 a little / 2,2 a little more / 4,2 more / 6,2 a bunch / 12,4 a lot
      im: 3,1 a little / 8,2 a little more / 30,2 more / 80,2 a bunch / 140,3 a lot
    Keep the im bit count low; it is easy to make decoders give up on the rest of the scan.
    """
    typ: int = Field(3, ge=0, le=3)
    qt: Tuple[int, int] = (2, 1)
    im: Tuple[int, int] = (15, 1)
    validate_output: bool = False
    max_tries: int = Field(10, ge=1)
    seed: Optional[int] = None

    @field_validator("qt", "im")
    @classmethod
    def _non_negative(cls, v: Tuple[int, int]) -> Tuple[int, int]:
        if v[0] < 0 or v[1] < 0:
            raise ValueError("corruption amounts must be >= 0")
        return v

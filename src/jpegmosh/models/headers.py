from __future__ import annotations
from pydantic import BaseModel, Field
from typing import List
from .common import DensityUnits

class FrameComponent(BaseModel):
    id: int = Field(..., ge=0, le=255)
    channel: str
    h_sampling: int = Field(..., ge=0, le=15)
    v_sampling: int = Field(..., ge=0, le=15)
    quant_table: int = Field(..., ge=0, le=255)

class FrameHeader(BaseModel):
    marker: int
    precision: int
    height: int = Field(..., ge=0)
    width: int = Field(..., ge=0)
    components: List[FrameComponent] = Field(default_factory=list)

class JfifHeader(BaseModel):
    version: str
    units: DensityUnits | int
    x_density: int = Field(..., ge=0)
    y_density: int = Field(..., ge=0)
    x_thumbnail: int = Field(..., ge=0)
    y_thumbnail: int = Field(..., ge=0)

class ScanComponent(BaseModel):
    id: int = Field(..., ge=0, le=255)
    channel: str
    dc_table: int = Field(..., ge=0, le=15)
    ac_table: int = Field(..., ge=0, le=15)

class ScanHeader(BaseModel):
    header_length: int = Field(..., ge=0)
    components: List[ScanComponent] = Field(default_factory=list)

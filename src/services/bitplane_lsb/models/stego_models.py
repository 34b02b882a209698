from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field


class RGBChannel(str, Enum):
    RED = "R"
    GREEN = "G"
    BLUE = "B"


class CursorPositionModel(BaseModel):
    row: int
    col: int
    channel: RGBChannel
    plane_index: int = Field(description="Wraparounds completed; 8 means every plane was used")


class PlaneCapacity(BaseModel):
    planes: int = Field(ge=1, le=8, description="Planes 0..planes-1 in use")
    bits: int
    max_message_bytes: int


class StegoCapacityResult(BaseModel):
    width: int
    height: int
    bits_per_plane: int
    capacity_bits: int
    max_message_bytes: int
    per_plane: List[PlaneCapacity] = Field(default_factory=list)


class StegoHideResult(BaseModel):
    output_path: Optional[Path] = None
    message_length: int
    used_capacity_bits: int
    capacity_bits: int
    wraparounds_used: int = Field(description="Bit planes touched by the frame")
    final_position: CursorPositionModel


class StegoRevealResult(BaseModel):
    message: bytes
    message_length: int
    wraparounds_used: int

    @property
    def text(self) -> str:
        return self.message.decode("utf-8", errors="replace")


class BitPlaneVisualizerResult(BaseModel):
    output_images: List[Path]
    channel: str
    bit_plane: int

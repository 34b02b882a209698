"""
Channel cursor: walks every color channel of every pixel, one bit at a time

Order is red, green, blue within a pixel, then left to right along a row,
then top to bottom. After the blue channel of the bottom-right pixel the
cursor wraps back to the top-left red channel one bit plane higher, so a
message too large for the LSBs continues in the 2nd least significant bits,
and so on up to the most significant bit.
"""

from enum import IntEnum
from typing import NamedTuple

from .exceptions import PlaneIndexError
from .pixel_grid import PixelGrid

NUM_BIT_PLANES = 8


class Channel(IntEnum):
    RED = 0
    GREEN = 1
    BLUE = 2


class CursorPosition(NamedTuple):
    row: int
    col: int
    channel: Channel
    plane_index: int


def _check_plane(plane_index: int) -> None:
    if not 0 <= plane_index < NUM_BIT_PLANES:
        raise PlaneIndexError(f"Bit plane must be between 0 and 7, got {plane_index}")


def write_mask(plane_index: int) -> int:
    """Every bit set except ``plane_index``. Clears the target bit before writing."""
    _check_plane(plane_index)
    return 0xFF ^ (1 << plane_index)


def read_mask(plane_index: int) -> int:
    """Only ``plane_index`` set. Isolates the target bit when reading."""
    _check_plane(plane_index)
    return 1 << plane_index


class ChannelCursor:
    """
    Index-based cursor over a borrowed PixelGrid

    Starts at the red channel of pixel (0, 0) in plane 0. ``advance`` must be
    called exactly once per bit written or read.
    """

    write_mask = staticmethod(write_mask)
    read_mask = staticmethod(read_mask)

    def __init__(self, grid: PixelGrid):
        if grid.width == 0 or grid.height == 0:
            raise ValueError("Cannot traverse an empty pixel grid")
        self._grid = grid
        self._row = 0
        self._col = 0
        self._channel = Channel.RED
        self._plane_index = 0

    @property
    def row(self) -> int:
        return self._row

    @property
    def col(self) -> int:
        return self._col

    @property
    def channel(self) -> Channel:
        return self._channel

    @property
    def plane_index(self) -> int:
        return self._plane_index

    @property
    def exhausted(self) -> bool:
        """True once every channel has been visited in all eight planes."""
        return self._plane_index >= NUM_BIT_PLANES

    def position(self) -> CursorPosition:
        return CursorPosition(self._row, self._col, self._channel, self._plane_index)

    def current_value(self) -> int:
        """Full 8-bit value of the addressed channel."""
        _check_plane(self._plane_index)
        return self._grid[self._row, self._col, self._channel]

    def set_value(self, value: int) -> None:
        """
        Overwrite the addressed channel. The caller keeps every bit except
        the one at ``plane_index`` intact.
        """
        _check_plane(self._plane_index)
        self._grid[self._row, self._col, self._channel] = value

    def advance(self) -> None:
        if self._channel is not Channel.BLUE:
            self._channel = Channel(self._channel + 1)
            return

        self._channel = Channel.RED
        if self._col < self._grid.width - 1:
            self._col += 1
        elif self._row < self._grid.height - 1:
            self._row += 1
            self._col = 0
        else:
            # End of raster: wrap to the top-left pixel, next plane up
            self._row = 0
            self._col = 0
            self._plane_index += 1

import numpy as np
import pytest

from src.services.bitplane_lsb.core.cursor import (
    Channel,
    ChannelCursor,
    CursorPosition,
    read_mask,
    write_mask,
)
from src.services.bitplane_lsb.core.exceptions import PlaneIndexError
from src.services.bitplane_lsb.core.pixel_grid import PixelGrid


def test_starts_at_red_of_first_pixel(make_grid):
    cursor = ChannelCursor(make_grid(3, 2))
    assert cursor.position() == CursorPosition(0, 0, Channel.RED, 0)
    assert not cursor.exhausted


def test_traversal_order_channels_then_columns_then_rows(make_grid):
    cursor = ChannelCursor(make_grid(2, 2))
    seen = []
    for _ in range(12):
        seen.append(cursor.position()[:3])
        cursor.advance()

    expected = [
        (row, col, channel)
        for row in range(2)
        for col in range(2)
        for channel in (Channel.RED, Channel.GREEN, Channel.BLUE)
    ]
    assert seen == expected


@pytest.mark.parametrize("width,height", [(1, 1), (4, 4), (5, 3), (1, 7)])
def test_wraparound_after_full_raster(make_grid, width, height):
    cursor = ChannelCursor(make_grid(width, height))
    for plane in range(1, 4):
        for _ in range(3 * width * height):
            cursor.advance()
        assert cursor.position() == CursorPosition(0, 0, Channel.RED, plane)


def test_identical_grids_give_identical_sequences(make_grid):
    first = ChannelCursor(make_grid(3, 5, seed=1))
    second = ChannelCursor(make_grid(3, 5, seed=1))
    for _ in range(200):
        assert first.position() == second.position()
        assert first.current_value() == second.current_value()
        first.advance()
        second.advance()


def test_current_value_reads_whole_channel():
    pixels = np.zeros((1, 2, 3), dtype=np.uint8)
    pixels[0, 1] = (10, 20, 30)
    cursor = ChannelCursor(PixelGrid(pixels))
    for _ in range(3):
        cursor.advance()
    values = []
    for _ in range(3):
        values.append(cursor.current_value())
        cursor.advance()
    assert values == [10, 20, 30]


def test_set_value_writes_addressed_channel():
    grid = PixelGrid(np.zeros((2, 2, 3), dtype=np.uint8))
    cursor = ChannelCursor(grid)
    cursor.advance()
    cursor.set_value(0xAB)
    assert grid[0, 0, Channel.GREEN] == 0xAB
    assert grid[0, 0, Channel.RED] == 0
    assert grid[0, 0, Channel.BLUE] == 0


@pytest.mark.parametrize("plane", range(8))
def test_masks_partition_the_byte(plane):
    assert write_mask(plane) & read_mask(plane) == 0
    assert write_mask(plane) | read_mask(plane) == 0xFF
    assert read_mask(plane) == 1 << plane


def test_mask_values():
    assert write_mask(0) == 0b11111110
    assert write_mask(7) == 0b01111111
    assert ChannelCursor.read_mask(3) == 0b00001000


@pytest.mark.parametrize("plane", [-1, 8, 42])
def test_masks_reject_planes_outside_byte(plane):
    with pytest.raises(PlaneIndexError):
        write_mask(plane)
    with pytest.raises(PlaneIndexError):
        read_mask(plane)


def test_exhausted_after_all_planes(make_grid):
    cursor = ChannelCursor(make_grid(1, 1))
    for _ in range(24):
        cursor.current_value()
        cursor.advance()
    assert cursor.exhausted
    assert cursor.plane_index == 8
    with pytest.raises(PlaneIndexError):
        cursor.current_value()
    with pytest.raises(PlaneIndexError):
        cursor.set_value(0)


def test_empty_grid_rejected():
    with pytest.raises(ValueError):
        ChannelCursor(PixelGrid(np.zeros((0, 0, 3), dtype=np.uint8)))

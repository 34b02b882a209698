import random

import numpy as np
import pytest

from src.services.bitplane_lsb.core.cursor import Channel, CursorPosition
from src.services.bitplane_lsb.core.exceptions import CapacityError, FrameLengthError
from src.services.bitplane_lsb.core.frame_codec import (
    MAX_MESSAGE_LENGTH,
    available_bits,
    decode_frame,
    encode_frame,
    max_message_length,
    planes_required,
    required_bits,
    validate_capacity,
)
from src.services.bitplane_lsb.core.pixel_grid import PixelGrid


def test_hi_in_four_by_four(make_grid):
    grid = make_grid(4, 4)
    original = grid.copy()

    cursor = encode_frame(grid, b"hi")

    assert decode_frame(grid) == b"hi"
    # 32 bits fit in plane 0, so only LSBs may differ
    assert np.array_equal(grid.pixels & 0xFE, original.pixels & 0xFE)
    # channels past the 32nd are untouched
    assert np.array_equal(grid.pixels.reshape(-1)[32:], original.pixels.reshape(-1)[32:])
    assert cursor.position() == CursorPosition(2, 2, Channel.BLUE, 0)


def test_bit_layout_is_msb_first():
    grid = PixelGrid(np.zeros((4, 4, 3), dtype=np.uint8))
    encode_frame(grid, b"\x80")

    flat = grid.pixels.reshape(-1)
    ones = [i for i, value in enumerate(flat) if value]
    # length 1 ends at bit 15, the byte's top bit is bit 16
    assert ones == [15, 16]
    assert all(flat[i] == 1 for i in ones)


def test_one_pixel_image_at_exact_capacity(make_grid):
    grid = make_grid(1, 1)
    cursor = encode_frame(grid, b"Z")
    assert cursor.exhausted
    assert decode_frame(grid) == b"Z"


@pytest.mark.parametrize("message,needed", [(b"ab", 32), (b"abc", 40)])
def test_one_pixel_image_rejects_longer_messages(make_grid, message, needed):
    grid = make_grid(1, 1)
    original = grid.copy()
    with pytest.raises(CapacityError) as excinfo:
        encode_frame(grid, message)
    assert excinfo.value.required_bits == needed
    assert excinfo.value.available_bits == 24
    assert grid == original


def test_message_longer_than_length_field_rejected(make_grid):
    grid = make_grid(200, 200)
    original = grid.copy()
    with pytest.raises(CapacityError):
        encode_frame(grid, b"x" * (MAX_MESSAGE_LENGTH + 1))
    assert grid == original


def test_length_limit_applies_regardless_of_image_size():
    with pytest.raises(CapacityError):
        validate_capacity(65536, 10000, 10000)


def test_empty_message_round_trip(make_grid):
    grid = make_grid(3, 3)
    encode_frame(grid, b"")
    assert decode_frame(grid) == b""


def test_wraparound_into_higher_planes(make_grid):
    grid = make_grid(2, 2)
    original = grid.copy()

    cursor = encode_frame(grid, b"abc")

    # 40 bits over 12 channels: three full planes plus four bits of the fourth
    assert cursor.position() == CursorPosition(0, 1, Channel.GREEN, 3)
    assert decode_frame(grid) == b"abc"
    assert np.array_equal(grid.pixels & 0xF0, original.pixels & 0xF0)


@pytest.mark.parametrize("width,height,length", [(1, 1, 0), (2, 1, 4), (3, 2, 16), (8, 8, 150), (5, 7, 100)])
def test_round_trip_random_messages(make_grid, width, height, length):
    rng = random.Random(length)
    message = bytes(rng.randrange(256) for _ in range(length))
    grid = make_grid(width, height, seed=length)
    encode_frame(grid, message)
    assert decode_frame(grid) == message


def test_maximum_length_message_round_trip(make_grid):
    message = bytes(range(256)) * 255 + bytes(range(255))
    assert len(message) == MAX_MESSAGE_LENGTH
    grid = make_grid(150, 150)
    encode_frame(grid, message)
    assert decode_frame(grid) == message


def test_decode_does_not_mutate(make_grid):
    grid = make_grid(4, 4)
    encode_frame(grid, b"hi")
    snapshot = grid.copy()
    decode_frame(grid)
    assert grid == snapshot


def test_decode_rejects_impossible_length():
    grid = PixelGrid(np.full((1, 1, 3), 255, dtype=np.uint8))
    with pytest.raises(FrameLengthError) as excinfo:
        decode_frame(grid)
    assert excinfo.value.message_length == 0xFFFF
    assert isinstance(excinfo.value, CapacityError)


def test_decode_of_blank_image_is_empty_message():
    grid = PixelGrid(np.zeros((4, 4, 3), dtype=np.uint8))
    assert decode_frame(grid) == b""


def test_capacity_arithmetic():
    assert required_bits(0) == 16
    assert required_bits(2) == 32
    assert available_bits(4, 4) == 384
    assert available_bits(1, 1) == 24
    assert planes_required(2, 4, 4) == 1
    assert planes_required(1, 1, 1) == 8
    assert planes_required(3, 2, 2) == 4
    assert max_message_length(1, 1) == 1
    assert max_message_length(1000, 1000) == MAX_MESSAGE_LENGTH
    assert max_message_length(0, 5) == 0


def test_validate_capacity_boundaries():
    validate_capacity(1, 1, 1)
    validate_capacity(MAX_MESSAGE_LENGTH, 148, 148)
    with pytest.raises(CapacityError):
        validate_capacity(2, 1, 1)
    with pytest.raises(CapacityError):
        validate_capacity(0, 0, 0)
    with pytest.raises(ValueError):
        validate_capacity(-1, 4, 4)

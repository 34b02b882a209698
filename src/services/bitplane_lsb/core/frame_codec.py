"""
Length-prefixed frame codec for bit-plane LSB embedding

Frame layout, in cursor order:

    16-bit message length in bytes, most significant bit first
    message bytes, each most significant bit first

Bits land in the least significant plane of every channel first and move one
plane up each time the cursor wraps around the image. There is no magic
marker or checksum: decoding an image that never carried a frame returns
garbage (or fails the length check).
"""

import logging
import math

from .cursor import NUM_BIT_PLANES, ChannelCursor, read_mask, write_mask
from .exceptions import CapacityError, FrameLengthError
from .pixel_grid import PixelGrid

logger = logging.getLogger(__name__)

BITS_PER_BYTE = 8
LENGTH_FIELD_BITS = 16
MAX_MESSAGE_LENGTH = (1 << LENGTH_FIELD_BITS) - 1
NUM_CHANNELS = 3


def required_bits(message_length: int) -> int:
    return LENGTH_FIELD_BITS + BITS_PER_BYTE * message_length


def available_bits(width: int, height: int) -> int:
    return NUM_CHANNELS * width * height * NUM_BIT_PLANES


def planes_required(message_length: int, width: int, height: int) -> int:
    """Number of wraparounds a frame of ``message_length`` bytes touches."""
    bits_per_plane = NUM_CHANNELS * width * height
    if bits_per_plane == 0:
        raise CapacityError("Image has no pixels", message_length, required_bits(message_length), 0)
    return math.ceil(required_bits(message_length) / bits_per_plane)


def max_message_length(width: int, height: int) -> int:
    """Longest message the image can carry across all eight planes."""
    room = (available_bits(width, height) - LENGTH_FIELD_BITS) // BITS_PER_BYTE
    return max(0, min(room, MAX_MESSAGE_LENGTH))


def validate_capacity(message_length: int, width: int, height: int) -> None:
    """
    Check that a frame for ``message_length`` bytes fits in a width x height image

    Raises:
        CapacityError: If the message is too long for the length field or
            needs more bits than the image's eight planes provide
    """
    needed = required_bits(message_length)
    available = available_bits(width, height)
    if message_length < 0:
        raise ValueError(f"Message length cannot be negative: {message_length}")
    if message_length > MAX_MESSAGE_LENGTH:
        raise CapacityError(
            f"Message length exceeds maximum of {MAX_MESSAGE_LENGTH} bytes: {message_length}",
            message_length, needed, available,
        )
    if needed > available:
        raise CapacityError(
            f"Image is not large enough to hold message: {needed} bits needed > {available} bits available",
            message_length, needed, available,
        )


def _write_bit(cursor: ChannelCursor, bit: int) -> None:
    plane = cursor.plane_index
    cursor.set_value((cursor.current_value() & write_mask(plane)) | (bit << plane))
    cursor.advance()


def _read_bit(cursor: ChannelCursor) -> int:
    plane = cursor.plane_index
    bit = (cursor.current_value() & read_mask(plane)) >> plane
    cursor.advance()
    return bit


def encode_frame(grid: PixelGrid, message: bytes) -> ChannelCursor:
    """
    Embed ``message`` into ``grid`` in place

    Capacity is validated before the first pixel is touched, so a failed
    call leaves the grid unchanged.

    Args:
        grid: Pixel grid to write into
        message: Bytes to hide (0 to 65535 of them)

    Returns:
        The cursor, positioned just past the last bit written

    Raises:
        CapacityError: If the framed message does not fit
    """
    length = len(message)
    validate_capacity(length, grid.width, grid.height)
    logger.debug(
        "Encoding %d-byte frame into %dx%d grid across %d plane(s)",
        length, grid.width, grid.height, planes_required(length, grid.width, grid.height),
    )

    cursor = ChannelCursor(grid)
    for shift in range(LENGTH_FIELD_BITS - 1, -1, -1):
        _write_bit(cursor, (length >> shift) & 1)
    for byte in message:
        for shift in range(BITS_PER_BYTE - 1, -1, -1):
            _write_bit(cursor, (byte >> shift) & 1)
    return cursor


def decode_length(cursor: ChannelCursor) -> int:
    """Read the 16-bit length field, most significant bit first."""
    length = 0
    for i in range(LENGTH_FIELD_BITS):
        length |= _read_bit(cursor) << (LENGTH_FIELD_BITS - 1 - i)
    return length


def decode_frame(grid: PixelGrid) -> bytes:
    """
    Recover the message embedded in ``grid``

    The grid is only read, never modified.

    Raises:
        CapacityError: If the grid cannot even hold a length field
        FrameLengthError: If the decoded length needs more bits than the
            grid has, which means the image is corrupt or was never encoded
    """
    validate_capacity(0, grid.width, grid.height)

    cursor = ChannelCursor(grid)
    length = decode_length(cursor)
    try:
        validate_capacity(length, grid.width, grid.height)
    except CapacityError as exc:
        raise FrameLengthError(
            f"Declared message length {length} does not fit in a {grid.width}x{grid.height} image; "
            "the image is corrupt or carries no message",
            exc.message_length, exc.required_bits, exc.available_bits,
        ) from exc
    logger.debug("Decoding %d-byte frame from %dx%d grid", length, grid.width, grid.height)

    message = bytearray()
    for _ in range(length):
        byte = 0
        for j in range(BITS_PER_BYTE):
            byte |= _read_bit(cursor) << (BITS_PER_BYTE - 1 - j)
        message.append(byte)
    return bytes(message)

"""
Error types raised by the bit-plane LSB codec
"""

from typing import Optional


class StegoError(ValueError):
    """Base class for recoverable steganography errors."""


class CapacityError(StegoError):
    """
    The framed message cannot fit in the image, or the message is longer
    than the 16-bit length field can describe.
    """

    def __init__(
        self,
        message: str,
        message_length: Optional[int] = None,
        required_bits: Optional[int] = None,
        available_bits: Optional[int] = None,
    ):
        super().__init__(message)
        self.message_length = message_length
        self.required_bits = required_bits
        self.available_bits = available_bits


class FrameLengthError(CapacityError):
    """The decoded length field describes a frame the image cannot hold."""


class PlaneIndexError(IndexError):
    """A bit plane outside 0..7 was addressed. Indicates a codec bug."""

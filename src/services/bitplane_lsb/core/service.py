"""
Main service class for bit-plane LSB steganography
"""

import logging
from pathlib import Path
from typing import Tuple, Union

from PIL import Image

from ..models.stego_models import (
    BitPlaneVisualizerResult,
    CursorPositionModel,
    PlaneCapacity,
    RGBChannel,
    StegoCapacityResult,
    StegoHideResult,
    StegoRevealResult,
)
from ..utils.validation import validate_cover_image, validate_output_path
from .cursor import NUM_BIT_PLANES, ChannelCursor
from .exceptions import CapacityError
from .frame_codec import (
    BITS_PER_BYTE,
    LENGTH_FIELD_BITS,
    MAX_MESSAGE_LENGTH,
    NUM_CHANNELS,
    available_bits,
    decode_frame,
    encode_frame,
    max_message_length,
    planes_required,
    required_bits,
    validate_capacity,
)
from .pixel_grid import PixelGrid
from .visualization import generate_all_bit_planes, generate_single_bit_plane

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _position_model(cursor: ChannelCursor) -> CursorPositionModel:
    pos = cursor.position()
    return CursorPositionModel(
        row=pos.row,
        col=pos.col,
        channel=list(RGBChannel)[pos.channel],
        plane_index=pos.plane_index,
    )


class LsbStegoService:
    """
    High-level interface over the frame codec

    File-based ``encode``/``decode`` for library and CLI callers, and
    in-memory ``hide_message``/``reveal_message`` for the HTTP layer.
    """

    def __init__(self, output_format: str = "BMP"):
        self.output_format = output_format

    def capacity(self, image: Image.Image) -> StegoCapacityResult:
        """
        Calculate how much message an image can carry

        Args:
            image: Input image

        Returns:
            StegoCapacityResult with overall and per-plane capacity
        """
        width, height = image.size
        bits_per_plane = NUM_CHANNELS * width * height

        per_plane = []
        for planes in range(1, NUM_BIT_PLANES + 1):
            bits = bits_per_plane * planes
            room = max(0, (bits - LENGTH_FIELD_BITS) // BITS_PER_BYTE)
            per_plane.append(PlaneCapacity(
                planes=planes,
                bits=bits,
                max_message_bytes=min(room, MAX_MESSAGE_LENGTH),
            ))

        return StegoCapacityResult(
            width=width,
            height=height,
            bits_per_plane=bits_per_plane,
            capacity_bits=available_bits(width, height),
            max_message_bytes=max_message_length(width, height),
            per_plane=per_plane,
        )

    def embed(self, grid: PixelGrid, message: bytes) -> StegoHideResult:
        """
        Embed ``message`` into ``grid`` in place

        Raises:
            CapacityError: If the message does not fit. The grid is untouched.
        """
        try:
            cursor = encode_frame(grid, message)
        except CapacityError as exc:
            logger.warning("Capacity check failed for %d-byte message: %s", len(message), exc)
            raise

        return StegoHideResult(
            message_length=len(message),
            used_capacity_bits=required_bits(len(message)),
            capacity_bits=available_bits(grid.width, grid.height),
            wraparounds_used=planes_required(len(message), grid.width, grid.height),
            final_position=_position_model(cursor),
        )

    def extract(self, grid: PixelGrid) -> StegoRevealResult:
        message = decode_frame(grid)
        return StegoRevealResult(
            message=message,
            message_length=len(message),
            wraparounds_used=planes_required(len(message), grid.width, grid.height),
        )

    def hide_message(self, cover: Image.Image, message: bytes) -> Tuple[Image.Image, StegoHideResult]:
        """
        Hide a message in a copy of ``cover``

        Args:
            cover: Cover image. It is not modified.
            message: Bytes to hide

        Returns:
            Tuple of (stego_image, result_metadata)

        Raises:
            CapacityError: If the message does not fit
        """
        validate_cover_image(cover)
        width, height = cover.size
        validate_capacity(len(message), width, height)

        grid = PixelGrid.from_image(cover)
        result = self.embed(grid, message)
        logger.info(
            "Hid %d-byte message in %dx%d image using %d plane(s)",
            len(message), width, height, result.wraparounds_used,
        )
        return grid.to_image(), result

    def reveal_message(self, stego_image: Image.Image) -> StegoRevealResult:
        """
        Recover the message hidden in ``stego_image``

        Raises:
            FrameLengthError: If the length field cannot be valid for this image
        """
        validate_cover_image(stego_image)
        result = self.extract(PixelGrid.from_image(stego_image))
        logger.info("Revealed %d-byte message", result.message_length)
        return result

    def encode(self, message: bytes, source_path: PathLike, dest_path: PathLike) -> StegoHideResult:
        """
        Hide ``message`` in the bitmap at ``source_path`` and write it to ``dest_path``

        Nothing is written when the capacity check fails.

        Raises:
            CapacityError: If the message does not fit in the source image
            ValueError: If ``dest_path`` names a lossy format
        """
        dest = Path(dest_path)
        validate_output_path(dest, self.output_format)
        logger.info("Encoding %d-byte message from %s into %s", len(message), source_path, dest)

        grid = PixelGrid.load(source_path)
        result = self.embed(grid, message)
        result.output_path = grid.save(dest, self.output_format)
        return result

    def decode(self, source_path: PathLike) -> StegoRevealResult:
        logger.info("Decoding message from %s", source_path)
        return self.extract(PixelGrid.load(source_path))

    def visualize_bit_planes(
        self,
        image: Image.Image,
        channel: str = "R",
        output_dir: Path = Path("./bit_planes")
    ) -> BitPlaneVisualizerResult:
        return generate_all_bit_planes(image, channel, output_dir)

    def visualize_single_bit_plane(
        self,
        image: Image.Image,
        bit_plane: int,
        channel: str = "R",
        output_dir: Path = Path("./bit_planes")
    ) -> BitPlaneVisualizerResult:
        return generate_single_bit_plane(image, bit_plane, channel, output_dir)

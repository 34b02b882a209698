"""
Pixel grid provider backed by Pillow and numpy

The codec only ever sees a PixelGrid: a mutable row-major grid of RGB
triples with fixed dimensions. Reading and writing the bitmap container is
left to Pillow.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple, Union

import numpy as np
from PIL import Image

from ..utils.image_utils import ensure_rgb_image
from ..utils.validation import validate_output_path

logger = logging.getLogger(__name__)


class PixelGrid:
    """
    Mutable grid of 8-bit RGB channel values, indexed as ``grid[row, col, channel]``
    """

    def __init__(self, pixels: np.ndarray):
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ValueError(f"Pixel array must have shape (height, width, 3), got {pixels.shape}")
        if pixels.dtype != np.uint8:
            raise ValueError(f"Pixel array must be uint8, got {pixels.dtype}")
        self._pixels = pixels

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelGrid":
        """
        Build a grid from a Pillow image. The pixels are copied, so the
        image itself is never modified through the grid.
        """
        rgb = ensure_rgb_image(image)
        return cls(np.array(rgb, dtype=np.uint8))

    @classmethod
    def load(cls, path: Union[str, Path]) -> "PixelGrid":
        logger.debug("Loading pixel grid from %s", path)
        with Image.open(path) as image:
            return cls.from_image(image)

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    def __getitem__(self, index: Tuple[int, int, int]) -> int:
        return int(self._pixels[index])

    def __setitem__(self, index: Tuple[int, int, int], value: int) -> None:
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Channel value must be between 0 and 255, got {value}")
        self._pixels[index] = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return np.array_equal(self._pixels, other._pixels)

    def copy(self) -> "PixelGrid":
        return PixelGrid(self._pixels.copy())

    def to_image(self) -> Image.Image:
        return Image.fromarray(self._pixels.copy())

    def save(self, path: Union[str, Path], default_format: str = "BMP") -> Path:
        """
        Write the grid to disk in a lossless format

        Args:
            path: Destination file. The format follows the extension.
            default_format: Format used when the path has no extension

        Returns:
            The path written

        Raises:
            ValueError: If the extension names a lossy format
        """
        out_path = Path(path)
        fmt = validate_output_path(out_path, default_format)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        self.to_image().save(out_path, format=fmt)
        logger.debug("Saved %dx%d pixel grid to %s as %s", self.width, self.height, out_path, fmt)
        return out_path

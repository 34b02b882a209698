"""
Bit plane visualization for inspecting which planes a frame touched
"""

import numpy as np
from PIL import Image
from pathlib import Path

from ..models.stego_models import BitPlaneVisualizerResult
from ..utils.validation import validate_bit_plane, validate_channel
from .pixel_grid import PixelGrid


def extract_bit_plane(grid: PixelGrid, channel_idx: int, bit_plane: int) -> Image.Image:
    """
    Extract a specific bit plane from the grid

    Args:
        grid: Pixel grid to inspect
        channel_idx: Channel index (0=R, 1=G, 2=B)
        bit_plane: Bit plane to extract (0-7, where 0 is LSB)

    Returns:
        Grayscale image, white where the bit is set
    """
    validate_bit_plane(bit_plane)
    channel = grid.pixels[:, :, channel_idx]
    bit_plane_data = ((channel & (1 << bit_plane)) > 0).astype(np.uint8) * 255
    return Image.fromarray(bit_plane_data)


def generate_all_bit_planes(
    image: Image.Image,
    channel: str,
    output_dir: Path
) -> BitPlaneVisualizerResult:
    """
    Generate visualizations for all bit planes of a specified channel

    Args:
        image: Input PIL Image
        channel: Color channel to visualize (R, G, or B)
        output_dir: Directory to save bit plane images

    Returns:
        BitPlaneVisualizerResult with output paths and metadata
    """
    channel_idx = validate_channel(channel)
    grid = PixelGrid.from_image(image)
    output_dir.mkdir(parents=True, exist_ok=True)

    output_paths = []
    for bit in range(8):
        out_path = output_dir / f"bit_plane_{channel}_{bit}.png"
        extract_bit_plane(grid, channel_idx, bit).save(out_path)
        output_paths.append(out_path)

    return BitPlaneVisualizerResult(
        output_images=output_paths,
        channel=channel,
        bit_plane=-1  # All bit planes
    )


def generate_single_bit_plane(
    image: Image.Image,
    bit_plane: int,
    channel: str,
    output_dir: Path
) -> BitPlaneVisualizerResult:
    validate_bit_plane(bit_plane)
    channel_idx = validate_channel(channel)
    output_dir.mkdir(parents=True, exist_ok=True)

    out_path = output_dir / f"bit_plane_{channel}_{bit_plane}.png"
    extract_bit_plane(PixelGrid.from_image(image), channel_idx, bit_plane).save(out_path)

    return BitPlaneVisualizerResult(
        output_images=[out_path],
        channel=channel,
        bit_plane=bit_plane
    )

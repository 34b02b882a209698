"""
Image utility functions for steganography operations
"""

import httpx
from io import BytesIO
from typing import Optional
from PIL import Image


def load_image_from_input(file: Optional[BytesIO] = None, url: Optional[str] = None) -> Image.Image:
    """
    Load an image from either a file object or URL

    Args:
        file: BytesIO object containing image data
        url: URL to fetch image from

    Returns:
        PIL Image object

    Raises:
        ValueError: If neither file nor url is provided
    """
    if file is not None:
        return Image.open(file)
    if url is not None:
        with httpx.Client(timeout=30) as client:
            resp = client.get(url)
            resp.raise_for_status()
            return Image.open(BytesIO(resp.content))
    raise ValueError("Provide file or url")


def ensure_rgb_image(image: Image.Image) -> Image.Image:
    """
    Drop alpha and palettes so every pixel is a plain RGB triple
    """
    if image.mode != "RGB":
        return image.convert("RGB")
    return image


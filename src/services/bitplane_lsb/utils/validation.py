"""
Validation utilities for steganography operations
"""

from pathlib import Path

from PIL import Image

# Extensions Pillow writes losslessly, mapped to its format names
LOSSLESS_FORMATS = {
    ".bmp": "BMP",
    ".dib": "BMP",
    ".png": "PNG",
    ".tif": "TIFF",
    ".tiff": "TIFF",
    ".ppm": "PPM",
}

LOSSY_EXTENSIONS = {".jpg", ".jpeg", ".jpe", ".jfif", ".webp", ".heic", ".avif"}

CHANNEL_NAMES = ("R", "G", "B")


def validate_output_path(path: Path, default_format: str = "BMP") -> str:
    """
    Pick the Pillow format for a stego output path

    Args:
        path: Destination path
        default_format: Format to use when the path has no extension

    Returns:
        Pillow format name

    Raises:
        ValueError: If the extension names a lossy or unknown format
    """
    suffix = path.suffix.lower()
    if not suffix:
        return validate_output_format(default_format)
    if suffix in LOSSY_EXTENSIONS:
        raise ValueError(f"Lossy output format {suffix} would destroy the embedded message; use BMP or PNG")
    if suffix not in LOSSLESS_FORMATS:
        raise ValueError(f"Unsupported output format: {suffix}")
    return LOSSLESS_FORMATS[suffix]


def validate_output_format(fmt: str) -> str:
    """
    Normalise a format name such as "bmp" or "PNG" to Pillow's spelling

    Raises:
        ValueError: If the format is not a supported lossless format
    """
    key = "." + fmt.lower().lstrip(".")
    if key not in LOSSLESS_FORMATS:
        raise ValueError(f"Output format must be one of BMP, PNG, TIFF, PPM; got {fmt!r}")
    return LOSSLESS_FORMATS[key]


def validate_channel(channel: str) -> int:
    """
    Validate a channel name and return its index (R=0, G=1, B=2)

    Raises:
        ValueError: If the channel is not R, G, or B
    """
    if channel not in CHANNEL_NAMES:
        raise ValueError("Channel must be R, G, or B")
    return CHANNEL_NAMES.index(channel)


def validate_bit_plane(bit_plane: int) -> None:
    if not isinstance(bit_plane, int) or bit_plane < 0 or bit_plane > 7:
        raise ValueError("Bit plane must be between 0 and 7")


def validate_cover_image(image: Image.Image) -> None:
    """
    Reject images with no pixels

    Raises:
        ValueError: If either dimension is zero
    """
    width, height = image.size
    if width == 0 or height == 0:
        raise ValueError(f"Cover image has no pixels: {width}x{height}")


def validate_output_filename(filename: str) -> str:
    """
    Reduce a client-supplied output filename to a bare file name

    Raises:
        ValueError: If nothing usable is left, e.g. "", "." or ".."
    """
    name = Path(filename).name
    if name in ("", ".", ".."):
        raise ValueError(f"Invalid output filename: {filename!r}")
    return name

"""
API routes for the bit-plane LSB service
"""

import logging
import traceback
import uuid
from io import BytesIO
from pathlib import Path
from typing import Optional

import httpx
from fastapi import APIRouter, File, Form, UploadFile
from fastapi.responses import JSONResponse
from PIL import Image, UnidentifiedImageError

from ..core.exceptions import CapacityError, FrameLengthError
from ..core.service import LsbStegoService
from ..utils.image_utils import load_image_from_input
from ..utils.validation import validate_output_filename, validate_output_format, validate_output_path
from .responses import StegoAPIResult
from src.utility.constants_manager import ConstantsManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/lsb", tags=["lsb"])

constants = ConstantsManager()


def get_service() -> LsbStegoService:
    return LsbStegoService(output_format=validate_output_format(constants.get_output_format()))


def send_response(
    status_code: int,
    message: str,
    path: Optional[str] = None,
    details: Optional[dict] = None
) -> JSONResponse:
    """
    Helper function to send consistent API responses
    """
    return JSONResponse(
        status_code=status_code,
        content=StegoAPIResult(
            success=status_code < 400,
            message=message,
            path=path,
            details=details
        ).model_dump()
    )


async def read_image(file: Optional[UploadFile], url: Optional[str]) -> Image.Image:
    """
    Load the uploaded image, or fetch it from ``url`` when no file was sent

    Raises:
        ValueError: If neither is given or the data is not an image
    """
    try:
        data = BytesIO(await file.read()) if file is not None else None
        image = load_image_from_input(data, url)
        image.load()
    except UnidentifiedImageError as exc:
        raise ValueError("Could not read image") from exc
    except httpx.HTTPError as exc:
        raise ValueError(f"Could not fetch image from {url}: {exc}") from exc
    return image


@router.post("/capacity", response_model=StegoAPIResult)
async def check_capacity(
    file: Optional[UploadFile] = File(None),
    url: Optional[str] = Form(None),
):
    """
    Report how many message bytes an image can carry, overall and per bit plane
    """
    try:
        img = await read_image(file, url)
        result = get_service().capacity(img)
        return send_response(
            200,
            f"Image can hold up to {result.max_message_bytes} message bytes",
            None,
            result.model_dump(),
        )
    except ValueError as e:
        return send_response(400, str(e))
    except Exception as e:
        logger.error(f"Unexpected error in capacity: {str(e)}\n{traceback.format_exc()}")
        return send_response(500, str(e))


@router.post("/encode", response_model=StegoAPIResult)
async def encode_message(
    file: Optional[UploadFile] = File(None),
    url: Optional[str] = Form(None),
    message: str = Form(""),
    output_filename: Optional[str] = Form(None),
):
    """
    Hide a UTF-8 message in an image

    Args:
        file: Cover image
        url: Cover image URL, used when no file is uploaded
        message: Text to hide; empty is allowed
        output_filename: Optional output filename (BMP, PNG, TIFF or PPM)

    Returns:
        StegoAPIResult with the stego image path and embedding details
    """
    try:
        service = get_service()
        filename = validate_output_filename(output_filename) if output_filename is not None else f"stego_{uuid.uuid4().hex}.{service.output_format.lower()}"
        output_dir = Path(constants.get_output_dir())
        output_path = output_dir / filename
        fmt = validate_output_path(output_path, service.output_format)

        img = await read_image(file, url)
        stego_img, result = service.hide_message(img, message.encode("utf-8"))

        output_dir.mkdir(parents=True, exist_ok=True)
        stego_img.save(output_path, format=fmt)

        return send_response(
            200,
            f"Message hidden successfully using {result.wraparounds_used} bit plane(s)",
            str(output_path),
            {
                "message_length": result.message_length,
                "used_capacity_bits": result.used_capacity_bits,
                "capacity_bits": result.capacity_bits,
                "wraparounds_used": result.wraparounds_used,
            }
        )
    except CapacityError as e:
        return send_response(413, str(e), None, {
            "required_bits": e.required_bits,
            "available_bits": e.available_bits,
        })
    except ValueError as e:
        return send_response(400, str(e))
    except Exception as e:
        logger.error(f"Unexpected error in encode: {str(e)}\n{traceback.format_exc()}")
        return send_response(500, str(e))


@router.post("/decode", response_model=StegoAPIResult)
async def decode_message(
    file: Optional[UploadFile] = File(None),
    url: Optional[str] = Form(None),
):
    """
    Recover a hidden message from an image

    The result is unverified: an image that never carried a message decodes
    to garbage.
    """
    try:
        img = await read_image(file, url)
        result = get_service().reveal_message(img)
        return send_response(
            200,
            f"Recovered {result.message_length}-byte message",
            None,
            {
                "text": result.text,
                "hex": result.message.hex(),
                "message_length": result.message_length,
                "wraparounds_used": result.wraparounds_used,
            }
        )
    except FrameLengthError as e:
        logger.warning(f"Length field rejected in decode: {str(e)}")
        return send_response(422, str(e))
    except ValueError as e:
        return send_response(400, str(e))
    except Exception as e:
        logger.error(f"Unexpected error in decode: {str(e)}\n{traceback.format_exc()}")
        return send_response(500, str(e))


@router.post("/visualize-bit-planes", response_model=StegoAPIResult)
async def visualize_bit_planes(
    file: Optional[UploadFile] = File(None),
    url: Optional[str] = Form(None),
    channel: str = Form("R"),
    bit_plane: Optional[int] = Form(None),
):
    """
    Render bit planes of one channel as black and white images

    Args:
        file: The image to visualize
        channel: Color channel to visualize (R, G, or B)
        bit_plane: Single plane to render (0-7); all eight when omitted
    """
    try:
        img = await read_image(file, url)
        output_dir = Path(constants.get_bit_planes_dir()) / uuid.uuid4().hex
        service = get_service()
        if bit_plane is not None:
            result = service.visualize_single_bit_plane(img, bit_plane, channel, output_dir)
        else:
            result = service.visualize_bit_planes(img, channel, output_dir)

        return send_response(
            200,
            f"Generated {len(result.output_images)} bit plane visualization(s) for channel {channel}",
            str(output_dir),
            {
                "output_images": [str(path) for path in result.output_images],
                "channel": result.channel,
                "bit_plane": result.bit_plane,
            }
        )
    except ValueError as e:
        return send_response(400, str(e))
    except Exception as e:
        logger.error(f"Unexpected error in visualize: {str(e)}\n{traceback.format_exc()}")
        return send_response(500, str(e))

"""Image loading using OpenCV, with EXIF orientation read through Pillow."""

import io
import logging
from pathlib import Path
from typing import Optional, Union

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from models.errors import DecodeError
from models.image_buffer import ImageBuffer

logger = logging.getLogger(__name__)

EXIF_ORIENTATION_TAG = 0x0112


def read_orientation(data: bytes) -> Optional[int]:
    """EXIF orientation (1-8) of encoded image bytes, if present."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            value = img.getexif().get(EXIF_ORIENTATION_TAG)
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError):
        return None
    return int(value) if value else None


def apply_orientation(image: np.ndarray, orientation: Optional[int]) -> np.ndarray:
    """Rotate/flip so the image displays upright."""
    if orientation == 2:
        return cv2.flip(image, 1)
    if orientation == 3:
        return cv2.rotate(image, cv2.ROTATE_180)
    if orientation == 4:
        return cv2.flip(image, 0)
    if orientation == 5:
        return cv2.flip(cv2.rotate(image, cv2.ROTATE_90_CLOCKWISE), 1)
    if orientation == 6:
        return cv2.rotate(image, cv2.ROTATE_90_CLOCKWISE)
    if orientation == 7:
        return cv2.flip(cv2.rotate(image, cv2.ROTATE_90_COUNTERCLOCKWISE), 1)
    if orientation == 8:
        return cv2.rotate(image, cv2.ROTATE_90_COUNTERCLOCKWISE)
    return image


def _bgr_to_rgb_order(image: np.ndarray) -> np.ndarray:
    if image.ndim == 3 and image.shape[2] == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
    if image.ndim == 3 and image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)
    return image


def decode_image(data: bytes) -> ImageBuffer:
    """Decode PNG/JPEG/WEBP/GIF/BMP/TIFF bytes into an RGBA8 buffer."""
    if not data:
        raise DecodeError("Empty input")

    img = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_UNCHANGED)
    if img is None:
        raise DecodeError("Failed to decode image: unsupported or corrupt data")

    img = apply_orientation(_bgr_to_rgb_order(img), read_orientation(data))
    try:
        buffer = ImageBuffer.from_array(img)
    except ValueError as e:
        raise DecodeError(f"Failed to decode image: {e}") from e

    logger.debug("Decoded %dx%d image", buffer.width, buffer.height)
    return buffer


def load_image(path: Union[str, Path]) -> ImageBuffer:
    """Load image file as RGBA uint8."""
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise DecodeError(f"Failed to read file {path}: {e}") from e
    return decode_image(data)

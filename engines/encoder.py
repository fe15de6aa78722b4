"""PNG encoding with physical-resolution (pHYs) metadata."""

import io
import logging
import os
import struct
import tempfile
from pathlib import Path
from typing import Tuple, Union

from PIL import Image

from models.errors import EncodeError
from models.image_buffer import ImageBuffer
from utils.constants import DEFAULT_COMPRESS_LEVEL, METERS_PER_INCH

logger = logging.getLogger(__name__)


def dpi_to_ppm(dpi: int) -> int:
    """PNG pHYs stores pixels per meter."""
    return int(round(dpi / METERS_PER_INCH))


def ppm_to_dpi(ppm: int) -> float:
    return ppm * METERS_PER_INCH


def encode_png(buffer: ImageBuffer, dpi: int, compress_level: int = DEFAULT_COMPRESS_LEVEL) -> bytes:
    """Serialize an RGBA8 buffer to PNG bytes.

    Only the pHYs chunk is added; no color profile or EXIF is written, so
    identical pixels always give identical bytes.
    """
    if buffer.width == 0 or buffer.height == 0:
        raise EncodeError(f"Cannot encode empty image ({buffer.width}x{buffer.height})")

    # Pillow derives pHYs from dpi with the same rounding as dpi_to_ppm
    out = io.BytesIO()
    try:
        image = Image.fromarray(buffer.pixels)
        image.save(out, format='PNG', dpi=(dpi, dpi), compress_level=compress_level, optimize=False)
    except (OSError, ValueError, struct.error) as e:
        raise EncodeError(f"PNG write error: {e}") from e

    data = out.getvalue()
    logger.debug("Encoded %dx%d PNG at %d dpi: %d bytes", buffer.width, buffer.height, dpi, len(data))
    return data


def read_png_dpi(data: bytes) -> Tuple[float, float]:
    """Read the physical resolution of PNG bytes back as (x_dpi, y_dpi)."""
    with Image.open(io.BytesIO(data)) as image:
        dpi = image.info.get('dpi')
    if dpi is None:
        raise EncodeError("PNG has no pHYs chunk")
    return float(dpi[0]), float(dpi[1])


def write_atomic(path: Union[str, Path], data: bytes) -> Path:
    """Write bytes through a temp file in the target directory, then rename."""
    path = Path(path)
    directory = path.parent
    try:
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix='.tmp', dir=directory)
    except OSError as e:
        raise EncodeError(f"Failed to create {path}: {e}") from e

    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except OSError as e:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise EncodeError(f"Failed to write {path}: {e}") from e

    logger.info("Wrote %s (%d bytes)", path, len(data))
    return path

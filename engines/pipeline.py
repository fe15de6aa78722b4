"""Main pixelation pipeline: resolve, plan, process, encode."""

import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np

from models.errors import EncodeError
from models.image_buffer import ImageBuffer
from models.pixelate_params import DEFAULTS, PixelateDefaults, PixelateParams
from models.pixelate_result import PixelateResult
from engines.config_resolver import resolve
from engines.grid_planner import grid_shape, plan_blocks
from engines.orchestrator import process
from engines.encoder import encode_png, write_atomic
from utils.image_io import load_image
from utils.metrics import Timer, compute_psnr, count_unique_colors

logger = logging.getLogger(__name__)


def pixelate(
    image: Union[ImageBuffer, np.ndarray],
    params: Optional[PixelateParams] = None,
    defaults: PixelateDefaults = DEFAULTS,
    workers: Optional[int] = None
) -> PixelateResult:
    """Run the full pixelation pipeline on an in-memory image.

    Raises InvalidConfigError, ProcessingError or EncodeError; nothing is
    written to disk.
    """
    if isinstance(image, np.ndarray):
        image = ImageBuffer.from_array(image)
    if image.width == 0 or image.height == 0:
        raise EncodeError(f"Cannot pixelate empty image ({image.width}x{image.height})")
    params = params or PixelateParams()
    timer = Timer()

    config = resolve(params, image.width, image.height, defaults)
    blocks = plan_blocks(image.width, image.height, config.block_size)
    grid = grid_shape(image.width, image.height, config.block_size)
    logger.info(
        "Pixelating %dx%d: block=%d (%s), down=%s, up=%s, %d blocks",
        image.width, image.height, config.block_size, config.sizing_mode.value,
        config.down_filter.value, config.up_filter.value, len(blocks)
    )

    output = timer.measure_process(process, image, blocks, config, workers)
    png_bytes = timer.measure_encode(encode_png, output, config.dpi, config.compress_level)

    return PixelateResult(
        image=output,
        png_bytes=png_bytes,
        config=config,
        block_count=len(blocks),
        grid=grid,
        psnr=compute_psnr(image.pixels, output.pixels),
        unique_colors=count_unique_colors(output.pixels),
        process_time_ms=timer.process_time_ms,
        encode_time_ms=timer.encode_time_ms,
    )


def pixelate_file(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    params: Optional[PixelateParams] = None,
    defaults: PixelateDefaults = DEFAULTS,
    workers: Optional[int] = None
) -> PixelateResult:
    """Load `input_path`, pixelate it and atomically write the PNG to `output_path`."""
    image = load_image(input_path)
    result = pixelate(image, params, defaults, workers)
    result.output_path = write_atomic(output_path, result.png_bytes)
    return result

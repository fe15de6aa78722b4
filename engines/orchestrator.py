"""Parallel block dispatch over a bounded thread pool."""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from models.block import Block
from models.errors import PixelatorError, ProcessingError
from models.image_buffer import ImageBuffer
from models.pixelate_params import ResolvedConfig
from engines.block_expander import EXPANDERS
from engines.block_reducer import REDUCERS
from engines.grid_planner import block_centers

logger = logging.getLogger(__name__)


class RunState(Enum):
    PLANNED = 'planned'
    DISPATCHED = 'dispatched'
    ALL_COMPLETE = 'all_complete'
    READY = 'ready'


def default_workers() -> int:
    return os.cpu_count() or 1


def chunk_ranges(count: int, workers: int) -> List[Tuple[int, int]]:
    """Split [0, count) into at most `workers` contiguous, near-equal ranges."""
    workers = max(1, min(workers, count))
    base, extra = divmod(count, workers)
    ranges = []
    start = 0
    for i in range(workers):
        end = start + base + (1 if i < extra else 0)
        ranges.append((start, end))
        start = end
    return ranges


def _run_chunks(pool: ThreadPoolExecutor, ranges, task: Callable[[int, int], None], phase: str) -> None:
    """Submit one task per range and wait for all of them."""
    futures = [pool.submit(task, start, end) for start, end in ranges]
    errors = []
    for future in futures:
        exc = future.exception()
        if exc is not None:
            errors.append(exc)
    if errors:
        logger.error("%s phase failed in %d of %d workers: %s", phase, len(errors), len(futures), errors[0])
        raise ProcessingError(f"{phase} phase failed: {errors[0]}") from errors[0]


def process(
    source: ImageBuffer,
    blocks: Sequence[Block],
    config: ResolvedConfig,
    workers: Optional[int] = None
) -> ImageBuffer:
    """Pixelate `source` block by block and return a new buffer.

    Runs in two passes separated by a join: every block is reduced into a
    (rows, cols, 4) color grid, then every block is expanded into the
    destination. Each block owns its grid cell and its footprint, so
    workers never share a write target. Either the finished buffer is
    returned or ProcessingError is raised.
    """
    if not blocks:
        raise ProcessingError("No blocks to process")

    reducer = config.reducer or REDUCERS[config.down_filter]
    expander = config.expander or EXPANDERS[config.up_filter]
    workers = workers or default_workers()

    rows = max(b.row for b in blocks) + 1
    cols = max(b.col for b in blocks) + 1
    xs, ys = block_centers(list(blocks), rows, cols)
    centers = (np.asarray(xs), np.asarray(ys))

    src = source.pixels.view()
    src.flags.writeable = False
    colors = np.zeros((rows, cols, source.pixels.shape[2]), dtype=np.uint8)
    destination = ImageBuffer.blank(source.width, source.height)
    dst = destination.pixels

    def reduce_range(start: int, end: int) -> None:
        for block in blocks[start:end]:
            colors[block.row, block.col] = reducer(src, block)

    def expand_range(start: int, end: int) -> None:
        for block in blocks[start:end]:
            expander(dst, block, colors, centers)

    ranges = chunk_ranges(len(blocks), workers)
    state = RunState.PLANNED
    logger.debug("%s: %d blocks (%dx%d grid) over %d workers", state.value, len(blocks), rows, cols, len(ranges))

    try:
        with ThreadPoolExecutor(max_workers=len(ranges)) as pool:
            state = RunState.DISPATCHED
            logger.debug("%s: reduce", state.value)
            _run_chunks(pool, ranges, reduce_range, "Reduce")
            logger.debug("%s: expand", state.value)
            _run_chunks(pool, ranges, expand_range, "Expand")
    except PixelatorError:
        raise
    except Exception as e:
        logger.error("Worker pool failure: %s", e)
        raise ProcessingError(f"Worker pool failure: {e}") from e

    state = RunState.ALL_COMPLETE
    logger.debug("%s", state.value)
    state = RunState.READY
    logger.debug("%s: %dx%d", state.value, destination.width, destination.height)
    return destination

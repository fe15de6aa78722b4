"""Block expansion: spread block colors back over each block footprint."""

from typing import Callable, Sequence, Tuple

import numpy as np

from models.block import Block
from models.pixelate_params import UpFilter
from engines.block_reducer import catmull_rom, gaussian, lanczos3


def expand_nearest(destination: np.ndarray, block: Block, colors: np.ndarray, centers=None) -> None:
    """Fill the whole footprint with the block's own color."""
    destination[block.slices] = colors[block.row, block.col]


def _axis_weights(start: int, length: int, centers: Sequence[float]) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Lower neighbour index, upper neighbour index and blend factor per pixel."""
    c = np.asarray(centers, dtype=np.float64)
    pos = np.arange(start, start + length, dtype=np.float64) + 0.5
    if len(c) == 1:
        zeros = np.zeros(length, dtype=np.intp)
        return zeros, zeros, np.zeros(length)
    lo = np.clip(np.searchsorted(c, pos, side='right') - 1, 0, len(c) - 2)
    hi = lo + 1
    t = np.clip((pos - c[lo]) / (c[hi] - c[lo]), 0.0, 1.0)
    return lo, hi, t


def expand_triangle(
    destination: np.ndarray,
    block: Block,
    colors: np.ndarray,
    centers: Tuple[Sequence[float], Sequence[float]]
) -> None:
    """Bilinear blend between the four nearest block centers.

    Pixels beyond the outermost centers take the clamped edge color.
    Reads neighbouring cells of `colors` but writes only this block.
    """
    xs, ys = centers
    x0, x1, tx = _axis_weights(block.x, block.width, xs)
    y0, y1, ty = _axis_weights(block.y, block.height, ys)

    def corner(ys_idx, xs_idx):
        return colors[np.ix_(ys_idx, xs_idx)].astype(np.float64)

    tx = tx[np.newaxis, :, np.newaxis]
    ty = ty[:, np.newaxis, np.newaxis]
    top = corner(y0, x0) * (1.0 - tx) + corner(y0, x1) * tx
    bottom = corner(y1, x0) * (1.0 - tx) + corner(y1, x1) * tx
    blended = top * (1.0 - ty) + bottom * ty

    destination[block.slices] = np.clip(np.floor(blended + 0.5), 0, 255).astype(np.uint8)


def _kernel_axis(
    start: int,
    length: int,
    centers: Sequence[float],
    kernel: Callable[[np.ndarray], np.ndarray],
    radius: int
) -> Tuple[np.ndarray, np.ndarray]:
    """Neighbour indices and normalized kernel weights per pixel, shape (length, 2 * radius)."""
    c = np.asarray(centers, dtype=np.float64)
    n = len(c)
    # the first block is always full size when there is more than one
    spacing = 2.0 * c[0]
    pos = np.arange(start, start + length, dtype=np.float64) + 0.5
    lo = np.searchsorted(c, pos, side='right') - 1
    idx = lo[:, np.newaxis] + np.arange(1 - radius, radius + 1)[np.newaxis, :]
    valid = (idx >= 0) & (idx < n)
    idx = np.clip(idx, 0, n - 1)
    weights = np.where(valid, kernel((pos[:, np.newaxis] - c[idx]) / spacing), 0.0)
    return idx, weights / weights.sum(axis=1, keepdims=True)


def expand_kernel(
    destination: np.ndarray,
    block: Block,
    colors: np.ndarray,
    centers: Tuple[Sequence[float], Sequence[float]],
    kernel: Callable[[np.ndarray], np.ndarray],
    radius: int
) -> None:
    """Separable resampling of the color grid with `kernel`, centered on block centers.

    Negative lobes may overshoot; results are clipped to 0-255.
    """
    xs, ys = centers
    ix, wx = _kernel_axis(block.x, block.width, xs, kernel, radius)
    iy, wy = _kernel_axis(block.y, block.height, ys, kernel, radius)

    rows = np.unique(iy)
    band = colors[rows].astype(np.float64)                          # (k, cols, 4)
    horizontal = np.einsum('xb,kxbc->kxc', wx, band[:, ix, :])      # (k, w, 4)
    gathered = horizontal[np.searchsorted(rows, iy)]                 # (h, 2r, w, 4)
    blended = np.einsum('ya,yawc->ywc', wy, gathered)

    destination[block.slices] = np.clip(np.floor(blended + 0.5), 0, 255).astype(np.uint8)


def expand_gaussian(destination, block, colors, centers) -> None:
    expand_kernel(destination, block, colors, centers, gaussian, 3)


def expand_catmull_rom(destination, block, colors, centers) -> None:
    expand_kernel(destination, block, colors, centers, catmull_rom, 2)


def expand_lanczos3(destination, block, colors, centers) -> None:
    expand_kernel(destination, block, colors, centers, lanczos3, 3)


EXPANDERS = {
    UpFilter.NEAREST: expand_nearest,
    UpFilter.TRIANGLE: expand_triangle,
    UpFilter.GAUSSIAN: expand_gaussian,
    UpFilter.CATMULLROM: expand_catmull_rom,
    UpFilter.LANCZOS3: expand_lanczos3,
}


def expand_block(
    destination: np.ndarray,
    block: Block,
    colors: np.ndarray,
    centers: Tuple[Sequence[float], Sequence[float]],
    up_filter: UpFilter
) -> None:
    """Write block colors into `destination` inside the block footprint only."""
    EXPANDERS[up_filter](destination, block, colors, centers)

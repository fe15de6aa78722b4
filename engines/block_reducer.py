"""Block reduction: collapse a block's pixels to one representative color."""

import numpy as np

from models.block import Block
from models.pixelate_params import DownFilter


def catmull_rom(x: np.ndarray) -> np.ndarray:
    """Cubic convolution kernel (a = -0.5), support 2."""
    x = np.abs(x)
    near = 1.5 * x ** 3 - 2.5 * x ** 2 + 1.0
    far = -0.5 * x ** 3 + 2.5 * x ** 2 - 4.0 * x + 2.0
    return np.where(x < 1.0, near, np.where(x < 2.0, far, 0.0))


def lanczos3(x: np.ndarray) -> np.ndarray:
    """Windowed sinc, support 3."""
    return np.where(np.abs(x) < 3.0, np.sinc(x) * np.sinc(x / 3.0), 0.0)


def gaussian(x: np.ndarray) -> np.ndarray:
    """Gaussian with sigma 0.5, truncated at 3."""
    return np.where(np.abs(x) < 3.0, np.exp(-2.0 * x ** 2), 0.0)


def _offsets(n: int) -> np.ndarray:
    """Pixel distance from the block center, in units of the block side."""
    i = np.arange(n, dtype=np.float64)
    return (i - (n - 1) / 2.0) / n


def tent_weights(n: int) -> np.ndarray:
    """Linear falloff from the center; every weight stays positive."""
    i = np.arange(n, dtype=np.float64)
    return n / 2.0 + 0.5 - np.abs(i - (n - 1) / 2.0)


def gaussian_weights(n: int) -> np.ndarray:
    i = np.arange(n, dtype=np.float64)
    sigma = max(n / 4.0, 0.5)
    return np.exp(-((i - (n - 1) / 2.0) ** 2) / (2.0 * sigma ** 2))


def catmull_rom_weights(n: int) -> np.ndarray:
    # offsets stay inside the positive lobe
    return catmull_rom(_offsets(n))


def lanczos3_weights(n: int) -> np.ndarray:
    return lanczos3(_offsets(n))


def _weighted_mean(region: np.ndarray, wy: np.ndarray, wx: np.ndarray) -> np.ndarray:
    weights = np.outer(wy, wx)
    total = np.tensordot(weights, region.astype(np.float64), axes=([0, 1], [0, 1]))
    color = np.floor(total / weights.sum() + 0.5)
    return np.clip(color, 0, 255).astype(np.uint8)


def reduce_box(pixels: np.ndarray, block: Block) -> np.ndarray:
    """Plain per-channel mean, rounded half up."""
    region = pixels[block.slices]
    count = block.area
    total = region.reshape(count, -1).sum(axis=0, dtype=np.int64)
    return ((total + count // 2) // count).astype(np.uint8)


def reduce_triangle(pixels: np.ndarray, block: Block) -> np.ndarray:
    """Mean weighted by a tent centered on the block."""
    region = pixels[block.slices]
    return _weighted_mean(region, tent_weights(block.height), tent_weights(block.width))


def reduce_gaussian(pixels: np.ndarray, block: Block) -> np.ndarray:
    region = pixels[block.slices]
    return _weighted_mean(region, gaussian_weights(block.height), gaussian_weights(block.width))


def reduce_nearest(pixels: np.ndarray, block: Block) -> np.ndarray:
    """Sample the pixel under the block center."""
    return pixels[block.y + block.height // 2, block.x + block.width // 2].copy()


def reduce_catmull_rom(pixels: np.ndarray, block: Block) -> np.ndarray:
    region = pixels[block.slices]
    return _weighted_mean(region, catmull_rom_weights(block.height), catmull_rom_weights(block.width))


def reduce_lanczos3(pixels: np.ndarray, block: Block) -> np.ndarray:
    region = pixels[block.slices]
    return _weighted_mean(region, lanczos3_weights(block.height), lanczos3_weights(block.width))


REDUCERS = {
    DownFilter.BOX: reduce_box,
    DownFilter.NEAREST: reduce_nearest,
    DownFilter.TRIANGLE: reduce_triangle,
    DownFilter.GAUSSIAN: reduce_gaussian,
    DownFilter.CATMULLROM: reduce_catmull_rom,
    DownFilter.LANCZOS3: reduce_lanczos3,
}


def reduce_block(pixels: np.ndarray, block: Block, down_filter: DownFilter) -> np.ndarray:
    """Representative RGBA color of `block` under `down_filter`."""
    if block.area == 1:
        return pixels[block.y, block.x].copy()
    return REDUCERS[down_filter](pixels, block)

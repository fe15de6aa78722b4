"""Block grid planning: tile an image into row-major blocks."""

from typing import List, Tuple

from models.block import Block


def grid_shape(width: int, height: int, block_size: int) -> Tuple[int, int]:
    """Number of block rows and columns, counting clipped edge blocks."""
    if width < 1 or height < 1:
        raise ValueError(f"Image must be at least 1x1, got {width}x{height}")
    if block_size < 1:
        raise ValueError(f"Block size must be positive, got {block_size}")
    rows = (height + block_size - 1) // block_size
    cols = (width + block_size - 1) // block_size
    return rows, cols


def plan_blocks(width: int, height: int, block_size: int) -> List[Block]:
    """Split a width x height grid into blocks of side `block_size`.

    Blocks touching the right or bottom edge are clipped to the remaining
    pixels, so the result covers every pixel exactly once.
    """
    grid_shape(width, height, block_size)
    blocks = []
    for row, y in enumerate(range(0, height, block_size)):
        block_h = min(block_size, height - y)
        for col, x in enumerate(range(0, width, block_size)):
            block_w = min(block_size, width - x)
            blocks.append(Block(x, y, block_w, block_h, row, col))
    return blocks


def block_centers(blocks: List[Block], rows: int, cols: int) -> Tuple[List[float], List[float]]:
    """Pixel-space centers of each block column and block row."""
    xs = [0.0] * cols
    ys = [0.0] * rows
    for block in blocks:
        if block.row == 0:
            xs[block.col] = block.x + block.width / 2.0
        if block.col == 0:
            ys[block.row] = block.y + block.height / 2.0
    return xs, ys

"""Pixelation engines - pure computation, no GUI dependencies."""

from .grid_planner import grid_shape, plan_blocks, block_centers
from .block_reducer import reduce_block, reduce_box, reduce_triangle, reduce_gaussian
from .block_expander import expand_block, expand_nearest, expand_triangle
from .config_resolver import resolve, auto_block_size
from .orchestrator import process, chunk_ranges
from .encoder import encode_png, read_png_dpi, write_atomic, dpi_to_ppm, ppm_to_dpi
from .pipeline import pixelate, pixelate_file

__all__ = [
    'grid_shape',
    'plan_blocks',
    'block_centers',
    'reduce_block',
    'reduce_box',
    'reduce_triangle',
    'reduce_gaussian',
    'expand_block',
    'expand_nearest',
    'expand_triangle',
    'resolve',
    'auto_block_size',
    'process',
    'chunk_ranges',
    'encode_png',
    'read_png_dpi',
    'write_atomic',
    'dpi_to_ppm',
    'ppm_to_dpi',
    'pixelate',
    'pixelate_file',
]

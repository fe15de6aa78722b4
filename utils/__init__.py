"""Shared utilities."""

from . import constants
from .metrics import compute_psnr, count_unique_colors, Timer
from .test_images import (
    generate_solid,
    generate_checkerboard,
    generate_gradient,
    generate_noise,
    generate_stripes,
    generate_demo_image,
)
from .image_io import load_image, decode_image

__all__ = [
    'constants',
    'compute_psnr',
    'count_unique_colors',
    'Timer',
    'generate_solid',
    'generate_checkerboard',
    'generate_gradient',
    'generate_noise',
    'generate_stripes',
    'generate_demo_image',
    'load_image',
    'decode_image',
]

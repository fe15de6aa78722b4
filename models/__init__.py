"""Data models for pixelation parameters, buffers and results."""

from .errors import (
    PixelatorError,
    InvalidConfigError,
    DecodeError,
    ProcessingError,
    EncodeError,
)
from .image_buffer import ImageBuffer
from .block import Block
from .pixelate_params import (
    SizingMode,
    DownFilter,
    UpFilter,
    PixelateParams,
    PixelateDefaults,
    ResolvedConfig,
    DEFAULTS,
)
from .pixelate_result import PixelateResult

__all__ = [
    'PixelatorError',
    'InvalidConfigError',
    'DecodeError',
    'ProcessingError',
    'EncodeError',
    'ImageBuffer',
    'Block',
    'SizingMode',
    'DownFilter',
    'UpFilter',
    'PixelateParams',
    'PixelateDefaults',
    'ResolvedConfig',
    'DEFAULTS',
    'PixelateResult',
]

"""Pixelation parameters: raw request, defaults record, resolved plan."""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from utils import constants


class SizingMode(Enum):
    AUTO = 'auto'
    MANUAL = 'manual'


class DownFilter(Enum):
    """Kernels that collapse a block to one color."""

    BOX = 'box'
    NEAREST = 'nearest'
    TRIANGLE = 'triangle'
    GAUSSIAN = 'gaussian'
    CATMULLROM = 'catmullrom'
    LANCZOS3 = 'lanczos3'


class UpFilter(Enum):
    """Kernels that spread a block color over its footprint."""

    NEAREST = 'nearest'
    TRIANGLE = 'triangle'
    GAUSSIAN = 'gaussian'
    CATMULLROM = 'catmullrom'
    LANCZOS3 = 'lanczos3'


@dataclass
class PixelateParams:
    """Raw configuration as received from the caller. None means "use default"."""

    block: Optional[int] = None
    dpi: Optional[int] = None
    mode: Optional[str] = None
    filter: Optional[str] = None
    pixel_down_filter: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PixelateParams":
        """Build from a record such as a front-end payload; unknown keys are ignored."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in names})


@dataclass(frozen=True)
class PixelateDefaults:
    """Values used when a request leaves a field unset."""

    dpi: int = constants.DEFAULT_DPI
    sizing_mode: SizingMode = SizingMode(constants.DEFAULT_SIZING_MODE)
    down_filter: DownFilter = DownFilter(constants.DEFAULT_DOWN_FILTER)
    up_filter: UpFilter = UpFilter(constants.DEFAULT_UP_FILTER)
    auto_target_blocks: int = constants.AUTO_TARGET_BLOCKS
    min_block: int = constants.MIN_BLOCK_SIZE
    max_block: int = constants.MAX_BLOCK_SIZE
    compress_level: int = constants.DEFAULT_COMPRESS_LEVEL

    def __post_init__(self):
        if self.auto_target_blocks < 1:
            raise ValueError(f"auto_target_blocks must be >= 1, got {self.auto_target_blocks}")
        if not (1 <= self.min_block <= self.max_block):
            raise ValueError(f"Invalid block range [{self.min_block}, {self.max_block}]")
        if not (0 <= self.compress_level <= 9):
            raise ValueError(f"compress_level must be 0-9, got {self.compress_level}")


DEFAULTS = PixelateDefaults()


@dataclass(frozen=True)
class ResolvedConfig:
    """Concrete, immutable plan for one run."""

    block_size: int
    sizing_mode: SizingMode
    down_filter: DownFilter
    up_filter: UpFilter
    dpi: int
    compress_level: int = constants.DEFAULT_COMPRESS_LEVEL
    reducer: Optional[Callable] = field(default=None, compare=False, repr=False)
    expander: Optional[Callable] = field(default=None, compare=False, repr=False)

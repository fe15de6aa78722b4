"""Resolve raw pixelation parameters into an immutable plan."""

import logging
from enum import Enum
from typing import Optional, Type, TypeVar

from models.errors import InvalidConfigError
from models.pixelate_params import (
    DEFAULTS,
    DownFilter,
    PixelateDefaults,
    PixelateParams,
    ResolvedConfig,
    SizingMode,
    UpFilter,
)
from engines.block_reducer import REDUCERS
from engines.block_expander import EXPANDERS
from utils.constants import MAX_DPI

logger = logging.getLogger(__name__)

E = TypeVar('E', bound=Enum)


def parse_choice(value: Optional[str], enum_type: Type[E], default: E, label: str) -> E:
    """Map a case-insensitive name onto an enum member."""
    if value is None:
        return default
    if isinstance(value, enum_type):
        return value
    if not isinstance(value, str):
        raise InvalidConfigError(f"{label} must be a name, got {value!r}")
    try:
        return enum_type(value.strip().lower())
    except ValueError:
        choices = ', '.join(m.value for m in enum_type)
        raise InvalidConfigError(f"Unknown {label} {value!r} (expected one of: {choices})") from None


def _require_int(value, label: str) -> int:
    # bool is an int subclass but never a valid size
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigError(f"{label} must be an integer, got {value!r}")
    return value


def auto_block_size(width: int, height: int, defaults: PixelateDefaults = DEFAULTS) -> int:
    """Block size giving about `auto_target_blocks` blocks along the longer side."""
    longer = max(width, height)
    size = int(longer / defaults.auto_target_blocks + 0.5)
    return min(max(size, defaults.min_block), defaults.max_block)


def resolve_block_size(
    params: PixelateParams,
    mode: SizingMode,
    width: int,
    height: int,
    defaults: PixelateDefaults = DEFAULTS
) -> int:
    if params.block is None:
        if mode is SizingMode.MANUAL:
            raise InvalidConfigError("Manual mode requires an explicit block size")
        return auto_block_size(width, height, defaults)

    block = _require_int(params.block, "Block size")
    if not (defaults.min_block <= block <= defaults.max_block):
        raise InvalidConfigError(
            f"Block size must be {defaults.min_block}-{defaults.max_block}, got {block}"
        )
    return block


def resolve(
    params: PixelateParams,
    width: int,
    height: int,
    defaults: PixelateDefaults = DEFAULTS
) -> ResolvedConfig:
    """Validate `params` against an image of `width` x `height` and fill in defaults.

    Raises InvalidConfigError before any pixel work is done.
    """
    mode = parse_choice(params.mode, SizingMode, defaults.sizing_mode, "mode")
    down = parse_choice(params.pixel_down_filter, DownFilter, defaults.down_filter, "down filter")
    up = parse_choice(params.filter, UpFilter, defaults.up_filter, "up filter")

    dpi = defaults.dpi if params.dpi is None else _require_int(params.dpi, "DPI")
    if dpi < 1:
        raise InvalidConfigError(f"DPI must be positive, got {dpi}")
    if dpi > MAX_DPI:
        raise InvalidConfigError(f"DPI must be at most {MAX_DPI}, got {dpi}")

    block_size = resolve_block_size(params, mode, width, height, defaults)

    config = ResolvedConfig(
        block_size=block_size,
        sizing_mode=mode,
        down_filter=down,
        up_filter=up,
        dpi=dpi,
        compress_level=defaults.compress_level,
        reducer=REDUCERS[down],
        expander=EXPANDERS[up],
    )
    logger.debug("Resolved %dx%d -> %s", width, height, config)
    return config

"""Tests for configuration resolution."""

import pytest
from models.errors import InvalidConfigError
from models.pixelate_params import (
    DownFilter,
    PixelateDefaults,
    PixelateParams,
    SizingMode,
    UpFilter,
)
from engines.block_expander import expand_nearest, expand_triangle
from engines.block_reducer import reduce_box, reduce_triangle
from engines.config_resolver import auto_block_size, resolve


def test_manual_block_zero_rejected():
    """Block size 0 is below the allowed range."""
    with pytest.raises(InvalidConfigError):
        resolve(PixelateParams(block=0, mode="Manual"), 100, 100)


def test_manual_block_501_rejected():
    with pytest.raises(InvalidConfigError):
        resolve(PixelateParams(block=501, mode="Manual"), 100, 100)


def test_manual_block_500_accepted():
    config = resolve(PixelateParams(block=500, mode="Manual"), 100, 100)
    assert config.block_size == 500
    assert config.sizing_mode is SizingMode.MANUAL


def test_manual_without_block_rejected():
    """Manual mode has no automatic fallback."""
    with pytest.raises(InvalidConfigError, match="Manual"):
        resolve(PixelateParams(mode="Manual"), 100, 100)


@pytest.mark.parametrize("block", [True, 2.5, "8"])
def test_non_integer_block_rejected(block):
    with pytest.raises(InvalidConfigError):
        resolve(PixelateParams(block=block, mode="Manual"), 100, 100)


def test_auto_targets_fixed_block_count():
    """Auto mode divides the longer side into ~64 blocks."""
    assert auto_block_size(1920, 1080) == 30
    assert auto_block_size(1080, 1920) == 30
    assert resolve(PixelateParams(mode="Auto"), 640, 480).block_size == 10


def test_auto_clamped_to_range():
    assert auto_block_size(10, 10) == 1
    assert auto_block_size(1, 1) == 1
    assert auto_block_size(64 * 1000, 10) == 500


def test_auto_respects_defaults_record():
    defaults = PixelateDefaults(auto_target_blocks=10)
    assert resolve(PixelateParams(), 200, 100, defaults).block_size == 20


def test_auto_uses_explicit_block_override():
    config = resolve(PixelateParams(block=7, mode="Auto"), 1000, 1000)
    assert config.block_size == 7


def test_auto_explicit_block_still_validated():
    with pytest.raises(InvalidConfigError):
        resolve(PixelateParams(block=501, mode="Auto"), 1000, 1000)


def test_defaults_applied():
    config = resolve(PixelateParams(), 128, 128)
    assert config.sizing_mode is SizingMode.AUTO
    assert config.down_filter is DownFilter.BOX
    assert config.up_filter is UpFilter.NEAREST
    assert config.dpi == 300
    assert config.reducer is reduce_box
    assert config.expander is expand_nearest


def test_filter_names_case_insensitive():
    config = resolve(
        PixelateParams(block=4, mode="MANUAL", filter="Triangle", pixel_down_filter="TRIANGLE"),
        64, 64
    )
    assert config.up_filter is UpFilter.TRIANGLE
    assert config.down_filter is DownFilter.TRIANGLE
    assert config.reducer is reduce_triangle
    assert config.expander is expand_triangle


@pytest.mark.parametrize("field,value", [
    ("filter", "Bicubic"),
    ("pixel_down_filter", "Mitchell"),
    ("mode", "Exact"),
    ("filter", 3),
])
def test_unknown_names_rejected(field, value):
    """No silent substitution of unknown filters or modes."""
    with pytest.raises(InvalidConfigError):
        resolve(PixelateParams(**{field: value}), 64, 64)


@pytest.mark.parametrize("dpi", [0, -72, 1.5])
def test_invalid_dpi_rejected(dpi):
    with pytest.raises(InvalidConfigError):
        resolve(PixelateParams(dpi=dpi), 64, 64)


def test_dpi_passed_through():
    assert resolve(PixelateParams(dpi=150), 64, 64).dpi == 150


def test_params_from_dict_ignores_unknown_keys():
    params = PixelateParams.from_dict({
        "block": 12, "dpi": 96, "mode": "Manual", "filter": "Nearest",
        "pixel_down_filter": "Box", "width": 640,
    })
    assert params.block == 12
    assert resolve(params, 100, 100).block_size == 12


def test_defaults_record_validated():
    with pytest.raises(ValueError):
        PixelateDefaults(min_block=0)
    with pytest.raises(ValueError):
        PixelateDefaults(compress_level=10)


def test_resolved_config_is_immutable():
    config = resolve(PixelateParams(), 64, 64)
    with pytest.raises(AttributeError):
        config.block_size = 3


def test_auto_rounds_half_up():
    """160 / 64 = 2.5 and 224 / 64 = 3.5 both round up."""
    assert auto_block_size(160, 10) == 3
    assert auto_block_size(224, 10) == 4


def test_dpi_limit():
    """pHYs holds pixels per meter in 31 bits."""
    assert resolve(PixelateParams(dpi=54_544_379), 64, 64).dpi == 54_544_379
    with pytest.raises(InvalidConfigError, match="at most"):
        resolve(PixelateParams(dpi=54_544_380), 64, 64)
    with pytest.raises(InvalidConfigError):
        resolve(PixelateParams(dpi=200_000_000), 64, 64)


@pytest.mark.parametrize("name", ["Nearest", "Triangle", "Gaussian", "CatmullRom", "Lanczos3"])
def test_resample_names_accepted_for_both_filters(name):
    """The same filter vocabulary works for up- and down-sampling."""
    config = resolve(PixelateParams(filter=name, pixel_down_filter=name), 64, 64)
    assert config.up_filter is UpFilter(name.lower())
    assert config.down_filter is DownFilter(name.lower())
    assert config.reducer is not None and config.expander is not None

"""Tests for parallel block dispatch."""

import numpy as np
import pytest
from models.errors import ProcessingError
from models.image_buffer import ImageBuffer
from models.pixelate_params import PixelateParams
from engines.block_reducer import reduce_block
from engines.config_resolver import resolve
from engines.grid_planner import plan_blocks
from engines.orchestrator import chunk_ranges, process
from utils.test_images import generate_noise, generate_solid, generate_stripes


def _run(pixels, block, workers=None, **kwargs):
    source = ImageBuffer.from_array(pixels)
    config = resolve(PixelateParams(block=block, mode="Manual", **kwargs), source.width, source.height)
    blocks = plan_blocks(source.width, source.height, config.block_size)
    return source, blocks, process(source, blocks, config, workers)


def test_chunk_ranges_cover_all_blocks():
    ranges = chunk_ranges(10, 4)
    assert ranges == [(0, 3), (3, 6), (6, 8), (8, 10)]
    assert chunk_ranges(3, 16) == [(0, 1), (1, 2), (2, 3)]
    assert chunk_ranges(5, 1) == [(0, 5)]


def test_dimensions_preserved():
    _, _, out = _run(generate_noise(37, 23), 5)
    assert out.size == (37, 23)
    assert out.pixels.shape == (23, 37, 4)


@pytest.mark.parametrize("up", ["Nearest", "Triangle", "Gaussian", "CatmullRom", "Lanczos3"])
@pytest.mark.parametrize("down", ["Box", "Nearest", "Triangle", "Gaussian", "CatmullRom", "Lanczos3"])
def test_deterministic_across_worker_counts(down, up):
    """Output does not depend on how blocks are split between workers."""
    pixels = generate_noise(53, 41, seed=7, alpha=True)
    results = [
        _run(pixels, 6, workers=w, filter=up, pixel_down_filter=down)[2].pixels
        for w in (1, 2, 3, 8, 64)
    ]
    for other in results[1:]:
        assert np.array_equal(results[0], other)


def test_uniform_blocks_match_reducer():
    """Under Nearest every block is one color, equal to the reducer output."""
    source, blocks, out = _run(generate_noise(30, 20, seed=3), 7, pixel_down_filter="Triangle")
    config = resolve(PixelateParams(block=7, mode="Manual", pixel_down_filter="Triangle"), 30, 20)
    for block in blocks:
        region = out.pixels[block.slices]
        expected = reduce_block(source.pixels, block, config.down_filter)
        assert np.all(region == expected)


def test_block_size_one_is_noop():
    pixels = generate_noise(16, 9, alpha=True)
    _, _, out = _run(pixels, 1)
    assert np.array_equal(out.pixels, pixels)


def test_solid_red_100x100():
    source, blocks, out = _run(generate_solid(100, 100, (255, 0, 0, 255)), 25)
    assert len(blocks) == 16
    assert np.all(out.pixels == (255, 0, 0, 255))


def test_source_not_modified():
    pixels = generate_stripes(40, 40)
    original = pixels.copy()
    source, _, out = _run(pixels, 8)
    assert np.array_equal(source.pixels, original)
    assert out.pixels is not source.pixels


def test_empty_block_list_rejected():
    source = ImageBuffer.from_array(generate_solid(4, 4))
    config = resolve(PixelateParams(block=2, mode="Manual"), 4, 4)
    with pytest.raises(ProcessingError):
        process(source, [], config)


def test_worker_failure_raises_processing_error():
    """A failing kernel aborts the run instead of returning a partial image."""
    source = ImageBuffer.from_array(generate_solid(8, 8))
    config = resolve(PixelateParams(block=2, mode="Manual"), 8, 8)

    def broken(pixels, block):
        if block.row == 1:
            raise MemoryError("out of memory")
        return pixels[block.y, block.x]

    config = type(config)(
        block_size=config.block_size,
        sizing_mode=config.sizing_mode,
        down_filter=config.down_filter,
        up_filter=config.up_filter,
        dpi=config.dpi,
        reducer=broken,
        expander=config.expander,
    )
    with pytest.raises(ProcessingError, match="out of memory"):
        process(source, plan_blocks(8, 8, 2), config, workers=4)

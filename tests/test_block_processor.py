"""Tests for the tile kernel: variants, geometry and page processing."""

import numpy as np
import pytest
from engines.block_processor import KernelVariant, PageContext, Stage, get_kernel
from engines.quantizer import build_luma_table, build_chroma_table
from utils.constants import SCRATCH_PITCH


@pytest.mark.parametrize('mode, group, page, luma_blocks', [
    ('4:4:4', (1, 1), (16, 32), (2, 4)),
    ('4:2:2', (1, 2), (16, 64), (2, 8)),
    ('4:4:0', (2, 1), (32, 32), (4, 4)),
    ('4:2:0', (2, 2), (32, 64), (4, 8)),
])
def test_variant_geometry(mode, group, page, luma_blocks):
    variant = KernelVariant.from_mode(mode)
    kernel = get_kernel(variant)
    assert variant.group_shape == group
    assert variant.page_shape == page
    assert kernel.luma_blocks == luma_blocks
    assert kernel.chroma_blocks == (2, 4)

    scratch = kernel.new_scratch()
    assert scratch.luma.shape == (*luma_blocks, 8, SCRATCH_PITCH)
    assert scratch.cb.shape == scratch.cr.shape == (2, 4, 8, SCRATCH_PITCH)


def test_unknown_mode_rejected():
    with pytest.raises(ValueError):
        KernelVariant.from_mode('4:1:1')


def test_stage_plan():
    full = KernelVariant(True, True, True).stages
    assert full == (
        Stage.GATHER, Stage.FORWARD_ROWS, Stage.FORWARD_COLS, Stage.QUANTIZE,
        Stage.INVERSE_COLS, Stage.INVERSE_ROWS, Stage.SCATTER
    )
    assert Stage.QUANTIZE not in KernelVariant(True, True, False).stages


def test_kernel_is_cached_per_variant():
    assert get_kernel(KernelVariant(True, False)) is get_kernel(KernelVariant(True, False))
    assert get_kernel(KernelVariant(True, False)) is not get_kernel(KernelVariant(False, True))


def test_align_grows_to_mcu():
    kernel = get_kernel(KernelVariant.from_mode('4:2:0'))
    assert kernel.align((3, 5), (10, 20)) == ((0, 0), (16, 32))
    kernel = get_kernel(KernelVariant.from_mode('4:4:4'))
    assert kernel.align((8, 16), (13, 17)) == ((8, 16), (16, 24))


def test_prepare_tables_floors_steps():
    luma, chroma = get_kernel(KernelVariant()).prepare_tables(
        np.zeros((8, 8), dtype=np.uint8), build_chroma_table(50)
    )
    assert np.all(luma == 1)
    assert luma.dtype == np.float32
    assert np.array_equal(chroma, build_chroma_table(50).astype(np.float32))


def _run_single_page(image, variant, quality=50):
    kernel = get_kernel(variant)
    out = np.zeros_like(image)
    tables = kernel.prepare_tables(build_luma_table(quality), build_chroma_table(quality))
    scratch = kernel.new_scratch()
    ctx = PageContext(image, out, (0, 0), image.shape[:2], *tables)
    kernel.run_page(scratch, ctx)
    return out, scratch


def test_flat_page_survives_quantization():
    image = np.full((16, 32, 3), 90, dtype=np.uint8)
    out, scratch = _run_single_page(image, KernelVariant(), quality=95)
    assert np.array_equal(out, image)
    assert np.all(scratch.luma[..., 8] == 0)


def test_page_writes_only_inside_limit():
    image = np.random.default_rng(0).integers(0, 256, (32, 64, 3), dtype=np.uint8)
    kernel = get_kernel(KernelVariant.from_mode('4:2:0'))
    out = np.full_like(image, 7)
    tables = kernel.prepare_tables(build_luma_table(50), build_chroma_table(50))
    ctx = PageContext(image, out, (0, 0), (20, 40), *tables)
    kernel.run_page(kernel.new_scratch(), ctx)
    assert np.all(out[20:] == 7)
    assert np.all(out[:, 40:] == 7)
    assert not np.all(out[:20, :40] == 7)


def test_scratch_reused_across_pages():
    """A second page fully overwrites what the first left in scratch."""
    rng = np.random.default_rng(1)
    first = rng.integers(0, 256, (16, 32, 3), dtype=np.uint8)
    second = rng.integers(0, 256, (16, 32, 3), dtype=np.uint8)
    variant = KernelVariant(False, False, True)
    kernel = get_kernel(variant)
    tables = kernel.prepare_tables(build_luma_table(60), build_chroma_table(60))

    scratch = kernel.new_scratch()
    sink = np.zeros_like(first)
    kernel.run_page(scratch, PageContext(first, sink, (0, 0), (16, 32), *tables))
    reused = np.zeros_like(second)
    kernel.run_page(scratch, PageContext(second, reused, (0, 0), (16, 32), *tables))

    fresh, _ = _run_single_page(second, variant, quality=60)
    assert np.array_equal(reused, fresh)


def _blocks_to_plane(blocks):
    nby, nbx = blocks.shape[:2]
    return blocks[..., :8].swapaxes(1, 2).reshape(nby * 8, nbx * 8)


def test_each_plane_quantized_with_its_own_table():
    """Luma coefficients land on the luma grid, Cb/Cr on the chroma grid."""
    from engines.dct_engine import dct2
    image = np.random.default_rng(2).integers(0, 256, (32, 64, 3), dtype=np.uint8)
    kernel = get_kernel(KernelVariant.from_mode('4:2:0'))
    luma_table = np.full((8, 8), 16, dtype=np.uint8)
    chroma_table = np.full((8, 8), 50, dtype=np.uint8)
    tables = kernel.prepare_tables(luma_table, chroma_table)
    scratch = kernel.new_scratch()
    kernel.run_page(scratch, PageContext(image, np.zeros_like(image), (0, 0), (32, 64), *tables))

    for plane, step in ((scratch.luma, 16), (scratch.cb, 50), (scratch.cr, 50)):
        steps = dct2(plane[..., :8]) / step
        assert np.allclose(steps, np.rint(steps), atol=0.01)
        assert np.any(np.rint(steps) != 0)

    luma_steps = dct2(scratch.luma[..., :8]) / 50
    assert not np.allclose(luma_steps, np.rint(luma_steps), atol=0.01)


def test_scratch_chroma_is_group_chroma():
    """Without quantization each lane's Cb/Cr is exactly its group's pair."""
    from engines.color_space import sample_groups
    image = np.random.default_rng(3).integers(0, 256, (16, 64, 3), dtype=np.uint8)
    variant = KernelVariant.from_mode('4:2:2', apply_quantization=False)
    out, scratch = _run_single_page(image, variant)

    _, cb, cr = sample_groups(image, np.arange(16), np.arange(0, 64, 2), True, False)
    assert np.array_equal(np.rint(_blocks_to_plane(scratch.cb) + 128.0), cb)
    assert np.array_equal(np.rint(_blocks_to_plane(scratch.cr) + 128.0), cr)

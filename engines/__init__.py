"""DSP engines - pure computation, no I/O."""

from .color_space import (
    rgb_to_y, rgb_to_cb, rgb_to_cr, rgb_to_ycbcr, ycbcr_to_rgb,
    sample_groups, groups_to_rgb, subsample_ycbcr, subsample_chroma
)
from .dct_engine import dct_rows, dct_cols, idct_rows, idct_cols, dct2, idct2
from .quantizer import build_luma_table, build_chroma_table, quantize_dequantize
from .block_processor import KernelVariant, Stage, TileKernel, get_kernel
from .block_setup import partition_samples
from .tile_driver import TileDriver
from .pipeline import build_samples, distort_batch, distort_image

__all__ = [
    'rgb_to_y',
    'rgb_to_cb',
    'rgb_to_cr',
    'rgb_to_ycbcr',
    'ycbcr_to_rgb',
    'sample_groups',
    'groups_to_rgb',
    'subsample_ycbcr',
    'subsample_chroma',
    'dct_rows',
    'dct_cols',
    'idct_rows',
    'idct_cols',
    'dct2',
    'idct2',
    'build_luma_table',
    'build_chroma_table',
    'quantize_dequantize',
    'KernelVariant',
    'Stage',
    'TileKernel',
    'get_kernel',
    'partition_samples',
    'TileDriver',
    'build_samples',
    'distort_batch',
    'distort_image',
]

"""Shared utilities."""

from .constants import JPEG_LUMA_Q50, JPEG_CHROMA_Q50, SUBSAMPLING_MODES
from .metrics import compute_psnr_ssim, luma, Timer
from .test_images import (
    generate_flat, generate_column_edge, generate_colored_checkerboard, generate_chroma_stripes
)
from .image_io import load_image, save_image

__all__ = [
    'JPEG_LUMA_Q50',
    'JPEG_CHROMA_Q50',
    'SUBSAMPLING_MODES',
    'compute_psnr_ssim',
    'luma',
    'Timer',
    'generate_flat',
    'generate_column_edge',
    'generate_colored_checkerboard',
    'generate_chroma_stripes',
    'load_image',
    'save_image',
]

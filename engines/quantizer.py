"""Quantization tables and coefficient quantization."""

from functools import lru_cache

import numpy as np
from utils.constants import JPEG_LUMA_Q50, JPEG_CHROMA_Q50


def clamp_quality(quality: int) -> int:
    """Coerce quality into the supported 1-99 range."""
    return int(min(max(int(quality), 1), 99))


def quality_scale(quality: int) -> float:
    """Annex K scale factor for a (clamped) quality."""
    quality = clamp_quality(quality)
    if quality < 50:
        return 50.0 / quality
    return 2.0 - 2.0 * quality / 100.0


def scale_quant_matrix(base_matrix: np.ndarray, quality: int) -> np.ndarray:
    """Scale a base table by the quality factor, saturated to [1, 255]."""
    Q = np.rint(base_matrix * quality_scale(quality))
    return np.clip(Q, 1, 255).astype(np.uint8)


@lru_cache(maxsize=None)
def _cached_table(kind: str, quality: int) -> np.ndarray:
    base = JPEG_LUMA_Q50 if kind == 'luma' else JPEG_CHROMA_Q50
    table = scale_quant_matrix(base, quality)
    table.setflags(write=False)
    return table


def build_luma_table(quality: int) -> np.ndarray:
    """8x8 luma quantization table for quality (clamped to 1-99)."""
    return _cached_table('luma', clamp_quality(quality))


def build_chroma_table(quality: int) -> np.ndarray:
    """8x8 chroma quantization table for quality (clamped to 1-99)."""
    return _cached_table('chroma', clamp_quality(quality))


def quantize_dequantize(coeffs: np.ndarray, Q_matrix: np.ndarray) -> np.ndarray:
    """Snap coefficients to the quantization grid.

    ``coeffs`` has the 8x8 block in its last two axes; the table is broadcast
    over every leading axis. Steps below 1 are treated as 1.
    """
    step = np.maximum(Q_matrix.astype(coeffs.dtype), 1)
    return np.rint(coeffs / step) * step

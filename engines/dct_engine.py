"""8-point DCT primitive applied along one axis of 8x8 blocks."""

import numpy as np
from scipy.fft import dct, idct

from utils.constants import BLOCK_SIZE


def dct_rows(scratch: np.ndarray) -> None:
    """Forward 1-D DCT-II along every row of every block, in place.

    ``scratch`` holds blocks in its last two axes; padding columns past
    ``BLOCK_SIZE`` are left alone.
    """
    view = scratch[..., :BLOCK_SIZE, :BLOCK_SIZE]
    view[...] = dct(view, type=2, norm='ortho', axis=-1)


def dct_cols(scratch: np.ndarray) -> None:
    """Forward 1-D DCT-II along every column of every block, in place."""
    view = scratch[..., :BLOCK_SIZE, :BLOCK_SIZE]
    view[...] = dct(view, type=2, norm='ortho', axis=-2)


def idct_rows(scratch: np.ndarray) -> None:
    """Inverse 1-D DCT along every row of every block, in place."""
    view = scratch[..., :BLOCK_SIZE, :BLOCK_SIZE]
    view[...] = idct(view, type=2, norm='ortho', axis=-1)


def idct_cols(scratch: np.ndarray) -> None:
    """Inverse 1-D DCT along every column of every block, in place."""
    view = scratch[..., :BLOCK_SIZE, :BLOCK_SIZE]
    view[...] = idct(view, type=2, norm='ortho', axis=-2)


def dct2(block: np.ndarray) -> np.ndarray:
    """2D DCT-II of an 8x8 block as a row pass followed by a column pass."""
    out = np.array(block, dtype=np.float64)
    dct_rows(out)
    dct_cols(out)
    return out


def idct2(coeffs: np.ndarray) -> np.ndarray:
    """2D inverse DCT as a column pass followed by a row pass."""
    out = np.array(coeffs, dtype=np.float64)
    idct_cols(out)
    idct_rows(out)
    return out

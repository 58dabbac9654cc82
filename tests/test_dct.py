"""Tests for the separable DCT primitive."""

import numpy as np
from scipy.fft import dctn
from engines.dct_engine import dct_rows, dct_cols, idct_rows, idct_cols, dct2, idct2
from utils.constants import BLOCK_SIZE, SCRATCH_PITCH


def test_two_pass_matches_2d_dct():
    """Row pass + column pass equals a true 2D DCT-II."""
    block = np.random.default_rng(0).random((8, 8)) * 255 - 128
    assert np.allclose(dct2(block), dctn(block, type=2, norm='ortho'), atol=1e-9)


def test_dct_idct_invertibility():
    """DCT/IDCT should be perfectly invertible."""
    block = np.random.default_rng(1).random((8, 8)) * 255
    shifted = block - 128.0
    recovered = idct2(dct2(shifted)) + 128.0
    assert np.allclose(block, recovered, atol=1e-10)


def test_energy_preservation():
    """Parseval's theorem: sum(block^2) == sum(dct^2) for ortho norm."""
    shifted = np.random.default_rng(2).random((8, 8)) * 255 - 128.0
    dct_block = dct2(shifted)
    assert np.isclose(np.sum(shifted ** 2), np.sum(dct_block ** 2), rtol=1e-10)


def test_constant_block_dct():
    """Constant block should have only DC coefficient."""
    dct_block = dct2(np.full((8, 8), 72.0))
    assert np.isclose(dct_block[0, 0], 72.0 * 8)
    assert np.allclose(dct_block.ravel()[1:], 0, atol=1e-10)


def test_padded_scratch_in_place():
    """Passes work in place on padded scratch and leave the pad column alone."""
    rng = np.random.default_rng(3)
    scratch = np.zeros((2, 3, BLOCK_SIZE, SCRATCH_PITCH), dtype=np.float32)
    scratch[..., :BLOCK_SIZE] = rng.random((2, 3, 8, 8)) * 255 - 128
    scratch[..., BLOCK_SIZE] = 42.0
    original = scratch[..., :BLOCK_SIZE].copy()

    dct_rows(scratch)
    dct_cols(scratch)
    expected = dctn(original.astype(np.float64), type=2, norm='ortho', axes=(-2, -1))
    assert np.allclose(scratch[..., :BLOCK_SIZE], expected, atol=1e-3)

    idct_cols(scratch)
    idct_rows(scratch)
    assert np.allclose(scratch[..., :BLOCK_SIZE], original, atol=1e-3)
    assert np.all(scratch[..., BLOCK_SIZE] == 42.0)

"""Shared constants: JPEG Annex K tables and tile geometry."""

import numpy as np

BLOCK_SIZE = 8

# Scratch rows are padded by one column so column passes do not alias rows.
SCRATCH_PITCH = BLOCK_SIZE + 1

# Lane grid of one tile invocation, one lane per chroma group.
LANES_Y = 16
LANES_X = 32

# ITU-T T.81 Annex K, Table K.1
JPEG_LUMA_Q50 = np.array([
    [16, 11, 10, 16, 24, 40, 51, 61],
    [12, 12, 14, 19, 26, 58, 60, 55],
    [14, 13, 16, 24, 40, 57, 69, 56],
    [14, 17, 22, 29, 51, 87, 80, 62],
    [18, 22, 37, 56, 68, 109, 103, 77],
    [24, 35, 55, 64, 81, 104, 113, 92],
    [49, 64, 78, 87, 103, 121, 120, 101],
    [72, 92, 95, 98, 112, 100, 103, 99],
], dtype=np.float64)

# ITU-T T.81 Annex K, Table K.2
JPEG_CHROMA_Q50 = np.array([
    [17, 18, 24, 47, 99, 99, 99, 99],
    [18, 21, 26, 66, 99, 99, 99, 99],
    [24, 26, 56, 99, 99, 99, 99, 99],
    [47, 66, 99, 99, 99, 99, 99, 99],
    [99, 99, 99, 99, 99, 99, 99, 99],
    [99, 99, 99, 99, 99, 99, 99, 99],
    [99, 99, 99, 99, 99, 99, 99, 99],
    [99, 99, 99, 99, 99, 99, 99, 99],
], dtype=np.float64)

SUBSAMPLING_MODES = {
    '4:4:4': (False, False),
    '4:2:2': (True, False),
    '4:4:0': (False, True),
    '4:2:0': (True, True),
}

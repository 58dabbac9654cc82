"""Color space conversion and chroma subsampling emulation.

All conversions round to nearest and saturate to the 8-bit range, so a
forward/inverse pair reproduces its input to within one level per channel.
"""

import numpy as np
from typing import Tuple


def saturate(values: np.ndarray) -> np.ndarray:
    """Round to nearest and clamp to [0, 255] (still floating point)."""
    return np.clip(np.rint(values), 0.0, 255.0)


def rgb_to_y(r: np.ndarray, g: np.ndarray, b: np.ndarray) -> np.ndarray:
    return saturate(0.299 * r + 0.587 * g + 0.114 * b)


def rgb_to_cb(r: np.ndarray, g: np.ndarray, b: np.ndarray) -> np.ndarray:
    return saturate(-0.16874 * r - 0.33126 * g + 0.5 * b + 128.0)


def rgb_to_cr(r: np.ndarray, g: np.ndarray, b: np.ndarray) -> np.ndarray:
    return saturate(0.5 * r - 0.41869 * g - 0.08131 * b + 128.0)


def ycbcr_to_rgb_planes(
    y: np.ndarray,
    cb: np.ndarray,
    cr: np.ndarray
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Inverse BT.601 transform; chroma broadcasts against luma."""
    cb = cb - 128.0
    cr = cr - 128.0
    r = saturate(y + 1.402 * cr)
    g = saturate(y - 0.34414 * cb - 0.71414 * cr)
    b = saturate(y + 1.772 * cb)
    return r, g, b


def rgb_to_ycbcr(rgb: np.ndarray) -> np.ndarray:
    """RGB to YCbCr using ITU-R BT.601 (full range)."""
    rgb = rgb.astype(np.float64)
    R, G, B = rgb[:, :, 0], rgb[:, :, 1], rgb[:, :, 2]
    return np.stack([rgb_to_y(R, G, B), rgb_to_cb(R, G, B), rgb_to_cr(R, G, B)], axis=-1)


def ycbcr_to_rgb(ycbcr: np.ndarray) -> np.ndarray:
    """YCbCr to RGB using ITU-R BT.601, as uint8."""
    ycbcr = ycbcr.astype(np.float64)
    rgb = ycbcr_to_rgb_planes(ycbcr[:, :, 0], ycbcr[:, :, 1], ycbcr[:, :, 2])
    return np.stack(rgb, axis=-1).astype(np.uint8)


def group_shape(horz_subsample: bool, vert_subsample: bool) -> Tuple[int, int]:
    """Pixels sharing one chroma pair, as (rows, cols)."""
    return (2 if vert_subsample else 1, 2 if horz_subsample else 1)


def sample_groups(
    rgb: np.ndarray,
    anchor_ys: np.ndarray,
    anchor_xs: np.ndarray,
    horz_subsample: bool,
    vert_subsample: bool
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Sample the pixel groups anchored at the given rows/columns.

    Reads outside the image clamp to the nearest edge pixel. Returns per-pixel
    luma of shape ``(len(anchor_ys), len(anchor_xs), gy, gx)`` and one Cb and
    one Cr per group, derived from the rounded mean RGB of the group.
    """
    h, w = rgb.shape[:2]
    gy, gx = group_shape(horz_subsample, vert_subsample)
    ys = np.clip(np.asarray(anchor_ys)[:, None] + np.arange(gy), 0, h - 1)
    xs = np.clip(np.asarray(anchor_xs)[:, None] + np.arange(gx), 0, w - 1)

    pixels = rgb[ys[:, None, :, None], xs[None, :, None, :]].astype(np.float64)
    R, G, B = pixels[..., 0], pixels[..., 1], pixels[..., 2]
    luma = rgb_to_y(R, G, B)

    if gy * gx == 1:
        mean = pixels[:, :, 0, 0]
    else:
        mean = saturate(pixels.mean(axis=(2, 3)))
    R, G, B = mean[..., 0], mean[..., 1], mean[..., 2]
    return luma, rgb_to_cb(R, G, B), rgb_to_cr(R, G, B)


def groups_to_rgb(luma: np.ndarray, cb: np.ndarray, cr: np.ndarray) -> np.ndarray:
    """Rebuild RGB for every pixel of every group from its shared chroma."""
    r, g, b = ycbcr_to_rgb_planes(luma, cb[:, :, None, None], cr[:, :, None, None])
    return np.stack([r, g, b], axis=-1).astype(np.uint8)


def groups_to_plane(groups: np.ndarray) -> np.ndarray:
    """(Ly, Lx, gy, gx, ...) group layout to a (Ly*gy, Lx*gx, ...) plane."""
    ly, lx, gy, gx = groups.shape[:4]
    return groups.swapaxes(1, 2).reshape(ly * gy, lx * gx, *groups.shape[4:])


def plane_to_groups(plane: np.ndarray, gy: int, gx: int) -> np.ndarray:
    """Inverse of :func:`groups_to_plane`."""
    h, w = plane.shape[:2]
    return plane.reshape(h // gy, gy, w // gx, gx, *plane.shape[2:]).swapaxes(1, 2)


def subsample_ycbcr(
    image_rgb: np.ndarray,
    horz_subsample: bool,
    vert_subsample: bool
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Full-resolution luma plus the shared Cb/Cr broadcast to every pixel."""
    h, w = image_rgb.shape[:2]
    gy, gx = group_shape(horz_subsample, vert_subsample)
    luma, cb, cr = sample_groups(
        image_rgb, np.arange(0, h, gy), np.arange(0, w, gx),
        horz_subsample, vert_subsample
    )
    spread = np.ones((1, 1, gy, gx), dtype=cb.dtype)
    cb_full = groups_to_plane(cb[:, :, None, None] * spread)[:h, :w]
    cr_full = groups_to_plane(cr[:, :, None, None] * spread)[:h, :w]
    return groups_to_plane(luma)[:h, :w], cb_full, cr_full


def subsample_chroma(
    image_rgb: np.ndarray,
    horz_subsample: bool,
    vert_subsample: bool
) -> np.ndarray:
    """Chroma-subsampling-only distortion of a whole image (no DCT)."""
    h, w = image_rgb.shape[:2]
    gy, gx = group_shape(horz_subsample, vert_subsample)
    luma, cb, cr = sample_groups(
        image_rgb, np.arange(0, h, gy), np.arange(0, w, gx),
        horz_subsample, vert_subsample
    )
    return groups_to_plane(groups_to_rgb(luma, cb, cr))[:h, :w]

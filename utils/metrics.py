"""Metrics: PSNR, SSIM and wall-clock timing."""

import time
import numpy as np
from skimage.metrics import peak_signal_noise_ratio, structural_similarity
from typing import Dict


def luma(rgb: np.ndarray) -> np.ndarray:
    """BT.601 luma of an RGB image, as float."""
    rgb = rgb.astype(np.float64)
    return 0.299 * rgb[:, :, 0] + 0.587 * rgb[:, :, 1] + 0.114 * rgb[:, :, 2]


def compute_psnr_ssim(original_rgb: np.ndarray, distorted_rgb: np.ndarray) -> Dict[str, float]:
    """Compute PSNR and SSIM on RGB and Y channel."""
    psnr_rgb = peak_signal_noise_ratio(original_rgb, distorted_rgb, data_range=255)
    ssim_rgb = structural_similarity(
        original_rgb, distorted_rgb, channel_axis=2, data_range=255
    )
    
    original_y = luma(original_rgb)
    distorted_y = luma(distorted_rgb)
    
    psnr_y = peak_signal_noise_ratio(original_y, distorted_y, data_range=255)
    ssim_y = structural_similarity(original_y, distorted_y, data_range=255)
    
    return {
        'psnr_rgb': float(psnr_rgb),
        'ssim_rgb': float(ssim_rgb),
        'psnr_y': float(psnr_y),
        'ssim_y': float(ssim_y)
    }


class Timer:
    """Wall-clock timer for a single call."""
    
    def __init__(self):
        self.elapsed_ms = 0.0
    
    def measure(self, func, *args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        self.elapsed_ms = (time.perf_counter() - start) * 1000.0
        return result

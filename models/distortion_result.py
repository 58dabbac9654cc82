"""Distortion result with metrics."""

from dataclasses import dataclass
import numpy as np


@dataclass
class DistortionResult:
    """Output of a single-image distortion run."""
    
    original_image: np.ndarray
    distorted_image: np.ndarray
    
    # Quality metrics
    psnr_y: float
    ssim_y: float
    psnr_rgb: float
    ssim_rgb: float
    
    # Runtime
    elapsed_ms: float
    
    quality: int = 50
    subsampling_mode: str = '4:2:0'

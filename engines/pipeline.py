"""Batch distortion pipeline: descriptors, partitioning and dispatch."""

import logging
from typing import Dict, List, Optional, Sequence, Union

import numpy as np

from models.distortion_params import DistortionParams
from models.distortion_result import DistortionResult
from models.sample_desc import SampleDesc
from engines.block_processor import KernelVariant
from engines.block_setup import partition_samples
from engines.quantizer import build_luma_table, build_chroma_table
from engines.tile_driver import TileDriver
from utils.metrics import compute_psnr_ssim, Timer

logger = logging.getLogger(__name__)


def _check_image(image: np.ndarray) -> np.ndarray:
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected HxWx3 RGB image, got shape {image.shape}")
    if image.dtype != np.uint8:
        raise ValueError(f"Expected uint8 image, got {image.dtype}")
    return image


def variant_for(params: DistortionParams) -> KernelVariant:
    horz, vert = params.subsampling
    return KernelVariant(horz, vert, params.apply_quantization)


def build_samples(
    images: Sequence[np.ndarray],
    outputs: Sequence[np.ndarray],
    qualities: Sequence[int]
) -> List[SampleDesc]:
    """Sample descriptors with quantization tables for each quality."""
    return [
        SampleDesc.from_arrays(image, output, build_luma_table(q), build_chroma_table(q))
        for image, output, q in zip(images, outputs, qualities)
    ]


def distort_batch(
    images: Sequence[np.ndarray],
    params: Union[DistortionParams, Sequence[DistortionParams]],
    max_workers: Optional[int] = None
) -> List[np.ndarray]:
    """Apply JPEG-like distortion to every image of a batch.

    ``params`` is either shared by the batch or given per image. Images with
    the same subsampling/quantization settings are launched together.
    """
    images = [_check_image(image) for image in images]
    if isinstance(params, DistortionParams):
        params = [params] * len(images)
    if len(params) != len(images):
        raise ValueError(f"Got {len(params)} params for {len(images)} images")

    outputs = [np.zeros_like(image) for image in images]

    launches: Dict[KernelVariant, List[int]] = {}
    for idx, p in enumerate(params):
        launches.setdefault(variant_for(p), []).append(idx)

    driver = TileDriver(max_workers)
    for variant, indices in launches.items():
        samples = build_samples(
            [images[i] for i in indices],
            [outputs[i] for i in indices],
            [params[i].quality for i in indices]
        )
        blocks = partition_samples([images[i].shape[:2] for i in indices], variant)
        logger.debug("Variant %s: %d samples, %d tiles", variant, len(samples), len(blocks))
        driver.run(samples, blocks, variant)

    return outputs


def distort_image(
    image_rgb: np.ndarray,
    params: DistortionParams,
    max_workers: Optional[int] = None
) -> DistortionResult:
    """Distort a single image and measure the damage."""
    timer = Timer()
    [distorted] = timer.measure(distort_batch, [image_rgb], params, max_workers)
    metrics = compute_psnr_ssim(image_rgb, distorted)

    return DistortionResult(
        original_image=image_rgb,
        distorted_image=distorted,
        psnr_y=metrics['psnr_y'],
        ssim_y=metrics['ssim_y'],
        psnr_rgb=metrics['psnr_rgb'],
        ssim_rgb=metrics['ssim_rgb'],
        elapsed_ms=timer.elapsed_ms,
        quality=params.quality,
        subsampling_mode=params.subsampling_mode
    )

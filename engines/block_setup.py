"""Partition a batch of images into tile descriptors."""

from typing import List, Optional, Sequence, Tuple

from engines.block_processor import KernelVariant
from models.block_desc import BlockDesc


def partition_samples(
    shapes: Sequence[Tuple[int, int]],
    variant: KernelVariant,
    tile_shape: Optional[Tuple[int, int]] = None
) -> List[BlockDesc]:
    """Split every (height, width) into non-overlapping MCU-aligned tiles.

    Tiles default to one page of the kernel's lane grid. Edge tiles are
    clipped to the image; the driver grows them back to whole MCUs.
    """
    my, mx = variant.mcu_shape
    th, tw = tile_shape if tile_shape is not None else variant.page_shape
    if th <= 0 or tw <= 0 or th % my or tw % mx:
        raise ValueError(f"Tile shape {(th, tw)} must be a positive multiple of {(my, mx)}")

    blocks = []
    for sample_idx, (h, w) in enumerate(shapes):
        for i in range(0, h, th):
            for j in range(0, w, tw):
                blocks.append(BlockDesc(sample_idx, (i, j), (min(i + th, h), min(j + tw, w))))
    return blocks

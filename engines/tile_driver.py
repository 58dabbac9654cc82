"""Tile driver: runs the tile kernel for every block descriptor."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence

from engines.block_processor import KernelVariant, PageContext, TileKernel, get_kernel
from models.block_desc import BlockDesc
from models.sample_desc import SampleDesc

logger = logging.getLogger(__name__)


def run_tile(kernel: TileKernel, sample: SampleDesc, block: BlockDesc) -> None:
    """Process one tile: every page covering its MCU-aligned region."""
    src = sample.input_view()
    dst = sample.output_view()
    (y0, x0), (y1, x1) = kernel.align(block.start, block.end)
    limit = (min(y1, sample.height), min(x1, sample.width))
    luma_table, chroma_table = kernel.prepare_tables(sample.luma_table, sample.chroma_table)

    scratch = kernel.new_scratch()
    ph, pw = kernel.page_shape
    for py in range(y0, y1, ph):
        for px in range(x0, x1, pw):
            ctx = PageContext(src, dst, (py, px), limit, luma_table, chroma_table)
            kernel.run_page(scratch, ctx)


class TileDriver:
    """Dispatches tiles, optionally across a thread pool.

    Tiles are independent and finish in no particular order. Each tile owns
    its scratch; callers must not hand out tiles whose output regions overlap.
    """

    def __init__(self, max_workers: Optional[int] = None):
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.max_workers = max_workers

    def run(
        self,
        samples: Sequence[SampleDesc],
        blocks: Sequence[BlockDesc],
        variant: KernelVariant
    ) -> None:
        kernel = get_kernel(variant)
        logger.debug("Launching %d tiles over %d samples (%s)", len(blocks), len(samples), variant)

        if self.max_workers == 1 or len(blocks) <= 1:
            for block in blocks:
                run_tile(kernel, samples[block.sample_idx], block)
            return

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = [
                pool.submit(run_tile, kernel, samples[block.sample_idx], block)
                for block in blocks
            ]
            for future in futures:
                future.result()

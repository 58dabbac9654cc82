"""Block transform engine: staged DCT/quantization over one tile page.

A tile is a grid of ``LANES_Y x LANES_X`` lanes, one lane per chroma group.
Each page covers the luma footprint of that lane grid and is pushed through a
fixed sequence of stages. Every stage is one vectorized operation over all
lanes of the page, so a stage only starts once the previous one has finished
writing scratch.
"""

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import NamedTuple, Tuple

import numpy as np

from engines.color_space import (
    group_shape, sample_groups, groups_to_rgb, groups_to_plane, plane_to_groups, saturate
)
from engines.dct_engine import dct_rows, dct_cols, idct_rows, idct_cols
from engines.quantizer import quantize_dequantize
from utils.constants import BLOCK_SIZE, SCRATCH_PITCH, LANES_Y, LANES_X, SUBSAMPLING_MODES


class Stage(Enum):
    GATHER = 'gather'
    FORWARD_ROWS = 'forward_rows'
    FORWARD_COLS = 'forward_cols'
    QUANTIZE = 'quantize'
    INVERSE_COLS = 'inverse_cols'
    INVERSE_ROWS = 'inverse_rows'
    SCATTER = 'scatter'


@dataclass(frozen=True)
class KernelVariant:
    """Subsampling/quantization specialization of the tile kernel."""

    horz_subsample: bool = False
    vert_subsample: bool = False
    apply_quantization: bool = True

    @classmethod
    def from_mode(cls, mode: str, apply_quantization: bool = True) -> 'KernelVariant':
        if mode not in SUBSAMPLING_MODES:
            raise ValueError(f"Unknown subsampling mode: {mode}")
        horz, vert = SUBSAMPLING_MODES[mode]
        return cls(horz, vert, apply_quantization)

    @property
    def group_shape(self) -> Tuple[int, int]:
        return group_shape(self.horz_subsample, self.vert_subsample)

    @property
    def mcu_shape(self) -> Tuple[int, int]:
        """Smallest luma area holding whole luma and chroma blocks."""
        gy, gx = self.group_shape
        return BLOCK_SIZE * gy, BLOCK_SIZE * gx

    @property
    def page_shape(self) -> Tuple[int, int]:
        """Luma footprint of one page of the lane grid."""
        gy, gx = self.group_shape
        return LANES_Y * gy, LANES_X * gx

    @property
    def stages(self) -> Tuple[Stage, ...]:
        if self.apply_quantization:
            return tuple(Stage)
        return tuple(s for s in Stage if s is not Stage.QUANTIZE)


@dataclass
class TileScratch:
    """Padded per-plane block scratch owned by a single tile invocation."""

    luma: np.ndarray
    cb: np.ndarray
    cr: np.ndarray

    def planes(self):
        return self.luma, self.cb, self.cr


class PageContext(NamedTuple):
    src: np.ndarray
    dst: np.ndarray
    origin: Tuple[int, int]
    limit: Tuple[int, int]
    luma_table: np.ndarray
    chroma_table: np.ndarray


def _block_index(height: int, width: int):
    """Scratch index (block row, block col, row, col) for every plane pixel."""
    py = np.arange(height)[:, None]
    px = np.arange(width)[None, :]
    return (py // BLOCK_SIZE, px // BLOCK_SIZE, py % BLOCK_SIZE, px % BLOCK_SIZE)


class TileKernel:
    """Static geometry and stage implementations for one KernelVariant."""

    def __init__(self, variant: KernelVariant):
        self.variant = variant
        gy, gx = variant.group_shape
        self.page_shape = variant.page_shape
        self.luma_blocks = (self.page_shape[0] // BLOCK_SIZE, self.page_shape[1] // BLOCK_SIZE)
        self.chroma_blocks = (LANES_Y // BLOCK_SIZE, LANES_X // BLOCK_SIZE)

        # Lane offsets inside a page and each lane's slot in its block
        self.lane_ys = np.arange(LANES_Y) * gy
        self.lane_xs = np.arange(LANES_X) * gx
        self._luma_index = _block_index(*self.page_shape)
        self._chroma_index = _block_index(LANES_Y, LANES_X)

        self._stage_fns = {
            Stage.GATHER: self._gather,
            Stage.FORWARD_ROWS: self._forward_rows,
            Stage.FORWARD_COLS: self._forward_cols,
            Stage.QUANTIZE: self._quantize,
            Stage.INVERSE_COLS: self._inverse_cols,
            Stage.INVERSE_ROWS: self._inverse_rows,
            Stage.SCATTER: self._scatter,
        }
        self.stages = variant.stages

    def new_scratch(self) -> TileScratch:
        def blocks(shape):
            return np.zeros((*shape, BLOCK_SIZE, SCRATCH_PITCH), dtype=np.float32)
        return TileScratch(blocks(self.luma_blocks), blocks(self.chroma_blocks), blocks(self.chroma_blocks))

    def align(self, start: Tuple[int, int], end: Tuple[int, int]):
        """Grow a region outward to whole MCUs."""
        my, mx = self.variant.mcu_shape
        y0 = start[0] // my * my
        x0 = start[1] // mx * mx
        y1 = -(-end[0] // my) * my
        x1 = -(-end[1] // mx) * mx
        return (y0, x0), (y1, x1)

    @staticmethod
    def prepare_tables(luma_table: np.ndarray, chroma_table: np.ndarray):
        """Float copies of the tables with steps floored at 1."""
        return (np.maximum(luma_table, 1).astype(np.float32),
                np.maximum(chroma_table, 1).astype(np.float32))

    def run_page(self, scratch: TileScratch, ctx: PageContext) -> None:
        for stage in self.stages:
            self._stage_fns[stage](scratch, ctx)

    def _gather(self, scratch: TileScratch, ctx: PageContext) -> None:
        y0, x0 = ctx.origin
        luma, cb, cr = sample_groups(
            ctx.src, y0 + self.lane_ys, x0 + self.lane_xs,
            self.variant.horz_subsample, self.variant.vert_subsample
        )
        scratch.luma[self._luma_index] = groups_to_plane(luma) - 128.0
        scratch.cb[self._chroma_index] = cb - 128.0
        scratch.cr[self._chroma_index] = cr - 128.0

    def _forward_rows(self, scratch: TileScratch, ctx: PageContext) -> None:
        for plane in scratch.planes():
            dct_rows(plane)

    def _forward_cols(self, scratch: TileScratch, ctx: PageContext) -> None:
        for plane in scratch.planes():
            dct_cols(plane)

    def _quantize(self, scratch: TileScratch, ctx: PageContext) -> None:
        n = BLOCK_SIZE
        scratch.luma[..., :n] = quantize_dequantize(scratch.luma[..., :n], ctx.luma_table)
        scratch.cb[..., :n] = quantize_dequantize(scratch.cb[..., :n], ctx.chroma_table)
        scratch.cr[..., :n] = quantize_dequantize(scratch.cr[..., :n], ctx.chroma_table)

    def _inverse_cols(self, scratch: TileScratch, ctx: PageContext) -> None:
        for plane in scratch.planes():
            idct_cols(plane)

    def _inverse_rows(self, scratch: TileScratch, ctx: PageContext) -> None:
        for plane in scratch.planes():
            idct_rows(plane)

    def _scatter(self, scratch: TileScratch, ctx: PageContext) -> None:
        y0, x0 = ctx.origin
        rows = min(self.page_shape[0], ctx.limit[0] - y0)
        cols = min(self.page_shape[1], ctx.limit[1] - x0)
        if rows <= 0 or cols <= 0:
            return

        gy, gx = self.variant.group_shape
        luma = saturate(scratch.luma[self._luma_index] + 128.0)
        cb = saturate(scratch.cb[self._chroma_index] + 128.0)
        cr = saturate(scratch.cr[self._chroma_index] + 128.0)
        rgb = groups_to_plane(groups_to_rgb(plane_to_groups(luma, gy, gx), cb, cr))
        ctx.dst[y0:y0 + rows, x0:x0 + cols] = rgb[:rows, :cols]


@lru_cache(maxsize=None)
def get_kernel(variant: KernelVariant) -> TileKernel:
    """Kernel specialization for a variant, built once."""
    return TileKernel(variant)

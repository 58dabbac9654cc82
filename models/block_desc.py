"""Tile descriptor produced by the block partitioner."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class BlockDesc:
    """Half-open pixel region ``[start, end)`` of one sample, as (y, x)."""
    
    sample_idx: int
    start: Tuple[int, int]
    end: Tuple[int, int]
    

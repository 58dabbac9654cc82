"""Distortion parameters."""

from dataclasses import dataclass
from typing import Literal, Tuple

from utils.constants import SUBSAMPLING_MODES


@dataclass(frozen=True)
class DistortionParams:
    """JPEG-like distortion parameters for one sample."""
    
    quality: int = 50
    subsampling_mode: Literal['4:4:4', '4:2:2', '4:4:0', '4:2:0'] = '4:2:0'
    apply_quantization: bool = True
    
    def __post_init__(self):
        if not (1 <= self.quality <= 100):
            raise ValueError(f"Quality must be 1-100, got {self.quality}")
        if self.subsampling_mode not in SUBSAMPLING_MODES:
            raise ValueError(
                f"Subsampling mode must be one of {sorted(SUBSAMPLING_MODES)}, "
                f"got {self.subsampling_mode}"
            )
    
    @property
    def subsampling(self) -> Tuple[bool, bool]:
        """(horizontal, vertical) subsampling flags."""
        return SUBSAMPLING_MODES[self.subsampling_mode]

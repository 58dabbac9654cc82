"""Per-sample descriptor: strided pixel buffers and quantization tables."""

from dataclasses import dataclass

import numpy as np
from numpy.lib.stride_tricks import as_strided


@dataclass(frozen=True)
class SampleDesc:
    """One image of a batch.

    ``input`` and ``output`` are flat uint8 buffers holding packed RGB pixels.
    Pixel ``(y, x)`` channel ``c`` lives at
    ``offset + y * row_stride + x * pixel_stride + c``.
    """

    input: np.ndarray
    output: np.ndarray
    height: int
    width: int
    row_stride: int
    luma_table: np.ndarray
    chroma_table: np.ndarray
    pixel_stride: int = 3
    offset: int = 0

    @classmethod
    def from_arrays(cls, image: np.ndarray, output: np.ndarray,
                    luma_table: np.ndarray, chroma_table: np.ndarray) -> 'SampleDesc':
        """Describe contiguous HxWx3 uint8 input/output arrays."""
        if image.ndim != 3 or image.shape[2] != 3 or image.dtype != np.uint8:
            raise ValueError(f"Expected HxWx3 uint8 image, got {image.shape} {image.dtype}")
        if output.shape != image.shape or output.dtype != np.uint8:
            raise ValueError(f"Output must match input shape {image.shape}, got {output.shape}")
        if not output.flags.c_contiguous:
            raise ValueError("Output array must be C-contiguous")
        h, w = image.shape[:2]
        return cls(
            input=np.ascontiguousarray(image).reshape(-1),
            output=output.reshape(-1),
            height=h,
            width=w,
            row_stride=w * 3,
            luma_table=luma_table,
            chroma_table=chroma_table,
        )

    def _view(self, buffer: np.ndarray, writeable: bool) -> np.ndarray:
        item = buffer.itemsize
        return as_strided(
            buffer[self.offset:],
            shape=(self.height, self.width, 3),
            strides=(self.row_stride * item, self.pixel_stride * item, item),
            writeable=writeable,
        )

    def input_view(self) -> np.ndarray:
        """Read-only HxWx3 view over the input buffer."""
        return self._view(self.input, writeable=False)

    def output_view(self) -> np.ndarray:
        """Writable HxWx3 view over the output buffer."""
        return self._view(self.output, writeable=True)

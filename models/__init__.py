"""Data models for distortion parameters, descriptors and results."""

from .distortion_params import DistortionParams
from .distortion_result import DistortionResult
from .sample_desc import SampleDesc
from .block_desc import BlockDesc

__all__ = ['DistortionParams', 'DistortionResult', 'SampleDesc', 'BlockDesc']

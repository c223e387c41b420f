"""AlphaCentroid - Numba-accelerated wavelet centroiding for mass spectrometry.

Converts profile spectra into centroid peak lists with a single-scale
Mexican-Hat continuous wavelet transform followed by local-maximum picking.
"""

__version__ = "0.1.0"

from alphacentroid import spectrum
from alphacentroid import centroiding
from alphacentroid import convenience

from alphacentroid.exceptions import (
    SampleBufferError,
    OrderViolationError,
    IndexOutOfRangeError,
    CapacityExceededError,
    LengthMismatchError,
)
from alphacentroid.methods import MSMethod

__all__ = [
    "spectrum",
    "centroiding",
    "convenience",
    "SampleBufferError",
    "OrderViolationError",
    "IndexOutOfRangeError",
    "CapacityExceededError",
    "LengthMismatchError",
    "MSMethod",
]

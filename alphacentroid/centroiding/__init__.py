"""Mexican-Hat CWT centroiding of profile mass spectra.

This module turns a profile spectrum (continuous signal) into centroids
(one data point per peak) by correlating the intensities with a dilated
Mexican-Hat wavelet and picking the maxima of the positive response.

Key Features
------------
- Wavelet tabulated once per parameter set, shared read-only
- Numba-compiled transform and peak picking
- Deterministic float32 accumulation, identical results run to run
- Configurable handling of a peak still open at the spectrum end

Examples
--------
>>> from alphacentroid.centroiding import centroid_buffer, KernelCache
>>>
>>> cache = KernelCache()
>>> centroids = centroid_buffer(
...     profile_buffer, noise_level=100.0, scale_level=2,
...     wavelet_window=1.0, kernel_cache=cache
... )
"""

from .wavelets import (
    mexican_hat,
    build_mexican_hat_table,
    MexicanHatKernel,
    KernelCache,
)

from .transform import (
    trunc_div,
    cwt_transform,
    wavelet_response,
)

from .peaks import (
    BoundaryPolicy,
    extract_peak_indices,
    extract_peaks,
)

from .params import CentroidingParams

from .method import (
    centroid_with_kernel,
    centroid_buffer,
    WaveletCentroidingMethod,
)

__all__ = [
    # Wavelet table
    "mexican_hat",
    "build_mexican_hat_table",
    "MexicanHatKernel",
    "KernelCache",
    # Transform
    "trunc_div",
    "cwt_transform",
    "wavelet_response",
    # Peak picking
    "BoundaryPolicy",
    "extract_peak_indices",
    "extract_peaks",
    # Orchestration
    "CentroidingParams",
    "centroid_with_kernel",
    "centroid_buffer",
    "WaveletCentroidingMethod",
]

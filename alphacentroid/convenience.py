"""Convenience wrapper functions for easy-to-use API.

This module lets you centroid plain numpy arrays and scans without building
buffers, kernels or method objects yourself.

For processing many scans, create one KernelCache and pass it to every call
so the wavelet table is built only once.

Examples
--------
>>> # Plain arrays in, plain arrays out
>>> mz, intensity = centroid_arrays(
...     profile_mz, profile_intensity,
...     noise_level=100.0, scale_level=2, wavelet_window=1.0
... )

>>> # Whole scans
>>> params = CentroidingParams(noise_level=100.0, scale_level=2, wavelet_window=1.0)
>>> cache = KernelCache()
>>> centroided = [centroid_scan(scan, params, cache) for scan in scans]
"""

import logging
from typing import Optional, Tuple

import numpy as np

from .centroiding.method import WaveletCentroidingMethod, centroid_buffer
from .centroiding.params import CentroidingParams
from .centroiding.peaks import BoundaryPolicy
from .centroiding.wavelets import KernelCache
from .spectrum.buffer import INTENSITY_DTYPE, MZ_DTYPE, OrderedSampleBuffer
from .spectrum.scan import MsScan

logger = logging.getLogger(__name__)


# =============================================================================
# Array Input
# =============================================================================

def buffer_from_arrays(
    mz_array: np.ndarray,
    intensity_array: np.ndarray
) -> OrderedSampleBuffer:
    """Copy m/z and intensity arrays into a new buffer.

    Parameters
    ----------
    mz_array : np.ndarray
        m/z values, sorted ascending
    intensity_array : np.ndarray
        Intensities (same length)

    Returns
    -------
    OrderedSampleBuffer
        Buffer owning copies of the arrays

    Raises
    ------
    LengthMismatchError
        If the arrays differ in length
    OrderViolationError
        If mz_array is not sorted
    """
    return OrderedSampleBuffer.from_arrays(
        np.array(mz_array, dtype=MZ_DTYPE),
        np.array(intensity_array, dtype=INTENSITY_DTYPE),
    )


def centroid_arrays(
    mz_array: np.ndarray,
    intensity_array: np.ndarray,
    noise_level: float,
    scale_level: int,
    wavelet_window: float,
    boundary_policy: BoundaryPolicy = BoundaryPolicy.LEGACY,
    kernel_cache: Optional[KernelCache] = None
) -> Tuple[np.ndarray, np.ndarray]:
    """Centroid a profile spectrum given as arrays.

    Parameters
    ----------
    mz_array : np.ndarray
        Profile m/z values, sorted ascending
    intensity_array : np.ndarray
        Profile intensities
    noise_level : float
        Peaks must have intensity strictly above this
    scale_level : int
        Wavelet dilation factor (>= 1)
    wavelet_window : float
        Window width of the wavelet
    boundary_policy : BoundaryPolicy
        Handling of a run open at the spectrum end (default: LEGACY)
    kernel_cache : KernelCache, optional
        Kernel store reused across calls

    Returns
    -------
    mz : np.ndarray (float64)
        Centroid m/z values
    intensity : np.ndarray (float32)
        Centroid intensities

    Examples
    --------
    >>> mz = np.linspace(500.0, 501.0, 100)
    >>> intensity = np.zeros(100, dtype=np.float32)
    >>> intensity[48:53] = [135.0, 606.0, 1000.0, 606.0, 135.0]
    >>> centroid_arrays(mz, intensity, 10.0, 2, 1.0)
    (array([500.50505051]), array([1000.], dtype=float32))
    """
    buffer = buffer_from_arrays(mz_array, intensity_array)
    centroids = centroid_buffer(
        buffer,
        noise_level=noise_level,
        scale_level=scale_level,
        wavelet_window=wavelet_window,
        boundary_policy=boundary_policy,
        kernel_cache=kernel_cache,
    )
    return centroids.mz_array.copy(), centroids.intensity_array.copy()


# =============================================================================
# Scan Input
# =============================================================================

def centroid_scan(
    scan: MsScan,
    params: CentroidingParams,
    kernel_cache: Optional[KernelCache] = None
) -> MsScan:
    """Centroid one scan and return the new centroided scan."""
    method = WaveletCentroidingMethod(scan, params, kernel_cache)
    result = method.execute()
    logger.debug(
        f"Scan {scan.scan_number}: {scan.n_data_points:,} -> "
        f"{result.n_data_points:,} data points"
    )
    return result

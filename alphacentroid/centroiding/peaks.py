"""Local-maximum picking on a wavelet response.

The response of the transform is zero everywhere except in runs where the
positive lobe of the wavelet overlaps a peak. Each run contributes at most
one centroid: the original sample at the position of the largest response
in the run, provided its original intensity is above the noise level.
"""

from enum import Enum

import numpy as np
from numba import njit

from ..exceptions import LengthMismatchError
from ..spectrum.buffer import OrderedSampleBuffer


class BoundaryPolicy(Enum):
    """Treatment of a run that reaches the last index of the response."""
    LEGACY = "legacy"        # Stop scanning there, the run is not reported
    INCLUSIVE = "inclusive"  # Evaluate the run like any other


@njit
def extract_peak_indices(
    response: np.ndarray,
    intensity_array: np.ndarray,
    noise_level: float,
    include_last: bool = False
) -> np.ndarray:
    """Indices of the run maxima whose original intensity exceeds noise_level.

    Parameters
    ----------
    response : np.ndarray (float32)
        Non-negative wavelet response
    intensity_array : np.ndarray (float32)
        Original intensities (same length as response)
    noise_level : float
        Strict lower bound for reported intensities
    include_last : bool
        Evaluate runs touching the last index (INCLUSIVE policy)

    Returns
    -------
    np.ndarray (int64)
        Ascending sample indices

    Notes
    -----
    With include_last=False the scan stops as soon as the index reaches
    the last position, either at the start of a run or where a run ends,
    and that run is dropped.
    """
    n = len(response)
    peaks = np.empty(n, dtype=np.int64)
    n_peaks = 0
    stop = n - 1

    ind = 0
    while ind <= stop:
        while ind <= stop and response[ind] == 0:
            ind += 1
        if ind > stop:
            break
        if ind == stop and not include_last:
            break

        peak_max = ind
        while ind <= stop and response[ind] > 0:
            # Earliest maximum wins on ties
            if response[ind] > response[peak_max]:
                peak_max = ind
            ind += 1

        if ind >= stop and not include_last:
            break

        if intensity_array[peak_max] > noise_level:
            peaks[n_peaks] = peak_max
            n_peaks += 1
        ind += 1

    return peaks[:n_peaks]


def extract_peaks(
    input_buffer: OrderedSampleBuffer,
    response: np.ndarray,
    noise_level: float,
    boundary_policy: BoundaryPolicy = BoundaryPolicy.LEGACY
) -> OrderedSampleBuffer:
    """Build the centroid buffer from a wavelet response.

    The noise level is compared in float32, the precision of the stored
    intensities.

    Raises
    ------
    LengthMismatchError
        If the response and the input buffer differ in length
    """
    if len(response) != input_buffer.size:
        raise LengthMismatchError(
            f"Response length {len(response)} does not match buffer size "
            f"{input_buffer.size}"
        )
    intensities = input_buffer.intensity_array
    indices = extract_peak_indices(
        np.ascontiguousarray(response, dtype=np.float32),
        intensities,
        np.float32(noise_level),
        boundary_policy is BoundaryPolicy.INCLUSIVE,
    )
    return OrderedSampleBuffer.from_arrays(
        input_buffer.mz_array[indices], intensities[indices]
    )

"""Wavelet centroiding of one profile scan.

Continuous Wavelet Transform (Mexican Hat) at a single scale, followed by
local-maximum detection on the transformed signal. Each maximum is mapped
back to the raw sample it came from, so centroids keep the measured m/z and
intensity of the apex sample.

Examples
--------
>>> from alphacentroid.centroiding import CentroidingParams, WaveletCentroidingMethod
>>>
>>> params = CentroidingParams(noise_level=100.0, scale_level=2, wavelet_window=1.0)
>>> method = WaveletCentroidingMethod(profile_scan, params)
>>> centroided_scan = method.execute()
>>> method.get_finished_percentage()
1.0
"""

import logging
from functools import lru_cache
from typing import Optional

from ..spectrum.buffer import OrderedSampleBuffer
from ..spectrum.scan import MsScan, SpectrumType, clone_scan
from .params import CentroidingParams
from .peaks import BoundaryPolicy, extract_peaks
from .transform import wavelet_response
from .wavelets import KernelCache, MexicanHatKernel

logger = logging.getLogger(__name__)


def centroid_with_kernel(
    input_buffer: OrderedSampleBuffer,
    kernel: MexicanHatKernel,
    noise_level: float,
    scale_level: int,
    boundary_policy: BoundaryPolicy = BoundaryPolicy.LEGACY
) -> OrderedSampleBuffer:
    """Centroid a buffer with a prebuilt kernel.

    Returns
    -------
    OrderedSampleBuffer
        New buffer with one sample per detected peak (empty for empty input)
    """
    if input_buffer.size == 0:
        return OrderedSampleBuffer()

    response = wavelet_response(input_buffer.intensity_array, kernel, scale_level)
    centroids = extract_peaks(input_buffer, response, noise_level, boundary_policy)

    logger.debug(
        f"Centroided {input_buffer.size:,} samples into {centroids.size:,} peaks "
        f"(scale={scale_level}, noise={noise_level})"
    )
    return centroids


def centroid_buffer(
    input_buffer: OrderedSampleBuffer,
    noise_level: float,
    scale_level: int,
    wavelet_window: float,
    boundary_policy: BoundaryPolicy = BoundaryPolicy.LEGACY,
    kernel_cache: Optional[KernelCache] = None
) -> OrderedSampleBuffer:
    """Centroid one spectrum.

    Args:
        input_buffer: Profile data points, sorted by m/z
        noise_level: Peaks must have intensity strictly above this
        scale_level: Wavelet dilation factor (integer >= 1)
        wavelet_window: Window width of the wavelet
        boundary_policy: Handling of a run open at the end of the spectrum
        kernel_cache: Reuse kernels across calls; a fresh kernel is built if None

    Returns:
        New buffer with the centroids in ascending m/z order

    Raises:
        ValueError: If the parameters are invalid
    """
    params = _validated_params(noise_level, scale_level, wavelet_window, boundary_policy)
    if input_buffer.size == 0:
        return OrderedSampleBuffer()
    kernel = _kernel_for(params, kernel_cache)
    return centroid_with_kernel(
        input_buffer, kernel, params.noise_level, params.scale_level, params.boundary_policy
    )


@lru_cache(maxsize=128, typed=True)
def _validated_params(
    noise_level: float,
    scale_level: int,
    wavelet_window: float,
    boundary_policy: BoundaryPolicy
) -> CentroidingParams:
    # One validation (and zero-window warning) per distinct parameter set
    return CentroidingParams(
        noise_level=noise_level,
        scale_level=scale_level,
        wavelet_window=wavelet_window,
        boundary_policy=boundary_policy,
    )


def _kernel_for(
    params: CentroidingParams,
    kernel_cache: Optional[KernelCache]
) -> MexicanHatKernel:
    if kernel_cache is not None:
        return kernel_cache.get_for_params(params)
    return MexicanHatKernel(params.wavelet_window, params.n_points, params.esl, params.esr)


class WaveletCentroidingMethod:
    """Centroid an MsScan, producing a new scan.

    The input scan is left untouched. Its metadata is cloned and the
    centroids are attached to the clone. Progress jumps from 0.0 to 1.0
    when execute() returns; there are no intermediate steps.

    Parameters
    ----------
    input_scan : MsScan
        Profile scan to centroid
    params : CentroidingParams
        Noise level, scale level, window and table geometry
    kernel_cache : KernelCache, optional
        Shared kernel store for processing many scans with one parameter set
    """

    def __init__(
        self,
        input_scan: MsScan,
        params: CentroidingParams,
        kernel_cache: Optional[KernelCache] = None
    ):
        self.input_scan = input_scan
        self.params = params
        self.kernel_cache = kernel_cache

        self._progress = 0.0
        self._result: Optional[MsScan] = None

    def execute(self) -> MsScan:
        new_scan = clone_scan(self.input_scan)
        data_points = self.input_scan.data_points

        if data_points.size == 0:
            new_scan.data_points = OrderedSampleBuffer()
        else:
            kernel = _kernel_for(self.params, self.kernel_cache)
            new_scan.data_points = centroid_with_kernel(
                data_points,
                kernel,
                self.params.noise_level,
                self.params.scale_level,
                self.params.boundary_policy,
            )
        new_scan.spectrum_type = SpectrumType.CENTROIDED

        self._result = new_scan
        self._progress = 1.0
        return new_scan

    def get_finished_percentage(self) -> float:
        return self._progress

    def get_result(self) -> Optional[MsScan]:
        return self._result

    def cancel(self) -> None:
        # Single-scan runs are too short to interrupt
        logger.debug(f"Cancel ignored for scan {self.input_scan.scan_number}")

"""Parameters for wavelet centroiding."""

import logging
import math
from dataclasses import dataclass

import numpy as np

from ..constants import WAVELET_ESL, WAVELET_ESR, WAVELET_NPOINTS
from .peaks import BoundaryPolicy
from .wavelets import KernelKey

logger = logging.getLogger(__name__)


@dataclass
class CentroidingParams:
    """Parameters for Mexican-Hat CWT centroiding.

    Noise level, scale level and window have no defaults: they depend on
    the instrument and acquisition and must be chosen per data set.
    """

    # Reported peaks must be strictly more intense than this
    noise_level: float

    # Wavelet dilation, in samples per wavelet-domain unit
    scale_level: int

    # Window width `a` of the wavelet
    wavelet_window: float

    boundary_policy: BoundaryPolicy = BoundaryPolicy.LEGACY

    # Wavelet table geometry
    n_points: int = WAVELET_NPOINTS
    esl: int = WAVELET_ESL
    esr: int = WAVELET_ESR

    def __post_init__(self):
        if isinstance(self.scale_level, bool) or not isinstance(
            self.scale_level, (int, np.integer)
        ):
            raise ValueError(f"scale_level must be an integer, got {self.scale_level!r}")
        if self.scale_level < 1:
            raise ValueError(f"scale_level must be >= 1, got {self.scale_level}")
        if not math.isfinite(self.noise_level):
            raise ValueError(f"noise_level must be finite, got {self.noise_level}")
        if not math.isfinite(self.wavelet_window):
            raise ValueError(f"wavelet_window must be finite, got {self.wavelet_window}")
        if not isinstance(self.boundary_policy, BoundaryPolicy):
            raise ValueError(f"Unknown boundary policy: {self.boundary_policy!r}")
        if self.esl >= self.esr:
            raise ValueError(
                f"Effective support must satisfy esl < esr, got [{self.esl}, {self.esr}]"
            )
        if self.n_points < self.esr - self.esl:
            raise ValueError(
                f"n_points ({self.n_points}) must be at least the support "
                f"width ({self.esr - self.esl})"
            )
        if self.wavelet_window == 0.0:
            logger.warning("wavelet_window is 0, substituting a tiny epsilon")

    def kernel_key(self) -> KernelKey:
        return (int(self.n_points), int(self.esl), int(self.esr), float(self.wavelet_window))

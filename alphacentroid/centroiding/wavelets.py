"""Tabulated Mexican-Hat wavelet.

The transform never evaluates the wavelet directly. Instead the real
Mexican-Hat mother wavelet

    psi(x) = c * (1 - x^2) * exp(-x^2 / 2),   x = (t - b) / a
    c = 2 / (sqrt(3) * pi^(1/4))

is sampled once at ``n_points`` evenly spaced positions over its effective
support [esl, esr] (translation b = 0) and the transform looks values up by
index. A :class:`MexicanHatKernel` is read-only after construction, so one
instance can serve any number of concurrent transforms.

Examples
--------
>>> from alphacentroid.centroiding import MexicanHatKernel, KernelCache
>>>
>>> kernel = MexicanHatKernel(wavelet_window=1.0)
>>> kernel.values.shape
(60000,)
>>>
>>> # Share kernels between scans processed with the same window
>>> cache = KernelCache()
>>> cache.get(1.0) is cache.get(1.0)
True
"""

import logging
import math
import threading
from typing import Dict, Tuple

import numpy as np
from numba import njit

from ..constants import (
    MEXHAT_NORM,
    TINY_WINDOW,
    WAVELET_ESL,
    WAVELET_ESR,
    WAVELET_NPOINTS,
)

logger = logging.getLogger(__name__)

KernelKey = Tuple[int, int, int, float]


@njit
def mexican_hat(x: float, a: float, b: float) -> float:
    """Real Mexican-Hat wavelet coefficient.

    Args:
        x: Position in wavelet-domain units
        a: Window width (dilation); zero is replaced by a tiny epsilon
        b: Translation

    Returns:
        psi((x - b) / a)
    """
    width = a if a != 0.0 else TINY_WINDOW
    u = (x - b) / width
    u2 = u * u
    return MEXHAT_NORM * (1.0 - u2) * math.exp(-u2 / 2)


@njit
def build_mexican_hat_table(
    n_points: int,
    esl: int,
    esr: int,
    wavelet_window: float
) -> np.ndarray:
    """Sample the wavelet at n_points positions starting at esl.

    Positions are generated by repeatedly adding the step rather than by
    multiplying the index, so the center entry is only approximately x = 0.
    """
    step = (esr - esl) / n_points
    table = np.empty(n_points, dtype=np.float64)
    x = float(esl)
    for j in range(n_points):
        table[j] = mexican_hat(x, wavelet_window, 0.0)
        x += step
    return table


class MexicanHatKernel:
    """Immutable Mexican-Hat lookup table for one parameter set.

    Parameters
    ----------
    wavelet_window : float
        Window width ``a`` of the wavelet
    n_points : int
        Number of tabulated values (default: 60000)
    esl, esr : int
        Effective support boundaries (default: -5, 5)
    """

    __slots__ = ("_values", "_n_points", "_esl", "_esr", "_wavelet_window")

    def __init__(
        self,
        wavelet_window: float,
        n_points: int = WAVELET_NPOINTS,
        esl: int = WAVELET_ESL,
        esr: int = WAVELET_ESR,
    ):
        if esl >= esr:
            raise ValueError(
                f"Effective support must satisfy esl < esr, got [{esl}, {esr}]"
            )
        if n_points < esr - esl:
            raise ValueError(
                f"n_points ({n_points}) must be at least the support width ({esr - esl})"
            )

        values = build_mexican_hat_table(
            int(n_points), int(esl), int(esr), float(wavelet_window)
        )
        values.flags.writeable = False

        self._values = values
        self._n_points = int(n_points)
        self._esl = int(esl)
        self._esr = int(esr)
        self._wavelet_window = float(wavelet_window)

    @property
    def values(self) -> np.ndarray:
        """Read-only wavelet table."""
        return self._values

    @property
    def n_points(self) -> int:
        return self._n_points

    @property
    def esl(self) -> int:
        return self._esl

    @property
    def esr(self) -> int:
        return self._esr

    @property
    def wavelet_window(self) -> float:
        return self._wavelet_window

    @property
    def density(self) -> int:
        """Table samples per wavelet-domain unit."""
        return self._n_points // (self._esr - self._esl)

    @property
    def key(self) -> KernelKey:
        return (self._n_points, self._esl, self._esr, self._wavelet_window)

    def __repr__(self) -> str:
        return (
            f"MexicanHatKernel(wavelet_window={self._wavelet_window}, "
            f"n_points={self._n_points}, esl={self._esl}, esr={self._esr})"
        )


class KernelCache:
    """Caller-owned store of kernels, one per parameter set.

    Kernels are built on first request. Building is serialized with a lock;
    the returned kernels are immutable and need no locking to read.
    """

    def __init__(self):
        self._kernels: Dict[KernelKey, MexicanHatKernel] = {}
        self._lock = threading.Lock()

    def get(
        self,
        wavelet_window: float,
        n_points: int = WAVELET_NPOINTS,
        esl: int = WAVELET_ESL,
        esr: int = WAVELET_ESR,
    ) -> MexicanHatKernel:
        key = (int(n_points), int(esl), int(esr), float(wavelet_window))
        kernel = self._kernels.get(key)
        if kernel is not None:
            return kernel

        with self._lock:
            kernel = self._kernels.get(key)
            if kernel is None:
                kernel = MexicanHatKernel(wavelet_window, n_points, esl, esr)
                self._kernels[key] = kernel
                logger.debug(f"Built wavelet kernel {kernel!r}")
        return kernel

    def get_for_params(self, params) -> MexicanHatKernel:
        """Kernel matching a CentroidingParams instance."""
        return self.get(params.wavelet_window, params.n_points, params.esl, params.esr)

    def clear(self) -> None:
        with self._lock:
            self._kernels.clear()

    def __len__(self) -> int:
        return len(self._kernels)

    def __contains__(self, key: KernelKey) -> bool:
        return key in self._kernels

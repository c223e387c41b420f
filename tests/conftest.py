"""Pytest configuration for AlphaCentroid tests.

Common fixtures for synthetic profile spectra and shared wavelet kernels.
"""

import numpy as np
import pytest


def gaussian_profile(
    centers,
    heights,
    n_samples: int = 100,
    sigma: float = 1.0,
    half_width: int = 4,
):
    """Profile spectrum with narrow Gaussian bumps on a zero baseline.

    Each bump is non-zero only within half_width samples of its center;
    everything else is exactly zero.
    """
    mz = np.linspace(500.0, 510.0, n_samples)
    intensity = np.zeros(n_samples, dtype=np.float32)
    offsets = np.arange(-half_width, half_width + 1)
    for center, height in zip(centers, heights):
        idx = center + offsets
        keep = (idx >= 0) & (idx < n_samples)
        bump = height * np.exp(-0.5 * (offsets[keep] / sigma) ** 2)
        intensity[idx[keep]] += bump.astype(np.float32)
    return mz, intensity


@pytest.fixture
def make_profile():
    """Factory for synthetic profile spectra."""
    return gaussian_profile


@pytest.fixture
def single_peak_buffer():
    """100 samples, one bump of height 1000 at sample 50."""
    from alphacentroid.convenience import buffer_from_arrays
    mz, intensity = gaussian_profile([50], [1000.0])
    return buffer_from_arrays(mz, intensity)


@pytest.fixture
def five_point_buffer():
    """Masses 1..5 with intensities 10..50."""
    from alphacentroid.spectrum import OrderedSampleBuffer
    buf = OrderedSampleBuffer()
    for mz, intensity in zip([1.0, 2.0, 3.0, 4.0, 5.0], [10.0, 20.0, 30.0, 40.0, 50.0]):
        buf.add(mz, intensity)
    return buf


@pytest.fixture(scope="session")
def default_kernel():
    """Default Mexican-Hat kernel (window 1.0, 60000 points, [-5, 5])."""
    from alphacentroid.centroiding import MexicanHatKernel
    return MexicanHatKernel(wavelet_window=1.0)


# Random seed for reproducibility
@pytest.fixture(scope="session", autouse=True)
def set_random_seed():
    """Set random seed for reproducible tests."""
    np.random.seed(42)

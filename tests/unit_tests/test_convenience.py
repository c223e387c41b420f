"""Tests for the array- and scan-level convenience wrappers."""

import numpy as np
import pytest

from alphacentroid.centroiding import CentroidingParams, KernelCache
from alphacentroid.convenience import buffer_from_arrays, centroid_arrays, centroid_scan
from alphacentroid.exceptions import LengthMismatchError, OrderViolationError
from alphacentroid.spectrum import MsScan, SpectrumType


class TestBufferFromArrays:
    """Test array ingestion."""

    def test_copies_input(self):
        mz = np.array([1.0, 2.0, 3.0])
        intensity = np.array([10.0, 20.0, 30.0])
        buf = buffer_from_arrays(mz, intensity)

        mz[0] = 99.0
        assert buf[0].mz == 1.0
        assert buf.intensity_array.dtype == np.float32

    def test_accepts_lists(self):
        buf = buffer_from_arrays([1.0, 2.0], [5, 6])
        assert buf.size == 2

    def test_unsorted(self):
        with pytest.raises(OrderViolationError):
            buffer_from_arrays([2.0, 1.0], [1.0, 1.0])

    def test_length_mismatch(self):
        with pytest.raises(LengthMismatchError):
            buffer_from_arrays([1.0, 2.0, 3.0], [1.0, 1.0])


class TestCentroidArrays:
    """Test array-in, array-out centroiding."""

    def test_single_peak(self, make_profile):
        mz, intensity = make_profile([50], [1000.0])
        out_mz, out_intensity = centroid_arrays(
            mz, intensity, noise_level=10.0, scale_level=2, wavelet_window=1.0
        )

        np.testing.assert_array_equal(out_mz, [mz[50]])
        np.testing.assert_array_equal(out_intensity, [1000.0])
        assert out_mz.dtype == np.float64
        assert out_intensity.dtype == np.float32

    def test_empty(self):
        out_mz, out_intensity = centroid_arrays(
            np.array([]), np.array([]), noise_level=10.0, scale_level=2, wavelet_window=1.0
        )
        assert len(out_mz) == 0
        assert len(out_intensity) == 0

    def test_unsorted_input(self):
        with pytest.raises(OrderViolationError):
            centroid_arrays([3.0, 2.0, 1.0], [1.0, 2.0, 3.0], 0.0, 1, 1.0)

    def test_with_cache(self, make_profile):
        cache = KernelCache()
        mz, intensity = make_profile([30, 60], [400.0, 900.0])
        out_mz, _ = centroid_arrays(mz, intensity, 10.0, 2, 1.0, kernel_cache=cache)
        assert len(out_mz) == 2
        assert len(cache) == 1


class TestCentroidScan:
    """Test the one-call scan wrapper."""

    def test_scan(self, single_peak_buffer):
        scan = MsScan(scan_number=3, rt=10.0, data_points=single_peak_buffer)
        params = CentroidingParams(noise_level=10.0, scale_level=2, wavelet_window=1.0)

        result = centroid_scan(scan, params)

        assert result.scan_number == 3
        assert result.spectrum_type is SpectrumType.CENTROIDED
        assert result.n_data_points == 1

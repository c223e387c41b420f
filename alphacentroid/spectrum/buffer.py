"""Ordered (m/z, intensity) sample buffer.

Profile and centroided spectra are both stored as two parallel numpy arrays
(float64 m/z, float32 intensity) with a logical size smaller than or equal
to the array length (the capacity). The m/z values of the valid region are
always sorted ascending; every mutating operation either keeps that
invariant or raises before touching the buffer.

Key Features
------------
- Sorted insertion with amortized capacity doubling
- Bulk replacement of the backing arrays (ownership transfer, no copy)
- Deep copies between buffers that never shrink the destination
- Numba-compiled scans for order validation, TIC and base peak lookup

Examples
--------
>>> from alphacentroid.spectrum import OrderedSampleBuffer
>>>
>>> buf = OrderedSampleBuffer()
>>> buf.add(300.0, 30.0)
>>> buf.add(100.0, 10.0)
>>> buf.add(200.0, 20.0)
>>> buf.mz_array
array([100., 200., 300.])
>>> buf.get_highest_sample()
Sample(mz=300.0, intensity=30.0)

Notes
-----
Not thread-safe. Share a buffer between threads only with external locking.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union

import numpy as np
from numba import njit

from ..constants import DEFAULT_BUFFER_CAPACITY
from ..exceptions import (
    CapacityExceededError,
    IndexOutOfRangeError,
    LengthMismatchError,
    OrderViolationError,
)

MZ_DTYPE = np.float64
INTENSITY_DTYPE = np.float32

_ORDER_MESSAGE = (
    "Setting the data point at this position would break the m/z ordering "
    "of the data points"
)


@dataclass(frozen=True)
class Sample:
    """A single (m/z, intensity) data point."""

    mz: float
    intensity: float


# =============================================================================
# Numba kernels
# =============================================================================

@njit
def first_unsorted_index(mz_array: np.ndarray, size: int) -> int:
    """Return the first i with mz[i] > mz[i+1] within size, or -1 if sorted."""
    for i in range(size - 1):
        if mz_array[i] > mz_array[i + 1]:
            return i
    return -1


@njit
def find_insert_position(mz_array: np.ndarray, size: int, new_mz: float) -> int:
    """Index of the first element with m/z strictly greater than new_mz.

    Linear scan from the front. Equal masses are inserted after the existing
    ones, so insertion order is kept for ties.
    """
    for i in range(size):
        if mz_array[i] > new_mz:
            return i
    return size


@njit
def highest_intensity_index(intensity_array: np.ndarray, size: int) -> int:
    """Index of the most intense sample (first occurrence wins), -1 if empty."""
    if size == 0:
        return -1
    max_idx = 0
    for i in range(1, size):
        if intensity_array[i] > intensity_array[max_idx]:
            max_idx = i
    return max_idx


@njit
def total_intensity(intensity_array: np.ndarray, size: int) -> float:
    """Sum intensities front to back with a float32 accumulator."""
    tic = np.float32(0.0)
    for i in range(size):
        tic = np.float32(tic + intensity_array[i])
    return tic


def _validate_order(mz_array: np.ndarray, size: int) -> None:
    bad = first_unsorted_index(mz_array, size)
    if bad >= 0:
        raise OrderViolationError(
            f"The m/z array must be sorted in ascending order "
            f"(m/z[{bad}]={mz_array[bad]} > m/z[{bad + 1}]={mz_array[bad + 1]})"
        )


# =============================================================================
# Buffer
# =============================================================================

class OrderedSampleBuffer:
    """Growable, m/z-sorted container of spectrum data points.

    Parameters
    ----------
    capacity : int
        Initial length of the backing arrays (default: 100)

    Notes
    -----
    Equality compares the valid region only (capacity is ignored) using the
    bit patterns of m/z and intensity, and the hash is built from the same
    bytes, so equal buffers always hash equal.
    """

    def __init__(self, capacity: int = DEFAULT_BUFFER_CAPACITY):
        if capacity < 0:
            raise ValueError(f"Capacity must be non-negative, got {capacity}")
        self._mz = np.zeros(capacity, dtype=MZ_DTYPE)
        self._intensity = np.zeros(capacity, dtype=INTENSITY_DTYPE)
        self._size = 0

    @classmethod
    def from_buffer(
        cls,
        source: "OrderedSampleBuffer",
        capacity: Optional[int] = None
    ) -> "OrderedSampleBuffer":
        """Create a deep copy of source with the given capacity.

        Raises
        ------
        ValueError
            If capacity is smaller than the size of source
        """
        if capacity is None:
            capacity = source.size
        if capacity < source.size:
            raise ValueError(
                "Requested capacity must be >= size of the source buffer "
                f"({capacity} < {source.size})"
            )
        buf = cls(capacity)
        buf.copy_from(source)
        return buf

    @classmethod
    def from_arrays(
        cls,
        mz_array: np.ndarray,
        intensity_array: np.ndarray,
        size: Optional[int] = None
    ) -> "OrderedSampleBuffer":
        """Create a buffer backed by the given arrays (see set_buffers)."""
        if size is None:
            size = len(mz_array)
        buf = cls(0)
        buf.set_buffers(mz_array, intensity_array, size)
        return buf

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def size(self) -> int:
        return self._size

    @property
    def capacity(self) -> int:
        return len(self._mz)

    @property
    def mz_buffer(self) -> np.ndarray:
        """Backing m/z array, including slots beyond the logical size."""
        return self._mz

    @property
    def intensity_buffer(self) -> np.ndarray:
        """Backing intensity array, including slots beyond the logical size."""
        return self._intensity

    @property
    def mz_array(self) -> np.ndarray:
        """View of the valid m/z values."""
        return self._mz[:self._size]

    @property
    def intensity_array(self) -> np.ndarray:
        """View of the valid intensity values."""
        return self._intensity[:self._size]

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Sample]:
        for i in range(self._size):
            yield Sample(float(self._mz[i]), float(self._intensity[i]))

    def __getitem__(self, index: int) -> Sample:
        i = self._normalize_index(index)
        return Sample(float(self._mz[i]), float(self._intensity[i]))

    def __setitem__(
        self,
        index: int,
        sample: Union[Sample, Tuple[float, float]]
    ) -> None:
        i = self._normalize_index(index)
        new_mz, new_intensity = _unpack(sample)
        if i > 0 and self._mz[i - 1] > new_mz:
            raise OrderViolationError(_ORDER_MESSAGE)
        if i < self._size - 1 and self._mz[i + 1] < new_mz:
            raise OrderViolationError(_ORDER_MESSAGE)
        self._mz[i] = new_mz
        self._intensity[i] = new_intensity

    def _normalize_index(self, index: int) -> int:
        i = index + self._size if index < 0 else index
        if i < 0 or i >= self._size:
            raise IndexOutOfRangeError(
                f"Index {index} out of range (buffer size is {self._size})"
            )
        return i

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def add(self, mz: float, intensity: float) -> None:
        """Insert a sample at its sorted position."""
        position = find_insert_position(self._mz, self._size, float(mz))
        self.insert(position, mz, intensity)

    def insert(self, index: int, mz: float, intensity: float) -> None:
        """Insert a sample at an explicit position.

        Raises
        ------
        IndexOutOfRangeError
            If index < 0 or index > size
        OrderViolationError
            If the sample does not fit between its neighbours
        """
        size = self._size
        if index < 0 or index > size:
            raise IndexOutOfRangeError(
                f"Cannot insert at position {index} (buffer size is {size})"
            )
        if index > 0 and self._mz[index - 1] > mz:
            raise OrderViolationError(_ORDER_MESSAGE)
        if index < size and self._mz[index] < mz:
            raise OrderViolationError(_ORDER_MESSAGE)

        if size >= len(self._mz):
            self._grow(max(len(self._mz) * 2, index * 2, 1))

        if index < size:
            self._mz[index + 1:size + 1] = self._mz[index:size]
            self._intensity[index + 1:size + 1] = self._intensity[index:size]

        self._mz[index] = mz
        self._intensity[index] = intensity
        self._size = size + 1

    def remove(self, index: int) -> Sample:
        """Remove and return the sample at index."""
        i = self._normalize_index(index)
        removed = Sample(float(self._mz[i]), float(self._intensity[i]))
        size = self._size
        if i < size - 1:
            self._mz[i:size - 1] = self._mz[i + 1:size]
            self._intensity[i:size - 1] = self._intensity[i + 1:size]
        self._size = size - 1
        return removed

    def _grow(self, new_capacity: int) -> None:
        size = self._size
        new_mz = np.zeros(new_capacity, dtype=MZ_DTYPE)
        new_mz[:size] = self._mz[:size]
        new_intensity = np.zeros(new_capacity, dtype=INTENSITY_DTYPE)
        new_intensity[:size] = self._intensity[:size]
        self._mz = new_mz
        self._intensity = new_intensity

    def set_size(self, new_size: int) -> None:
        """Change the logical size without touching the backing arrays.

        Raises
        ------
        CapacityExceededError
            If new_size is larger than the backing arrays
        OrderViolationError
            If the first new_size m/z values are not sorted
        """
        if new_size < 0:
            raise IndexOutOfRangeError(f"Size must be non-negative, got {new_size}")
        if new_size > len(self._mz):
            raise CapacityExceededError(
                "Size of the buffer cannot be larger than the length of the "
                f"m/z and intensity arrays ({new_size} > {len(self._mz)})"
            )
        _validate_order(self._mz, new_size)
        self._size = new_size

    def set_buffers(
        self,
        mz_array: np.ndarray,
        intensity_array: np.ndarray,
        new_size: int
    ) -> None:
        """Replace the backing arrays.

        Writable contiguous arrays of the right dtype (float64 m/z, float32
        intensity) are adopted by reference: the buffer takes ownership and
        the caller must not modify them afterwards. Other inputs, including
        read-only arrays such as those from np.frombuffer, are copied. The
        previous backing arrays are dropped.
        Everything is validated before the buffer is modified.

        Raises
        ------
        LengthMismatchError
            If the two arrays differ in length
        CapacityExceededError
            If new_size exceeds the array length
        OrderViolationError
            If the first new_size m/z values are not sorted
        """
        mz_array = np.require(mz_array, MZ_DTYPE, ["C", "W"])
        intensity_array = np.require(intensity_array, INTENSITY_DTYPE, ["C", "W"])
        if mz_array.ndim != 1 or intensity_array.ndim != 1:
            raise ValueError("m/z and intensity arrays must be one-dimensional")
        if len(mz_array) != len(intensity_array):
            raise LengthMismatchError(
                "The length of the m/z and intensity arrays must be equal "
                f"({len(mz_array)} != {len(intensity_array)})"
            )
        if new_size < 0:
            raise IndexOutOfRangeError(f"Size must be non-negative, got {new_size}")
        if new_size > len(mz_array):
            raise CapacityExceededError(
                "Size of the buffer cannot be larger than the length of the "
                f"m/z and intensity arrays ({new_size} > {len(mz_array)})"
            )
        _validate_order(mz_array, new_size)

        self._mz = mz_array
        self._intensity = intensity_array
        self._size = new_size

    def copy_from(self, other: "OrderedSampleBuffer") -> None:
        """Deep-copy the samples of other into this buffer."""
        n = other.size
        if len(self._mz) < n:
            self._mz = np.zeros(n, dtype=MZ_DTYPE)
            self._intensity = np.zeros(n, dtype=INTENSITY_DTYPE)
        self._mz[:n] = other.mz_array
        self._intensity[:n] = other.intensity_array
        self.set_size(n)

    def copy_to(self, other: "OrderedSampleBuffer") -> None:
        """Deep-copy the samples of this buffer into other."""
        n = self._size
        target_mz = other.mz_buffer
        target_intensity = other.intensity_buffer
        if len(target_mz) < n or len(target_intensity) < n:
            target_mz = np.zeros(n, dtype=MZ_DTYPE)
            target_intensity = np.zeros(n, dtype=INTENSITY_DTYPE)
        target_mz[:n] = self._mz[:n]
        target_intensity[:n] = self._intensity[:n]
        other.set_buffers(target_mz, target_intensity, n)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_mz_range(self) -> Optional[Tuple[float, float]]:
        """Return (lowest, highest) m/z, assuming sorted storage."""
        if self._size == 0:
            return None
        return float(self._mz[0]), float(self._mz[self._size - 1])

    def get_highest_sample_index(self) -> Optional[int]:
        if self._size == 0:
            return None
        return int(highest_intensity_index(self._intensity, self._size))

    def get_highest_sample(self) -> Optional[Sample]:
        """Return the base peak (first one on intensity ties)."""
        idx = self.get_highest_sample_index()
        if idx is None:
            return None
        return Sample(float(self._mz[idx]), float(self._intensity[idx]))

    def get_total_intensity(self) -> float:
        """Total ion current of the buffer.

        Intensities are summed in index order into a float32 accumulator,
        so the result is reproducible bit for bit for the same samples.
        """
        return float(total_intensity(self._intensity, self._size))

    def select_samples(
        self,
        mz_range: Tuple[float, float],
        intensity_range: Tuple[float, float]
    ) -> "OrderedSampleBuffer":
        """Return a new buffer with the samples inside both closed ranges."""
        mz = self.mz_array
        intensity = self.intensity_array
        mask = (
            (mz >= mz_range[0]) & (mz <= mz_range[1])
            & (intensity >= intensity_range[0]) & (intensity <= intensity_range[1])
        )
        return OrderedSampleBuffer.from_arrays(mz[mask], intensity[mask])

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderedSampleBuffer):
            return NotImplemented
        if other.size != self._size:
            return False
        return (
            np.array_equal(self.mz_array.view(np.uint64), other.mz_array.view(np.uint64))
            and np.array_equal(
                self.intensity_array.view(np.uint32),
                other.intensity_array.view(np.uint32),
            )
        )

    def __hash__(self) -> int:
        return hash((self._size, self.mz_array.tobytes(), self.intensity_array.tobytes()))

    def __repr__(self) -> str:
        points = ", ".join(
            f"{float(mz)}:{float(intensity)}"
            for mz, intensity in zip(self.mz_array, self.intensity_array)
        )
        return f"[{points}]"


def _unpack(sample: Union[Sample, Tuple[float, float]]) -> Tuple[float, float]:
    if isinstance(sample, Sample):
        return sample.mz, sample.intensity
    mz, intensity = sample
    return mz, intensity

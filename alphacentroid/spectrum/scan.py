"""Minimal MS scan shell for centroiding.

Raw-file readers populate an :class:`MsScan` with the profile data points
of one acquisition. Centroiding never modifies the input scan: it clones the
metadata into a fresh shell via :func:`clone_scan` and attaches the new data
points to the clone.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .buffer import OrderedSampleBuffer


class SpectrumType(Enum):
    """How the data points of a spectrum were recorded or processed."""
    PROFILE = "profile"          # Continuous signal
    CENTROIDED = "centroided"    # One data point per peak
    THRESHOLDED = "thresholded"  # Profile with low-intensity points removed


class Polarity(Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    UNKNOWN = "unknown"


@dataclass
class MsScan:
    """One acquisition with its metadata and data points."""

    scan_number: int
    ms_level: int = 1
    rt: Optional[float] = None  # seconds
    polarity: Polarity = Polarity.UNKNOWN
    spectrum_type: SpectrumType = SpectrumType.PROFILE
    scan_definition: str = ""
    isolation_mz: Optional[float] = None  # precursor m/z for MS2
    data_points: OrderedSampleBuffer = field(default_factory=OrderedSampleBuffer)

    @property
    def n_data_points(self) -> int:
        return self.data_points.size


def clone_scan(scan: MsScan, copy_data_points: bool = False) -> MsScan:
    """Copy all scan metadata into a new scan.

    Args:
        scan: Scan to clone
        copy_data_points: Deep-copy the data points as well; otherwise the
            clone starts with an empty buffer

    Returns:
        New MsScan sharing no storage with the input
    """
    if copy_data_points:
        data_points = OrderedSampleBuffer.from_buffer(scan.data_points)
    else:
        data_points = OrderedSampleBuffer()

    return MsScan(
        scan_number=scan.scan_number,
        ms_level=scan.ms_level,
        rt=scan.rt,
        polarity=scan.polarity,
        spectrum_type=scan.spectrum_type,
        scan_definition=scan.scan_definition,
        isolation_mz=scan.isolation_mz,
        data_points=data_points,
    )

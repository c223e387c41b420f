"""Spectrum data model: ordered sample buffers and scan shells.

Examples
--------
>>> from alphacentroid.spectrum import OrderedSampleBuffer, MsScan
>>>
>>> buf = OrderedSampleBuffer()
>>> buf.add(500.25, 1200.0)
>>> scan = MsScan(scan_number=1, rt=62.4, data_points=buf)
"""

from .buffer import (
    Sample,
    OrderedSampleBuffer,
    first_unsorted_index,
    find_insert_position,
    highest_intensity_index,
    total_intensity,
)

from .scan import (
    MsScan,
    Polarity,
    SpectrumType,
    clone_scan,
)

__all__ = [
    # Buffer
    "Sample",
    "OrderedSampleBuffer",
    "first_unsorted_index",
    "find_insert_position",
    "highest_intensity_index",
    "total_intensity",
    # Scan
    "MsScan",
    "Polarity",
    "SpectrumType",
    "clone_scan",
]

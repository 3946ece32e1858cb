"""Histogram-based helpers for binarizing grayscale images."""
from typing import Iterable, Optional, Sequence

import numpy as np


def accumulate_histogram(values, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Count 8-bit luma values into 256 buckets.

    ``values`` may be a numpy array of any shape or an iterable of ints. When
    ``out`` is given, the counts are added to it in place. Values outside
    0..255 raise ``ValueError``.
    """
    if out is None:
        out = np.zeros(256, dtype=np.int64)
    if isinstance(values, np.ndarray):
        values = values.ravel()
        if values.dtype != np.uint8 and values.size and (values.min() < 0 or values.max() > 255):
            raise ValueError(f"luma values out of range: {values.min()}..{values.max()}")
        out[:256] += np.bincount(values.astype(np.uint8), minlength=256)
    else:
        for value in values:
            if not 0 <= value <= 255:
                raise ValueError(f"luma value out of range: {value}")
            out[value] += 1
    return out


def find_threshold(histogram: Sequence[int]) -> Optional[int]:
    """Find the threshold that maximizes the between-class variance (Otsu).

    Pixels below the returned value belong to class 0, the rest to class 1.
    Returns ``None`` if every candidate leaves one class empty, i.e. the
    image is uniform.
    """
    histogram = [int(x) for x in histogram[:256]]

    # With t splitting the histogram into [0, t) and [t, 256):
    #
    #   omega0(t) = sum(histogram[:t]),   omega1(t) = sum(histogram[t:])
    #   mu0(t) = sum(h[i] * i for i < t) / omega0(t)
    #   mu1(t) = sum(h[i] * i for i >= t) / omega1(t)
    #   sigma²(t) = omega0(t) * omega1(t) * (mu0(t) - mu1(t))²
    #
    # The partial sums are updated incrementally as t increases.
    omega0 = 0
    omega1 = sum(histogram)
    mu0_part = 0
    mu1_part = sum(i * x for i, x in enumerate(histogram))

    best = None
    best_sigma = -1.0
    for t in range(1, 256):
        delta = histogram[t - 1]
        omega0 += delta
        omega1 -= delta
        mu0_part += delta * (t - 1)
        mu1_part -= delta * (t - 1)

        if omega0 == 0 or omega1 == 0:
            continue

        mu0 = mu0_part / omega0
        mu1 = mu1_part / omega1
        sigma = omega0 * omega1 * (mu0 - mu1) * (mu0 - mu1)
        if sigma > best_sigma:
            best, best_sigma = t, sigma

    return best


def equalization_map(histogram: Sequence[int], out: Optional[np.ndarray] = None) -> np.ndarray:
    """Build a luma lookup table that flattens ``histogram``.

    An empty histogram leaves ``out`` untouched (identity by default).
    """
    if out is None:
        out = np.arange(256, dtype=np.uint8)
    histogram = [int(x) for x in histogram[:256]]
    total = sum(histogram)
    if total == 0:
        return out
    partial_sum = 0
    for in_luma in range(256):
        out[in_luma] = min(partial_sum * 256 // total, 255)
        partial_sum += histogram[in_luma]
    return out


def median(histogram: Iterable[int]) -> int:
    histogram = [int(x) for x in histogram]
    total = sum(histogram)
    partial_sum = 0
    for i, count in enumerate(histogram):
        partial_sum += count
        if partial_sum * 2 >= total:
            return i
    raise ValueError("histogram is empty")

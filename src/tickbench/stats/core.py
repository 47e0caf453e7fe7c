"""Outlier-aware descriptive statistics for timing samples.

The kernels operate on contiguous ``float64`` arrays and sort them in place:
the median needs a sorted buffer, and the outlier scan walks that same
sorted buffer. Callers that need the original order must pass a copy.
"""

import math
from enum import IntEnum

import numpy as np
from msgspec import Struct
from numba import njit
from numpy.typing import ArrayLike, NDArray


class DistributionShape(IntEnum):
    """Classification returned by the normality quicktest."""

    NORMAL = 0
    NOT_NORMAL = 1
    TOO_MANY_OUTLIERS = 2


class NormalityResult(Struct, frozen=True):
    """Outcome of ``detect_normal``.

    ``start``/``end`` delimit the trimmed range of the (sorted) sample the
    final statistics were computed over. For TOO_MANY_OUTLIERS the
    statistics are those of the full sample.
    """

    shape: DistributionShape
    start: int
    end: int
    outliers: int
    mean: float
    median: float
    stddev: float

    @property
    def is_normal(self) -> bool:
        return self.shape == DistributionShape.NORMAL

    @property
    def size(self) -> int:
        return self.end - self.start


@njit(inline="always")
def _nb_basic_stats(base: np.ndarray) -> tuple[float, float, float]:
    base.sort()

    n = base.shape[0]
    total = 0.0
    total_sq = 0.0
    for i in range(n):
        total += base[i]
        total_sq += base[i] * base[i]

    mean = total / n
    # Rounding can leave a tiny negative residue for constant samples.
    var = (total_sq - total * total / n) / (n - 1)
    if var < 0.0:
        var = 0.0
    stddev = math.sqrt(var)

    middle = n // 2
    if n % 2 == 1:
        median = base[middle]
    else:
        median = (base[middle] + base[middle - 1]) / 2.0
    return mean, median, stddev


@njit(inline="always")
def _nb_is_normal(mean: float, median: float, threshold: float) -> bool:
    denom = max(mean, median)
    if denom <= 0.0:
        return False
    return abs(mean - median) / denom < threshold


@njit(inline="always")
def _nb_detect_normal(
    base: np.ndarray,
    sigma: float,
    max_outlier_fraction: float,
    normal_threshold: float,
) -> tuple[int, int, int, int, float, float, float]:
    n = base.shape[0]
    mean, median, stddev = _nb_basic_stats(base)

    limit = sigma * stddev
    start = 0
    end = n
    outliers = 0
    found_ok = False
    for i in range(n):
        if abs(base[i] - mean) > limit:
            if found_ok:
                end -= 1
            else:
                start += 1
            outliers += 1
        else:
            found_ok = True

    # Fewer than two survivors leave nothing to recompute a spread from.
    if outliers / n > max_outlier_fraction or end - start < 2:
        return 2, start, end, outliers, mean, median, stddev

    mean, median, stddev = _nb_basic_stats(base[start:end])
    shape = 0 if _nb_is_normal(mean, median, normal_threshold) else 1
    return shape, start, end, outliers, mean, median, stddev


def _as_samples(samples: ArrayLike) -> NDArray[np.float64]:
    """Return a 1-D contiguous float64 view (no copy when already one)."""
    arr = np.asarray(samples, dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError(f"Invalid sample shape; expected 1-D but got {arr.shape}")
    if not arr.flags.c_contiguous:
        arr = np.ascontiguousarray(arr)
    if arr.shape[0] < 2:
        raise ValueError(
            f"Invalid sample size; expected >= 2 but got {arr.shape[0]}"
        )
    return arr


def basic_stats(samples: ArrayLike) -> tuple[float, float, float]:
    """Return ``(mean, median, stddev)`` of ``samples``.

    The standard deviation uses the N-1 (Bessel) correction and is derived
    from the running sum and sum of squares. A float64 ndarray argument is
    sorted in place.

    Raises:
        ValueError: If fewer than two samples are given.
    """
    arr = _as_samples(samples)
    mean, median, stddev = _nb_basic_stats(arr)
    return float(mean), float(median), float(stddev)


def detect_normal(
    samples: ArrayLike,
    sigma: float = 3.0,
    max_outlier_fraction: float = 0.25,
    normal_threshold: float = 0.005,
) -> NormalityResult:
    """Trim outliers from ``samples`` and run the normality quicktest.

    A sample is an outlier when it lies more than ``sigma`` standard
    deviations from the mean of the full sample. Walking the sorted
    sample, outliers seen before the first in-range value shrink the
    range from the front; every later outlier shrinks it from the back.
    More than ``max_outlier_fraction`` outliers, or fewer than two samples
    left in the trimmed range, yields TOO_MANY_OUTLIERS. Otherwise the statistics are recomputed over the trimmed range and the
    shape is NORMAL when mean and median differ by less than
    ``normal_threshold`` relative to the larger of the two.

    Note that with ``sigma=3`` at most roughly 1/9 of any sample can fall
    outside the band, so TOO_MANY_OUTLIERS needs a tighter ``sigma`` or a
    lower ``max_outlier_fraction`` to trigger.

    A float64 ndarray argument is sorted in place.
    """
    if sigma <= 0.0:
        raise ValueError(f"Invalid sigma; expected >0 but got {sigma}")
    if not (0.0 <= max_outlier_fraction <= 1.0):
        raise ValueError(
            f"Invalid max_outlier_fraction; expected [0, 1] but got {max_outlier_fraction}"
        )

    arr = _as_samples(samples)
    shape, start, end, outliers, mean, median, stddev = _nb_detect_normal(
        arr, float(sigma), float(max_outlier_fraction), float(normal_threshold)
    )
    return NormalityResult(
        shape=DistributionShape(shape),
        start=int(start),
        end=int(end),
        outliers=int(outliers),
        mean=float(mean),
        median=float(median),
        stddev=float(stddev),
    )


def combine_quadrature(*errors: float) -> float:
    """Combine independent, non-negative error magnitudes as ``sqrt(sum(e**2))``.

    Raises:
        ValueError: If any error is negative.
    """
    for err in errors:
        if err < 0.0:
            raise ValueError(f"Invalid error magnitude; expected >=0 but got {err}")
    return math.hypot(*errors)

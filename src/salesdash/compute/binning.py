"""Histogram binning of sales amounts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np

from salesdash.data.records import Dataset

DEFAULT_BIN_COUNT = 30


@dataclass(frozen=True)
class Bucket:
    """One histogram bin: ``[lower, upper)``, or ``[lower, upper]`` when last."""

    lower: float
    upper: float
    count: int

    @property
    def width(self) -> float:
        return self.upper - self.lower

    @property
    def center(self) -> float:
        return (self.lower + self.upper) / 2


def bin_sales(
    data: Union[Dataset, Sequence[float], np.ndarray],
    bin_count: int = DEFAULT_BIN_COUNT,
) -> list[Bucket]:
    """Partition ``[0, max(sales)]`` into equal-width buckets and count members.

    Non-finite values are ignored, as are values below zero. A value equal to
    the domain max lands in the last bucket. If there are no finite values the
    result is empty; if the max is 0 a single ``[0, 0]`` bucket is returned.

    Args:
        data: Dataset or array of sales amounts.
        bin_count: Number of buckets (K).

    Returns:
        Buckets in ascending order.
    """
    if bin_count < 1:
        raise ValueError(f"bin_count must be >= 1, got {bin_count}")

    values = data.sales if isinstance(data, Dataset) else np.asarray(data, dtype=float)
    values = values[np.isfinite(values)]
    if values.size == 0:
        return []

    hi = float(np.max(values))
    if hi <= 0:
        return [Bucket(lower=0.0, upper=0.0, count=int(np.count_nonzero(values == 0)))]

    # np.histogram bins are half-open except the last, which includes its right edge
    counts, edges = np.histogram(values, bins=bin_count, range=(0.0, hi))
    return [
        Bucket(lower=float(edges[i]), upper=float(edges[i + 1]), count=int(counts[i]))
        for i in range(bin_count)
    ]

"""Summary statistics over the sales column."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from salesdash.data.records import Dataset


@dataclass(frozen=True)
class SummaryStats:
    """Total, count, mean and max of sales for one render pass.

    For an empty dataset ``mean`` is NaN and ``max`` is None. NaN sales
    (rows kept under the KEEP policy) propagate into total, mean and max.
    """

    total: float
    count: int
    mean: float
    max: Optional[float]

    def to_dict(self) -> dict[str, Optional[float]]:
        return {
            "total": self.total,
            "count": self.count,
            "mean": self.mean,
            "max": self.max,
        }


def summarize(data: Union[Dataset, np.ndarray, list]) -> SummaryStats:
    """Compute SummaryStats for a Dataset or a sequence of sales values."""
    values = data.sales if isinstance(data, Dataset) else np.asarray(data, dtype=float)
    count = int(values.size)
    if count == 0:
        return SummaryStats(total=0.0, count=0, mean=math.nan, max=None)

    total = float(np.sum(values))
    return SummaryStats(
        total=total,
        count=count,
        mean=total / count,
        max=float(np.max(values)),
    )

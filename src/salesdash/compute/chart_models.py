"""Per-chart scales and pixel coordinates.

Each ``build_*`` function takes a Dataset and a ChartGeometry, sets up the
scales for that chart, and maps every bar or point to pixel coordinates
inside the chart's inner area (margins excluded, y growing downward). The
renderer consumes these models; nothing here touches the UI.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from salesdash.compute.binning import DEFAULT_BIN_COUNT, Bucket, bin_sales
from salesdash.compute.scales import BandScale, LinearScale, OrdinalScale, TimeScale, jitter_offsets
from salesdash.config import Margin
from salesdash.data.records import Dataset, Record


@dataclass(frozen=True)
class ChartGeometry:
    """Outer size of a chart plus its margins."""

    width: float
    height: float
    margin: Margin = field(default_factory=Margin)

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"chart size must be non-negative, got {self.width}x{self.height}")

    @property
    def inner_width(self) -> float:
        return max(0.0, self.width - self.margin.left - self.margin.right)

    @property
    def inner_height(self) -> float:
        return max(0.0, self.height - self.margin.top - self.margin.bottom)


def _max_sales(dataset: Dataset) -> float:
    """Max finite sales for scale domains; 0 when there is none."""
    sales = dataset.sales
    finite = sales[np.isfinite(sales)]
    if finite.size == 0:
        return 0.0
    return float(finite.max())


@dataclass(frozen=True)
class Bar:
    x: float
    width: float
    y: float
    height: float
    bucket: Bucket


@dataclass
class HistogramModel:
    geometry: ChartGeometry
    buckets: list[Bucket]
    x: LinearScale
    y: LinearScale
    bars: list[Bar]


def build_histogram(
    dataset: Dataset,
    geometry: ChartGeometry,
    *,
    bin_count: int = DEFAULT_BIN_COUNT,
) -> HistogramModel:
    """Bin sales and lay the bars out with a 1px gap on each side."""
    w, h = geometry.inner_width, geometry.inner_height
    buckets = bin_sales(dataset, bin_count)
    x = LinearScale((0.0, _max_sales(dataset)), (0.0, w))
    max_count = max((b.count for b in buckets), default=0)
    y = LinearScale((0.0, float(max_count)), (h, 0.0))

    bars = []
    for b in buckets:
        x0, x1 = x(b.lower), x(b.upper)
        top = y(b.count)
        bars.append(Bar(x=x0 + 1, width=max(0.0, x1 - x0 - 2), y=top, height=h - top, bucket=b))
    return HistogramModel(geometry=geometry, buckets=buckets, x=x, y=y, bars=bars)


@dataclass(frozen=True)
class ScatterPoint:
    cx: float
    cy: float
    color: str
    record: Record


@dataclass
class ScatterModel:
    geometry: ChartGeometry
    x: LinearScale
    band: BandScale
    color: OrdinalScale
    points: list[ScatterPoint]

    @property
    def categories(self) -> list:
        return list(self.band.domain)


def build_scatter(
    dataset: Dataset,
    geometry: ChartGeometry,
    *,
    palette: Sequence[str],
    padding: float = 0.3,
    jitter_fraction: float = 0.8,
    seed: Optional[int] = None,
) -> ScatterModel:
    """Sales on x, category bands on y (first category at the bottom).

    Each point sits at its band's center plus a uniform jitter spanning
    ``jitter_fraction`` of the bandwidth.
    """
    w, h = geometry.inner_width, geometry.inner_height
    categories = dataset.categories()
    x = LinearScale((0.0, _max_sales(dataset)), (0.0, w))
    band = BandScale(categories, (h, 0.0), padding=padding)
    color = OrdinalScale(palette, categories)

    offsets = jitter_offsets(len(dataset), band.bandwidth() * jitter_fraction, seed)
    points = [
        ScatterPoint(
            cx=x(r.sales),
            cy=band.center(r.category) + float(offsets[i]),
            color=color(r.category),
            record=r,
        )
        for i, r in enumerate(dataset)
    ]
    return ScatterModel(geometry=geometry, x=x, band=band, color=color, points=points)


@dataclass(frozen=True)
class TimePoint:
    cx: float
    cy: float
    record: Record


@dataclass
class TimeSeriesModel:
    geometry: ChartGeometry
    x: Optional[TimeScale]
    y: LinearScale
    points: list[TimePoint]


def build_timeseries(dataset: Dataset, geometry: ChartGeometry) -> TimeSeriesModel:
    """Order date on x, sales on y. Records without a valid date are skipped."""
    w, h = geometry.inner_width, geometry.inner_height
    x = TimeScale.from_extent(dataset.order_dates, (0.0, w))
    y = LinearScale((0.0, _max_sales(dataset)), (h, 0.0))

    points = []
    if x is not None:
        for r in dataset:
            if r.order_date is None:
                continue
            cx = x(r.order_date)
            if math.isnan(cx):
                continue
            points.append(TimePoint(cx=cx, cy=y(r.sales), record=r))
    return TimeSeriesModel(geometry=geometry, x=x, y=y, points=points)

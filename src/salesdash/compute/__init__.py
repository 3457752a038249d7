"""UI-agnostic dashboard computations.

This package contains:
- summary statistics (aggregate)
- histogram binning (binning)
- linear / time / band / ordinal scales (scales)
- per-chart pixel layouts built from those scales (chart_models)
- number formatting and counter animation frames (formatting)
"""

from salesdash.compute.aggregate import SummaryStats, summarize
from salesdash.compute.binning import DEFAULT_BIN_COUNT, Bucket, bin_sales
from salesdash.compute.chart_models import (
    ChartGeometry,
    HistogramModel,
    ScatterModel,
    TimeSeriesModel,
    build_histogram,
    build_scatter,
    build_timeseries,
)
from salesdash.compute.formatting import CounterAnimation, counter_frames, format_currency, format_number
from salesdash.compute.scales import BandScale, LinearScale, OrdinalScale, TimeScale, jitter_offsets

__all__ = [
    "DEFAULT_BIN_COUNT",
    "BandScale",
    "Bucket",
    "ChartGeometry",
    "CounterAnimation",
    "HistogramModel",
    "LinearScale",
    "OrdinalScale",
    "ScatterModel",
    "SummaryStats",
    "TimeScale",
    "TimeSeriesModel",
    "bin_sales",
    "build_histogram",
    "build_scatter",
    "build_timeseries",
    "counter_frames",
    "format_currency",
    "format_number",
    "jitter_offsets",
    "summarize",
]

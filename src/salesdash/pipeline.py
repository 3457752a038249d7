"""Load-then-compute pipeline for the sales dashboard.

A render pass has two stages:

1. ``load_dataset`` (awaitable): read and parse the CSV, returning a
   LoadResult instead of raising.
2. ``compute_dashboard`` (synchronous, pure): summary stats plus the three
   chart models.

``DashboardPipeline`` runs passes on demand (page load, viewport resize).
Starting a pass cancels the token of the previous one; a superseded pass
drops its result when its load completes, so the most recently started
pass is the one that reaches the renderer.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from salesdash.compute.aggregate import SummaryStats, summarize
from salesdash.compute.chart_models import (
    ChartGeometry,
    HistogramModel,
    ScatterModel,
    TimeSeriesModel,
    build_histogram,
    build_scatter,
    build_timeseries,
)
from salesdash.config import DashboardConfig
from salesdash.data.loader import CancelToken, load_dataset
from salesdash.data.parser import ParseReport
from salesdash.data.records import Dataset
from salesdash.utils.logging import get_logger

logger = get_logger(__name__)

# Smallest chart width we lay out for, in pixels
MIN_CHART_WIDTH = 200

OnModel = Callable[["DashboardModel"], None]
OnError = Callable[[BaseException], None]


@dataclass(frozen=True)
class ChartWidths:
    """Outer pixel widths of the three charts."""
    histogram: int
    scatter: int
    timeseries: int


def chart_widths(viewport_width: float, config: DashboardConfig) -> ChartWidths:
    """Split a viewport into chart widths.

    Histogram and scatter share a two-column row; the time series spans the
    full row. Each chart sits in a card with ``config.card_padding``.
    """
    row = max(0.0, float(viewport_width) - config.page_padding)
    half = (row - config.column_gap) / 2 - config.card_padding
    full = row - config.card_padding
    return ChartWidths(
        histogram=int(max(MIN_CHART_WIDTH, half)),
        scatter=int(max(MIN_CHART_WIDTH, half)),
        timeseries=int(max(MIN_CHART_WIDTH, full)),
    )


@dataclass
class DashboardModel:
    """Everything the renderer needs for one render pass."""
    stats: SummaryStats
    histogram: HistogramModel
    scatter: ScatterModel
    timeseries: TimeSeriesModel
    report: Optional[ParseReport] = None


def compute_dashboard(
    dataset: Dataset,
    *,
    widths: ChartWidths,
    config: DashboardConfig,
    report: Optional[ParseReport] = None,
) -> DashboardModel:
    """Compute stats and chart models for a loaded dataset."""
    margin = config.margin
    histogram = build_histogram(
        dataset,
        ChartGeometry(widths.histogram, config.histogram_height, margin),
        bin_count=config.bin_count,
    )
    scatter = build_scatter(
        dataset,
        ChartGeometry(widths.scatter, config.scatter_height, margin),
        palette=config.palette.categories,
        padding=config.band_padding,
        jitter_fraction=config.jitter_fraction,
        seed=config.jitter_seed,
    )
    timeseries = build_timeseries(
        dataset,
        ChartGeometry(widths.timeseries, config.timeseries_height, margin),
    )
    return DashboardModel(
        stats=summarize(dataset),
        histogram=histogram,
        scatter=scatter,
        timeseries=timeseries,
        report=report,
    )


class DashboardPipeline:
    """Runs load/compute passes for one dashboard page."""

    def __init__(
        self,
        source: Union[str, Path],
        *,
        config: Optional[DashboardConfig] = None,
        on_model: OnModel,
        on_error: Optional[OnError] = None,
    ) -> None:
        self.source = Path(source)
        self.config = config if config is not None else DashboardConfig()
        self._on_model = on_model
        self._on_error = on_error
        self._token: Optional[CancelToken] = None
        self._passes = 0

    @property
    def passes_started(self) -> int:
        return self._passes

    def cancel(self) -> None:
        """Cancel the in-flight pass, if any."""
        if self._token is not None:
            self._token.cancel()

    def _report_error(self, error: BaseException) -> None:
        if self._on_error is None:
            return
        try:
            self._on_error(error)
        except Exception:
            logger.exception("on_error callback failed")

    async def reload(self, viewport_width: float) -> Optional[DashboardModel]:
        """Run a full pass; returns the model, or None if superseded or failed."""
        self.cancel()
        token = CancelToken()
        self._token = token
        self._passes += 1
        pass_no = self._passes
        logger.debug("pass %d: loading %s (viewport=%s)", pass_no, self.source, viewport_width)

        result = await load_dataset(self.source, policy=self.config.malformed_rows, token=token)

        if token.cancelled or result.cancelled:
            logger.info("pass %d superseded; discarding result", pass_no)
            return None

        if not result.ok:
            error = result.error if result.error is not None else RuntimeError("load produced no dataset")
            logger.error("pass %d failed: %s", pass_no, error)
            self._report_error(error)
            return None

        try:
            model = compute_dashboard(
                result.dataset,
                widths=chart_widths(viewport_width, self.config),
                config=self.config,
                report=result.report,
            )
        except Exception as e:
            logger.exception("pass %d: compute failed", pass_no)
            self._report_error(e)
            return None
        logger.info(
            "pass %d: %d record(s), total=%s",
            pass_no,
            model.stats.count,
            model.stats.total,
        )
        try:
            self._on_model(model)
        except Exception:
            logger.exception("on_model callback failed")
        return model

"""Sales dashboard widget.

Self-contained NiceGUI widget: four stat cards with animated counters and
three Plotly charts (histogram, scatter, time series). Uses Plotly dicts
only for ui.plotly (never go.Figure). The widget holds no data of its own;
each DashboardModel passed to ``set_model`` replaces the previous one.
"""

from __future__ import annotations

from typing import Callable, Optional

from nicegui import ui

from salesdash.compute.aggregate import SummaryStats
from salesdash.compute.formatting import CounterAnimation
from salesdash.config import DashboardConfig
from salesdash.dashboard_widget.figures import (
    empty_figure,
    histogram_figure,
    scatter_figure,
    timeseries_figure,
)
from salesdash.dashboard_widget.theme import resolve_theme
from salesdash.pipeline import DashboardModel
from salesdash.utils.logging import get_logger

logger = get_logger(__name__)

# (marker, title, SummaryStats field, currency)
STAT_CARDS: tuple[tuple[str, str, str, bool], ...] = (
    ("total-sales", "Total Sales", "total", True),
    ("total-orders", "Total Orders", "count", False),
    ("avg-sales", "Average Sale", "mean", True),
    ("max-sales", "Max Sale", "max", True),
)

# (marker, card title)
CHARTS: tuple[tuple[str, str], ...] = (
    ("histogram", "Sales Distribution"),
    ("scatter", "Sales by Category"),
    ("timeseries", "Sales Over Time"),
)


def _safe_call(func: Callable, *args, **kwargs) -> None:
    """Call func, ignoring only 'client deleted' RuntimeErrors."""
    try:
        func(*args, **kwargs)
    except RuntimeError as e:
        if "deleted" not in str(e).lower():
            raise


class SalesDashboard:
    """Stat cards plus histogram, scatter and time-series charts."""

    def __init__(self, *, config: Optional[DashboardConfig] = None) -> None:
        self._config = config if config is not None else DashboardConfig()
        self._theme = resolve_theme(self._config.theme)
        self._model: Optional[DashboardModel] = None

        self._stat_labels: dict[str, ui.label] = {}
        self._plots: dict[str, ui.plotly] = {}
        self._error_label: Optional[ui.label] = None
        self._report_label: Optional[ui.label] = None
        self._animations: dict[str, CounterAnimation] = {}
        self._timer: Optional[ui.timer] = None

    @property
    def model(self) -> Optional[DashboardModel]:
        return self._model

    def render(self) -> None:
        """Create the dashboard UI inside the current container."""
        self._stat_labels = {}
        self._plots = {}
        blank = empty_figure(self._theme)

        # Row 1: stat cards
        with ui.row().classes("w-full gap-4"):
            for marker, title, _field, _currency in STAT_CARDS:
                with ui.card().classes("flex-1 items-center"):
                    ui.label(title).classes("text-sm text-gray-500 uppercase")
                    self._stat_labels[marker] = ui.label("-").classes("text-2xl font-bold").mark(marker)

        self._error_label = ui.label("").classes("text-negative")
        self._error_label.visible = False
        self._report_label = ui.label("").classes("text-xs text-gray-500")
        self._report_label.visible = False

        # Row 2: histogram + scatter, Row 3: time series
        with ui.row().classes("w-full gap-6 no-wrap"):
            for marker, title in CHARTS[:2]:
                with ui.card().classes("flex-1 min-w-0"):
                    ui.label(title).classes("text-lg font-semibold")
                    self._plots[marker] = ui.plotly(blank).classes("w-full").mark(marker)
        marker, title = CHARTS[2]
        with ui.card().classes("w-full"):
            ui.label(title).classes("text-lg font-semibold")
            self._plots[marker] = ui.plotly(blank).classes("w-full").mark(marker)

    def set_model(self, model: DashboardModel) -> None:
        """Show a freshly computed render pass."""
        _safe_call(self._set_model_impl, model)

    def _set_model_impl(self, model: DashboardModel) -> None:
        self._model = model
        if self._error_label is not None:
            self._error_label.visible = False

        palette = self._config.palette
        self._update_plot("histogram", histogram_figure(model.histogram, palette=palette, theme=self._theme))
        self._update_plot("scatter", scatter_figure(model.scatter, theme=self._theme))
        self._update_plot("timeseries", timeseries_figure(model.timeseries, palette=palette, theme=self._theme))

        self._update_report(model)
        self._start_counters(model.stats)

    def show_error(self, error: BaseException) -> None:
        """Report a failed load in place of the charts' data."""
        logger.debug("showing load error: %s", error)
        if self._error_label is None:
            return
        self._error_label.text = f"Failed to load: {error}"
        self._error_label.visible = True

    def _update_plot(self, marker: str, fig_dict: dict) -> None:
        plot = self._plots.get(marker)
        if plot is None:
            return
        try:
            plot.update_figure(fig_dict)
        except RuntimeError as e:
            if "deleted" not in str(e).lower():
                raise

    def _update_report(self, model: DashboardModel) -> None:
        if self._report_label is None:
            return
        report = model.report
        if report is None or report.ok:
            self._report_label.visible = False
            return
        self._report_label.text = f"Data issues: {report.summary()}"
        self._report_label.visible = True

    # Counters

    def _start_counters(self, stats: SummaryStats) -> None:
        self._stop_timer()
        self._animations = {
            marker: CounterAnimation(
                getattr(stats, field),
                currency=currency,
                duration_ms=self._config.counter_duration_ms,
                interval_ms=self._config.counter_interval_ms,
            )
            for marker, _title, field, currency in STAT_CARDS
        }
        self._timer = ui.timer(self._config.counter_interval_ms / 1000, self._tick)

    def _tick(self) -> None:
        for marker, animation in self._animations.items():
            text = animation.next_text()
            label = self._stat_labels.get(marker)
            if text is not None and label is not None:
                label.text = text
        if all(a.done for a in self._animations.values()):
            self._stop_timer()

    def _stop_timer(self) -> None:
        timer = self._timer
        self._timer = None
        if timer is not None:
            timer.cancel()

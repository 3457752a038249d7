from __future__ import annotations

from typing import Any, Callable, Optional

import pytest

import salesdash.dashboard_widget.dashboard_widget as dw_mod
from salesdash.config import DashboardConfig
from salesdash.dashboard_widget.dashboard_widget import CHARTS, STAT_CARDS, SalesDashboard
from salesdash.data.parser import ParseReport, RowIssue
from salesdash.data.records import Dataset
from salesdash.pipeline import chart_widths, compute_dashboard

pytestmark = pytest.mark.requires_nicegui


class _FakeElement:
    def __init__(self, text: str = "") -> None:
        self.text = text
        self.visible: bool = True
        self.marker: Optional[str] = None

    def classes(self, *_args: Any, **_kwargs: Any) -> "_FakeElement":
        return self

    def mark(self, marker: str) -> "_FakeElement":
        self.marker = marker
        return self

    def __enter__(self) -> "_FakeElement":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        return None


class _FakePlot(_FakeElement):
    def __init__(self, figure: dict) -> None:
        super().__init__()
        self.figure = figure
        self.updates: list[dict] = []

    def update_figure(self, figure: dict) -> None:
        self.figure = figure
        self.updates.append(figure)


class _FakeTimer:
    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        self.interval = interval
        self.callback = callback
        self.active = True
        self.cancelled = False

    def cancel(self) -> None:
        self.active = False
        self.cancelled = True


class _FakeUI:
    def __init__(self) -> None:
        self.timers: list[_FakeTimer] = []

    def row(self) -> _FakeElement:
        return _FakeElement()

    def card(self) -> _FakeElement:
        return _FakeElement()

    def label(self, text: str = "") -> _FakeElement:
        return _FakeElement(text=text)

    def plotly(self, figure: dict) -> _FakePlot:
        return _FakePlot(figure)

    def timer(self, interval: float, callback: Callable[[], None]) -> _FakeTimer:
        t = _FakeTimer(interval, callback)
        self.timers.append(t)
        return t


@pytest.fixture()
def fake_ui(monkeypatch: pytest.MonkeyPatch) -> _FakeUI:
    ui = _FakeUI()
    monkeypatch.setattr(dw_mod, "ui", ui, raising=True)
    return ui


def _config() -> DashboardConfig:
    # 4 counter frames per stat
    return DashboardConfig(counter_duration_ms=64, counter_interval_ms=16, jitter_seed=0)


def _rendered(config: DashboardConfig) -> SalesDashboard:
    dash = SalesDashboard(config=config)
    dash.render()
    return dash


def test_render_creates_cards_and_plots(fake_ui: _FakeUI) -> None:
    dash = _rendered(_config())
    assert set(dash._stat_labels) == {marker for marker, *_ in STAT_CARDS}
    assert set(dash._plots) == {marker for marker, _ in CHARTS}
    assert all(label.text == "-" for label in dash._stat_labels.values())
    assert dash._plots["histogram"].figure["layout"]["paper_bgcolor"] == "#ffffff"


def test_set_model_updates_plots_and_animates_counters(fake_ui: _FakeUI, dataset: Dataset) -> None:
    config = _config()
    dash = _rendered(config)
    model = compute_dashboard(dataset, widths=chart_widths(1200, config), config=config)

    dash.set_model(model)
    assert dash.model is model
    for marker, _ in CHARTS:
        assert len(dash._plots[marker].updates) == 1
    assert dash._plots["histogram"].figure["data"][0]["type"] == "bar"

    assert len(fake_ui.timers) == 1
    timer = fake_ui.timers[0]
    assert timer.interval == pytest.approx(0.016)

    for _ in range(4):
        assert timer.active
        timer.callback()
    assert timer.cancelled

    labels = dash._stat_labels
    assert labels["total-sales"].text == "$60"
    assert labels["total-orders"].text == "3"
    assert labels["avg-sales"].text == "$20"
    assert labels["max-sales"].text == "$30"


def test_new_model_restarts_counters(fake_ui: _FakeUI, dataset: Dataset) -> None:
    config = _config()
    dash = _rendered(config)
    model = compute_dashboard(dataset, widths=chart_widths(1200, config), config=config)
    dash.set_model(model)
    dash.set_model(model)
    assert len(fake_ui.timers) == 2
    assert fake_ui.timers[0].cancelled
    assert not fake_ui.timers[1].cancelled


def test_empty_dataset_counters(fake_ui: _FakeUI) -> None:
    config = _config()
    dash = _rendered(config)
    dash.set_model(compute_dashboard(Dataset(), widths=chart_widths(800, config), config=config))
    fake_ui.timers[0].callback()
    assert dash._stat_labels["total-orders"].text == "0"
    assert dash._stat_labels["avg-sales"].text == "$NaN"
    assert dash._stat_labels["max-sales"].text == "$-"
    assert fake_ui.timers[0].cancelled


def test_report_label_shows_malformed_rows(fake_ui: _FakeUI, dataset: Dataset) -> None:
    config = _config()
    dash = _rendered(config)
    report = ParseReport(total_rows=4, issues=[RowIssue(2, "sales", "abc", "not a number")], dropped_rows=1)
    dash.set_model(compute_dashboard(dataset, widths=chart_widths(1200, config), config=config, report=report))
    assert dash._report_label.visible
    assert dash._report_label.text.startswith("Data issues:")


def test_show_error_then_recover(fake_ui: _FakeUI, dataset: Dataset) -> None:
    config = _config()
    dash = _rendered(config)
    dash.show_error(FileNotFoundError("CSV not found: x.csv"))
    assert dash._error_label.visible
    assert dash._error_label.text == "Failed to load: CSV not found: x.csv"

    dash.set_model(compute_dashboard(dataset, widths=chart_widths(1200, config), config=config))
    assert not dash._error_label.visible


def test_set_model_ignores_deleted_client(fake_ui: _FakeUI, dataset: Dataset) -> None:
    config = _config()
    dash = _rendered(config)

    def deleted(_figure: dict) -> None:
        raise RuntimeError("The client this element belongs to has been deleted.")

    dash._plots["histogram"].update_figure = deleted  # type: ignore[method-assign]
    dash.set_model(compute_dashboard(dataset, widths=chart_widths(1200, config), config=config))
    assert len(dash._plots["scatter"].updates) == 1

"""Plotly figures for the dashboard charts.

Returns Plotly figure dicts (never go.Figure) for ui.plotly / update_figure.

Figures are built from the chart models in ``salesdash.compute.chart_models``:
axis ranges come from the model's scale domains, bar extents from its pixel
layout, and the scatter plot is drawn directly in the model's pixel space so
the category bands and jitter match the band scale exactly.
"""

from __future__ import annotations

import math
from typing import Optional, Union

import plotly.graph_objects as go

from salesdash.compute.chart_models import ChartGeometry, HistogramModel, ScatterModel, TimeSeriesModel
from salesdash.compute.formatting import format_currency
from salesdash.compute.scales import LinearScale
from salesdash.config import Palette
from salesdash.dashboard_widget.theme import (
    ThemeMode,
    get_grid_color,
    get_theme_colors,
    get_theme_template,
    resolve_theme,
)

HOVER_LABEL = dict(bgcolor="rgba(26,32,44,0.9)", font=dict(color="#ffffff", size=12))


def _base_layout(geometry: Optional[ChartGeometry], theme: ThemeMode) -> dict:
    bg_color, fg_color = get_theme_colors(theme)
    layout = dict(
        template=get_theme_template(theme),
        paper_bgcolor=bg_color,
        plot_bgcolor=bg_color,
        font=dict(color=fg_color, size=12),
        hoverlabel=HOVER_LABEL,
        showlegend=False,
    )
    if geometry is not None:
        m = geometry.margin
        layout.update(
            width=geometry.width,
            height=geometry.height,
            margin=dict(l=m.left, r=m.right, t=m.top, b=m.bottom),
        )
    return layout


def _axis(title: str, theme: ThemeMode, **kwargs) -> dict:
    _, fg_color = get_theme_colors(theme)
    axis = dict(
        title=dict(text=title, font=dict(size=12, color=fg_color)),
        color=fg_color,
        gridcolor=get_grid_color(theme),
        zeroline=False,
    )
    axis.update({k: v for k, v in kwargs.items() if v is not None})
    return axis


def _finite_range(domain: tuple[float, float]) -> Optional[list[float]]:
    """Axis range from a scale domain; None (autorange) if degenerate or NaN."""
    lo, hi = domain
    if not (math.isfinite(lo) and math.isfinite(hi)) or lo == hi:
        return None
    return [lo, hi]


def _currency_ticks(scale: LinearScale, count: int = 8) -> dict:
    """Axis tick kwargs labelled like the stat cards ("$1.5K", "$2.30M")."""
    values = scale.ticks(count)
    if not values:
        return dict(tickprefix="$", nticks=count)
    return dict(
        tickmode="array",
        tickvals=values,
        ticktext=[format_currency(v) for v in values],
    )


def empty_figure(theme: Optional[Union[str, ThemeMode]] = None) -> dict:
    """Blank figure shown before the first render pass completes."""
    theme_mode = resolve_theme(theme)
    fig = go.Figure()
    fig.update_layout(**_base_layout(None, theme_mode))
    return fig.to_dict()


def histogram_figure(
    model: HistogramModel,
    *,
    palette: Optional[Palette] = None,
    theme: Optional[Union[str, ThemeMode]] = None,
) -> dict:
    """Histogram of sales amounts with "Range / Count" tooltips."""
    palette = palette or Palette()
    theme_mode = resolve_theme(theme)
    x = model.x

    centers, widths, counts, customdata = [], [], [], []
    degenerate = x.domain[0] == x.domain[1]
    for bar in model.bars:
        if degenerate:
            centers.append(bar.bucket.center)
            widths.append(None)
        else:
            # bar extents are in pixels; map them back to sales for the axis
            left = x.invert(bar.x)
            right = x.invert(bar.x + bar.width)
            centers.append((left + right) / 2)
            widths.append(right - left)
        counts.append(bar.bucket.count)
        customdata.append([format_currency(bar.bucket.lower), format_currency(bar.bucket.upper)])

    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            x=centers,
            y=counts,
            width=None if degenerate else widths,
            customdata=customdata,
            marker=dict(color=palette.primary),
            hovertemplate=(
                "<b>Range:</b> %{customdata[0]} - %{customdata[1]}<br>"
                "<b>Count:</b> %{y} orders<extra></extra>"
            ),
        )
    )
    fig.update_layout(
        **_base_layout(model.geometry, theme_mode),
        bargap=0,
        xaxis=_axis("Sales Amount ($)", theme_mode, range=_finite_range(x.domain), **_currency_ticks(x)),
        yaxis=_axis("Frequency", theme_mode, range=_finite_range(model.y.domain)),
    )
    return fig.to_dict()


def scatter_figure(
    model: ScatterModel,
    *,
    theme: Optional[Union[str, ThemeMode]] = None,
) -> dict:
    """Sales by category with jittered points; one legend entry per category."""
    theme_mode = resolve_theme(theme)
    band = model.band
    h = model.geometry.inner_height

    fig = go.Figure()
    for category in model.categories:
        points = [p for p in model.points if p.record.category == category]
        fig.add_trace(
            go.Scatter(
                x=[p.record.sales for p in points],
                y=[p.cy for p in points],
                mode="markers",
                name=str(category),
                marker=dict(color=model.color(category), size=8, opacity=0.6),
                customdata=[
                    [p.record.category, format_currency(p.record.sales), p.record.product_name]
                    for p in points
                ],
                hovertemplate=(
                    "<b>Category:</b> %{customdata[0]}<br>"
                    "<b>Sales:</b> %{customdata[1]}<br>"
                    "<b>Product:</b> %{customdata[2]}<extra></extra>"
                ),
            )
        )

    layout = _base_layout(model.geometry, theme_mode)
    layout["showlegend"] = True
    fig.update_layout(
        **layout,
        legend=dict(x=1, xanchor="right", y=1, yanchor="top", bgcolor="rgba(0,0,0,0)"),
        xaxis=_axis("Sales Amount ($)", theme_mode, range=_finite_range(model.x.domain), **_currency_ticks(model.x)),
        # pixel space: 0 at the top, inner height at the bottom
        yaxis=_axis(
            "Category",
            theme_mode,
            range=[h, 0.0],
            tickmode="array",
            tickvals=[band.center(c) for c in model.categories],
            ticktext=[str(c) for c in model.categories],
        ),
    )
    return fig.to_dict()


def _format_date(value) -> str:
    return f"{value.month}/{value.day}/{value.year}"


def timeseries_figure(
    model: TimeSeriesModel,
    *,
    palette: Optional[Palette] = None,
    theme: Optional[Union[str, ThemeMode]] = None,
) -> dict:
    """Sales per order over time with "Date / Sales / Customer" tooltips."""
    palette = palette or Palette()
    theme_mode = resolve_theme(theme)

    records = [p.record for p in model.points]
    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=[r.order_date for r in records],
            y=[r.sales for r in records],
            mode="markers",
            marker=dict(color=palette.accent3, size=6, opacity=0.5),
            customdata=[
                [_format_date(r.order_date), format_currency(r.sales), r.customer_name] for r in records
            ],
            hovertemplate=(
                "<b>Date:</b> %{customdata[0]}<br>"
                "<b>Sales:</b> %{customdata[1]}<br>"
                "<b>Customer:</b> %{customdata[2]}<extra></extra>"
            ),
        )
    )

    xaxis = _axis("Order Date", theme_mode, type="date", nticks=10)
    if model.x is not None:
        xaxis["range"] = [d.isoformat() for d in model.x.domain]
    fig.update_layout(
        **_base_layout(model.geometry, theme_mode),
        xaxis=xaxis,
        yaxis=_axis("Sales Amount ($)", theme_mode, range=_finite_range(model.y.domain), **_currency_ticks(model.y)),
    )
    return fig.to_dict()

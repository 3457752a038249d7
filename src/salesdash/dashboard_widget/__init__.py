"""Dashboard widget: stat cards and Plotly charts for a DashboardModel."""

from salesdash.dashboard_widget.dashboard_widget import CHARTS, STAT_CARDS, SalesDashboard

__all__ = [
    "CHARTS",
    "STAT_CARDS",
    "SalesDashboard",
]

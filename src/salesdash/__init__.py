"""
salesdash: static-data sales dashboard.

This package provides:
- Sales CSV loading and typed row parsing with a per-row validation report
- Summary statistics, histogram binning and chart scales (UI-agnostic)
- A two-stage load/compute pipeline with cancellation of superseded loads
- SalesDashboard: NiceGUI widget with stat cards and Plotly charts
- Logging utilities for library and application use

For logging configuration in standalone scripts:
    ```python
    from salesdash.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```

The UI pieces (salesdash.dashboard_widget, salesdash.dashboard_app) import
NiceGUI; everything else only needs pandas, numpy and plotly.
"""

import logging

from salesdash.utils.logging import configure_logging, get_logger

from salesdash.config import DashboardConfig
from salesdash.pipeline import DashboardModel, DashboardPipeline, compute_dashboard

# Library logger gets a NullHandler; applications call configure_logging()
# to attach a real one.
_logger = logging.getLogger("salesdash")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "DashboardConfig",
    "DashboardModel",
    "DashboardPipeline",
    "compute_dashboard",
    "configure_logging",
    "get_logger",
]

__version__ = "0.1.0"

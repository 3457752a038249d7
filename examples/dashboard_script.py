"""Headless run of the sales dashboard pipeline.

Loads a CSV (default: bundled sample), prints the stat cards and writes the
three charts to standalone HTML files next to the CSV.

    python examples/dashboard_script.py [path/to/sales.csv]
"""

import asyncio
import sys
from pathlib import Path

import plotly.io as pio

from salesdash import DashboardConfig, compute_dashboard, configure_logging
from salesdash.compute.formatting import format_currency, format_number
from salesdash.dashboard_widget.figures import histogram_figure, scatter_figure, timeseries_figure
from salesdash.data.loader import default_csv_path, load_dataset
from salesdash.pipeline import chart_widths


async def run(csv_path: Path) -> None:
    config = DashboardConfig(jitter_seed=0)
    result = await load_dataset(csv_path, policy=config.malformed_rows)
    if not result.ok:
        print("load failed:", result.error)
        return

    model = compute_dashboard(
        result.dataset,
        widths=chart_widths(1200, config),
        config=config,
        report=result.report,
    )
    stats = model.stats
    print("Total Sales: ", format_currency(stats.total))
    print("Total Orders:", format_number(stats.count))
    print("Average Sale:", format_currency(stats.mean))
    print("Max Sale:    ", format_currency(stats.max))
    print("Parse report:", result.report.summary())

    figures = {
        "histogram": histogram_figure(model.histogram, palette=config.palette),
        "scatter": scatter_figure(model.scatter),
        "timeseries": timeseries_figure(model.timeseries, palette=config.palette),
    }
    for name, fig in figures.items():
        out = csv_path.with_name(f"{csv_path.stem}_{name}.html")
        pio.write_html(fig, str(out))
        print("wrote", out)


if __name__ == "__main__":
    configure_logging("INFO")
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else default_csv_path()
    asyncio.run(run(path))

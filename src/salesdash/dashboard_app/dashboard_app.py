"""Sales dashboard app: standalone NiceGUI application for SalesDashboard.

Serves one page that loads the sales CSV, shows the stat cards and charts,
and re-runs the full load/compute pass whenever the browser viewport is
resized.

Run:
    python -m salesdash.dashboard_app.dashboard_app

Env vars:
    SALESDASH_CSV: CSV to load (default: bundled data/sales_sample.csv)
    SALESDASH_GUI_RELOAD: 1/0 (default 0)
    SALESDASH_LOG_LEVEL: log level (default INFO)
    HOST: bind host (default 127.0.0.1)
    PORT: bind port (default 8080)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from nicegui import ui

from salesdash.config import DashboardConfig
from salesdash.dashboard_widget import SalesDashboard
from salesdash.data.loader import default_csv_path
from salesdash.pipeline import DashboardPipeline
from salesdash.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

CSV_ENV = "SALESDASH_CSV"
RESIZE_EVENT = "viewport_resize"
DEFAULT_VIEWPORT_WIDTH = 1200

# Emits the viewport width on every resize
RESIZE_SCRIPT = f"""
<script>
(function () {{
  const send = () => emitEvent('{RESIZE_EVENT}', {{ width: window.innerWidth }});
  window.addEventListener('resize', send);
}})();
</script>
"""


def _env_bool(name: str, default: bool) -> bool:
    """Parse env var as bool; if unset/invalid returns default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _env_int(name: str, default: int) -> int:
    """Parse env var as int; if unset/invalid returns default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def resolve_csv_path() -> Path:
    """CSV from SALESDASH_CSV, else the bundled sample."""
    raw = os.getenv(CSV_ENV)
    if raw:
        return Path(raw).expanduser()
    return default_csv_path()


def viewport_width_from_args(args: Any, default: int = DEFAULT_VIEWPORT_WIDTH) -> int:
    """Read ``width`` from a resize event payload, falling back to default."""
    if isinstance(args, dict):
        try:
            return int(args.get("width", default))
        except (TypeError, ValueError):
            return default
    return default


def build_dashboard(csv_path: Path, config: Optional[DashboardConfig] = None) -> tuple[SalesDashboard, DashboardPipeline]:
    """Create the widget and a pipeline that feeds it."""
    config = config if config is not None else DashboardConfig()
    dashboard = SalesDashboard(config=config)
    pipeline = DashboardPipeline(
        csv_path,
        config=config,
        on_model=dashboard.set_model,
        on_error=dashboard.show_error,
    )
    return dashboard, pipeline


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------

@ui.page("/")
async def home() -> None:
    """Home page: header, stat cards and the three charts."""
    ui.page_title("Sales Dashboard")
    ui.add_body_html(RESIZE_SCRIPT)

    with ui.header().classes("py-2 px-4"):
        ui.label("Sales Dashboard").classes("text-lg font-semibold")

    csv_path = resolve_csv_path()
    dashboard, pipeline = build_dashboard(csv_path)

    with ui.column().classes("w-full gap-4 p-4"):
        dashboard.render()

    async def _on_resize(e: Any) -> None:
        width = viewport_width_from_args(getattr(e, "args", None))
        logger.debug("viewport resize: width=%s", width)
        await pipeline.reload(width)

    ui.on(RESIZE_EVENT, _on_resize)

    # First pass once the browser is connected and can report its width
    await ui.context.client.connected()
    width = await ui.run_javascript("window.innerWidth")
    await pipeline.reload(viewport_width_from_args({"width": width}))


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(*, reload: bool | None = None) -> None:
    """Start the dashboard application.

    Env vars (used when arg is None):
      - SALESDASH_GUI_RELOAD: 1/0
      - HOST: bind host
      - PORT: bind port
    """
    configure_logging()
    reload = _env_bool("SALESDASH_GUI_RELOAD", False) if reload is None else reload
    host = os.getenv("HOST", "127.0.0.1")
    port = _env_int("PORT", 8080)

    logger.info(
        "Starting Sales Dashboard: host=%s port=%s reload=%s csv=%s",
        host,
        port,
        reload,
        resolve_csv_path(),
    )
    ui.run(host=host, port=port, reload=reload, title="Sales Dashboard")


if __name__ in {"__main__", "__mp_main__"}:
    main()

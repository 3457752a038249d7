"""Dashboard configuration.

A single ``DashboardConfig`` is built once and passed explicitly to the
pipeline and the widget; nothing in salesdash reads module-level palette or
layout state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from salesdash.data.parser import MalformedRowPolicy


@dataclass(frozen=True)
class Margin:
    """Chart margins in pixels."""
    top: int = 30
    right: int = 30
    bottom: int = 50
    left: int = 60


@dataclass(frozen=True)
class Palette:
    """Dashboard colors."""
    primary: str = "#667eea"
    secondary: str = "#764ba2"
    accent1: str = "#f093fb"
    accent2: str = "#4facfe"
    accent3: str = "#43e97b"
    accent4: str = "#fa709a"
    categories: tuple[str, ...] = ("#667eea", "#f093fb", "#4facfe")
    label: str = "#4a5568"


@dataclass(frozen=True)
class DashboardConfig:
    """Layout, binning, animation and parsing options for one dashboard."""
    margin: Margin = field(default_factory=Margin)
    palette: Palette = field(default_factory=Palette)
    histogram_height: int = 350
    scatter_height: int = 350
    timeseries_height: int = 400
    bin_count: int = 30
    band_padding: float = 0.3
    jitter_fraction: float = 0.8      # share of a band used for scatter jitter
    jitter_seed: Optional[int] = None
    counter_duration_ms: int = 1500
    counter_interval_ms: int = 16
    malformed_rows: MalformedRowPolicy = MalformedRowPolicy.DROP
    page_padding: int = 32            # horizontal page padding, both sides together
    column_gap: int = 24              # gap between histogram and scatter columns
    card_padding: int = 48            # horizontal padding inside a chart card
    theme: str = "light"

    def __post_init__(self) -> None:
        if self.bin_count < 1:
            raise ValueError(f"bin_count must be >= 1, got {self.bin_count}")
        if not 0 <= self.band_padding < 1:
            raise ValueError(f"band_padding must be in [0, 1), got {self.band_padding}")
        if self.counter_interval_ms <= 0 or self.counter_duration_ms <= 0:
            raise ValueError("counter_duration_ms and counter_interval_ms must be positive")
        # Accept plain strings (e.g. from from_dict) for the policy
        object.__setattr__(self, "malformed_rows", MalformedRowPolicy(self.malformed_rows))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-friendly dict."""
        return {
            "margin": {
                "top": self.margin.top,
                "right": self.margin.right,
                "bottom": self.margin.bottom,
                "left": self.margin.left,
            },
            "palette": {
                "primary": self.palette.primary,
                "secondary": self.palette.secondary,
                "accent1": self.palette.accent1,
                "accent2": self.palette.accent2,
                "accent3": self.palette.accent3,
                "accent4": self.palette.accent4,
                "categories": list(self.palette.categories),
                "label": self.palette.label,
            },
            "histogram_height": self.histogram_height,
            "scatter_height": self.scatter_height,
            "timeseries_height": self.timeseries_height,
            "bin_count": self.bin_count,
            "band_padding": self.band_padding,
            "jitter_fraction": self.jitter_fraction,
            "jitter_seed": self.jitter_seed,
            "counter_duration_ms": self.counter_duration_ms,
            "counter_interval_ms": self.counter_interval_ms,
            "malformed_rows": self.malformed_rows.value,
            "page_padding": self.page_padding,
            "column_gap": self.column_gap,
            "card_padding": self.card_padding,
            "theme": self.theme,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DashboardConfig":
        """Build a config from a dict; missing keys use defaults, unknown keys are ignored."""
        defaults = cls()
        margin = data.get("margin")
        palette = data.get("palette")
        if isinstance(palette, dict) and "categories" in palette:
            palette = {**palette, "categories": tuple(palette["categories"])}
        jitter_seed = data.get("jitter_seed", defaults.jitter_seed)
        return cls(
            margin=Margin(**margin) if isinstance(margin, dict) else defaults.margin,
            palette=Palette(**palette) if isinstance(palette, dict) else defaults.palette,
            histogram_height=int(data.get("histogram_height", defaults.histogram_height)),
            scatter_height=int(data.get("scatter_height", defaults.scatter_height)),
            timeseries_height=int(data.get("timeseries_height", defaults.timeseries_height)),
            bin_count=int(data.get("bin_count", defaults.bin_count)),
            band_padding=float(data.get("band_padding", defaults.band_padding)),
            jitter_fraction=float(data.get("jitter_fraction", defaults.jitter_fraction)),
            jitter_seed=None if jitter_seed is None else int(jitter_seed),
            counter_duration_ms=int(data.get("counter_duration_ms", defaults.counter_duration_ms)),
            counter_interval_ms=int(data.get("counter_interval_ms", defaults.counter_interval_ms)),
            malformed_rows=MalformedRowPolicy(data.get("malformed_rows", defaults.malformed_rows)),
            page_padding=int(data.get("page_padding", defaults.page_padding)),
            column_gap=int(data.get("column_gap", defaults.column_gap)),
            card_padding=int(data.get("card_padding", defaults.card_padding)),
            theme=str(data.get("theme", defaults.theme)),
        )

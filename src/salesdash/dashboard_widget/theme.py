"""Theme utilities for the dashboard's Plotly charts."""

from __future__ import annotations

from enum import Enum
from typing import Union


class ThemeMode(str, Enum):
    """UI theme mode.

    Used by figure builders to coordinate template and axis colors.
    """

    DARK = "dark"
    LIGHT = "light"


def resolve_theme(theme: Union[str, ThemeMode, None]) -> ThemeMode:
    """Convert str to ThemeMode. Default to LIGHT."""
    if isinstance(theme, ThemeMode):
        return theme
    if str(theme).lower() in ("dark", "plotly_dark"):
        return ThemeMode.DARK
    return ThemeMode.LIGHT


def get_theme_colors(theme: ThemeMode) -> tuple[str, str]:
    """Background and foreground (axis label) colors for a theme."""
    if theme is ThemeMode.DARK:
        return "#1a202c", "#e2e8f0"
    return "#ffffff", "#4a5568"


def get_grid_color(theme: ThemeMode) -> str:
    return "rgba(255,255,255,0.15)" if theme is ThemeMode.DARK else "#e2e8f0"


def get_theme_template(theme: ThemeMode) -> str:
    """Plotly template name for a theme."""
    if theme is ThemeMode.DARK:
        return "plotly_dark"
    return "plotly_white"

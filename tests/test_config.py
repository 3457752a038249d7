"""Tests for DashboardConfig."""

from __future__ import annotations

import pytest

from salesdash.config import DashboardConfig, Margin, Palette
from salesdash.data.parser import MalformedRowPolicy


def test_defaults() -> None:
    cfg = DashboardConfig()
    assert cfg.margin == Margin(top=30, right=30, bottom=50, left=60)
    assert cfg.palette.primary == "#667eea"
    assert cfg.palette.categories == ("#667eea", "#f093fb", "#4facfe")
    assert cfg.bin_count == 30
    assert cfg.band_padding == 0.3
    assert cfg.malformed_rows is MalformedRowPolicy.DROP


def test_round_trip() -> None:
    cfg = DashboardConfig(
        margin=Margin(10, 20, 30, 40),
        palette=Palette(categories=("#000000", "#ffffff")),
        bin_count=12,
        jitter_seed=7,
        malformed_rows=MalformedRowPolicy.KEEP,
        theme="dark",
    )
    assert DashboardConfig.from_dict(cfg.to_dict()) == cfg


def test_from_dict_partial_and_unknown_keys() -> None:
    cfg = DashboardConfig.from_dict({"bin_count": "5", "malformed_rows": "keep", "unknown": 1})
    assert cfg.bin_count == 5
    assert cfg.malformed_rows is MalformedRowPolicy.KEEP
    assert cfg.margin == Margin()


def test_policy_string_is_coerced() -> None:
    cfg = DashboardConfig(malformed_rows="keep")
    assert cfg.malformed_rows is MalformedRowPolicy.KEEP


@pytest.mark.parametrize("kwargs", [
    {"bin_count": 0},
    {"band_padding": 1.0},
    {"band_padding": -0.1},
    {"counter_interval_ms": 0},
    {"malformed_rows": "ignore"},
])
def test_invalid_values(kwargs) -> None:
    with pytest.raises(ValueError):
        DashboardConfig(**kwargs)

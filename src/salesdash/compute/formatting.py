"""Number formatting and counter animation frames for the stat cards."""

from __future__ import annotations

import math
from typing import Optional


def format_number(num: Optional[float]) -> str:
    """Compact display: 1234567 -> '1.23M', 1500 -> '1.5K', 42.4 -> '42'."""
    if num is None:
        return "-"
    if isinstance(num, float) and math.isnan(num):
        return "NaN"
    if num >= 1_000_000:
        return f"{num / 1_000_000:.2f}M"
    if num >= 1_000:
        return f"{num / 1_000:.1f}K"
    return f"{num:.0f}"


def format_currency(num: Optional[float]) -> str:
    return "$" + format_number(num)


def counter_frames(
    end: Optional[float],
    *,
    duration_ms: int = 1500,
    interval_ms: int = 16,
    start: float = 0.0,
) -> list[Optional[float]]:
    """Values shown by an animated counter, one per timer tick.

    The counter climbs from ``start`` by a constant increment of
    ``(end - start) / (duration_ms / interval_ms)`` and stops exactly at
    ``end``. If ``end`` is missing, non-finite, or not above ``start`` the
    counter jumps straight to it.
    """
    if interval_ms <= 0 or duration_ms <= 0:
        raise ValueError("duration_ms and interval_ms must be positive")
    if end is None or not math.isfinite(end) or end <= start:
        return [end]

    increment = (end - start) / (duration_ms / interval_ms)
    frames: list[Optional[float]] = []
    current = start
    while True:
        current += increment
        if current >= end:
            frames.append(end)
            return frames
        frames.append(current)


class CounterAnimation:
    """Steps through counter frames and renders each as display text."""

    def __init__(
        self,
        end: Optional[float],
        *,
        currency: bool,
        duration_ms: int = 1500,
        interval_ms: int = 16,
    ) -> None:
        self.currency = currency
        self._frames = counter_frames(end, duration_ms=duration_ms, interval_ms=interval_ms)
        self._pos = 0

    @property
    def done(self) -> bool:
        return self._pos >= len(self._frames)

    def text(self, value: Optional[float]) -> str:
        return format_currency(value) if self.currency else format_number(value)

    def next_text(self) -> Optional[str]:
        """Text for the next frame, or None once the animation has finished."""
        if self.done:
            return None
        value = self._frames[self._pos]
        self._pos += 1
        return self.text(value)

    def final_text(self) -> str:
        return self.text(self._frames[-1])

"""Domain-to-pixel scales for the dashboard charts.

Three families are used:

- ``LinearScale``: numeric domain -> pixel range (sales amounts, counts).
- ``TimeScale``: date domain -> pixel range, linear over epoch milliseconds.
- ``BandScale``: ordered categories -> evenly spaced pixel bands.

``OrdinalScale`` maps categories to palette colors for the scatter legend.

Linear, time and band scales hold only their domain/range configuration.
Linear and time scales extrapolate outside their domain (no clamping).
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any, Hashable, Iterable, Optional, Sequence, Union

import numpy as np
import pandas as pd

Number = Union[int, float]
ArrayLike = Union[Number, Sequence[Number], np.ndarray]


def _interpolate(r0: float, r1: float, t):
    # r0*(1-t) + r1*t hits both endpoints exactly at t == 0 and t == 1
    return r0 * (1 - t) + r1 * t


class LinearScale:
    """Affine map from ``domain=(d0, d1)`` to ``range=(r0, r1)``."""

    def __init__(self, domain: tuple[Number, Number], range_: tuple[Number, Number]) -> None:
        self.domain = (float(domain[0]), float(domain[1]))
        self.range = (float(range_[0]), float(range_[1]))

    def __repr__(self) -> str:
        return f"LinearScale(domain={self.domain}, range={self.range})"

    def __call__(self, value: ArrayLike):
        d0, d1 = self.domain
        r0, r1 = self.range
        v = value if np.isscalar(value) else np.asarray(value, dtype=float)
        if d1 == d0:
            mid = (r0 + r1) / 2
            return mid if np.isscalar(v) else np.full(np.shape(v), mid)
        t = (v - d0) / (d1 - d0)
        out = _interpolate(r0, r1, t)
        return float(out) if np.isscalar(value) else out

    def invert(self, pixel: ArrayLike):
        """Map a pixel value back into the domain."""
        return LinearScale(self.range, self.domain)(pixel)

    def ticks(self, count: int = 10) -> list[float]:
        """Roughly ``count`` round tick values inside the domain.

        The step is 1, 2 or 5 times a power of ten. Empty for a degenerate
        or non-finite domain.
        """
        lo, hi = sorted(self.domain)
        if count < 1 or not (math.isfinite(lo) and math.isfinite(hi)) or lo == hi:
            return []
        raw_step = (hi - lo) / count
        power = math.floor(math.log10(raw_step))
        error = raw_step / 10 ** power
        if error >= math.sqrt(50):
            factor = 10
        elif error >= math.sqrt(10):
            factor = 5
        elif error >= math.sqrt(2):
            factor = 2
        else:
            factor = 1
        step = factor * 10.0 ** power
        first, last = math.ceil(lo / step), math.floor(hi / step)
        return [round(i * step, 12) for i in range(first, last + 1)]


def to_epoch_ms(value: Any) -> float:
    """Epoch milliseconds of a datetime-like value; NaN for None/NaT."""
    if value is None:
        return math.nan
    ts = pd.Timestamp(value)
    if pd.isna(ts):
        return math.nan
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC").tz_localize(None)
    return ts.value / 1e6


class TimeScale:
    """Linear map from a date extent to a pixel range."""

    def __init__(self, domain: tuple[Any, Any], range_: tuple[Number, Number]) -> None:
        self.domain = (pd.Timestamp(domain[0]).to_pydatetime(), pd.Timestamp(domain[1]).to_pydatetime())
        self._linear = LinearScale((to_epoch_ms(domain[0]), to_epoch_ms(domain[1])), range_)

    @classmethod
    def from_extent(
        cls,
        dates: Iterable[Optional[datetime]],
        range_: tuple[Number, Number],
    ) -> Optional["TimeScale"]:
        """Build a scale over ``[min(dates), max(dates)]``, ignoring invalid dates.

        Returns None if there is no valid date.
        """
        valid = [d for d in dates if d is not None and not pd.isna(d)]
        if not valid:
            return None
        return cls((min(valid), max(valid)), range_)

    @property
    def range(self) -> tuple[float, float]:
        return self._linear.range

    def __repr__(self) -> str:
        return f"TimeScale(domain={self.domain}, range={self.range})"

    def __call__(self, value: Any):
        if isinstance(value, (list, tuple, np.ndarray, pd.Series, pd.DatetimeIndex)):
            ms = np.array([to_epoch_ms(v) for v in value], dtype=float)
            return self._linear(ms)
        return self._linear(to_epoch_ms(value))

    def invert(self, pixel: Number) -> datetime:
        ms = self._linear.invert(pixel)
        return pd.Timestamp(int(round(ms)), unit="ms").to_pydatetime()


class BandScale:
    """Evenly spaced bands for an ordered set of categories.

    The range is divided into ``n`` bands separated by ``n - 1`` gaps of
    ``step * padding``, with no outer padding, so that
    ``n * bandwidth + (n - 1) * gap`` equals the range extent. When the range
    is reversed (``r0 > r1``) the first category sits at the ``r0`` end.
    """

    def __init__(
        self,
        domain: Iterable[Hashable],
        range_: tuple[Number, Number],
        padding: float = 0.3,
    ) -> None:
        if not 0 <= padding < 1:
            raise ValueError(f"padding must be in [0, 1), got {padding}")
        self.domain: list[Hashable] = list(dict.fromkeys(domain))
        self.range = (float(range_[0]), float(range_[1]))
        self.padding = float(padding)
        self._index = {key: i for i, key in enumerate(self.domain)}

        r0, r1 = self.range
        reverse = r1 < r0
        start, stop = (r1, r0) if reverse else (r0, r1)
        n = len(self.domain)
        if n == 0:
            self._step = 0.0
            self._bandwidth = 0.0
            self._starts: list[float] = []
            return
        self._step = (stop - start) / (n - self.padding)
        self._bandwidth = self._step * (1 - self.padding)
        starts = [start + self._step * i for i in range(n)]
        if reverse:
            starts.reverse()
        self._starts = starts

    def __repr__(self) -> str:
        return f"BandScale(domain={self.domain}, range={self.range}, padding={self.padding})"

    def __call__(self, key: Hashable) -> Optional[float]:
        """Start offset of the band for ``key``; None for an unknown key."""
        i = self._index.get(key)
        if i is None:
            return None
        return self._starts[i]

    def center(self, key: Hashable) -> Optional[float]:
        start = self(key)
        if start is None:
            return None
        return start + self._bandwidth / 2

    def bandwidth(self) -> float:
        return self._bandwidth

    def step(self) -> float:
        return self._step

    def gap(self) -> float:
        """Width of one inter-band gap."""
        return self._step * self.padding


class OrdinalScale:
    """Map categories to palette entries, cycling through the palette.

    Categories not in the domain are appended on first lookup, so colors stay
    stable for the lifetime of the scale.
    """

    def __init__(self, palette: Sequence[str], domain: Iterable[Hashable] = ()) -> None:
        if not palette:
            raise ValueError("palette must not be empty")
        self.palette = list(palette)
        self._index: dict[Hashable, int] = {}
        for key in domain:
            self._index.setdefault(key, len(self._index))

    @property
    def domain(self) -> list[Hashable]:
        return list(self._index)

    def __call__(self, key: Hashable) -> str:
        i = self._index.setdefault(key, len(self._index))
        return self.palette[i % len(self.palette)]


def jitter_offsets(n: int, spread: float, seed: Optional[int] = None) -> np.ndarray:
    """Uniform offsets in ``[-spread/2, spread/2)`` from a seeded generator."""
    rng = np.random.default_rng(seed)
    return (rng.random(n) - 0.5) * spread

"""Typed sales records and the immutable Dataset built from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Iterator, Optional

import numpy as np
import pandas as pd

# Columns every input CSV must provide.
REQUIRED_COLUMNS: tuple[str, ...] = (
    "sales",
    "order_date",
    "category",
    "product_name",
    "customer_name",
)


@dataclass(frozen=True)
class Record:
    """One sales transaction.

    ``order_date`` is None when the raw date could not be parsed, and
    ``sales`` is NaN when the raw amount could not be parsed; both only
    happen for rows kept under ``MalformedRowPolicy.KEEP``.
    """

    sales: float
    order_date: Optional[datetime]
    category: str = ""
    product_name: str = ""
    customer_name: str = ""


@dataclass(frozen=True)
class Dataset:
    """Ordered, immutable sequence of Records for one render pass."""

    records: tuple[Record, ...] = field(default_factory=tuple)

    @classmethod
    def from_records(cls, records: Iterable[Record]) -> "Dataset":
        return cls(records=tuple(records))

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def __getitem__(self, index: int) -> Record:
        return self.records[index]

    @property
    def sales(self) -> np.ndarray:
        """Sales amounts as a float array (NaN for unparsed amounts)."""
        return np.fromiter((r.sales for r in self.records), dtype=float, count=len(self.records))

    @property
    def order_dates(self) -> list[Optional[datetime]]:
        return [r.order_date for r in self.records]

    def categories(self) -> list[str]:
        """Distinct categories in first-seen order."""
        return list(dict.fromkeys(r.category for r in self.records))

    def to_frame(self) -> pd.DataFrame:
        """Return the records as a DataFrame with REQUIRED_COLUMNS."""
        if not self.records:
            return pd.DataFrame({col: pd.Series(dtype=object) for col in REQUIRED_COLUMNS})
        df = pd.DataFrame(
            {
                "sales": self.sales,
                "order_date": pd.to_datetime(self.order_dates),
                "category": [r.category for r in self.records],
                "product_name": [r.product_name for r in self.records],
                "customer_name": [r.customer_name for r in self.records],
            }
        )
        return df

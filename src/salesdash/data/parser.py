"""Row parsing for sales data.

Converts raw string-keyed rows (as read from CSV) into typed ``Record``
objects. Each field is parsed with an explicit result object instead of
implicit coercion, and every failing field is collected into a
``ParseReport`` so callers can decide what to show or log.

What happens to a row with a failing field is decided by
``MalformedRowPolicy``:

- ``KEEP``: the row is kept with ``sales=NaN`` / ``order_date=None``,
  which then propagates into aggregates and scale domains.
- ``DROP``: the row is excluded from the Dataset.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Iterable, Mapping, Optional

import pandas as pd

from salesdash.data.records import Dataset, Record
from salesdash.utils.logging import get_logger

logger = get_logger(__name__)


class MalformedRowPolicy(str, Enum):
    """What to do with rows whose sales or order_date fail to parse."""

    KEEP = "keep"
    DROP = "drop"


@dataclass(frozen=True)
class FieldResult:
    """Outcome of parsing one field: a value, or an error message."""

    value: Any
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class RowIssue:
    """A single field that failed to parse."""

    row_index: int
    field: str
    raw: Any
    message: str


@dataclass
class ParseReport:
    """Per-load validation report."""

    total_rows: int = 0
    issues: list[RowIssue] = field(default_factory=list)
    dropped_rows: int = 0

    @property
    def bad_rows(self) -> list[int]:
        """Sorted indices of rows with at least one issue."""
        return sorted({issue.row_index for issue in self.issues})

    @property
    def ok(self) -> bool:
        return not self.issues

    def summary(self) -> str:
        return (
            f"{self.total_rows} row(s), {len(self.bad_rows)} malformed, "
            f"{self.dropped_rows} dropped"
        )


def _as_text(raw: Any) -> str:
    if raw is None:
        return ""
    if isinstance(raw, float) and math.isnan(raw):
        return ""
    return str(raw).strip()


def parse_sales(raw: Any) -> FieldResult:
    """Parse a sales amount.

    Accepts anything ``float()`` accepts after stripping whitespace. Empty,
    non-numeric, non-finite and negative values are failures with a NaN value.
    """
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        value = float(raw)
        text = repr(raw)
    else:
        text = _as_text(raw)
        if not text:
            return FieldResult(math.nan, "empty sales value")
        try:
            value = float(text)
        except ValueError:
            return FieldResult(math.nan, f"not a number: {text!r}")

    if not math.isfinite(value):
        return FieldResult(math.nan, f"not a finite number: {text!r}")
    if value < 0:
        return FieldResult(math.nan, f"negative sales amount: {text!r}")
    return FieldResult(value)


def parse_order_date(raw: Any) -> FieldResult:
    """Parse an order date with pandas' flexible timestamp parser.

    Timezone-aware values are converted to naive UTC so that all dates in a
    Dataset are comparable. Failures carry a None value.
    """
    if isinstance(raw, datetime):
        ts = pd.Timestamp(raw)
    else:
        text = _as_text(raw)
        if not text:
            return FieldResult(None, "empty order_date value")
        try:
            ts = pd.Timestamp(text)
        except (ValueError, TypeError, OverflowError):
            return FieldResult(None, f"unparseable date: {text!r}")

    if pd.isna(ts):
        return FieldResult(None, f"unparseable date: {raw!r}")
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC").tz_localize(None)
    return FieldResult(ts.to_pydatetime())


def parse_row(row: Mapping[str, Any], row_index: int = 0) -> tuple[Record, list[RowIssue]]:
    """Parse one raw row into a Record plus the issues found in it."""
    issues: list[RowIssue] = []

    sales = parse_sales(row.get("sales"))
    if not sales.ok:
        issues.append(RowIssue(row_index, "sales", row.get("sales"), sales.error))

    order_date = parse_order_date(row.get("order_date"))
    if not order_date.ok:
        issues.append(RowIssue(row_index, "order_date", row.get("order_date"), order_date.error))

    record = Record(
        sales=sales.value,
        order_date=order_date.value,
        category=_as_text(row.get("category")),
        product_name=_as_text(row.get("product_name")),
        customer_name=_as_text(row.get("customer_name")),
    )
    return record, issues


def parse_rows(
    rows: Iterable[Mapping[str, Any]],
    *,
    policy: MalformedRowPolicy = MalformedRowPolicy.DROP,
) -> tuple[Dataset, ParseReport]:
    """Parse raw rows into a Dataset and a ParseReport.

    Args:
        rows: Iterable of string-keyed rows (e.g. ``DataFrame.to_dict("records")``).
        policy: KEEP or DROP rows with malformed sales/order_date.

    Returns:
        (dataset, report). Never raises on field content.
    """
    policy = MalformedRowPolicy(policy)
    report = ParseReport()
    records: list[Record] = []

    for i, row in enumerate(rows):
        report.total_rows += 1
        record, issues = parse_row(row, i)
        if issues:
            report.issues.extend(issues)
            if policy is MalformedRowPolicy.DROP:
                report.dropped_rows += 1
                continue
        records.append(record)

    if report.issues:
        logger.warning("parse_rows (%s): %s", policy.value, report.summary())
        for issue in report.issues[:5]:
            logger.debug("row %d %s: %s", issue.row_index, issue.field, issue.message)
    else:
        logger.debug("parse_rows: %d row(s) parsed cleanly", report.total_rows)

    return Dataset.from_records(records), report

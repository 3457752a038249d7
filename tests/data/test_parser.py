"""Unit tests for field and row parsing."""

from __future__ import annotations

import math
from datetime import datetime, timezone

import pytest

from salesdash.data.parser import (
    MalformedRowPolicy,
    parse_order_date,
    parse_row,
    parse_rows,
    parse_sales,
)


@pytest.mark.parametrize(
    "raw, expected",
    [("10", 10.0), (" 12.5 ", 12.5), ("1e3", 1000.0), ("0", 0.0), (7, 7.0), (2.5, 2.5)],
)
def test_parse_sales_accepts_numbers(raw, expected) -> None:
    result = parse_sales(raw)
    assert result.ok
    assert result.value == expected


@pytest.mark.parametrize("raw", ["", "   ", None, "abc", "12abc", "nan", "inf", "-5", float("nan")])
def test_parse_sales_failures_yield_nan(raw) -> None:
    result = parse_sales(raw)
    assert not result.ok
    assert math.isnan(result.value)
    assert result.error


def test_parse_sales_negative_message() -> None:
    assert "negative" in parse_sales("-1").error


def test_parse_order_date_formats() -> None:
    assert parse_order_date("11/8/2017").value == datetime(2017, 11, 8)
    assert parse_order_date("2017-11-08").value == datetime(2017, 11, 8)
    assert parse_order_date(datetime(2020, 1, 2)).value == datetime(2020, 1, 2)


def test_parse_order_date_tz_aware_becomes_naive_utc() -> None:
    result = parse_order_date("2020-01-01T05:00:00+05:00")
    assert result.ok
    assert result.value == datetime(2020, 1, 1, 0, 0)
    assert result.value.tzinfo is None

    aware = datetime(2020, 1, 1, 12, tzinfo=timezone.utc)
    assert parse_order_date(aware).value == datetime(2020, 1, 1, 12)


@pytest.mark.parametrize("raw", ["", None, "not a date", "NaT"])
def test_parse_order_date_failures(raw) -> None:
    result = parse_order_date(raw)
    assert not result.ok
    assert result.value is None


def test_parse_row_collects_issues_per_field() -> None:
    record, issues = parse_row({"sales": "x", "order_date": "", "category": " Tech "}, row_index=7)
    assert math.isnan(record.sales)
    assert record.order_date is None
    assert record.category == "Tech"
    assert record.product_name == ""
    assert [(i.row_index, i.field) for i in issues] == [(7, "sales"), (7, "order_date")]


def test_parse_rows_drop_policy(raw_rows) -> None:
    dataset, report = parse_rows(raw_rows, policy=MalformedRowPolicy.DROP)
    assert len(dataset) == 2
    assert [r.sales for r in dataset] == [10.0, 20.5]
    assert report.total_rows == 4
    assert report.dropped_rows == 2
    assert report.bad_rows == [2, 3]
    assert not report.ok


def test_parse_rows_keep_policy_propagates_nan(raw_rows) -> None:
    dataset, report = parse_rows(raw_rows, policy="keep")
    assert len(dataset) == 4
    assert report.dropped_rows == 0
    assert math.isnan(dataset[2].sales)
    assert dataset[3].order_date is None
    assert {i.field for i in report.issues} == {"sales", "order_date"}


def test_parse_rows_clean_input() -> None:
    rows = [{"sales": "1", "order_date": "2020-01-01"}]
    dataset, report = parse_rows(rows)
    assert len(dataset) == 1
    assert report.ok
    assert report.summary() == "1 row(s), 0 malformed, 0 dropped"


def test_parse_rows_empty() -> None:
    dataset, report = parse_rows([])
    assert len(dataset) == 0
    assert report.total_rows == 0
    assert report.ok

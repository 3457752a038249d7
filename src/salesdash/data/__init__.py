"""Sales data: typed records, row parsing and CSV loading."""

from salesdash.data.errors import MissingColumnsError, SalesDataError
from salesdash.data.loader import CancelToken, LoadResult, load_dataset, read_sales_csv
from salesdash.data.parser import (
    FieldResult,
    MalformedRowPolicy,
    ParseReport,
    RowIssue,
    parse_order_date,
    parse_rows,
    parse_sales,
)
from salesdash.data.records import REQUIRED_COLUMNS, Dataset, Record

__all__ = [
    "REQUIRED_COLUMNS",
    "CancelToken",
    "Dataset",
    "FieldResult",
    "LoadResult",
    "MalformedRowPolicy",
    "MissingColumnsError",
    "ParseReport",
    "Record",
    "RowIssue",
    "SalesDataError",
    "load_dataset",
    "parse_order_date",
    "parse_rows",
    "parse_sales",
    "read_sales_csv",
]

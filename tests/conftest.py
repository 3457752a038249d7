# tests/conftest.py
"""Shared fixtures for salesdash tests."""
from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

import pytest


def pytest_configure() -> None:
    # Ensure `src` is importable when running tests from the repo root without an install.
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    if src_dir.exists() and str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


CSV_HEADER = "order_date,customer_name,category,product_name,sales\n"


@pytest.fixture
def raw_rows() -> list[dict[str, str]]:
    """Raw string rows as read from CSV; row 2 has a bad amount, row 3 a bad date."""
    return [
        {"sales": "10", "order_date": "1/5/2020", "category": "Furniture",
         "product_name": "Chair", "customer_name": "Ann"},
        {"sales": "20.5", "order_date": "2020-02-10", "category": "Technology",
         "product_name": "Phone", "customer_name": "Bob"},
        {"sales": "abc", "order_date": "3/1/2020", "category": "Furniture",
         "product_name": "Desk", "customer_name": "Cy"},
        {"sales": "30", "order_date": "not a date", "category": "Office Supplies",
         "product_name": "Paper", "customer_name": "Dee"},
    ]


@pytest.fixture
def dataset():
    """Clean three-record Dataset (sales 10, 20, 30)."""
    from salesdash.data.records import Dataset, Record

    return Dataset.from_records([
        Record(10.0, datetime(2020, 1, 1), "Furniture", "Chair", "Ann"),
        Record(20.0, datetime(2020, 1, 11), "Technology", "Phone", "Bob"),
        Record(30.0, datetime(2020, 1, 21), "Furniture", "Desk", "Cy"),
    ])


@pytest.fixture
def sales_csv(tmp_path: Path) -> Path:
    """Small valid CSV on disk."""
    p = tmp_path / "sales.csv"
    p.write_text(
        CSV_HEADER
        + "1/5/2020,Ann,Furniture,Chair,10\n"
        + "2/10/2020,Bob,Technology,Phone,20\n"
        + "3/1/2020,Cy,Furniture,\"Desk, oak\",30\n"
    )
    return p

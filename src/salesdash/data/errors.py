"""Exceptions raised while loading sales data."""

from __future__ import annotations

from typing import Iterable


class SalesDataError(ValueError):
    """Base class for problems with a sales data source."""


class MissingColumnsError(SalesDataError):
    """The input table lacks one or more required columns."""

    def __init__(self, missing: Iterable[str], *, source: object = None) -> None:
        self.missing = list(missing)
        self.source = source
        where = f" in {source}" if source is not None else ""
        super().__init__(f"Missing required column(s){where}: {self.missing}")

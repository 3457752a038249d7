"""CSV loading for the sales dashboard.

The load stage is the only suspension point of a render pass: the CSV is
read with pandas in a worker thread, then parsed into a Dataset. Load
failures never escape as exceptions; they are returned in ``LoadResult.error``
so the caller can report them.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from salesdash.data.errors import MissingColumnsError, SalesDataError
from salesdash.data.parser import MalformedRowPolicy, ParseReport, parse_rows
from salesdash.data.records import REQUIRED_COLUMNS, Dataset
from salesdash.utils.logging import get_logger

logger = get_logger(__name__)

# Bundled CSV used when no source is configured
DEFAULT_CSV = "sales_sample.csv"

PathLike = Union[str, Path]


@dataclass
class CancelToken:
    """Cooperative cancellation token for a render pass."""
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class LoadResult:
    """Outcome of the load stage: a Dataset, a failure, or a cancelled load."""

    dataset: Optional[Dataset] = None
    report: Optional[ParseReport] = None
    error: Optional[BaseException] = None
    cancelled: bool = False
    source: Optional[Path] = None

    @property
    def ok(self) -> bool:
        return self.dataset is not None and self.error is None and not self.cancelled


def get_data_dir() -> Path:
    """Resolve the project's data/ directory.

    Package layout: <root>/src/salesdash/data/loader.py, data in <root>/data/.
    """
    # loader.py -> data -> salesdash -> src -> project root
    return Path(__file__).resolve().parent.parent.parent.parent / "data"


def default_csv_path() -> Path:
    return get_data_dir() / DEFAULT_CSV


def read_sales_csv(path: PathLike) -> pd.DataFrame:
    """Read a sales CSV as strings and check the required columns.

    Raises:
        FileNotFoundError: If the file does not exist.
        MissingColumnsError: If any of REQUIRED_COLUMNS is absent.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"CSV not found: {path}")
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = [str(c).strip() for c in df.columns]
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise MissingColumnsError(missing, source=path)
    return df


async def load_dataset(
    path: PathLike,
    *,
    policy: MalformedRowPolicy = MalformedRowPolicy.DROP,
    token: Optional[CancelToken] = None,
) -> LoadResult:
    """Load and parse a sales CSV without blocking the event loop.

    Args:
        path: CSV file to read.
        policy: What to do with malformed rows (see MalformedRowPolicy).
        token: Checked once the read returns; if cancelled, parsing is skipped
            and a cancelled LoadResult is returned.

    Returns:
        LoadResult. Read failures are captured in ``error``.
    """
    source = Path(path)
    token = token if token is not None else CancelToken()

    try:
        df = await asyncio.to_thread(read_sales_csv, source)
    except (OSError, SalesDataError, pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        logger.error("load failed for %s: %s", source, e)
        return LoadResult(error=e, source=source)

    if token.cancelled:
        logger.debug("load of %s superseded before parsing", source)
        return LoadResult(cancelled=True, source=source)

    rows = df[list(REQUIRED_COLUMNS)].to_dict("records")
    dataset, report = parse_rows(rows, policy=policy)

    logger.info("loaded %s: %s", source.name, report.summary())
    return LoadResult(dataset=dataset, report=report, source=source)

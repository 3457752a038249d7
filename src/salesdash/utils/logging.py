"""
Logging utilities for the salesdash package.

Library Logging Conventions
---------------------------
1. **Library code never calls configure_logging()** - it only uses get_logger(__name__).
2. **The dashboard app (and scripts) call configure_logging()** to get console output.
3. When salesdash is embedded in another NiceGUI application that has configured
   logging, all salesdash logs flow to that application's handlers.

salesdash does NOT write log files.

Example Usage
-------------
In library code (parser.py, pipeline.py, ...):
    ```python
    from salesdash.utils.logging import get_logger
    logger = get_logger(__name__)
    logger.info("loaded %d rows", n)
    ```

In the app or a script:
    ```python
    from salesdash.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

LOG_LEVEL_ENV = "SALESDASH_LOG_LEVEL"
ROOT_LOGGER_NAME = "salesdash"


def resolve_level(level: Optional[Union[str, int]]) -> int:
    """Turn a level name, number or None (env var / INFO) into a logging level."""
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return int(level)


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Configure logging for the salesdash logger only (never root).

    Parameters
    ----------
    level:
        Logging level (e.g. "DEBUG", "INFO"). Defaults to the
        SALESDASH_LOG_LEVEL env var, or "INFO" if unset.
    fmt:
        Log message format. Defaults to DEFAULT_FMT.
    datefmt:
        Date format. Defaults to "%Y-%m-%d %H:%M:%S".
    force:
        If True, remove existing handlers before adding a new one. If False,
        keep an already-installed stderr handler and only update the level.
    """
    resolved = resolve_level(level)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(resolved)

    formatter = logging.Formatter(fmt=fmt or DEFAULT_FMT, datefmt=datefmt or DEFAULT_DATEFMT)

    if force:
        for h in logger.handlers[:]:
            h.close()
            logger.removeHandler(h)
    else:
        for h in logger.handlers:
            if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr:
                h.setLevel(resolved)
                return

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(resolved)
    console.setFormatter(formatter)
    logger.addHandler(console)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger by name.

    If name is None, returns the 'salesdash' logger.

    Use like:
        logger = get_logger(__name__)
    """
    return logging.getLogger(ROOT_LOGGER_NAME if name is None else name)

"""Logging setup for the terminal shell."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

DEFAULT_LEVEL = "WARNING"


def configure_logging(level: str = DEFAULT_LEVEL, log_file: Path | str | None = None) -> Path | None:
    """
    Configure loguru to emit to stderr and, optionally, a rotating log file.

    Returns the file path in use when file logging is enabled, otherwise None.
    """
    logger.remove()
    logger.enable("ize")
    logger.add(sys.stderr, level=level.upper(), backtrace=False, diagnose=False)

    if log_file is None:
        return None

    path = Path(log_file)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(path, level="DEBUG", rotation="1 MB", retention=3, encoding="utf-8")
    except OSError as exc:
        logger.warning(f"File logging disabled; unable to write to {path}: {exc}")
        return None
    return path

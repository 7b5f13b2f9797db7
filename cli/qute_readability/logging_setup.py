"""Logging configuration for the userscript."""

from __future__ import annotations

import logging
import os
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_ENV = "QUTE_READABILITY_LOG_LEVEL"


def _normalise_level(level: Optional[Union[str, int]]) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        value = level.strip().upper()
        if value.isdigit():
            return int(value)
        mapped = logging.getLevelName(value)
        if isinstance(mapped, int):
            return mapped
    return logging.WARNING


def configure_logging(level: Optional[Union[str, int]] = None) -> int:
    """Route log records to stderr through rich.

    The userscript runs inside the browser, so the default level is WARNING.
    ``level`` wins over the ``QUTE_READABILITY_LOG_LEVEL`` variable. Returns
    the level that was applied.
    """
    log_level = _normalise_level(level if level is not None else os.getenv(LOG_LEVEL_ENV))

    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s - %(message)s"))
    root.addHandler(handler)
    root.setLevel(log_level)
    return log_level

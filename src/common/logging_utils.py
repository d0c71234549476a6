"""Centralized logging helpers.

Keeps handler setup in one place so every entry point logs the same way,
and offers small helpers for structured DEBUG traces.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from constants import Constants

_HANDLER_FLAG = "_flowdef_handler"


def configure_logging(level: Optional[str] = None) -> None:
    """Install the flowdef stream handler on the root logger.

    Level precedence: explicit ``level`` argument, then ``FLOWDEF_LOG_LEVEL``,
    then INFO. Calling this more than once does not add duplicate handlers.
    """
    root = logging.getLogger()
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "INFO").upper()
    root.setLevel(getattr(logging, level_name, logging.INFO))

    if any(getattr(h, _HANDLER_FLAG, False) for h in root.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
    setattr(handler, _HANDLER_FLAG, True)
    root.addHandler(handler)


def add_file_handler(path: str) -> logging.Handler:
    """Attach a file handler with timestamps to the root logger."""
    file_handler = logging.FileHandler(path)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    )
    logging.getLogger().addHandler(file_handler)
    return file_handler


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by ``logger``."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping for structured log records.

    None values are dropped so formatters never see half-filled keys.
    """
    return {k: v for k, v in fields.items() if v is not None}

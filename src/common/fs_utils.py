"""Filesystem helpers used by the installer."""
from __future__ import annotations

import logging
import os
from typing import Callable, Optional

logger = logging.getLogger(__name__)


def search_up_dir_path(start: str, predicate: Callable[[str], bool]) -> Optional[str]:
    """Walk from ``start`` up to the filesystem root.

    Returns:
        The first directory for which ``predicate`` is true, or None.
    """
    current = os.path.abspath(start)
    while True:
        if predicate(current):
            return current
        parent = os.path.dirname(current)
        if parent == current:
            return None
        current = parent


def mkdirp(path: str) -> None:
    """Create ``path`` and any missing parents."""
    os.makedirs(path, exist_ok=True)


def copy_file(src: str, dest: str, preprocessor: Optional[Callable[[str], str]] = None) -> None:
    """Copy a text file, optionally transforming its content on the way.

    The destination is written in place; a failure part way through can
    leave a partial file behind.
    """
    with open(src, "r", encoding="utf-8") as fh:
        content = fh.read()
    if preprocessor is not None:
        content = preprocessor(content)
    with open(dest, "w", encoding="utf-8") as fh:
        fh.write(content)
    logger.debug("Copied %s -> %s", src, dest)

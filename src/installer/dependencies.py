"""Dependency discovery from a project's package.json."""

from __future__ import annotations

import json
import logging
import os
from typing import List

from constants import Constants

logger = logging.getLogger(__name__)


def list_dependencies(project_root: str) -> List[str]:
    """Return package names from dependencies and devDependencies.

    Order follows package.json, dependencies first; duplicates keep their
    first occurrence. Scoped packages are skipped since a query name cannot
    contain ``@``. Version ranges are not carried over: each name resolves
    to the newest definition compatible with the flow version.
    """
    package_json_path = os.path.join(project_root, Constants.PACKAGE_JSON_FILE)
    try:
        with open(package_json_path, "r", encoding="utf-8") as file:
            data = json.load(file)
    except FileNotFoundError:
        logger.warning("No %s found in %s", Constants.PACKAGE_JSON_FILE, project_root)
        return []
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("Failed to parse %s: %s", package_json_path, e)
        return []
    if not isinstance(data, dict):
        logger.warning("Unexpected content in %s", package_json_path)
        return []

    names: List[str] = []
    for section in ("dependencies", "devDependencies"):
        deps = data.get(section) or {}
        if not isinstance(deps, dict):
            continue
        for name in deps:
            if name in names:
                continue
            if name.startswith("@"):
                logger.warning("Skipping scoped package %s: not supported", name)
                continue
            names.append(name)
    return names

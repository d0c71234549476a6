"""Catalog provider backed by a local library-definitions directory.

Expected layout (the upstream definitions repository checked out or
cached locally)::

    <root>/VERSION
    <root>/definitions/npm/<name>_v<pkgver>/flow_v<range>/<name>_v<pkgver>.js
    <root>/definitions/npm/<name>_v<pkgver>/flow_v<range>/test_*.js
"""

from __future__ import annotations

import logging
import os
from typing import List, Optional, Tuple

import semantic_version

from constants import Constants
from errors import CatalogNotFound, MalformedVersion
from versioning.models import WILDCARD, CandidateDefinition, Version
from versioning.parser import parse_version

logger = logging.getLogger(__name__)

_FLOW_DIR_PREFIX = "flow_"
_TEST_FILE_PREFIX = "test_"

# Wildcards rank above any concrete number at the same position.
_WILDCARD_RANK = 2 ** 31


def _split_pkg_dir(dir_name: str) -> Optional[Tuple[str, str]]:
    """Split ``lodash_v4.x.x`` into (name, ``v4.x.x``) on the last ``_v``."""
    idx = dir_name.rfind("_v")
    if idx <= 0:
        return None
    return dir_name[:idx], dir_name[idx + 1:]


def _sort_key(version: Version) -> semantic_version.Version:
    """Project a (possibly wildcarded) version onto semantic_version for ordering."""
    parts = [_WILDCARD_RANK if c == WILDCARD else int(c or 0) for c in version.components]
    return semantic_version.Version(major=parts[0], minor=parts[1], patch=parts[2])


def _load_flow_dir(pkg_name: str, pkg_ver_str: str, pkg_version: Version,
                   flow_dir: str) -> Optional[CandidateDefinition]:
    flow_range = parse_version(os.path.basename(flow_dir)[len(_FLOW_DIR_PREFIX):])
    def_path = os.path.join(flow_dir, f"{pkg_name}_{pkg_ver_str}.js")
    if not os.path.isfile(def_path):
        logger.warning("Missing definition file %s, skipping", def_path)
        return None
    tests = sorted(
        os.path.join(flow_dir, f)
        for f in os.listdir(flow_dir)
        if f.startswith(_TEST_FILE_PREFIX) and f.endswith(".js")
    )
    return CandidateDefinition(
        pkg_name=pkg_name,
        pkg_version=pkg_version,
        flow_version=flow_range,
        path=def_path,
        test_file_paths=tuple(tests),
    )


class LocalCatalog:
    """Read-only catalog of library definitions found under ``root``."""

    def __init__(self, root: str):
        self.root = root
        self._defs: Optional[List[CandidateDefinition]] = None

    @property
    def definitions_dir(self) -> str:
        return os.path.join(self.root, *Constants.DEFINITIONS_SUBDIR)

    def load(self) -> List[CandidateDefinition]:
        """Scan the definitions directory once and return ordered candidates.

        Ordering: package name ascending, then package version newest first,
        then flow range newest first.

        Raises:
            CatalogNotFound: If the definitions directory does not exist.
        """
        if self._defs is not None:
            return self._defs
        defs_dir = self.definitions_dir
        if not os.path.isdir(defs_dir):
            raise CatalogNotFound(defs_dir)

        found: List[CandidateDefinition] = []
        for entry in sorted(os.listdir(defs_dir)):
            pkg_dir = os.path.join(defs_dir, entry)
            if not os.path.isdir(pkg_dir):
                continue
            split = _split_pkg_dir(entry)
            if split is None:
                logger.debug("Skipping unrecognized entry %s", pkg_dir)
                continue
            pkg_name, pkg_ver_str = split
            try:
                pkg_version = parse_version(pkg_ver_str)
            except MalformedVersion as e:
                logger.warning("Skipping %s: %s", pkg_dir, e)
                continue
            for flow_entry in sorted(os.listdir(pkg_dir)):
                flow_dir = os.path.join(pkg_dir, flow_entry)
                if not (os.path.isdir(flow_dir) and flow_entry.startswith(_FLOW_DIR_PREFIX)):
                    continue
                try:
                    defn = _load_flow_dir(pkg_name, pkg_ver_str, pkg_version, flow_dir)
                except MalformedVersion as e:
                    logger.warning("Skipping %s: %s", flow_dir, e)
                    continue
                if defn is not None:
                    found.append(defn)

        # Stable multi-key sort: least significant key first.
        found.sort(key=lambda d: _sort_key(d.flow_version), reverse=True)
        found.sort(key=lambda d: _sort_key(d.pkg_version), reverse=True)
        found.sort(key=lambda d: d.pkg_name)
        logger.debug("Loaded %d library definitions from %s", len(found), defs_dir)
        self._defs = found
        return found

    def definitions_version(self) -> str:
        """Return the definitions repository version used when signing."""
        path = os.path.join(self.root, Constants.DEFINITIONS_VERSION_FILE)
        try:
            with open(path, "r", encoding="utf-8") as fh:
                version = fh.read().strip()
        except FileNotFoundError:
            return Constants.DEFINITIONS_VERSION_UNKNOWN
        return version or Constants.DEFINITIONS_VERSION_UNKNOWN

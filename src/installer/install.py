"""Install library definitions into a Flow project.

Turns a query token into a resolved definition and writes it, signed,
under ``flow-typed/npm`` of the nearest project root.
"""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence, Tuple

from common.code_sign import sign_code_preprocessor, verify_signature
from common.fs_utils import copy_file, mkdirp, search_up_dir_path
from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants
from errors import NoMatchingCandidate, ProjectRootNotFound
from versioning.models import CandidateDefinition, Version
from versioning.parser import parse_query
from versioning.resolver import resolve

logger = logging.getLogger(__name__)

STATUS_INSTALLED = "installed"
STATUS_EXISTS = "exists"


class Catalog(Protocol):
    """Anything that can list candidate definitions in preferred order."""

    def load(self) -> List[CandidateDefinition]: ...

    def definitions_version(self) -> str: ...


@dataclass
class InstallResult:
    """Outcome of one successful install."""
    package: str
    target_path: str
    status: str


def _is_project_root(dir_path: str) -> bool:
    return os.path.isfile(os.path.join(dir_path, Constants.PROJECT_MARKER_FILE))


def find_project_root(start: str) -> Optional[str]:
    """Return the nearest directory at or above ``start`` holding .flowconfig."""
    return search_up_dir_path(start, _is_project_root)


def _has_valid_signature(path: str) -> bool:
    """Return True if the installed file at ``path`` still matches its signature."""
    with open(path, "r", encoding="utf-8", errors="replace") as fh:
        return verify_signature(fh.read())


def target_path_for(project_root: str, defn: CandidateDefinition) -> str:
    """Return where ``defn`` is installed inside ``project_root``."""
    install_dir = os.path.join(project_root, *Constants.INSTALL_SUBDIR)
    return os.path.join(install_dir, f"{defn.pkg_name}_{defn.pkg_version_str}.js")


def install_definition(
    token: str,
    flow_version: Version,
    catalog: Catalog,
    *,
    overwrite: bool = False,
    cwd: Optional[str] = None,
) -> InstallResult:
    """Resolve ``token`` against ``catalog`` and install the best match.

    Args:
        token: ``NAME`` or ``NAME@VERSION``.
        flow_version: Concrete flow version the definition must support.
        catalog: Catalog provider.
        overwrite: Replace an already installed file.
        cwd: Directory the project-root search starts from.

    Returns:
        InstallResult with status "installed" or "exists".

    Raises:
        MalformedQuery, MalformedVersion: On a bad token.
        NoMatchingCandidate: If nothing in the catalog fits.
        ProjectRootNotFound: If no .flowconfig is found upward from ``cwd``.
        OSError: On filesystem failures.
    """
    cwd = cwd or os.getcwd()
    query = parse_query(token, flow_version)

    matches = resolve(catalog.load(), query)
    if not matches:
        raise NoMatchingCandidate(token, str(flow_version))
    logger.info(" * found %s matching libdefs for %s.", len(matches), token)
    defn = matches[0]

    project_root = find_project_root(cwd)
    if project_root is None:
        raise ProjectRootNotFound(cwd)

    target = target_path_for(project_root, defn)
    mkdirp(os.path.dirname(target))
    terse_target = os.path.relpath(target, cwd)

    if os.path.exists(target) and not overwrite:
        logger.info(
            "%s already exists! Use --overwrite/-o to overwrite the existing libdef.",
            terse_target,
        )
        if not _has_valid_signature(target):
            logger.warning(
                "%s is unsigned or was modified after install; keeping it as is.",
                terse_target,
            )
        return InstallResult(package=token, target_path=target, status=STATUS_EXISTS)

    copy_file(defn.path, target, sign_code_preprocessor(catalog.definitions_version()))
    logger.info("'%s' installed at %s.", os.path.basename(target), terse_target)
    if is_debug_enabled(logger):
        logger.debug(
            "Installed definition",
            extra=extra_context(
                event="install",
                component="installer",
                package=defn.pkg_name,
                pkg_version=defn.pkg_version_str,
                flow_range=defn.flow_version_str,
                source=defn.path,
            ),
        )
    return InstallResult(package=token, target_path=target, status=STATUS_INSTALLED)


async def install_all(
    tokens: Sequence[str],
    flow_version: Version,
    catalog: Catalog,
    *,
    overwrite: bool = False,
    cwd: Optional[str] = None,
) -> Tuple[List[InstallResult], List[Tuple[str, BaseException]]]:
    """Install every token concurrently; one failure does not stop the rest.

    Returns:
        (successful results, [(token, exception), ...]) once all settle.
    """
    # Load before fanning out so workers only read the cached list.
    catalog.load()

    async def _one(token: str) -> InstallResult:
        logger.info("Installing libdef for %s", token)
        return await asyncio.to_thread(
            install_definition, token, flow_version, catalog, overwrite=overwrite, cwd=cwd
        )

    outcomes = await asyncio.gather(*(_one(t) for t in tokens), return_exceptions=True)

    results: List[InstallResult] = []
    failures: List[Tuple[str, BaseException]] = []
    for token, outcome in zip(tokens, outcomes):
        if isinstance(outcome, BaseException):
            failures.append((token, outcome))
        else:
            results.append(outcome)
    return results, failures

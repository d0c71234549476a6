"""Exception taxonomy for flowdef.

Every error the CLI turns into exit code 1 derives from ``FlowdefError``.
I/O failures are not wrapped; ``OSError`` propagates as-is.
"""

from __future__ import annotations

from typing import Optional

from constants import Constants


class FlowdefError(Exception):
    """Base class for expected, user-facing failures."""


class MalformedVersion(FlowdefError, ValueError):
    """A version string could not be parsed."""

    def __init__(self, raw: str, reason: Optional[str] = None):
        self.raw = raw
        detail = f": {reason}" if reason else ""
        super().__init__(f"Malformed version '{raw}'{detail}")


class MalformedQuery(FlowdefError, ValueError):
    """A query token yielded no package name."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(
            "Please specify a package name of the format `PackageFoo` or "
            f"`PackageFoo@0.2.2` (got '{token}')"
        )


class NoMatchingCandidate(FlowdefError):
    """The resolver returned no candidate for a query."""

    def __init__(self, requested: str, flow_version: str):
        self.requested = requested
        self.flow_version = flow_version
        super().__init__(
            f"Sorry, I was unable to find any libdefs for {requested} that work with "
            f"flow@{flow_version}. Consider submitting one! :)\n\n"
            f"{Constants.DEFINITIONS_REPO_URL}"
        )


class ProjectRootNotFound(FlowdefError):
    """No ancestor of the working directory holds the project marker."""

    def __init__(self, start: str):
        self.start = start
        super().__init__(
            "Unable to find a flow project in the current dir or any of "
            f"its parents ({start})!\nPlease run this command from within a Flow project."
        )


class CatalogNotFound(FlowdefError):
    """The definitions directory does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"Library definitions directory not found: {path}. "
            f"Set --definitions-dir or {Constants.ENV_DEFINITIONS_DIR}."
        )

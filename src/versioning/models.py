"""Data models for versioning and library definition resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from constants import Constants

WILDCARD = Constants.WILDCARD

# A component is a non-negative int or the wildcard token.
Component = Union[int, str]


@dataclass(frozen=True)
class Version:
    """Three-component version where any component may be the wildcard.

    All components None is the empty sentinel; it is a placeholder only and
    never satisfies anything.
    """
    major: Optional[Component]
    minor: Optional[Component]
    patch: Optional[Component]

    @classmethod
    def empty(cls) -> "Version":
        """Return the empty sentinel."""
        return cls(None, None, None)

    @property
    def components(self) -> Tuple[Optional[Component], ...]:
        return (self.major, self.minor, self.patch)

    @property
    def is_empty(self) -> bool:
        return all(c is None for c in self.components)

    @property
    def is_concrete(self) -> bool:
        """True when every component is a concrete integer."""
        return not self.is_empty and all(isinstance(c, int) for c in self.components)

    def __str__(self) -> str:
        if self.is_empty:
            return ""
        return "v" + ".".join(str(c) for c in self.components)


@dataclass(frozen=True)
class CandidateDefinition:
    """A library definition available in the catalog."""
    pkg_name: str
    pkg_version: Version
    flow_version: Version  # compiler-version compatibility range
    path: str
    test_file_paths: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def pkg_version_str(self) -> str:
        return str(self.pkg_version)

    @property
    def flow_version_str(self) -> str:
        return str(self.flow_version)


@dataclass(frozen=True)
class ExactVersionQuery:
    """Request for a definition of one exact package version."""
    pkg_name: str
    pkg_version: Version
    flow_version: Version

    def describe(self) -> str:
        return f"{self.pkg_name}@{str(self.pkg_version)[1:]}"


@dataclass(frozen=True)
class ExactNameQuery:
    """Request for a definition of any version of a package."""
    pkg_name: str
    flow_version: Version

    def describe(self) -> str:
        return self.pkg_name


Query = Union[ExactVersionQuery, ExactNameQuery]

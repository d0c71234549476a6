"""Version and query-token parsing utilities."""

import re
from typing import Optional

from errors import MalformedQuery, MalformedVersion
from .models import WILDCARD, ExactNameQuery, ExactVersionQuery, Query, Version

_COMPONENT = r"(\d+|" + re.escape(WILDCARD) + r")"
_VERSION_RE = re.compile(r"^v" + _COMPONENT + r"(?:\." + _COMPONENT + r")?(?:\." + _COMPONENT + r")?$")


def _to_component(text: Optional[str]):
    """Convert a matched component; absent components default to 0."""
    if text is None:
        return 0
    if text == WILDCARD:
        return WILDCARD
    return int(text)


def parse_version(raw: str) -> Version:
    """Parse ``vMAJOR[.MINOR[.PATCH]]`` into a Version.

    Components are digits or the wildcard token. A missing MINOR or PATCH
    is filled with 0, so ``v1.2`` parses equal to ``v1.2.0``.

    Raises:
        MalformedVersion: If the string does not have that shape.
    """
    if not isinstance(raw, str):
        raise MalformedVersion(str(raw), "expected a string")
    m = _VERSION_RE.match(raw.strip())
    if not m:
        raise MalformedVersion(raw, "expected vMAJOR.MINOR.PATCH")
    major, minor, patch = m.groups()
    return Version(_to_component(major), _to_component(minor), _to_component(patch))


def version_to_string(version: Version) -> str:
    """Render a Version; the inverse of parse_version for parsed versions."""
    return str(version)


def normalize_compiler_version(raw: str) -> Version:
    """Turn a ``--flow-version`` value into a concrete Version.

    The ``v`` prefix is optional and a two-component value gets a ``.0``
    patch appended.

    Raises:
        MalformedVersion: On unparseable input or when a wildcard is present.
    """
    text = (raw or "").strip()
    if not text:
        raise MalformedVersion(raw or "", "a flow version is required")
    if text[0] != "v":
        text = f"v{text}"
    if re.match(r"^v[0-9]+\.[0-9]+$", text):
        text = f"{text}.0"
    version = parse_version(text)
    if not version.is_concrete:
        raise MalformedVersion(raw, "flow version must not contain wildcards")
    return version


def parse_query(token: str, flow_version: Version) -> Query:
    """Parse a ``NAME`` or ``NAME@VERSION`` token into a Query.

    The name is everything before the first ``@`` and is taken verbatim
    (no trimming or case folding). An absent or empty version selects
    ExactNameQuery.

    Raises:
        MalformedQuery: If no package name can be extracted.
        MalformedVersion: If the version part does not parse.
    """
    name, _, ver = (token or "").partition("@")
    ver = ver.strip()
    if not name:
        raise MalformedQuery(token or "")
    if not ver:
        return ExactNameQuery(pkg_name=name, flow_version=flow_version)
    return ExactVersionQuery(
        pkg_name=name,
        pkg_version=parse_version(f"v{ver}"),
        flow_version=flow_version,
    )

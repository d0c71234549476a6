"""Library definition resolution.

Filters a catalog down to the definitions that satisfy a query. The
catalog's ordering is preserved; callers take the first element as the
best match.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from common.logging_utils import extra_context, is_debug_enabled
from .models import WILDCARD, CandidateDefinition, ExactNameQuery, ExactVersionQuery, Query, Version

logger = logging.getLogger(__name__)


def satisfies(candidate_range: Version, query: Version) -> bool:
    """Return True if ``query`` falls inside ``candidate_range``.

    Components are compared from major to patch. A wildcard in the range
    matches the rest of the version, so nothing after it is compared.
    """
    if candidate_range.is_empty or query.is_empty:
        return False
    for wanted, actual in zip(candidate_range.components, query.components):
        if wanted == WILDCARD:
            return True
        if wanted != actual:
            return False
    return True


def _matches_exact_version(defn: CandidateDefinition, query: ExactVersionQuery) -> bool:
    return (
        defn.pkg_name == query.pkg_name
        and defn.pkg_version == query.pkg_version
        and satisfies(defn.flow_version, query.flow_version)
    )


def _matches_exact_name(defn: CandidateDefinition, query: ExactNameQuery) -> bool:
    return defn.pkg_name == query.pkg_name and satisfies(defn.flow_version, query.flow_version)


def resolve(catalog: Iterable[CandidateDefinition], query: Query) -> List[CandidateDefinition]:
    """Return every catalog entry matching ``query`` in catalog order.

    An empty list means no match; it is not an error at this level.

    Raises:
        TypeError: If ``query`` is not a known query variant.
    """
    if isinstance(query, ExactVersionQuery):
        matches = [d for d in catalog if _matches_exact_version(d, query)]
    elif isinstance(query, ExactNameQuery):
        matches = [d for d in catalog if _matches_exact_name(d, query)]
    else:
        raise TypeError(f"Unsupported query type: {type(query).__name__}")

    if is_debug_enabled(logger):
        logger.debug(
            "Resolved query",
            extra=extra_context(
                event="decision",
                component="resolver",
                action="resolve",
                query=query.describe(),
                flow_version=str(query.flow_version),
                count=len(matches),
            ),
        )
    return matches

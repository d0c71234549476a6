"""Tests for satisfies() and resolve()."""

import itertools

import pytest

from versioning.models import WILDCARD, CandidateDefinition, ExactNameQuery, ExactVersionQuery, Version
from versioning.parser import parse_query, parse_version
from versioning.resolver import resolve, satisfies


def make_def(name, pkg_ver, flow_range, path=None):
    """Helper to build catalog entries from version strings."""
    return CandidateDefinition(
        pkg_name=name,
        pkg_version=parse_version(pkg_ver),
        flow_version=parse_version(flow_range),
        path=path or f"/defs/{name}_{pkg_ver}/flow_{flow_range}/{name}_{pkg_ver}.js",
    )


class TestSatisfies:
    """Tests for the wildcard-suffix comparator."""

    @pytest.mark.parametrize("raw", ["v0.0.0", "v1.2.3", "v9.99.999"])
    def test_reflexive(self, raw):
        v = parse_version(raw)
        assert satisfies(v, v)

    def test_major_mismatch_never_matches(self):
        for minor, patch in itertools.product([0, 1, 7], [0, 3]):
            assert not satisfies(Version(1, minor, patch), Version(2, minor, patch))
            assert not satisfies(Version(1, WILDCARD, WILDCARD), Version(2, minor, patch))

    def test_wildcard_suffix(self):
        rng = Version(1, WILDCARD, WILDCARD)
        for minor, patch in itertools.product([0, 5, 42], [0, 1, 9]):
            assert satisfies(rng, Version(1, minor, patch))

    def test_wildcard_short_circuits_rest(self):
        # Nothing after the wildcard is compared.
        assert satisfies(Version(0, WILDCARD, 5), Version(0, 30, 1))

    def test_minor_mismatch_before_wildcard(self):
        assert not satisfies(Version(0, 13, WILDCARD), Version(0, 14, 0))
        assert satisfies(Version(0, 13, WILDCARD), Version(0, 13, 7))

    def test_concrete_requires_equality(self):
        assert not satisfies(Version(1, 2, 3), Version(1, 2, 4))

    def test_full_wildcard(self):
        assert satisfies(Version(WILDCARD, WILDCARD, WILDCARD), Version(5, 4, 3))

    def test_empty_never_matches(self):
        assert not satisfies(Version.empty(), Version(1, 0, 0))
        assert not satisfies(Version(1, WILDCARD, WILDCARD), Version.empty())


class TestResolve:
    """Tests for resolve()."""

    def test_exact_version_query(self):
        catalog = [make_def("a", "v1.0.0", "v1.x.x")]
        query = parse_query("a@1.0.0", Version(1, 5, 0))
        assert resolve(catalog, query) == catalog

    def test_exact_name_query(self):
        catalog = [make_def("a", "v1.0.0", "v1.x.x")]
        query = parse_query("a", Version(1, 5, 0))
        assert resolve(catalog, query) == catalog

    def test_no_match_on_flow_major(self):
        catalog = [make_def("a", "v1.0.0", "v2.x.x")]
        assert resolve(catalog, parse_query("a", Version(1, 0, 0))) == []

    def test_exact_version_is_component_equality(self):
        catalog = [make_def("a", "v1.x.x", "v0.x.x")]
        flow = Version(0, 30, 0)
        assert resolve(catalog, ExactVersionQuery("a", Version(1, 2, 0), flow)) == []
        assert resolve(catalog, ExactVersionQuery("a", Version(1, WILDCARD, WILDCARD), flow)) == catalog

    def test_name_is_case_sensitive(self):
        catalog = [make_def("Lodash", "v4.0.0", "v0.x.x")]
        assert resolve(catalog, ExactNameQuery("lodash", Version(0, 1, 0))) == []

    def test_preserves_catalog_order(self):
        newest = make_def("a", "v2.0.0", "v0.x.x")
        older = make_def("a", "v1.0.0", "v0.x.x")
        other = make_def("b", "v1.0.0", "v0.x.x")
        flow = Version(0, 20, 0)
        assert resolve([newest, other, older], ExactNameQuery("a", flow)) == [newest, older]
        assert resolve([older, other, newest], ExactNameQuery("a", flow)) == [older, newest]

    def test_keeps_all_ranges_for_same_version(self):
        era1 = make_def("a", "v1.0.0", "v0.x.x")
        era2 = make_def("a", "v1.0.0", "vx.x.x")
        query = ExactVersionQuery("a", Version(1, 0, 0), Version(0, 9, 0))
        assert resolve([era1, era2], query) == [era1, era2]

    def test_empty_catalog(self):
        assert resolve([], ExactNameQuery("a", Version(1, 0, 0))) == []

    def test_unknown_query_type(self):
        with pytest.raises(TypeError):
            resolve([], object())

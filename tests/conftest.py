"""Shared fixtures for building definition trees and Flow projects."""

import pytest


def add_libdef(root, name, pkg_ver, flow_range, content=None, tests=()):
    """Write one definition (and optional test files) under ``root``."""
    flow_dir = root / "definitions" / "npm" / f"{name}_{pkg_ver}" / f"flow_{flow_range}"
    flow_dir.mkdir(parents=True, exist_ok=True)
    def_file = flow_dir / f"{name}_{pkg_ver}.js"
    def_file.write_text(content or f"declare module '{name}' {{ /* {pkg_ver} {flow_range} */ }}\n")
    for test_name in tests:
        (flow_dir / test_name).write_text("// test\n")
    return def_file


@pytest.fixture
def definitions_root(tmp_path):
    """A definitions directory with a handful of libdefs and a VERSION file."""
    root = tmp_path / "defs"
    add_libdef(root, "lodash", "v4.x.x", "v0.x.x", tests=("test_lodash.js",))
    add_libdef(root, "lodash", "v3.x.x", "v0.x.x")
    add_libdef(root, "lodash", "v4.x.x", "v1.x.x")
    add_libdef(root, "underscore", "v1.8.3", "v0.13.x")
    add_libdef(root, "a", "v1.0.0", "v1.x.x")
    (root / "VERSION").write_text("abc123\n")
    return root


@pytest.fixture
def flow_project(tmp_path):
    """A Flow project root (contains .flowconfig) with a nested working dir."""
    project = tmp_path / "project"
    nested = project / "src" / "components"
    nested.mkdir(parents=True)
    (project / ".flowconfig").write_text("[options]\n")
    return project

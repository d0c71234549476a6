"""Tests for filesystem helpers."""

import os

from common.fs_utils import copy_file, mkdirp, search_up_dir_path


class TestSearchUpDirPath:
    """Tests for the upward directory search."""

    def test_finds_start_dir(self, tmp_path):
        assert search_up_dir_path(str(tmp_path), lambda p: True) == str(tmp_path)

    def test_finds_ancestor(self, tmp_path):
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        (tmp_path / "marker").write_text("")
        found = search_up_dir_path(str(nested), lambda p: os.path.isfile(os.path.join(p, "marker")))
        assert found == str(tmp_path)

    def test_nearest_wins(self, tmp_path):
        inner = tmp_path / "inner"
        inner.mkdir()
        for d in (tmp_path, inner):
            (d / "marker").write_text("")
        found = search_up_dir_path(str(inner), lambda p: os.path.isfile(os.path.join(p, "marker")))
        assert found == str(inner)

    def test_none_at_filesystem_root(self, tmp_path):
        visited = []

        def never(path):
            visited.append(path)
            return False

        assert search_up_dir_path(str(tmp_path), never) is None
        assert visited[-1] == os.path.dirname(visited[-1])


def test_mkdirp_is_idempotent(tmp_path):
    target = tmp_path / "x" / "y" / "z"
    mkdirp(str(target))
    mkdirp(str(target))
    assert target.is_dir()


def test_copy_file_with_preprocessor(tmp_path):
    src = tmp_path / "src.js"
    dest = tmp_path / "dest.js"
    src.write_text("hello")
    copy_file(str(src), str(dest), lambda s: s.upper())
    assert dest.read_text() == "HELLO"


def test_copy_file_plain(tmp_path):
    src = tmp_path / "src.js"
    dest = tmp_path / "dest.js"
    src.write_text("hello")
    copy_file(str(src), str(dest))
    assert dest.read_text() == "hello"

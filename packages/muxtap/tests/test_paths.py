"""Tests for home expansion and window/pane root resolution."""

import pytest

from muxtap.paths import expand_path, join_path, resolve_pane_root, resolve_window_root


@pytest.fixture
def home(monkeypatch):
    monkeypatch.setenv("HOME", "/home/u")
    return "/home/u"


class TestExpandPath:
    def test_absolute_path_unchanged(self, home):
        assert expand_path("/srv/app") == "/srv/app"

    def test_home_shorthand_substituted_once(self, home):
        assert expand_path("~/code/~/notes") == "/home/u/code/~/notes"

    @pytest.mark.parametrize("path", ["", "relative", "~", "~user/x"])
    def test_other_paths_unchanged(self, home, path):
        assert expand_path(path) == path


class TestJoinPath:
    def test_empty_elements_skipped(self):
        assert join_path("/a", "") == "/a"
        assert join_path("", "") == ""

    def test_absolute_element_does_not_reset(self):
        assert join_path("root", "/abs") == "root/abs"

    def test_normalized(self):
        assert join_path("/a/", "./b/../c") == "/a/c"

    @pytest.mark.parametrize("elements", [("/", "src"), ("//", "src"), ("//src",), ("/", "/src")])
    def test_leading_slashes_collapsed(self, elements):
        assert join_path(*elements) == "/src"

    def test_root_alone(self):
        assert join_path("/", "") == "/"


class TestRootResolution:
    def test_window_root_defaults_to_base(self, home):
        assert resolve_window_root("", "/base") == "/base"

    def test_window_root_relative_joined(self, home):
        assert resolve_window_root("src", "/base") == "/base/src"

    def test_window_root_under_filesystem_root(self, home):
        assert resolve_window_root("src", "/") == "/src"

    def test_window_root_home_shorthand_kept_absolute(self, home):
        assert resolve_window_root("~/src", "/base") == "/home/u/src"

    def test_window_root_home_shorthand_joined_when_home_relative(self, monkeypatch):
        monkeypatch.setenv("HOME", "rel")
        assert resolve_window_root("~/src", "/base") == "/base/~/src"

    def test_pane_root_absolute_kept(self, home):
        assert resolve_pane_root("/tmp", "/base") == "/tmp"

    def test_pane_root_home_shorthand_joined_literally(self, home):
        assert resolve_pane_root("~/src", "/base") == "/base/~/src"

    def test_pane_root_empty_is_window_root(self, home):
        assert resolve_pane_root("", "/base/win") == "/base/win"

"""Tests for cappa.static.mount: directory walking and route mapping."""

import os
from pathlib import Path

import pytest

from cappa.errors import ConfigurationError
from cappa.routing.table import ExtensionTable
from cappa.static.files import StaticFile
from cappa.static.mount import MountedFile, build_handler, find_file, walk_directory


def _routes(directory: Path, route: str = "/", **kwargs) -> dict[str, Path]:
    return {m.route: m.path for m in walk_directory(directory, route, **kwargs)}


class TestWalkDirectory:
    def test_maps_every_file(self, site_dir: Path) -> None:
        routes = _routes(site_dir)
        assert set(routes) == {
            "/",
            "/about.html",
            "/style.css",
            "/data.bin",
            "/docs",
            "/docs/guide.md",
            "/docs/api/reference.txt",
        }

    def test_index_collapses_to_parent_route(self, site_dir: Path) -> None:
        routes = _routes(site_dir)
        assert routes["/"] == (site_dir / "index.html").resolve()
        assert routes["/docs"] == (site_dir / "docs" / "index.html").resolve()

    def test_route_prefix(self, site_dir: Path) -> None:
        routes = _routes(site_dir, "/static/")
        assert "/static" in routes
        assert "/static/docs/api/reference.txt" in routes

    def test_hidden_files_skipped_by_default(self, site_dir: Path) -> None:
        assert "/.secret" not in _routes(site_dir)
        assert "/.secret" in _routes(site_dir, include_hidden=True)

    def test_sorted_order(self, site_dir: Path) -> None:
        (site_dir / "index.md").write_text("# Home")
        found = [m for m in walk_directory(site_dir) if m.route == "/"]
        assert [m.path.name for m in found] == ["index.html", "index.md"]

    def test_missing_directory_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="not a directory"):
            list(walk_directory(tmp_path / "nope"))

    def test_file_is_not_a_mountable_directory(self, site_dir: Path) -> None:
        with pytest.raises(ConfigurationError):
            list(walk_directory(site_dir / "about.html"))


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
class TestWalkDirectorySymlinks:
    def test_symlink_escaping_root_skipped(self, site_dir: Path, outside_file: Path) -> None:
        (site_dir / "leak.txt").symlink_to(outside_file)
        assert "/leak.txt" not in _routes(site_dir)

    def test_symlinked_directory_escaping_root_skipped(
        self, site_dir: Path, outside_file: Path
    ) -> None:
        (site_dir / "up").symlink_to(outside_file.parent, target_is_directory=True)
        routes = _routes(site_dir)
        assert not any(route.startswith("/up") for route in routes)

    def test_symlink_inside_root_served(self, site_dir: Path) -> None:
        (site_dir / "alias.css").symlink_to(site_dir / "style.css")
        assert _routes(site_dir)["/alias.css"] == (site_dir / "style.css").resolve()

    def test_symlink_cycle_terminates(self, site_dir: Path) -> None:
        (site_dir / "docs" / "loop").symlink_to(site_dir, target_is_directory=True)
        routes = _routes(site_dir)
        assert "/docs/loop" not in routes
        assert "/docs/guide.md" in routes

    def test_self_referencing_symlink_skipped(self, site_dir: Path) -> None:
        (site_dir / "loop.txt").symlink_to("loop.txt")
        routes = _routes(site_dir)
        assert "/loop.txt" not in routes
        assert "/about.html" in routes


class TestBuildHandler:
    def test_default_is_static_file(self, site_dir: Path) -> None:
        mounted = MountedFile("/style.css", site_dir / "style.css")
        handler = build_handler(mounted, ExtensionTable(), cache_control="no-cache")
        assert isinstance(handler, StaticFile)
        assert handler.cache_control == "no-cache"

    def test_extension_factory_used(self, site_dir: Path) -> None:
        calls: list[Path] = []

        def factory(path: Path):
            calls.append(path)
            return lambda: "custom"

        extensions = ExtensionTable()
        extensions.add(".md", factory)
        mounted = MountedFile("/docs/guide.md", site_dir / "docs" / "guide.md")
        handler = build_handler(mounted, extensions)
        assert handler() == "custom"
        assert calls == [site_dir / "docs" / "guide.md"]


class TestFindFile:
    def test_file_under_root_mount(self, site_dir: Path) -> None:
        root = site_dir.resolve()
        assert find_file(root, "/", "/docs/guide.md") == root / "docs" / "guide.md"

    def test_file_under_prefixed_mount(self, site_dir: Path) -> None:
        root = site_dir.resolve()
        assert find_file(root, "/static", "/static/about.html") == root / "about.html"
        assert find_file(root, "/static", "/about.html") is None
        assert find_file(root, "/static", "/staticabout.html") is None

    def test_traversal_rejected(self, site_dir: Path, outside_file: Path) -> None:
        root = site_dir.resolve()
        assert find_file(root, "/", "/../passwords.txt") is None
        assert find_file(root, "/", "/docs/../../passwords.txt") is None

    def test_directories_and_missing_files_rejected(self, site_dir: Path) -> None:
        root = site_dir.resolve()
        assert find_file(root, "/", "/docs") is None
        assert find_file(root, "/", "/nope.md") is None
        assert find_file(root, "/", "/") is None

    def test_hidden_files_rejected_unless_included(self, site_dir: Path) -> None:
        root = site_dir.resolve()
        assert find_file(root, "/", "/.secret") is None
        assert find_file(root, "/", "/.secret", include_hidden=True) == root / ".secret"

    def test_index_files_only_reachable_at_directory_route(self, site_dir: Path) -> None:
        root = site_dir.resolve()
        assert find_file(root, "/", "/docs/index.html") is None
        assert find_file(root, "/", "/index.html") is None
        assert find_file(root, "/", "/docs/index.html", index_name="home") == (
            root / "docs" / "index.html"
        )

    def test_unresolvable_paths_rejected(self, site_dir: Path) -> None:
        root = site_dir.resolve()
        (site_dir / "loop.md").symlink_to("loop.md")
        assert find_file(root, "/", "/loop.md") is None
        assert find_file(root, "/", "/a\x00.md") is None

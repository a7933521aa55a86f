"""Shared fixtures: a small site tree on disk."""

from pathlib import Path

import pytest


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    """A directory tree to mount.

    site/
        index.html
        about.html
        style.css
        data.bin
        .secret
        docs/
            index.html
            guide.md
            api/
                reference.txt
    """
    site = tmp_path / "site"
    site.mkdir()
    (site / "index.html").write_text("<h1>Home</h1>")
    (site / "about.html").write_text("<h1>About</h1>")
    (site / "style.css").write_text("body { color: red; }")
    (site / "data.bin").write_bytes(b"\x00\x01\x02\x03")
    (site / ".secret").write_text("hidden")

    docs = site / "docs"
    docs.mkdir()
    (docs / "index.html").write_text("<h1>Docs</h1>")
    (docs / "guide.md").write_text("# Guide")

    api = docs / "api"
    api.mkdir()
    (api / "reference.txt").write_text("reference")
    return site


@pytest.fixture
def outside_file(tmp_path: Path) -> Path:
    """A file next to, not inside, the mounted site."""
    secret = tmp_path / "passwords.txt"
    secret.write_text("hunter2")
    return secret

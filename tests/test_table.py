"""Tests for cappa.routing.table: endpoint and extension tables."""

import logging

import pytest

from cappa.errors import ConfigurationError
from cappa.routing.table import EndpointTable, ExtensionTable


def _handler():
    return "ok"


def _other():
    return "other"


class TestEndpointTable:
    def test_add_and_get(self) -> None:
        table = EndpointTable()
        table.add("/docs", _handler)
        assert table.get("/docs") is _handler

    def test_lookup_is_normalized(self) -> None:
        table = EndpointTable()
        table.add("docs/", _handler)
        assert table.get("/docs") is _handler
        assert table.get("/docs/") is _handler
        assert "docs" in table

    def test_add_returns_normalized_route(self) -> None:
        assert EndpointTable().add("a//b/", _handler) == "/a/b"

    def test_miss_returns_none(self) -> None:
        assert EndpointTable().get("/missing") is None

    def test_exact_match_only(self) -> None:
        table = EndpointTable()
        table.add("/docs", _handler)
        assert table.get("/docs/guide") is None
        assert table.get("/doc") is None

    def test_last_registration_wins_with_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        table = EndpointTable()
        table.add("/", _handler)
        with caplog.at_level(logging.WARNING, logger="cappa.app"):
            table.add("/", _other)
        assert table.get("/") is _other
        assert len(table) == 1
        assert "Overwriting endpoint '/'" in caplog.text

    def test_routes_in_registration_order(self) -> None:
        table = EndpointTable()
        table.add("/b", _handler)
        table.add("/a", _handler)
        assert table.routes == ["/b", "/a"]

    def test_frozen_rejects_writes(self) -> None:
        table = EndpointTable()
        table.freeze()
        assert table.frozen
        with pytest.raises(RuntimeError, match="after the app has started"):
            table.add("/", _handler)


class TestExtensionTable:
    def test_keys_are_lowercase_dot_prefixed(self) -> None:
        table = ExtensionTable()
        table.add("MD", _handler)
        assert table.extensions == [".md"]
        assert table.get(".md") is _handler
        assert table.get(".Md") is _handler

    def test_empty_key_rejected_on_add(self) -> None:
        with pytest.raises(ConfigurationError):
            ExtensionTable().add("", _handler)

    def test_empty_key_misses_on_get(self) -> None:
        table = ExtensionTable()
        table.add(".md", _handler)
        assert table.get("") is None
        assert "" not in table

    def test_overwrite_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        table = ExtensionTable()
        table.add(".md", _handler)
        with caplog.at_level(logging.WARNING, logger="cappa.app"):
            table.add("md", _other)
        assert table.get(".md") is _other
        assert "extension handler '.md'" in caplog.text

"""Tests for cappa.server.negotiation: return value to Response."""

import pytest

from cappa.http.response import Redirect, Response
from cappa.server.negotiation import negotiate


class TestNegotiate:
    def test_response_passthrough(self) -> None:
        response = Response("x")
        assert negotiate(response) is response

    def test_str_is_html(self) -> None:
        response = negotiate("<p>hi</p>")
        assert response.status == 200
        assert response.content_type.startswith("text/html")

    def test_bytes_is_octet_stream(self) -> None:
        response = negotiate(b"\x00")
        assert response.content_type == "application/octet-stream"

    def test_dict_is_json(self) -> None:
        response = negotiate({"a": 1})
        assert response.content_type == "application/json"
        assert response.text == '{"a": 1}'

    def test_list_is_json(self) -> None:
        assert negotiate([1, 2]).text == "[1, 2]"

    def test_tuple_with_status(self) -> None:
        response = negotiate(("created", 201))
        assert response.status == 201
        assert response.text == "created"

    def test_tuple_with_status_and_headers(self) -> None:
        response = negotiate(("teapot", 418, {"X-Tea": "earl grey"}))
        assert response.status == 418
        assert response.header("X-Tea") == "earl grey"

    def test_redirect(self) -> None:
        response = negotiate(Redirect("/login", status=303))
        assert response.status == 303
        assert response.header("Location") == "/login"

    def test_none_is_204(self) -> None:
        assert negotiate(None).status == 204

    def test_unsupported_type(self) -> None:
        with pytest.raises(TypeError, match="cannot turn"):
            negotiate(object())

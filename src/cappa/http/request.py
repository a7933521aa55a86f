"""The request object handed to endpoint and extension handlers."""

from __future__ import annotations

from dataclasses import dataclass, field

from cappa._internal.asgi import Receive, Scope
from cappa.http.mappings import Headers, QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """One incoming HTTP request.

    Method, path, headers and query are fixed when the request arrives.
    The body is read on demand with ``await request.body()``.
    """

    method: str
    path: str
    headers: Headers
    query: QueryParams
    _receive: Receive
    _body: list[bytes] = field(default_factory=list, repr=False, compare=False)

    @property
    def url(self) -> str:
        """Path plus query string, as the client sent it."""
        if self.query.raw:
            return f"{self.path}?{self.query.raw.decode('latin-1')}"
        return self.path

    async def body(self) -> bytes:
        """The whole request body. Reads from the connection only once."""
        if not self._body:
            chunks = []
            more = True
            while more:
                message = await self._receive()
                chunks.append(message.get("body", b""))
                more = message.get("more_body", False)
            self._body.append(b"".join(chunks))
        return self._body[0]

    async def text(self) -> str:
        """The request body decoded as UTF-8."""
        return (await self.body()).decode("utf-8")

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query=QueryParams(scope.get("query_string", b"")),
            _receive=receive,
        )

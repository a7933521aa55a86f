"""Default static file responder.

One ``StaticFile`` is bound to each mounted file that has no extension
handler. The file is read on every request, so edits show up without a
restart and a deleted file turns into a 404 rather than stale content.
"""

import logging
import mimetypes
from pathlib import Path

import anyio

from cappa.errors import HTTPError, MethodNotAllowed, NotFound
from cappa.http.request import Request
from cappa.http.response import Response

logger = logging.getLogger("cappa.static")

ALLOWED_METHODS = frozenset({"GET", "HEAD"})

_MISSING_ERRORS = (FileNotFoundError, NotADirectoryError, IsADirectoryError)


def guess_content_type(path: str | Path) -> str:
    """Content type for *path* by extension, ``application/octet-stream`` if unknown."""
    content_type, _ = mimetypes.guess_type(str(path))
    return content_type or "application/octet-stream"


class StaticFile:
    """Handler that serves a single file with GET/HEAD semantics.

    - ``GET``: 200 with the file body, ``Content-Type`` and ``Content-Length``.
    - ``HEAD``: same response; the sender drops the body.
    - anything else: 405 with ``Allow: GET, HEAD``.
    - file gone: 404. Any other ``OSError``: logged, then 500.
    """

    __slots__ = ("cache_control", "content_type", "path")

    def __init__(self, path: str | Path, *, cache_control: str | None = None) -> None:
        self.path = Path(path)
        self.content_type = guess_content_type(self.path)
        self.cache_control = cache_control

    def __repr__(self) -> str:
        return f"StaticFile({str(self.path)!r})"

    async def __call__(self, request: Request) -> Response:
        if request.method not in ALLOWED_METHODS:
            raise MethodNotAllowed(ALLOWED_METHODS)

        try:
            body = await anyio.Path(self.path).read_bytes()
        except _MISSING_ERRORS as exc:
            raise NotFound(f"{request.path!r} is no longer on disk") from exc
        except OSError as exc:
            logger.exception("Failed to read %s for %s", self.path, request.path)
            raise HTTPError(status=500, detail="Internal Server Error") from exc

        response = Response(body=body, content_type=self.content_type).with_header(
            "Content-Length", str(len(body))
        )
        if self.cache_control:
            response = response.with_header("Cache-Control", self.cache_control)
        return response

"""Content negotiation: maps handler return values to Response objects.

isinstance-based dispatch, no magic, fully predictable.
"""

import json as json_module
from typing import Any

from cappa.http.response import Redirect, Response


def negotiate(value: Any) -> Response:
    """Convert a handler's return value to a Response.

    Dispatch order:

    1. ``Response``            -> pass through
    2. ``Redirect``            -> empty body with Location header
    3. ``str``                 -> 200, text/html
    4. ``bytes``               -> 200, application/octet-stream
    5. ``dict`` / ``list``     -> 200, application/json
    6. ``(value, int)``        -> negotiate value, override status
    7. ``(value, int, dict)``  -> negotiate value, override status + headers
    8. ``None``                -> 204, empty body
    """
    match value:
        case Response():
            return value
        case Redirect():
            return Response(body="", status=value.status).with_header("Location", value.url)
        case str():
            return Response(body=value)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case dict() | list():
            return Response(
                body=json_module.dumps(value, default=str),
                content_type="application/json",
            )
        case (inner, int() as status):
            return negotiate(inner).with_status(status)
        case (inner, int() as status, dict() as headers):
            return negotiate(inner).with_status(status).with_headers(headers)
        case None:
            return Response(body="", status=204)
        case _:
            msg = (
                f"Handler returned {type(value).__name__}, which cappa cannot turn "
                "into a response. Return a Response, str, bytes, dict, or list."
            )
            raise TypeError(msg)

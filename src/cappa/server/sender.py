"""ASGI response sending: translates cappa Responses to ASGI messages."""

from cappa._internal.asgi import Send
from cappa.http.response import Response


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Translate a cappa Response into ASGI send() calls.

    With ``head=True`` every header, ``Content-Length`` included, is the
    one a GET would produce; only the body is dropped.
    """
    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", response.content_type.encode("latin-1")),
    ]
    has_length = False
    for name, value in response.headers:
        key = name.lower()
        has_length = has_length or key == "content-length"
        raw_headers.append((key.encode("latin-1"), value.encode("latin-1")))

    body = response.body_bytes if _body_allowed(response.status) else b""

    if not has_length:
        raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": b"" if head else body,
        }
    )

"""ASGI handler: translates ASGI scope/messages to cappa types.

The only component that touches raw ASGI for HTTP. Converts the scope to
a Request, finds the handler, and sends the Response back through send().

Dispatch order:

1. Exact match on the normalized path in the endpoint table.
2. Extension fallback: the path's extension has a registered factory and
   the path names a regular file inside a mounted root.
3. ``NotFound``.
"""

import inspect
import logging
from collections.abc import Callable, Sequence
from typing import Any

from cappa._internal.asgi import Receive, Scope, Send
from cappa._internal.invoke import invoke
from cappa._internal.types import Handler
from cappa.errors import HTTPError, NotFound
from cappa.http.request import Request
from cappa.routing.paths import extension_of, normalize_route
from cappa.routing.table import EndpointTable, ExtensionTable
from cappa.server.errors import handle_http_error, handle_internal_error
from cappa.server.negotiation import negotiate
from cappa.server.sender import send_response
from cappa.static.mount import Mount, find_file

logger = logging.getLogger("cappa.server")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    endpoints: EndpointTable,
    extensions: ExtensionTable,
    mounts: Sequence[Mount],
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    try:
        handler = resolve_handler(request.path, endpoints, extensions, mounts)
        response = negotiate(await invoke(handler, **_handler_kwargs(handler, request)))
    except HTTPError as exc:
        response = await handle_http_error(exc, request, error_handlers, debug)
    except Exception as exc:
        response = await handle_internal_error(exc, request, error_handlers, debug)

    await send_response(response, send, head=request.method == "HEAD")


def resolve_handler(
    path: str,
    endpoints: EndpointTable,
    extensions: ExtensionTable,
    mounts: Sequence[Mount],
) -> Handler:
    """Find the handler for a request path, or raise ``NotFound``."""
    route = normalize_route(path)

    handler = endpoints.get(route)
    if handler is not None:
        return handler

    factory = extensions.get(extension_of(route))
    if factory is not None:
        for mount in mounts:
            file_path = find_file(
                mount.root,
                mount.route,
                route,
                index_name=mount.index_name,
                include_hidden=mount.include_hidden,
            )
            if file_path is not None:
                logger.debug("Extension fallback %s -> %s", route, file_path)
                return factory(file_path)

    raise NotFound(f"No endpoint matches {route!r}")


def _handler_kwargs(handler: Handler, request: Request) -> dict[str, Any]:
    """Pass the request to handlers that ask for it.

    A handler receives the request through a parameter named ``request``
    or annotated ``Request``; a handler with a single positional
    parameter gets it regardless of name. Zero-argument handlers are
    called bare.
    """
    try:
        sig = inspect.signature(handler)
    except (TypeError, ValueError):
        return {}

    params = [
        p
        for p in sig.parameters.values()
        if p.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    ]
    for param in params:
        if param.name == "request" or param.annotation in (Request, "Request"):
            return {param.name: request}
    if len(params) == 1 and params[0].kind != inspect.Parameter.KEYWORD_ONLY:
        return {params[0].name: request}
    return {}


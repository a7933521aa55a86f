"""Error handling pipeline for cappa requests.

Maps HTTPError exceptions and unexpected failures to appropriate
Response objects, using registered error handlers or plain-text defaults.
"""

import inspect
import logging
from collections.abc import Callable
from typing import Any

from cappa.errors import HTTPError
from cappa.http.request import Request
from cappa.http.response import Response
from cappa.server.negotiation import negotiate

logger = logging.getLogger("cappa.server")


async def call_error_handler(
    handler: Callable[..., Any],
    request: Request,
    exc: Exception,
) -> Response:
    """Invoke a user-registered error handler with introspected arguments.

    Error handlers may accept zero, one (request), or two (request, exc) args.
    Supports both sync and async error handlers.
    """
    params = list(inspect.signature(handler).parameters.values())

    if len(params) >= 2:
        result = handler(request, exc)
    elif len(params) == 1:
        result = handler(request)
    else:
        result = handler()

    if inspect.isawaitable(result):
        result = await result
    return negotiate(result)


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> Response:
    """Map an HTTPError to a Response using registered error handlers."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    # Try exact exception type, then status code
    handler = error_handlers.get(type(exc)) or error_handlers.get(exc.status)
    if handler is not None:
        response = await call_error_handler(handler, request, exc)
        # Keep the exception's status unless the handler chose one
        if response.status == 200:
            response = response.with_status(exc.status)
        for name, value in exc.headers:
            if response.header(name) is None:
                response = response.with_header(name, value)
        return response

    body = f"{exc.status}: {exc.detail}" if debug and exc.detail else _default_body(exc)
    response = Response(body=body, status=exc.status, content_type="text/plain; charset=utf-8")
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


async def handle_internal_error(
    exc: Exception,
    request: Request,
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.path)

    handler = error_handlers.get(type(exc)) or error_handlers.get(500)
    if handler is not None:
        response = await call_error_handler(handler, request, exc)
        return response if response.status != 200 else response.with_status(500)

    body = "Internal Server Error"
    if debug:
        body = f"{body}\n\n{type(exc).__name__}: {exc}"
    return Response(body=body, status=500, content_type="text/plain; charset=utf-8")


def _default_body(exc: HTTPError) -> str:
    match exc.status:
        case 404:
            return "Not Found"
        case 405:
            return "Method Not Allowed"
        case 500:
            return "Internal Server Error"
        case _:
            return exc.detail or f"Error {exc.status}"

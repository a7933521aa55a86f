"""Cappa exception hierarchy.

Shared across the tables, App, handler pipeline, and static responder so
every module raises and catches the same types.
"""

from dataclasses import dataclass


class CappaError(Exception):
    """Base for all cappa-specific errors."""


class ConfigurationError(CappaError):
    """Raised when app setup is invalid.

    Typically raised at registration time (bad extension, missing mount
    directory) so mistakes surface before the server starts.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(CappaError):
    """An error that maps directly to an HTTP status code.

    Raised by dispatch or handlers. The ASGI handler catches these and
    dispatches to the matching ``@app.error()`` handler.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: no endpoint matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405: the endpoint exists but not for this HTTP method.

    Carries an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )

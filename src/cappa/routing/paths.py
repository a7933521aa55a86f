"""Route string normalization.

Every route that enters an endpoint table, and every request path looked
up in one, goes through ``normalize_route`` so both sides agree::

    normalize_route("docs/")      -> "/docs"
    normalize_route("//a//b/")    -> "/a/b"
    normalize_route("")           -> "/"
    join_route("/docs", "guide")  -> "/docs/guide"
    route_for_file("/docs", "index.html") -> "/docs"
"""

from pathlib import PurePosixPath

from cappa.errors import ConfigurationError


def normalize_route(path: str) -> str:
    """Leading slash, single slashes, no trailing slash except for root."""
    parts = [part for part in path.split("/") if part]
    return "/" + "/".join(parts)


def join_route(base: str, *segments: str) -> str:
    """Join route pieces with single slashes and normalize the result."""
    return normalize_route("/".join((base, *segments)))


def is_index_file(filename: str, index_name: str = "index") -> bool:
    """True for ``index.*`` files (``index.html``, ``index.md``, ...)."""
    return filename.startswith(index_name + ".")


def route_for_file(base: str, filename: str, index_name: str = "index") -> str:
    """The route a mounted file is served at.

    ``index.*`` files collapse onto the directory route *base*; every
    other file is served at ``base/filename``.
    """
    if is_index_file(filename, index_name):
        return normalize_route(base)
    return join_route(base, filename)


def extension_of(path: str) -> str:
    """Lowercase, dot-prefixed extension of the last path segment, or ``""``."""
    return PurePosixPath(path).suffix.lower()


def normalize_extension(extension: str) -> str:
    """Normalize an extension-table key: ``"MD"``, ``".md"`` -> ``".md"``."""
    stripped = extension.strip().lstrip(".").lower()
    if not stripped:
        msg = f"Invalid file extension {extension!r}: expected something like '.md'."
        raise ConfigurationError(msg)
    return "." + stripped
